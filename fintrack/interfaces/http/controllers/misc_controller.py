# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from fintrack.infrastructure.health import check_database
from fintrack.shared.logging import logger


class MiscController:
    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.root, methods=["GET"])
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def root(self):
        return "Working server"

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            status["database"] = check_database()
        except Exception as exc:
            logger.error(f"health.database: err ({type(exc).__name__})")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status)
