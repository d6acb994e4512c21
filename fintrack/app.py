# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import importlib
from typing import Any, Protocol, cast

from flask import Flask

from fintrack.infrastructure.container import Container, container
from fintrack.infrastructure.db import init_db
from fintrack.interfaces.http.controllers.misc_controller import MiscController
from fintrack.shared.logging import logger, setup_logging
from fintrack.shared.middleware.error_handler import configure_error_handling
from fintrack.shared.middleware.request_logger import configure_request_logging


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


def create_app(services: Container | None = None) -> Flask:
    services = services or container
    config = services.config

    init_db()
    setup_logging(debug_mode=config.debug_logging)

    app = Flask(__name__)
    configure_error_handling(app)
    configure_request_logging(app)

    # Credentialed CORS so the browser sends the refresh cookie cross-origin.
    CORS(
        app,
        origins=config.security.allowed_origins,
        supports_credentials=True,
    )

    app.register_blueprint(MiscController().as_blueprint())
    app.register_blueprint(services.users_controller.as_blueprint())
    app.register_blueprint(services.categories_controller.as_blueprint())
    app.register_blueprint(services.payment_methods_controller.as_blueprint())
    app.register_blueprint(services.transactions_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    if config.auth.has_insecure_secret():
        logger.warning("auth: JWT_SECRET is the development default, do not deploy this")

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=container.config.port)


if __name__ == "__main__":
    main()
