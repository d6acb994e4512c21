# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from sqlalchemy import text

from fintrack.infrastructure.db import ENGINE


def check_database() -> dict[str, object]:
    t0 = perf_counter()
    with ENGINE.connect() as connection:
        connection.execute(text("SELECT 1"))
    return {
        "dialect": ENGINE.dialect.name,
        "latency_ms": round((perf_counter() - t0) * 1000, 1),
    }


__all__ = ["check_database"]
