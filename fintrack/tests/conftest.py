from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="fintrack-tests-"))

# Settings are read once at import time, so the environment goes first.
os.environ.update(
    {
        "APP_ENV": "test",
        "DATABASE_URL": f"sqlite:///{_TMP / 'fintrack.db'}",
        "JWT_SECRET": "test-secret-key-with-enough-entropy",
        "LOG_FILE": str(_TMP / "fintrack.log"),
        "ENABLE_RATE_LIMIT": "false",
        "COOKIE_SECURE": "false",
        "COOKIE_SAMESITE": "Lax",
    }
)


@pytest.fixture()
def reset_database():
    from fintrack.infrastructure.db import ENGINE, Base, init_db

    init_db()
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def app(reset_database):
    from fintrack.app import create_app

    return create_app()


@pytest.fixture()
def client(app):
    with app.test_client() as test_client:
        yield test_client
