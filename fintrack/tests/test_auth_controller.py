from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from fintrack.application.services.refresh_sessions import RefreshSessionManager
from fintrack.application.use_cases.finance.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    ListCategoriesUseCase,
)
from fintrack.application.use_cases.users.login_user import LoginResult, LoginUserUseCase
from fintrack.application.use_cases.users.register_user import RegisterUserUseCase
from fintrack.domain.finance.entities import Category
from fintrack.domain.users.entities import User
from fintrack.domain.users.exceptions import SessionExpiredError
from fintrack.interfaces.http.controllers.categories_controller import CategoriesController
from fintrack.interfaces.http.controllers import users_controller as users_controller_module
from fintrack.interfaces.http.controllers.users_controller import UsersController
from fintrack.shared.config import AppConfig
from fintrack.shared.errors import InvalidAccessTokenError
from fintrack.shared.middleware.error_handler import configure_error_handling

ANN = User(
    id=1,
    name="Ann",
    email="ann@example.com",
    password_hash="hash",
    created_at=datetime(2024, 1, 1, tzinfo=UTC),
)


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _users_controller(**overrides) -> UsersController:
    deps = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "refresh_sessions": MagicMock(),
    }
    deps.update(overrides)
    return UsersController(**deps)


def test_register_returns_created_user_without_password(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, name: str, email: str, password: str) -> User:
            register_called["args"] = (name, email, password)
            return ANN

    controller = _users_controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/users",
            json={"name": "Ann", "email": "ann@example.com", "password": "secret123"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("Ann", "ann@example.com", "secret123")
    payload = response.get_json()
    assert payload["email"] == "ann@example.com"
    assert "createdAt" in payload
    assert "password" not in payload and "passwordHash" not in payload


@pytest.mark.parametrize(
    "body",
    [
        {"name": "An", "email": "ann@example.com", "password": "secret123"},
        {"name": "Ann", "email": "not-an-email", "password": "secret123"},
        {"name": "Ann", "email": "ann@example.com", "password": "short"},
    ],
)
def test_register_invalid_payload_returns_422(flask_app: Flask, body: dict) -> None:
    register = MagicMock()
    flask_app.register_blueprint(_users_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/users", json=body)

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"
    register.execute.assert_not_called()


def _login_stub() -> LoginUserUseCase:
    class StubLogin:
        def execute(self, email: str, password: str) -> LoginResult:
            return LoginResult(user=ANN, token="access-token", session_id="session-uuid")

    return cast(LoginUserUseCase, StubLogin())


def test_login_sets_session_cookie_without_remember_me(flask_app: Flask) -> None:
    flask_app.register_blueprint(_users_controller(login_use_case=_login_stub()).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/users/login", json={"email": "ann@example.com", "password": "secret123"}
        )

    assert response.status_code == 200
    assert response.get_json()["token"] == "access-token"
    assert response.get_json()["user"]["id"] == 1
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("refreshToken=session-uuid")
    assert "HttpOnly" in cookie
    assert "Max-Age" not in cookie


def test_login_remember_me_sets_thirty_day_cookie(flask_app: Flask) -> None:
    flask_app.register_blueprint(_users_controller(login_use_case=_login_stub()).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/users/login",
            json={"email": "ann@example.com", "password": "secret123", "rememberMe": True},
        )

    assert f"Max-Age={30 * 24 * 3600}" in response.headers["Set-Cookie"]


def test_refresh_without_cookie_returns_401(flask_app: Flask) -> None:
    refresh_sessions = MagicMock()
    flask_app.register_blueprint(
        _users_controller(refresh_sessions=refresh_sessions).as_blueprint()
    )

    with flask_app.test_client() as client:
        response = client.post("/users/refresh-token")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Refresh token missing"
    refresh_sessions.refresh.assert_not_called()


def test_refresh_passes_cookie_to_session_manager(flask_app: Flask) -> None:
    refresh_sessions = MagicMock(spec=RefreshSessionManager)
    refresh_sessions.refresh.return_value = "new-token"
    flask_app.register_blueprint(
        _users_controller(refresh_sessions=refresh_sessions).as_blueprint()
    )

    with flask_app.test_client() as client:
        client.set_cookie("refreshToken", "session-uuid")
        response = client.post("/users/refresh-token")

    assert response.status_code == 200
    assert response.get_json() == {"token": "new-token"}
    refresh_sessions.refresh.assert_called_once_with("session-uuid")


def test_refresh_expired_session_returns_401(flask_app: Flask) -> None:
    refresh_sessions = MagicMock(spec=RefreshSessionManager)
    refresh_sessions.refresh.side_effect = SessionExpiredError()
    flask_app.register_blueprint(
        _users_controller(refresh_sessions=refresh_sessions).as_blueprint()
    )

    with flask_app.test_client() as client:
        client.set_cookie("refreshToken", "session-uuid")
        response = client.post("/users/refresh-token")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Refresh token expired"


class StubVerifier:
    def verify(self, token: str) -> int:
        if token != "good":
            raise InvalidAccessTokenError()
        return 7


@pytest.fixture()
def categories_app(flask_app: Flask) -> tuple[Flask, MagicMock]:
    list_use_case = MagicMock(spec=ListCategoriesUseCase)
    list_use_case.execute.return_value = [Category(id=3, user_id=7, name="Food", color="#ff0")]
    controller = CategoriesController(
        token_verifier=StubVerifier(),
        list_use_case=list_use_case,
        create_use_case=MagicMock(spec=CreateCategoryUseCase),
        delete_use_case=MagicMock(spec=DeleteCategoryUseCase),
    )
    flask_app.register_blueprint(controller.as_blueprint())
    return flask_app, list_use_case


def test_guard_without_header_returns_token_missing(categories_app) -> None:
    app, _ = categories_app

    with app.test_client() as client:
        response = client.get("/categories")

    assert response.status_code == 401
    assert response.get_json()["message"] == "Token missing"


@pytest.mark.parametrize("header", ["Bearer bad", "Basic good", "Bearer"])
def test_guard_with_bad_header_returns_invalid_token(categories_app, header: str) -> None:
    app, _ = categories_app

    with app.test_client() as client:
        response = client.get("/categories", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token"


def test_guard_exposes_user_to_view(categories_app) -> None:
    app, list_use_case = categories_app

    with app.test_client() as client:
        response = client.get("/categories", headers={"Authorization": "Bearer good"})

    assert response.status_code == 200
    assert response.get_json() == [{"id": 3, "name": "Food", "color": "#ff0", "userId": 7}]
    list_use_case.execute.assert_called_once_with(7)


def test_login_cookie_defaults_to_secure_cross_site(flask_app: Flask, monkeypatch) -> None:
    monkeypatch.delenv("COOKIE_SECURE", raising=False)
    monkeypatch.delenv("COOKIE_SAMESITE", raising=False)
    default_config = AppConfig()
    monkeypatch.setattr(users_controller_module, "load_config", lambda: default_config)
    flask_app.register_blueprint(_users_controller(login_use_case=_login_stub()).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post(
            "/users/login", json={"email": "ann@example.com", "password": "secret123"}
        )

    cookie = response.headers["Set-Cookie"]
    assert "Secure" in cookie
    assert "SameSite=None" in cookie
    assert "HttpOnly" in cookie
