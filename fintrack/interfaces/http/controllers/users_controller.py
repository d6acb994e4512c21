# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fintrack.application.services.refresh_sessions import RefreshSessionManager
from fintrack.application.use_cases.users.login_user import LoginUserUseCase
from fintrack.application.use_cases.users.register_user import RegisterUserUseCase
from fintrack.domain.users.exceptions import RefreshTokenMissingError
from fintrack.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginResponseDTO,
    RegisterRequestDTO,
    TokenResponseDTO,
    UserDTO,
)
from fintrack.shared.config import load_config
from fintrack.shared.errors.validation import raise_validation_error
from fintrack.shared.logging import logger
from fintrack.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        refresh_sessions: RefreshSessionManager,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._refresh_sessions = refresh_sessions

    @rate_limit(limit=5, window_seconds=60.0)
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.name, str(dto.email), dto.password)

        payload = UserDTO.from_domain(user).model_dump(mode="json", by_alias=True)
        logger.info(f"users.register: ok (user_id={user.id}, ip={_get_client_ip()})")
        return jsonify(payload), 201

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.email, dto.password)

        payload = LoginResponseDTO(
            user=UserDTO.from_domain(result.user), token=result.token
        ).model_dump(mode="json", by_alias=True)
        response = jsonify(payload)

        config = load_config()
        # Without "remember me" the browser drops the cookie at the end of its session.
        max_age = (
            int(timedelta(days=config.auth.refresh_session_ttl_days).total_seconds())
            if dto.remember_me
            else None
        )
        response.set_cookie(
            config.auth.refresh_cookie_name,
            result.session_id,
            httponly=True,
            secure=config.security.cookie_secure,
            samesite=config.security.cookie_samesite,
            max_age=max_age,
        )
        logger.info(
            f"users.login: ok (user_id={result.user.id}, remember_me={dto.remember_me}, "
            f"ip={_get_client_ip()})"
        )
        return response, 200

    def refresh_token(self) -> tuple[Response, int]:
        config = load_config()
        session_id = request.cookies.get(config.auth.refresh_cookie_name, "")
        if not session_id:
            logger.info(f"users.refresh: cookie missing (ip={_get_client_ip()})")
            raise RefreshTokenMissingError()

        token = self._refresh_sessions.refresh(session_id)

        payload = TokenResponseDTO(token=token).model_dump(mode="json", by_alias=True)
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/users")
        bp.add_url_rule("", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/refresh-token", view_func=self.refresh_token, methods=["POST"])
        return bp
