# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from fintrack.application.services.refresh_sessions import RefreshSessionManager
from fintrack.domain.users.entities import User
from fintrack.domain.users.exceptions import InvalidCredentialsError
from fintrack.domain.users.repositories import PasswordHasher, TokenIssuer, UserRepository
from fintrack.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    token: str
    session_id: str


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        refresh_sessions: RefreshSessionManager,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        self._refresh_sessions = refresh_sessions

    def execute(self, email: str, password: str) -> LoginResult:
        user = self._users.find_by_email(email.strip().lower())
        # Unknown email and wrong password are reported identically.
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            logger.info("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        token = self._token_issuer.issue(user.id)
        session_id = self._refresh_sessions.start_session(user.id)
        logger.info(f"auth.login: ok (user_id={user.id})")
        return LoginResult(user=user, token=token, session_id=session_id)
