# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Short-lived access credentials signed with the process-wide JWT secret."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from fintrack.domain.users.repositories import TokenIssuer
from fintrack.shared.errors import InvalidAccessTokenError
from fintrack.shared.logging import logger

ACCESS_TOKEN_TTL = timedelta(minutes=15)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = ACCESS_TOKEN_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int) -> str:
        issued_at = int(self._clock().timestamp())
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + int(self._ttl.total_seconds()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # Expiry is checked against the injected clock below.
                options={
                    "require": ["sub", "exp", "iat"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.warning(f"auth.token: rejected ({type(exc).__name__})")
            raise InvalidAccessTokenError() from exc

        try:
            expires_at = int(claims["exp"])
        except (TypeError, ValueError) as exc:
            raise InvalidAccessTokenError() from exc
        if int(self._clock().timestamp()) >= expires_at:
            logger.info("auth.token: expired")
            raise InvalidAccessTokenError()
        return claims

    def verify(self, token: str) -> int:
        claims = self.decode(token)
        try:
            return int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidAccessTokenError() from exc
