# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Lifecycle of the refresh session behind the ``refreshToken`` cookie.

One live session per user: starting a session replaces every earlier one,
so a new login signs the user's other devices out of silent refresh. A
session is never rotated or extended when used; it stays valid until the
absolute expiry stamped at login.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from fintrack.domain.users.exceptions import SessionExpiredError, SessionNotFoundError
from fintrack.domain.users.repositories import RefreshSessionRepository, TokenIssuer
from fintrack.shared.logging import logger

REFRESH_SESSION_TTL = timedelta(days=30)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RefreshSessionManager:
    def __init__(
        self,
        *,
        sessions: RefreshSessionRepository,
        token_issuer: TokenIssuer,
        ttl: timedelta = REFRESH_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions = sessions
        self._token_issuer = token_issuer
        self._ttl = ttl
        self._clock = clock

    def start_session(self, user_id: int) -> str:
        expires_in = int((self._clock() + self._ttl).timestamp())
        session = self._sessions.replace_for_user(user_id, expires_in)
        logger.info(f"auth.session: started (user_id={user_id}, expires_in={expires_in})")
        return session.id

    def refresh(self, session_id: str) -> str:
        session = self._sessions.find_by_id(session_id)
        if session is None:
            logger.info("auth.refresh: unknown session")
            raise SessionNotFoundError()

        if session.is_expired(int(self._clock().timestamp())):
            logger.info(f"auth.refresh: expired (user_id={session.user_id})")
            raise SessionExpiredError()

        token = self._token_issuer.issue(session.user_id)
        logger.info(f"auth.refresh: ok (user_id={session.user_id})")
        return token
