# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Protocol

from flask import g, request

from fintrack.shared.errors import AccessTokenMissingError, InvalidAccessTokenError
from fintrack.shared.logging import logger


class AccessTokenVerifier(Protocol):
    def verify(self, token: str) -> int: ...


def _bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def current_user_id() -> int:
    return int(g.user_id)


def ensure_authenticated(verifier: AccessTokenVerifier) -> Callable[[Callable], Callable]:
    """Guard a view with a bearer access token, exposing the caller as ``g.user_id``."""

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*args, **kwargs):
            token = _bearer_token()
            if token is None:
                logger.warning(f"auth.guard: token missing on {request.method} {request.path}")
                raise AccessTokenMissingError()
            if not token:
                logger.warning(f"auth.guard: malformed header on {request.method} {request.path}")
                raise InvalidAccessTokenError()

            g.user_id = verifier.verify(token)
            logger.debug(f"auth.guard: ok user={g.user_id} {request.method} {request.path}")
            return f(*args, **kwargs)

        return inner

    return decorator


__all__ = ["AccessTokenVerifier", "current_user_id", "ensure_authenticated"]
