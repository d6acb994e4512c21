# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer auth for the API client with transparent session refresh.

The access token lives in a :class:`TokenStore`; the refresh session id
lives in the ``refreshToken`` cookie the server set on login. When a call
comes back 401 the flow posts the refresh endpoint once, stores the new
token and replays the original request. A second 401 is returned as is.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Protocol

import httpx

from fintrack.shared.logging import logger


class SessionExpiredError(Exception):
    """The refresh session is gone or expired, the user must log in again."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Session expired ({response.status_code} {response.request.url.path})")
        self.response = response


class TokenStore(Protocol):
    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryTokenStore:
    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class RefreshingTokenAuth(httpx.Auth):
    requires_response_body = True

    def __init__(
        self,
        store: TokenStore,
        *,
        refresh_url: str,
        cookies: httpx.Cookies,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self._store = store
        self._refresh_url = refresh_url
        self._cookies = cookies
        self._on_session_expired = on_session_expired

    def _authorize(self, request: httpx.Request) -> None:
        token = self._store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        self._authorize(request)
        response = yield request
        if response.status_code != 401:
            return

        logger.debug(f"client.auth: 401 on {request.method} {request.url.path}, refreshing")
        refresh_request = httpx.Request("POST", self._refresh_url)
        self._cookies.set_cookie_header(refresh_request)
        refresh_response = yield refresh_request

        token = None
        if refresh_response.status_code == 200:
            try:
                body = refresh_response.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and isinstance(body.get("token"), str):
                token = body["token"]
        if not token:
            logger.info(f"client.auth: refresh failed (status={refresh_response.status_code})")
            self._store.clear()
            if self._on_session_expired is not None:
                self._on_session_expired()
            raise SessionExpiredError(response)

        self._store.set(token)
        request.headers["Authorization"] = f"Bearer {token}"
        yield request


__all__ = ["InMemoryTokenStore", "RefreshingTokenAuth", "SessionExpiredError", "TokenStore"]
