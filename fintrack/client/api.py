# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

import httpx

from fintrack.client.auth import InMemoryTokenStore, RefreshingTokenAuth, TokenStore
from fintrack.shared.logging import logger

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, status_code: int, error: str, message: str | None = None) -> None:
        super().__init__(message or error)
        self.status_code = status_code
        self.error = error
        self.message = message


def _unwrap(response: httpx.Response) -> Any:
    if response.is_success:
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    raise ApiError(
        response.status_code,
        str(body.get("error") or response.reason_phrase),
        body.get("message"),
    )


def calculate_summary(transactions: Iterable[Mapping[str, Any]]) -> dict[str, float]:
    """Dashboard totals from a transaction list. ``expense`` is positive."""
    income = Decimal("0")
    expense = Decimal("0")
    for item in transactions:
        amount = Decimal(str(item["amount"]))
        if amount > 0:
            income += amount
        else:
            expense += -amount
    return {
        "income": float(income),
        "expense": float(expense),
        "balance": float(income - expense),
    }


class FinanceApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token_store: TokenStore | None = None,
        on_session_expired: Callable[[], None] | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.tokens = token_store or InMemoryTokenStore()
        self._http = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)
        self._http.auth = RefreshingTokenAuth(
            self.tokens,
            refresh_url=str(self._http.base_url.join("users/refresh-token")),
            cookies=self._http.cookies,
            on_session_expired=on_session_expired,
        )

    def __enter__(self) -> FinanceApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # Users

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        response = self._http.post(
            "users",
            json={"name": name, "email": email, "password": password},
            auth=None,
        )
        return _unwrap(response)

    def login(self, email: str, password: str, *, remember_me: bool = False) -> dict[str, Any]:
        response = self._http.post(
            "users/login",
            json={"email": email, "password": password, "rememberMe": remember_me},
            auth=None,
        )
        payload = _unwrap(response)
        self.tokens.set(payload["token"])
        logger.info(f"client.login: ok (user_id={payload['user']['id']})")
        return payload

    def refresh(self) -> str:
        token = _unwrap(self._http.post("users/refresh-token", auth=None))["token"]
        self.tokens.set(token)
        return token

    def logout(self) -> None:
        # Client side only, the server keeps the refresh session until it expires.
        self.tokens.clear()
        self._http.cookies.clear()

    # Categories

    def list_categories(self) -> list[dict[str, Any]]:
        return _unwrap(self._http.get("categories"))

    def create_category(self, name: str, color: str | None = None) -> dict[str, Any]:
        return _unwrap(self._http.post("categories", json={"name": name, "color": color}))

    def delete_category(self, category_id: int) -> None:
        _unwrap(self._http.delete(f"categories/{category_id}"))

    # Payment methods

    def list_payment_methods(self) -> list[dict[str, Any]]:
        return _unwrap(self._http.get("payment-methods"))

    def create_payment_method(self, name: str) -> dict[str, Any]:
        return _unwrap(self._http.post("payment-methods", json={"name": name}))

    def delete_payment_method(self, payment_method_id: int) -> None:
        _unwrap(self._http.delete(f"payment-methods/{payment_method_id}"))

    # Transactions

    def list_transactions(self) -> list[dict[str, Any]]:
        return _unwrap(self._http.get("transactions"))

    def create_transaction(
        self,
        *,
        description: str,
        amount: Decimal | float,
        date: datetime,
        category_id: int,
        payment_method_id: int,
    ) -> dict[str, Any]:
        payload = {
            "description": description,
            "amount": str(amount),
            "date": date.isoformat(),
            "categoryId": category_id,
            "paymentMethodId": payment_method_id,
        }
        return _unwrap(self._http.post("transactions", json=payload))

    def delete_transaction(self, transaction_id: int) -> None:
        _unwrap(self._http.delete(f"transactions/{transaction_id}"))

    def summary(self) -> dict[str, Any]:
        return _unwrap(self._http.get("transactions/summary"))


__all__ = ["ApiError", "FinanceApiClient", "calculate_summary"]
