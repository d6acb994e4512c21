# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Category, NewTransaction, PaymentMethod, Transaction, TransactionSummary


class CategoryRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Category]: ...
    def get_for_user(self, user_id: int, category_id: int) -> Category | None: ...
    def add(self, user_id: int, name: str, color: str | None) -> Category: ...
    def delete_for_user(self, user_id: int, category_id: int) -> int: ...


class PaymentMethodRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[PaymentMethod]: ...
    def get_for_user(self, user_id: int, payment_method_id: int) -> PaymentMethod | None: ...
    def add(self, user_id: int, name: str) -> PaymentMethod: ...
    def delete_for_user(self, user_id: int, payment_method_id: int) -> int: ...


class TransactionRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Transaction]: ...
    def add(self, user_id: int, data: NewTransaction) -> Transaction: ...
    def delete_for_user(self, user_id: int, transaction_id: int) -> int: ...
    def summarize(self, user_id: int) -> TransactionSummary: ...
