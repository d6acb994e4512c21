# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Ledger entities owned by a single user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(slots=True, frozen=True)
class Category:
    id: int
    user_id: int
    name: str
    color: str | None = None


@dataclass(slots=True, frozen=True)
class PaymentMethod:
    id: int
    user_id: int
    name: str


@dataclass(slots=True, frozen=True)
class LabelRef:
    """Id/name pair embedded in a listed transaction."""

    id: int
    name: str


@dataclass(slots=True, frozen=True)
class NewTransaction:
    description: str
    amount: Decimal
    date: datetime
    category_id: int
    payment_method_id: int


@dataclass(slots=True, frozen=True)
class Transaction:
    id: int
    user_id: int
    description: str
    amount: Decimal
    date: datetime
    category: LabelRef
    payment_method: LabelRef


@dataclass(slots=True, frozen=True)
class TransactionSummary:
    balance: Decimal
    count: int
    income: Decimal
    expense: Decimal
