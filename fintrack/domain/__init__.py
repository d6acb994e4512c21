# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .finance.entities import (
    Category,
    LabelRef,
    NewTransaction,
    PaymentMethod,
    Transaction,
    TransactionSummary,
)
from .users.entities import RefreshSession, User

__all__ = [
    "Category",
    "LabelRef",
    "NewTransaction",
    "PaymentMethod",
    "RefreshSession",
    "Transaction",
    "TransactionSummary",
    "User",
]
