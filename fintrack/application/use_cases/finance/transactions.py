# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from fintrack.domain.finance.entities import NewTransaction, Transaction, TransactionSummary
from fintrack.domain.finance.exceptions import CategoryNotFoundError, PaymentMethodNotFoundError
from fintrack.domain.finance.repositories import (
    CategoryRepository,
    PaymentMethodRepository,
    TransactionRepository,
)
from fintrack.shared.logging import logger


class ListTransactionsUseCase:
    def __init__(self, *, transactions: TransactionRepository) -> None:
        self._transactions = transactions

    def execute(self, user_id: int) -> Sequence[Transaction]:
        return self._transactions.list_for_user(user_id)


class CreateTransactionUseCase:
    def __init__(
        self,
        *,
        transactions: TransactionRepository,
        categories: CategoryRepository,
        payment_methods: PaymentMethodRepository,
    ) -> None:
        self._transactions = transactions
        self._categories = categories
        self._payment_methods = payment_methods

    def execute(self, user_id: int, data: NewTransaction) -> Transaction:
        # Labels must belong to the same user as the transaction.
        if self._categories.get_for_user(user_id, data.category_id) is None:
            raise CategoryNotFoundError(data.category_id)
        if self._payment_methods.get_for_user(user_id, data.payment_method_id) is None:
            raise PaymentMethodNotFoundError(data.payment_method_id)

        transaction = self._transactions.add(user_id, data)
        logger.info(f"transactions.create: ok (user_id={user_id}, id={transaction.id})")
        return transaction


class DeleteTransactionUseCase:
    def __init__(self, *, transactions: TransactionRepository) -> None:
        self._transactions = transactions

    def execute(self, user_id: int, transaction_id: int) -> None:
        removed = self._transactions.delete_for_user(user_id, transaction_id)
        logger.info(
            f"transactions.delete: ok (user_id={user_id}, id={transaction_id}, n={removed})"
        )


class GetTransactionSummaryUseCase:
    def __init__(self, *, transactions: TransactionRepository) -> None:
        self._transactions = transactions

    def execute(self, user_id: int) -> TransactionSummary:
        return self._transactions.summarize(user_id)
