# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from fintrack.domain.finance.entities import PaymentMethod
from fintrack.domain.finance.repositories import PaymentMethodRepository
from fintrack.shared.logging import logger


class ListPaymentMethodsUseCase:
    def __init__(self, *, payment_methods: PaymentMethodRepository) -> None:
        self._payment_methods = payment_methods

    def execute(self, user_id: int) -> Sequence[PaymentMethod]:
        return self._payment_methods.list_for_user(user_id)


class CreatePaymentMethodUseCase:
    def __init__(self, *, payment_methods: PaymentMethodRepository) -> None:
        self._payment_methods = payment_methods

    def execute(self, user_id: int, name: str) -> PaymentMethod:
        method = self._payment_methods.add(user_id, name.strip())
        logger.info(f"payment_methods.create: ok (user_id={user_id}, id={method.id})")
        return method


class DeletePaymentMethodUseCase:
    def __init__(self, *, payment_methods: PaymentMethodRepository) -> None:
        self._payment_methods = payment_methods

    def execute(self, user_id: int, payment_method_id: int) -> None:
        removed = self._payment_methods.delete_for_user(user_id, payment_method_id)
        logger.info(
            f"payment_methods.delete: ok (user_id={user_id}, id={payment_method_id}, n={removed})"
        )
