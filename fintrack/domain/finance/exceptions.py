# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from fintrack.shared.errors.base import DomainError


class CategoryNotFoundError(DomainError):
    code = "category_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Category not found."

    def __init__(self, category_id: int) -> None:
        super().__init__(context={"category_id": category_id})


class PaymentMethodNotFoundError(DomainError):
    code = "payment_method_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Payment method not found."

    def __init__(self, payment_method_id: int) -> None:
        super().__init__(context={"payment_method_id": payment_method_id})


class CategoryInUseError(DomainError):
    code = "category_in_use"
    status = HTTPStatus.CONFLICT
    message = "Category is used by existing transactions."

    def __init__(self, category_id: int) -> None:
        super().__init__(context={"category_id": category_id})


class PaymentMethodInUseError(DomainError):
    code = "payment_method_in_use"
    status = HTTPStatus.CONFLICT
    message = "Payment method is used by existing transactions."

    def __init__(self, payment_method_id: int) -> None:
        super().__init__(context={"payment_method_id": payment_method_id})
