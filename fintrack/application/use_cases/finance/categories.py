# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from fintrack.domain.finance.entities import Category
from fintrack.domain.finance.repositories import CategoryRepository
from fintrack.shared.logging import logger


class ListCategoriesUseCase:
    def __init__(self, *, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, user_id: int) -> Sequence[Category]:
        return self._categories.list_for_user(user_id)


class CreateCategoryUseCase:
    def __init__(self, *, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, user_id: int, name: str, color: str | None = None) -> Category:
        category = self._categories.add(user_id, name.strip(), color)
        logger.info(f"categories.create: ok (user_id={user_id}, category_id={category.id})")
        return category


class DeleteCategoryUseCase:
    def __init__(self, *, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, user_id: int, category_id: int) -> None:
        removed = self._categories.delete_for_user(user_id, category_id)
        logger.info(
            f"categories.delete: ok (user_id={user_id}, category_id={category_id}, n={removed})"
        )
