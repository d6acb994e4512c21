# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fintrack.application.use_cases.finance.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    ListCategoriesUseCase,
)
from fintrack.interfaces.http.dto.finance import CategoryDTO, CreateCategoryDTO
from fintrack.shared.errors.validation import raise_validation_error
from fintrack.shared.logging import logger
from fintrack.shared.middleware.authentication import (
    AccessTokenVerifier,
    current_user_id,
    ensure_authenticated,
)


class CategoriesController:
    def __init__(
        self,
        *,
        token_verifier: AccessTokenVerifier,
        list_use_case: ListCategoriesUseCase,
        create_use_case: CreateCategoryUseCase,
        delete_use_case: DeleteCategoryUseCase,
    ) -> None:
        self._token_verifier = token_verifier
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._delete_use_case = delete_use_case

    def index(self) -> Response:
        t0 = perf_counter()
        user_id = current_user_id()
        items = self._list_use_case.execute(user_id)
        dt = (perf_counter() - t0) * 1000
        logger.info(f"categories.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify(
            [CategoryDTO.from_domain(item).model_dump(mode="json", by_alias=True) for item in items]
        )

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreateCategoryDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        category = self._create_use_case.execute(current_user_id(), dto.name, dto.color)
        return jsonify(CategoryDTO.from_domain(category).model_dump(mode="json", by_alias=True)), 201

    def delete(self, category_id: int) -> tuple[str, int]:
        self._delete_use_case.execute(current_user_id(), category_id)
        return "", 204

    def as_blueprint(self) -> Blueprint:
        guard = ensure_authenticated(self._token_verifier)
        bp = Blueprint("categories", __name__, url_prefix="/categories")
        bp.add_url_rule("", view_func=guard(self.index), methods=["GET"])
        bp.add_url_rule("", view_func=guard(self.create), methods=["POST"])
        bp.add_url_rule("/<int:category_id>", view_func=guard(self.delete), methods=["DELETE"])
        return bp
