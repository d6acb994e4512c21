# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from fintrack.application.use_cases.finance.payment_methods import (
    CreatePaymentMethodUseCase,
    DeletePaymentMethodUseCase,
    ListPaymentMethodsUseCase,
)
from fintrack.interfaces.http.dto.finance import CreatePaymentMethodDTO, PaymentMethodDTO
from fintrack.shared.errors.validation import raise_validation_error
from fintrack.shared.middleware.authentication import (
    AccessTokenVerifier,
    current_user_id,
    ensure_authenticated,
)


class PaymentMethodsController:
    def __init__(
        self,
        *,
        token_verifier: AccessTokenVerifier,
        list_use_case: ListPaymentMethodsUseCase,
        create_use_case: CreatePaymentMethodUseCase,
        delete_use_case: DeletePaymentMethodUseCase,
    ) -> None:
        self._token_verifier = token_verifier
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._delete_use_case = delete_use_case

    def index(self) -> Response:
        items = self._list_use_case.execute(current_user_id())
        return jsonify(
            [
                PaymentMethodDTO.from_domain(item).model_dump(mode="json", by_alias=True)
                for item in items
            ]
        )

    def create(self) -> tuple[Response, int]:
        try:
            dto = CreatePaymentMethodDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        method = self._create_use_case.execute(current_user_id(), dto.name)
        payload = PaymentMethodDTO.from_domain(method).model_dump(mode="json", by_alias=True)
        return jsonify(payload), 201

    def delete(self, payment_method_id: int) -> tuple[str, int]:
        self._delete_use_case.execute(current_user_id(), payment_method_id)
        return "", 204

    def as_blueprint(self) -> Blueprint:
        guard = ensure_authenticated(self._token_verifier)
        bp = Blueprint("payment_methods", __name__, url_prefix="/payment-methods")
        bp.add_url_rule("", view_func=guard(self.index), methods=["GET"])
        bp.add_url_rule("", view_func=guard(self.create), methods=["POST"])
        bp.add_url_rule(
            "/<int:payment_method_id>",
            view_func=guard(self.delete),
            methods=["DELETE"],
        )
        return bp
