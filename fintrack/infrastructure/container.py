# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from fintrack.application.services.password_hashing import WerkzeugPasswordHasher
from fintrack.application.services.refresh_sessions import RefreshSessionManager
from fintrack.application.services.token_issuer import JwtTokenIssuer
from fintrack.application.use_cases.finance.categories import (
    CreateCategoryUseCase, DeleteCategoryUseCase, ListCategoriesUseCase)
from fintrack.application.use_cases.finance.payment_methods import (
    CreatePaymentMethodUseCase, DeletePaymentMethodUseCase,
    ListPaymentMethodsUseCase)
from fintrack.application.use_cases.finance.transactions import (
    CreateTransactionUseCase, DeleteTransactionUseCase,
    GetTransactionSummaryUseCase, ListTransactionsUseCase)
from fintrack.application.use_cases.users.login_user import LoginUserUseCase
from fintrack.application.use_cases.users.register_user import \
    RegisterUserUseCase
from fintrack.infrastructure.db import SessionLocal
from fintrack.infrastructure.repositories.sqlalchemy import (
    SqlAlchemyCategoryRepository, SqlAlchemyPaymentMethodRepository,
    SqlAlchemyTransactionRepository)
from fintrack.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyRefreshSessionRepository, SqlAlchemyUserRepository)
from fintrack.interfaces.http.controllers.categories_controller import \
    CategoriesController
from fintrack.interfaces.http.controllers.payment_methods_controller import \
    PaymentMethodsController
from fintrack.interfaces.http.controllers.transactions_controller import \
    TransactionsController
from fintrack.interfaces.http.controllers.users_controller import \
    UsersController
from fintrack.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config

    @cached_property
    def config(self) -> AppConfig:
        return self._config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        auth = self.config.auth
        return JwtTokenIssuer(
            secret=auth.jwt_secret,
            algorithm=auth.jwt_algorithm,
            ttl=timedelta(minutes=auth.access_token_ttl_minutes),
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def refresh_session_repository(self) -> SqlAlchemyRefreshSessionRepository:
        return SqlAlchemyRefreshSessionRepository()

    @cached_property
    def refresh_session_manager(self) -> RefreshSessionManager:
        return RefreshSessionManager(
            sessions=self.refresh_session_repository,
            token_issuer=self.token_issuer,
            ttl=timedelta(days=self.config.auth.refresh_session_ttl_days),
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            token_issuer=self.token_issuer,
            refresh_sessions=self.refresh_session_manager,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            refresh_sessions=self.refresh_session_manager,
        )

    # Finance repositories

    @cached_property
    def category_repository(self) -> SqlAlchemyCategoryRepository:
        return SqlAlchemyCategoryRepository(SessionLocal)

    @cached_property
    def payment_method_repository(self) -> SqlAlchemyPaymentMethodRepository:
        return SqlAlchemyPaymentMethodRepository(SessionLocal)

    @cached_property
    def transaction_repository(self) -> SqlAlchemyTransactionRepository:
        return SqlAlchemyTransactionRepository(SessionLocal)

    # Finance controllers

    @cached_property
    def categories_controller(self) -> CategoriesController:
        return CategoriesController(
            token_verifier=self.token_issuer,
            list_use_case=ListCategoriesUseCase(categories=self.category_repository),
            create_use_case=CreateCategoryUseCase(categories=self.category_repository),
            delete_use_case=DeleteCategoryUseCase(categories=self.category_repository),
        )

    @cached_property
    def payment_methods_controller(self) -> PaymentMethodsController:
        repo = self.payment_method_repository
        return PaymentMethodsController(
            token_verifier=self.token_issuer,
            list_use_case=ListPaymentMethodsUseCase(payment_methods=repo),
            create_use_case=CreatePaymentMethodUseCase(payment_methods=repo),
            delete_use_case=DeletePaymentMethodUseCase(payment_methods=repo),
        )

    @cached_property
    def transactions_controller(self) -> TransactionsController:
        repo = self.transaction_repository
        return TransactionsController(
            token_verifier=self.token_issuer,
            list_use_case=ListTransactionsUseCase(transactions=repo),
            create_use_case=CreateTransactionUseCase(
                transactions=repo,
                categories=self.category_repository,
                payment_methods=self.payment_method_repository,
            ),
            delete_use_case=DeleteTransactionUseCase(transactions=repo),
            summary_use_case=GetTransactionSummaryUseCase(transactions=repo),
        )


container = Container()
