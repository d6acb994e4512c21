# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from fintrack.domain.finance.entities import Category as DomainCategory
from fintrack.domain.finance.entities import LabelRef, NewTransaction, TransactionSummary
from fintrack.domain.finance.entities import PaymentMethod as DomainPaymentMethod
from fintrack.domain.finance.entities import Transaction as DomainTransaction
from fintrack.domain.finance.exceptions import CategoryInUseError, PaymentMethodInUseError
from fintrack.domain.finance.repositories import (
    CategoryRepository,
    PaymentMethodRepository,
    TransactionRepository,
)
from fintrack.infrastructure.db.models import Category, PaymentMethod, Transaction
from fintrack.infrastructure.unit_of_work import unit_of_work_scope

_CENTS = Decimal("0.01")


def _money(value: object) -> Decimal:
    return Decimal(str(value if value is not None else 0)).quantize(_CENTS)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _category(row: Category) -> DomainCategory:
    return DomainCategory(id=row.id, user_id=row.user_id, name=row.name, color=row.color)


def _payment_method(row: PaymentMethod) -> DomainPaymentMethod:
    return DomainPaymentMethod(id=row.id, user_id=row.user_id, name=row.name)


def _transaction(row: Transaction) -> DomainTransaction:
    return DomainTransaction(
        id=row.id,
        user_id=row.user_id,
        description=row.description,
        amount=_money(row.amount),
        date=_aware(row.date),
        category=LabelRef(id=row.category.id, name=row.category.name),
        payment_method=LabelRef(id=row.payment_method.id, name=row.payment_method.name),
    )


class SqlAlchemyCategoryRepository(CategoryRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_user(self, user_id: int) -> Sequence[DomainCategory]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = (
                session.query(Category)
                .filter(Category.user_id == user_id)
                .order_by(Category.name.asc())
                .all()
            )
            return [_category(row) for row in rows]

    def get_for_user(self, user_id: int, category_id: int) -> DomainCategory | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = (
                session.query(Category)
                .filter(Category.id == category_id, Category.user_id == user_id)
                .first()
            )
            return _category(row) if row else None

    def add(self, user_id: int, name: str, color: str | None) -> DomainCategory:
        with unit_of_work_scope(self._session_factory) as session:
            row = Category(user_id=user_id, name=name, color=color)
            session.add(row)
            session.flush()
            return _category(row)

    def delete_for_user(self, user_id: int, category_id: int) -> int:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                return (
                    session.query(Category)
                    .filter(Category.id == category_id, Category.user_id == user_id)
                    .delete(synchronize_session=False)
                )
        except IntegrityError as exc:
            raise CategoryInUseError(category_id) from exc


class SqlAlchemyPaymentMethodRepository(PaymentMethodRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_user(self, user_id: int) -> Sequence[DomainPaymentMethod]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = (
                session.query(PaymentMethod)
                .filter(PaymentMethod.user_id == user_id)
                .order_by(PaymentMethod.name.asc())
                .all()
            )
            return [_payment_method(row) for row in rows]

    def get_for_user(self, user_id: int, payment_method_id: int) -> DomainPaymentMethod | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = (
                session.query(PaymentMethod)
                .filter(PaymentMethod.id == payment_method_id, PaymentMethod.user_id == user_id)
                .first()
            )
            return _payment_method(row) if row else None

    def add(self, user_id: int, name: str) -> DomainPaymentMethod:
        with unit_of_work_scope(self._session_factory) as session:
            row = PaymentMethod(user_id=user_id, name=name)
            session.add(row)
            session.flush()
            return _payment_method(row)

    def delete_for_user(self, user_id: int, payment_method_id: int) -> int:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                return (
                    session.query(PaymentMethod)
                    .filter(
                        PaymentMethod.id == payment_method_id,
                        PaymentMethod.user_id == user_id,
                    )
                    .delete(synchronize_session=False)
                )
        except IntegrityError as exc:
            raise PaymentMethodInUseError(payment_method_id) from exc


class SqlAlchemyTransactionRepository(TransactionRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_user(self, user_id: int) -> Sequence[DomainTransaction]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = (
                session.query(Transaction)
                .options(
                    joinedload(Transaction.category),
                    joinedload(Transaction.payment_method),
                )
                .filter(Transaction.user_id == user_id)
                .order_by(Transaction.date.desc(), Transaction.id.desc())
                .all()
            )
            return [_transaction(row) for row in rows]

    def add(self, user_id: int, data: NewTransaction) -> DomainTransaction:
        with unit_of_work_scope(self._session_factory) as session:
            row = Transaction(
                user_id=user_id,
                description=data.description,
                amount=data.amount,
                date=data.date,
                category_id=data.category_id,
                payment_method_id=data.payment_method_id,
            )
            session.add(row)
            session.flush()
            session.refresh(row, attribute_names=["category", "payment_method"])
            return _transaction(row)

    def delete_for_user(self, user_id: int, transaction_id: int) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return (
                session.query(Transaction)
                .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
                .delete(synchronize_session=False)
            )

    def summarize(self, user_id: int) -> TransactionSummary:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            balance, count, income, expense = (
                session.query(
                    func.sum(Transaction.amount),
                    func.count(Transaction.id),
                    func.sum(case((Transaction.amount > 0, Transaction.amount), else_=0)),
                    func.sum(case((Transaction.amount < 0, Transaction.amount), else_=0)),
                )
                .filter(Transaction.user_id == user_id)
                .one()
            )
        return TransactionSummary(
            balance=_money(balance),
            count=int(count or 0),
            income=_money(income),
            expense=_money(expense),
        )
