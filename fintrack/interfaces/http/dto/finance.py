from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fintrack.domain.finance.entities import (
    Category,
    LabelRef,
    NewTransaction,
    PaymentMethod,
    Transaction,
    TransactionSummary,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite keeps no offset, so dates are stored as UTC. Naive input is taken as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)


class CreateCategoryDTO(_CamelModel):
    name: str = Field(min_length=1, max_length=64)
    color: str | None = Field(None, max_length=32)


class CreatePaymentMethodDTO(_CamelModel):
    name: str = Field(min_length=1, max_length=64)


class CreateTransactionDTO(_CamelModel):
    description: str = Field(min_length=3, max_length=255)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    date: datetime
    category_id: int = Field(ge=1)
    payment_method_id: int = Field(ge=1)

    def to_domain(self) -> NewTransaction:
        return NewTransaction(
            description=self.description.strip(),
            amount=self.amount,
            date=_as_utc(self.date),
            category_id=self.category_id,
            payment_method_id=self.payment_method_id,
        )


class CategoryDTO(_CamelModel):
    id: int
    name: str
    color: str | None
    user_id: int

    @classmethod
    def from_domain(cls, category: Category) -> CategoryDTO:
        return cls(id=category.id, name=category.name, color=category.color, user_id=category.user_id)


class PaymentMethodDTO(_CamelModel):
    id: int
    name: str
    user_id: int

    @classmethod
    def from_domain(cls, method: PaymentMethod) -> PaymentMethodDTO:
        return cls(id=method.id, name=method.name, user_id=method.user_id)


class LabelDTO(_CamelModel):
    id: int
    name: str

    @classmethod
    def from_domain(cls, ref: LabelRef) -> LabelDTO:
        return cls(id=ref.id, name=ref.name)


class TransactionDTO(_CamelModel):
    id: int
    description: str
    amount: float
    date: datetime
    user_id: int
    category: LabelDTO
    payment_method: LabelDTO

    @classmethod
    def from_domain(cls, transaction: Transaction) -> TransactionDTO:
        return cls(
            id=transaction.id,
            description=transaction.description,
            amount=float(transaction.amount),
            date=transaction.date,
            user_id=transaction.user_id,
            category=LabelDTO.from_domain(transaction.category),
            payment_method=LabelDTO.from_domain(transaction.payment_method),
        )


class SummaryDTO(_CamelModel):
    balance: float
    count: int
    income: float
    expense: float

    @classmethod
    def from_domain(cls, summary: TransactionSummary) -> SummaryDTO:
        return cls(
            balance=float(summary.balance),
            count=summary.count,
            income=float(summary.income),
            expense=float(summary.expense),
        )
