"""Pydantic schemas for records handed over by the persistence/API layer"""

import datetime as dt
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from finance_engine.domain.models import (
    Account,
    CreditCard,
    Goal,
    RecurringItem,
    Transaction,
    TransactionType,
)
from finance_engine.domain.recurrence import RecurrenceFrequency
from finance_engine.ingest.amounts import resolve_amount_cents
from finance_engine.utils.date_utils import to_utc_date

LegacyAmount = Optional[float | str]


class Record(BaseModel):
    """Accepts camelCase (amountCents) or snake_case (amount_cents) keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TransactionRecord(Record):
    id: str
    type: TransactionType = TransactionType.EXPENSE
    date: dt.date
    category: str = "otros"
    merchant: str = ""
    description: str = ""
    amount_cents: Optional[int] = None
    amount: LegacyAmount = None
    is_fee_or_interest: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> dt.date:
        return to_utc_date(value)

    @model_validator(mode="after")
    def resolve_amount(self) -> "TransactionRecord":
        self.amount_cents = resolve_amount_cents(self.amount_cents, self.amount)
        return self

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.id,
            date=self.date,
            amount_cents=self.amount_cents,
            type=self.type,
            category=self.category,
            merchant=self.merchant,
            description=self.description,
            is_fee_or_interest=self.is_fee_or_interest,
        )


class RecurringRecord(Record):
    """Subscription or income row"""

    id: str
    name: str
    frequency: RecurrenceFrequency
    next_date: dt.date
    active: bool = True
    amount_cents: Optional[int] = None
    amount: LegacyAmount = None

    @field_validator("next_date", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> dt.date:
        return to_utc_date(value)

    @model_validator(mode="after")
    def resolve_amount(self) -> "RecurringRecord":
        self.amount_cents = resolve_amount_cents(self.amount_cents, self.amount)
        return self

    def to_domain(self) -> RecurringItem:
        return RecurringItem(
            item_id=self.id,
            name=self.name,
            amount_cents=self.amount_cents,
            frequency=self.frequency,
            next_date=self.next_date,
            active=self.active,
        )


class AccountRecord(Record):
    id: str
    name: str
    balance_cents: Optional[int] = None
    balance: LegacyAmount = None

    @model_validator(mode="after")
    def resolve_amount(self) -> "AccountRecord":
        self.balance_cents = resolve_amount_cents(self.balance_cents, self.balance)
        return self

    def to_domain(self) -> Account:
        return Account(account_id=self.id, name=self.name, balance_cents=self.balance_cents)


class CreditCardRecord(Record):
    id: str
    name: str
    credit_limit_cents: Optional[int] = None
    credit_limit: LegacyAmount = None
    balance_cents: Optional[int] = None
    balance: LegacyAmount = None
    apr: float = 0.0

    @model_validator(mode="after")
    def resolve_amounts(self) -> "CreditCardRecord":
        self.credit_limit_cents = resolve_amount_cents(self.credit_limit_cents, self.credit_limit)
        self.balance_cents = resolve_amount_cents(self.balance_cents, self.balance)
        return self

    def to_domain(self) -> CreditCard:
        return CreditCard(
            card_id=self.id,
            name=self.name,
            credit_limit_cents=self.credit_limit_cents,
            balance_cents=self.balance_cents,
            apr=self.apr,
        )


class GoalRecord(Record):
    id: str
    name: str
    target_amount_cents: Optional[int] = None
    target_amount: LegacyAmount = None
    current_amount_cents: Optional[int] = None
    current_amount: LegacyAmount = None
    deadline: Optional[dt.date] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def normalize_date(cls, value: Any) -> Optional[dt.date]:
        return None if value is None else to_utc_date(value)

    @model_validator(mode="after")
    def resolve_amounts(self) -> "GoalRecord":
        self.target_amount_cents = resolve_amount_cents(self.target_amount_cents, self.target_amount)
        self.current_amount_cents = resolve_amount_cents(self.current_amount_cents, self.current_amount)
        return self

    def to_domain(self) -> Goal:
        return Goal(
            goal_id=self.id,
            name=self.name,
            target_amount_cents=self.target_amount_cents,
            current_amount_cents=self.current_amount_cents,
            deadline=self.deadline,
        )


def load_transactions(rows: Iterable[dict]) -> List[Transaction]:
    return [TransactionRecord.model_validate(row).to_domain() for row in rows]


def load_recurring(rows: Iterable[dict]) -> List[RecurringItem]:
    return [RecurringRecord.model_validate(row).to_domain() for row in rows]


def load_accounts(rows: Iterable[dict]) -> List[Account]:
    return [AccountRecord.model_validate(row).to_domain() for row in rows]


def load_credit_cards(rows: Iterable[dict]) -> List[CreditCard]:
    return [CreditCardRecord.model_validate(row).to_domain() for row in rows]


def load_goals(rows: Iterable[dict]) -> List[Goal]:
    return [GoalRecord.model_validate(row).to_domain() for row in rows]
