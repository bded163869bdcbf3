"""Pytest fixtures for testing"""

import logging
from datetime import date
from typing import Generator

import pytest

from finance_engine.domain.models import (
    Account,
    CreditCard,
    Goal,
    RecurringItem,
    Transaction,
    TransactionType,
)
from finance_engine.domain.recurrence import RecurrenceFrequency

TODAY = date(2026, 2, 10)


def make_transaction(
    transaction_id: str,
    amount_cents: int,
    type: str = "expense",
    category: str = "comida",
    day: date = TODAY,
    merchant: str = "",
    is_fee_or_interest: bool = False,
) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        date=day,
        amount_cents=amount_cents,
        type=TransactionType(type),
        category=category,
        merchant=merchant,
        is_fee_or_interest=is_fee_or_interest,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """February 2026 so far: salary, rent, groceries and a January leftover"""
    return [
        make_transaction("salary", 3_000_000, type="income", category="salario", day=date(2026, 2, 1)),
        make_transaction("rent", 1_200_000, category="renta", day=date(2026, 2, 2), merchant="Inmobiliaria"),
        make_transaction("market_1", 150_000, category="supermercado", day=date(2026, 2, 3), merchant="Walmart"),
        make_transaction("market_2", 100_000, category="supermercado", day=date(2026, 2, 8), merchant="Walmart"),
        make_transaction("tacos", 50_000, category="comida", day=date(2026, 2, 9), merchant="Taqueria"),
        make_transaction("january", 999_900, category="compras", day=date(2026, 1, 28), merchant="Liverpool"),
    ]


@pytest.fixture
def sample_accounts() -> list[Account]:
    return [
        Account(account_id="checking", name="Nómina", balance_cents=2_000_000),
        Account(account_id="savings", name="Ahorro", balance_cents=500_000),
    ]


@pytest.fixture
def sample_cards() -> list[CreditCard]:
    return [
        CreditCard(card_id="gold", name="Oro", credit_limit_cents=5_000_000, balance_cents=1_000_000),
        CreditCard(card_id="basic", name="Clásica", credit_limit_cents=1_000_000, balance_cents=900_000),
    ]


@pytest.fixture
def sample_subscriptions() -> list[RecurringItem]:
    return [
        RecurringItem("netflix", "Netflix", 29_900, RecurrenceFrequency.MONTHLY, date(2026, 2, 15)),
        RecurringItem("icloud", "iCloud", 120_000, RecurrenceFrequency.YEARLY, date(2026, 6, 1)),
        RecurringItem("gym", "Gimnasio", 10_000, RecurrenceFrequency.WEEKLY, date(2026, 2, 12)),
        RecurringItem("old", "Cancelada", 50_000, RecurrenceFrequency.MONTHLY, date(2025, 1, 1), active=False),
    ]


@pytest.fixture
def sample_incomes() -> list[RecurringItem]:
    return [
        RecurringItem("salary", "Sueldo", 1_500_000, RecurrenceFrequency.BIWEEKLY, date(2026, 2, 13)),
    ]


@pytest.fixture
def sample_goals() -> list[Goal]:
    return [
        Goal(goal_id="trip", name="Viaje", target_amount_cents=2_000_000, current_amount_cents=500_000),
    ]


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Undo setup_logging changes after the test"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        yield root
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


@pytest.fixture
def txn():
    """Factory for Transaction objects with sensible defaults"""
    return make_transaction
