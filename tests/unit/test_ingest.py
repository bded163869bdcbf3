"""Unit tests for amount resolution and record schemas"""

from datetime import date

import pytest
from pydantic import ValidationError

from finance_engine.domain.exceptions import AmountOutOfRangeError, InvalidAmountError
from finance_engine.domain.models import TransactionType
from finance_engine.domain.recurrence import RecurrenceFrequency
from finance_engine.ingest.amounts import resolve_amount_cents
from finance_engine.ingest.records import (
    CreditCardRecord,
    GoalRecord,
    RecurringRecord,
    TransactionRecord,
    load_accounts,
    load_credit_cards,
    load_transactions,
)


def test_resolve_prefers_cents():
    assert resolve_amount_cents(cents=1999, major_units="5.00") == 1999


def test_resolve_falls_back_to_major_units():
    assert resolve_amount_cents(major_units="19.99") == 1999
    assert resolve_amount_cents(major_units=19.99) == 1999


def test_resolve_zero_cents_is_a_value():
    assert resolve_amount_cents(cents=0, major_units="12.00") == 0


def test_resolve_without_amount_raises():
    with pytest.raises(InvalidAmountError):
        resolve_amount_cents()


def test_resolve_rejects_unsafe_cents():
    with pytest.raises(AmountOutOfRangeError):
        resolve_amount_cents(cents=2**60)


def test_resolve_rejects_bad_major_units():
    with pytest.raises(InvalidAmountError):
        resolve_amount_cents(major_units="doce")


def test_transaction_record_camel_case_payload():
    record = TransactionRecord.model_validate(
        {
            "id": "tx_1",
            "type": "expense",
            "date": "2026-02-11T23:59:59.000Z",
            "category": "comida",
            "merchant": "Taqueria",
            "amountCents": 15050,
            "isFeeOrInterest": False,
        }
    )

    txn = record.to_domain()

    assert txn.transaction_id == "tx_1"
    assert txn.amount_cents == 15050
    assert txn.date == date(2026, 2, 11)
    assert txn.merchant == "Taqueria"


def test_transaction_record_legacy_amount():
    record = TransactionRecord.model_validate({"id": "tx_2", "date": "2026-02-01", "amount": 19.99})

    assert record.amount_cents == 1999
    assert record.type == "expense"
    assert record.category == "otros"


def test_transaction_record_snake_case_payload():
    record = TransactionRecord(id="tx_3", date=date(2026, 2, 1), amount_cents=100, is_fee_or_interest=True)
    assert record.to_domain().is_fee_or_interest is True


def test_transaction_record_without_amount_is_invalid():
    with pytest.raises(ValidationError):
        TransactionRecord.model_validate({"id": "tx_4", "date": "2026-02-01"})


@pytest.mark.parametrize("type_", ["gasto", "Expense", "transfer"])
def test_transaction_record_rejects_unknown_type(type_):
    with pytest.raises(ValidationError):
        TransactionRecord.model_validate(
            {"id": "tx_6", "type": type_, "date": "2026-02-01", "amountCents": 100}
        )


def test_transaction_record_type_becomes_enum():
    record = TransactionRecord.model_validate(
        {"id": "tx_7", "type": "income", "date": "2026-02-01", "amountCents": 100}
    )
    assert record.to_domain().type is TransactionType.INCOME


def test_transaction_record_with_bad_date_is_invalid():
    with pytest.raises(ValidationError):
        TransactionRecord.model_validate({"id": "tx_5", "date": "ayer", "amountCents": 100})


def test_recurring_record():
    item = RecurringRecord.model_validate(
        {"id": "s1", "name": "Netflix", "frequency": "monthly", "nextDate": "2026-02-15", "amount": "299"}
    ).to_domain()

    assert item.frequency is RecurrenceFrequency.MONTHLY
    assert item.amount_cents == 29900
    assert item.next_date == date(2026, 2, 15)
    assert item.active is True


def test_recurring_record_rejects_unknown_frequency():
    with pytest.raises(ValidationError):
        RecurringRecord.model_validate(
            {"id": "s1", "name": "Netflix", "frequency": "daily", "nextDate": "2026-02-15", "amountCents": 1}
        )


def test_credit_card_record_resolves_both_amounts():
    card = CreditCardRecord.model_validate(
        {"id": "c1", "name": "Oro", "creditLimit": "50000", "balanceCents": 1234500, "apr": 45.5}
    ).to_domain()

    assert card.credit_limit_cents == 5000000
    assert card.balance_cents == 1234500
    assert card.apr == 45.5


def test_goal_record_optional_deadline():
    goal = GoalRecord.model_validate(
        {"id": "g1", "name": "Viaje", "targetAmountCents": 100000, "currentAmount": 250.5}
    ).to_domain()

    assert goal.current_amount_cents == 25050
    assert goal.deadline is None


def test_bulk_loaders():
    transactions = load_transactions(
        [
            {"id": "1", "date": "2026-02-01", "amountCents": 100, "type": "income"},
            {"id": "2", "date": "2026-02-02", "amount": "0.30"},
        ]
    )
    accounts = load_accounts([{"id": "a1", "name": "Nómina", "balance": "1500.00"}])
    cards = load_credit_cards([{"id": "c1", "name": "Oro", "creditLimitCents": 0, "balanceCents": 0}])

    assert [t.amount_cents for t in transactions] == [100, 30]
    assert accounts[0].balance_cents == 150000
    assert cards[0].credit_limit_cents == 0
