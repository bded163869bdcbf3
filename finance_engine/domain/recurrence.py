"""Recurrence engine - calendar advancement and frequency normalization"""

from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, List, Protocol

from dateutil.relativedelta import relativedelta

from finance_engine.domain.exceptions import InvalidFrequencyError
from finance_engine.domain.money import assert_safe_integer, round_cents, sum_cents
from finance_engine.utils.date_utils import DateInput, to_utc_date, utc_today

MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52


class RecurrenceFrequency(str, Enum):
    """Cadence of a subscription or income stream"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def coerce(cls, value: "RecurrenceFrequency | str") -> "RecurrenceFrequency":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidFrequencyError(f"Unsupported frequency: {value!r}") from e


class HasRecurringAmount(Protocol):
    amount_cents: int
    frequency: RecurrenceFrequency


# Steps are always positive; the smallest is 7 days
_STEPS = {
    RecurrenceFrequency.WEEKLY: timedelta(days=7),
    RecurrenceFrequency.BIWEEKLY: timedelta(days=14),
    RecurrenceFrequency.MONTHLY: relativedelta(months=1),
    RecurrenceFrequency.YEARLY: relativedelta(months=12),
}


def advance_date(value: DateInput, frequency: RecurrenceFrequency | str) -> date:
    """
    Advance a date by one period of ``frequency``.

    The input is reduced to its UTC calendar day first. Month and year steps
    clamp the day-of-month to the end of the target month instead of rolling
    over into the next one.

    Example:
        2026-01-31 monthly -> 2026-02-28
        2024-02-29 yearly  -> 2025-02-28
    """
    frequency = RecurrenceFrequency.coerce(frequency)
    return to_utc_date(value) + _STEPS[frequency]


def next_occurrence(
    seed: DateInput,
    frequency: RecurrenceFrequency | str,
    now: DateInput | None = None,
) -> date:
    """
    First occurrence on or after ``now`` (default: today in UTC).

    A seed already on or after ``now`` is returned as-is; otherwise it is
    advanced one period at a time until it catches up.

    Example:
        seed 2025-10-15, monthly, now 2026-02-11 -> 2026-02-15
    """
    frequency = RecurrenceFrequency.coerce(frequency)
    cursor = to_utc_date(seed)
    baseline = utc_today() if now is None else to_utc_date(now)

    while cursor < baseline:
        cursor = advance_date(cursor, frequency)

    return cursor


def occurrences_between(
    seed: DateInput,
    frequency: RecurrenceFrequency | str,
    start: DateInput,
    end: DateInput,
) -> List[date]:
    """All occurrences in the inclusive window [start, end]"""
    frequency = RecurrenceFrequency.coerce(frequency)
    end_day = to_utc_date(end)

    occurrences = []
    cursor = next_occurrence(seed, frequency, start)
    while cursor <= end_day:
        occurrences.append(cursor)
        cursor = advance_date(cursor, frequency)

    return occurrences


def to_monthly_cents(amount_cents: int, frequency: RecurrenceFrequency | str) -> int:
    """
    Normalize a recurring amount to its monthly equivalent.

    weekly uses 52 weeks / 12 months and yearly divides by 12, both rounded
    half-up to the cent; biweekly doubles and monthly is unchanged.
    """
    frequency = RecurrenceFrequency.coerce(frequency)
    assert_safe_integer(amount_cents, "Recurring amount")

    if frequency is RecurrenceFrequency.WEEKLY:
        monthly = round_cents(Decimal(amount_cents * WEEKS_PER_YEAR) / MONTHS_PER_YEAR)
    elif frequency is RecurrenceFrequency.BIWEEKLY:
        monthly = amount_cents * 2
    elif frequency is RecurrenceFrequency.YEARLY:
        monthly = round_cents(Decimal(amount_cents) / MONTHS_PER_YEAR)
    else:
        monthly = amount_cents

    assert_safe_integer(monthly, "Monthly amount")
    return monthly


def to_yearly_cents(amount_cents: int, frequency: RecurrenceFrequency | str) -> int:
    """Normalize a recurring amount to its yearly equivalent (exact)"""
    frequency = RecurrenceFrequency.coerce(frequency)
    assert_safe_integer(amount_cents, "Recurring amount")

    multiplier = {
        RecurrenceFrequency.WEEKLY: WEEKS_PER_YEAR,
        RecurrenceFrequency.BIWEEKLY: 26,
        RecurrenceFrequency.MONTHLY: MONTHS_PER_YEAR,
        RecurrenceFrequency.YEARLY: 1,
    }[frequency]

    yearly = amount_cents * multiplier
    assert_safe_integer(yearly, "Yearly amount")
    return yearly


def monthly_total(
    items: Iterable[HasRecurringAmount | tuple[int, RecurrenceFrequency | str]],
) -> int:
    """Sum of monthly equivalents, e.g. total subscription cost per month"""
    monthly_amounts = []
    for item in items:
        if isinstance(item, tuple):
            amount_cents, frequency = item
        else:
            amount_cents, frequency = item.amount_cents, item.frequency
        monthly_amounts.append(to_monthly_cents(amount_cents, frequency))

    return sum_cents(monthly_amounts)
