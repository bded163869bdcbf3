"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timezone

from finance_engine.domain.exceptions import InvalidDateError

DateInput = date | datetime | str


def to_utc_date(value: DateInput) -> date:
    """
    Normalize a date-like value to its UTC calendar day.

    Aware datetimes are converted to UTC first; naive datetimes are taken as
    UTC. Strings are parsed as ISO-8601 ("2026-02-11", "2026-02-11T08:30:00Z").
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return to_utc_date(datetime.fromisoformat(text))
        except ValueError as e:
            raise InvalidDateError(f"Invalid date: {value!r}") from e

    raise InvalidDateError(f"Invalid date type: {type(value).__name__}")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing ``day``"""
    return day.replace(day=1), day.replace(day=days_in_month(day.year, day.month))


def month_progress(today: date) -> tuple[int, int]:
    """
    Return (days_passed, days_remaining) for the month of ``today``.

    Today counts as passed: on Feb 10 of a 28-day month this is (10, 18).
    """
    return today.day, days_in_month(today.year, today.month) - today.day
