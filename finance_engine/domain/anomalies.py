"""Anomaly detection over a month of transactions"""

from decimal import Decimal
from itertools import combinations
from typing import Iterable, List

from finance_engine.domain.categories import TRANSFER_CATEGORY
from finance_engine.domain.models import Anomaly, AnomalyType, Severity, Transaction
from finance_engine.domain.money import (
    DEFAULT_CURRENCY,
    DEFAULT_LOCALE,
    format_amount,
    round_cents,
    sum_cents,
)

DUPLICATE_WINDOW_DAYS = 2
UNUSUAL_FEE_THRESHOLD_CENTS = 50_000  # $500
SPIKE_MULTIPLIER = 3
SPIKE_MIN_SAMPLES = 5


def _formatter(currency: str, locale: str, min_fraction_digits: int, max_fraction_digits: int):
    def money(cents: int) -> str:
        return format_amount(cents, currency, locale, min_fraction_digits, max_fraction_digits)

    return money


def find_duplicates(
    transactions: List[Transaction],
    window_days: int = DUPLICATE_WINDOW_DAYS,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> List[Anomaly]:
    """Same merchant, same amount, at most ``window_days`` apart"""
    money = _formatter(currency, locale, min_fraction_digits, max_fraction_digits)
    anomalies = []
    for a, b in combinations(transactions, 2):
        if not a.merchant or a.merchant != b.merchant:
            continue
        if a.amount_cents != b.amount_cents:
            continue
        if abs((a.date - b.date).days) > window_days:
            continue
        anomalies.append(
            Anomaly(
                type=AnomalyType.DUPLICATE,
                severity=Severity.WARNING,
                description=(
                    f"Posible cargo duplicado: {a.merchant} por "
                    f"{money(abs(a.amount_cents))}"
                ),
                amount_cents=a.amount_cents,
                related_ids=[a.transaction_id, b.transaction_id],
            )
        )
    return anomalies


def find_unusual_fees(
    transactions: List[Transaction],
    threshold_cents: int = UNUSUAL_FEE_THRESHOLD_CENTS,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> List[Anomaly]:
    money = _formatter(currency, locale, min_fraction_digits, max_fraction_digits)
    return [
        Anomaly(
            type=AnomalyType.UNUSUAL_FEE,
            severity=Severity.WARNING,
            description=(
                f"Comisión/interés inusual: {t.merchant or 'Sin comercio'} por "
                f"{money(abs(t.amount_cents))}"
            ),
            amount_cents=t.amount_cents,
            related_ids=[t.transaction_id],
        )
        for t in transactions
        if t.is_fee_or_interest and abs(t.amount_cents) > threshold_cents
    ]


def find_spikes(
    transactions: List[Transaction],
    multiplier: int = SPIKE_MULTIPLIER,
    min_samples: int = SPIKE_MIN_SAMPLES,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> List[Anomaly]:
    """
    Flag single movements larger than ``multiplier`` times the average.

    Transfers are excluded from both the average and the candidates. The
    comparison is done in integers: |amount| * n > multiplier * total.
    """
    money = _formatter(currency, locale, min_fraction_digits, max_fraction_digits)
    candidates = [t for t in transactions if t.category != TRANSFER_CATEGORY]
    if len(candidates) <= min_samples:
        return []

    total = sum_cents(abs(t.amount_cents) for t in candidates)
    count = len(candidates)
    average = round_cents(Decimal(total) / count)

    return [
        Anomaly(
            type=AnomalyType.SPIKE,
            severity=Severity.INFO,
            description=(
                f"Gasto inusualmente alto: {t.merchant or t.category} por "
                f"{money(abs(t.amount_cents))} "
                f"(promedio: {format_amount(average, currency, locale, 0, 0)})"
            ),
            amount_cents=t.amount_cents,
            related_ids=[t.transaction_id],
        )
        for t in candidates
        if abs(t.amount_cents) * count > multiplier * total
    ]


def detect_anomalies(
    transactions: Iterable[Transaction],
    duplicate_window_days: int = DUPLICATE_WINDOW_DAYS,
    unusual_fee_threshold_cents: int = UNUSUAL_FEE_THRESHOLD_CENTS,
    spike_multiplier: int = SPIKE_MULTIPLIER,
    spike_min_samples: int = SPIKE_MIN_SAMPLES,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> List[Anomaly]:
    """Duplicates first, then unusual fees, then spending spikes"""
    transactions = list(transactions)
    digits = (min_fraction_digits, max_fraction_digits)
    return (
        find_duplicates(
            transactions, duplicate_window_days, currency, locale, *digits
        )
        + find_unusual_fees(
            transactions, unusual_fee_threshold_cents, currency, locale, *digits
        )
        + find_spikes(
            transactions, spike_multiplier, spike_min_samples, currency, locale, *digits
        )
    )
