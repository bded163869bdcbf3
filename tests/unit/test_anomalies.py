"""Unit tests for anomaly detection"""

from datetime import date

from finance_engine.domain.anomalies import (
    detect_anomalies,
    find_duplicates,
    find_spikes,
    find_unusual_fees,
)
from finance_engine.domain.models import AnomalyType, Severity


def test_duplicate_same_merchant_within_window(txn):
    transactions = [
        txn("a", 29900, merchant="Netflix", day=date(2026, 2, 1)),
        txn("b", 29900, merchant="Netflix", day=date(2026, 2, 3)),
    ]

    anomalies = find_duplicates(transactions)

    assert len(anomalies) == 1
    assert anomalies[0].type == AnomalyType.DUPLICATE
    assert anomalies[0].severity == Severity.WARNING
    assert anomalies[0].related_ids == ["a", "b"]
    assert "Netflix" in anomalies[0].description
    assert "$299" in anomalies[0].description


def test_duplicate_outside_window_is_ignored(txn):
    transactions = [
        txn("a", 29900, merchant="Netflix", day=date(2026, 2, 1)),
        txn("b", 29900, merchant="Netflix", day=date(2026, 2, 4)),
    ]
    assert find_duplicates(transactions) == []


def test_duplicate_requires_same_amount_and_merchant(txn):
    transactions = [
        txn("a", 29900, merchant="Netflix"),
        txn("b", 29901, merchant="Netflix"),
        txn("c", 29900, merchant="Spotify"),
        txn("d", 5000, merchant=""),
        txn("e", 5000, merchant=""),
    ]
    assert find_duplicates(transactions) == []


def test_unusual_fee_threshold(txn):
    transactions = [
        txn("big", 50001, category="comisiones_intereses", merchant="Banco", is_fee_or_interest=True),
        txn("limit", 50000, category="comisiones_intereses", is_fee_or_interest=True),
        txn("not_fee", 90000),
    ]

    anomalies = find_unusual_fees(transactions)

    assert [a.related_ids for a in anomalies] == [["big"]]
    assert anomalies[0].type == AnomalyType.UNUSUAL_FEE


def test_unusual_fee_custom_threshold(txn):
    fee = txn("fee", 20000, is_fee_or_interest=True)
    assert find_unusual_fees([fee], threshold_cents=10000)[0].description.startswith(
        "Comisión/interés inusual: Sin comercio"
    )


def test_spike_over_three_times_average(txn):
    transactions = [txn(str(i), 1000, merchant="Oxxo") for i in range(6)]
    transactions.append(txn("tv", 10000, merchant="Liverpool"))

    anomalies = find_spikes(transactions)

    assert [a.related_ids for a in anomalies] == [["tv"]]
    assert anomalies[0].severity == Severity.INFO
    assert "Liverpool" in anomalies[0].description


def test_spike_needs_enough_samples(txn):
    transactions = [txn(str(i), 1000) for i in range(4)]
    transactions.append(txn("tv", 100000))
    assert find_spikes(transactions) == []


def test_spike_ignores_transfers(txn):
    transactions = [txn(str(i), 1000) for i in range(6)]
    transactions.append(txn("move", 500000, category="transferencias"))
    assert find_spikes(transactions) == []


def test_detect_anomalies_orders_by_kind(txn):
    transactions = [txn(str(i), 1000, merchant=f"m{i}", day=date(2026, 2, i + 1)) for i in range(6)]
    transactions += [
        txn("fee", 60000, merchant="Banco", is_fee_or_interest=True, day=date(2026, 2, 20)),
        txn("dup", 1000, merchant="m0", day=date(2026, 2, 2)),
    ]

    kinds = [a.type for a in detect_anomalies(transactions)]

    assert kinds == [AnomalyType.DUPLICATE, AnomalyType.UNUSUAL_FEE, AnomalyType.SPIKE]


def test_detect_anomalies_empty():
    assert detect_anomalies([]) == []
