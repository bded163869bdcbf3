"""Monthly financial summary - main entry point for the dashboard"""

import time
from datetime import date
from typing import Iterable, List, Optional

from finance_engine.config import Settings, settings as default_settings
from finance_engine.domain.analytics import (
    analyze_by_category,
    analyze_credit_card,
    calculate_cash_flow,
    calculate_overview,
    goal_progress,
    project_current_month,
)
from finance_engine.domain.anomalies import detect_anomalies
from finance_engine.domain.models import (
    Account,
    CreditCard,
    FinancialSummary,
    Goal,
    RecurringItem,
    Transaction,
)
from finance_engine.domain.recommendations import generate_recommendations
from finance_engine.domain.recurrence import monthly_total
from finance_engine.infrastructure.observability.logging import log_summary
from finance_engine.utils.date_utils import month_bounds, utc_today


def build_financial_summary(
    accounts: Iterable[Account],
    credit_cards: Iterable[CreditCard],
    transactions: Iterable[Transaction],
    subscriptions: Iterable[RecurringItem] = (),
    incomes: Iterable[RecurringItem] = (),
    goals: Iterable[Goal] = (),
    today: Optional[date] = None,
    config: Optional[Settings] = None,
) -> FinancialSummary:
    """
    Compose every analytic for the month containing ``today``.

    Flow:
    1. Keep only transactions dated inside the month
    2. Overview over all accounts and cards
    3. Cash flow, category breakdown and card analyses
    4. End-of-month projection from the combined account balance
    5. Anomalies and recommendations
    6. Monthly cost of active subscriptions, expected income, goal progress

    Inputs are not modified; the result is a fresh FinancialSummary.
    """
    start_time = time.time()
    config = config or default_settings
    today = today or utc_today()
    month_start, month_end = month_bounds(today)

    # 1. Month window, newest first
    month_transactions: List[Transaction] = sorted(
        (t for t in transactions if month_start <= t.date <= month_end),
        key=lambda t: t.date,
        reverse=True,
    )

    # 2. Overview
    accounts = list(accounts)
    credit_cards = list(credit_cards)
    overview = calculate_overview(accounts, credit_cards)

    # 3. Cash flow and breakdowns
    cash_flow = calculate_cash_flow(month_transactions)
    category_breakdown = analyze_by_category(month_transactions)
    card_analyses = [analyze_credit_card(card) for card in credit_cards]

    # 4. Projection
    projection = project_current_month(month_transactions, overview.total_balance_cents, today)

    # 5. Anomalies and recommendations
    anomalies = detect_anomalies(
        month_transactions,
        duplicate_window_days=config.duplicate_window_days,
        unusual_fee_threshold_cents=config.unusual_fee_threshold_cents,
        spike_multiplier=config.spike_multiplier,
        spike_min_samples=config.spike_min_samples,
        currency=config.currency,
        locale=config.locale,
        min_fraction_digits=config.min_fraction_digits,
        max_fraction_digits=config.max_fraction_digits,
    )
    recommendations = generate_recommendations(
        cash_flow,
        category_breakdown,
        card_analyses,
        projection,
        top_category_threshold_pct=config.top_category_threshold_pct,
        low_savings_rate_pct=config.low_savings_rate_pct,
        currency=config.currency,
        locale=config.locale,
        min_fraction_digits=config.min_fraction_digits,
        max_fraction_digits=config.max_fraction_digits,
    )

    # 6. Recurring items and goals
    active_subscriptions = [s for s in subscriptions if s.active]
    active_incomes = [i for i in incomes if i.active]

    summary = FinancialSummary(
        month_start=month_start,
        month_end=month_end,
        overview=overview,
        cash_flow=cash_flow,
        category_breakdown=category_breakdown,
        credit_cards=card_analyses,
        projection=projection,
        anomalies=anomalies,
        recommendations=recommendations,
        subscription_count=len(active_subscriptions),
        subscriptions_monthly_cents=monthly_total(active_subscriptions),
        expected_monthly_income_cents=monthly_total(active_incomes),
        goals=[goal_progress(goal) for goal in goals],
        recent_transactions=month_transactions[: config.recent_transactions_limit],
    )

    duration_ms = (time.time() - start_time) * 1000
    log_summary(
        month=month_start.strftime("%Y-%m"),
        transaction_count=len(month_transactions),
        anomaly_count=len(anomalies),
        recommendation_count=len(recommendations),
        overdraft_risk=projection.overdraft_risk,
        duration_ms=duration_ms,
    )

    return summary
