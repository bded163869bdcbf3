"""Cash flow, category, credit card and projection analytics.

All inputs and outputs are integer cents. Percentages go through
``money.percentages`` so every ratio shown to the user follows the same
half-up rounding.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from finance_engine.domain.categories import DEFAULT_CATEGORY, category_info
from finance_engine.domain.models import (
    Account,
    AccountShare,
    CashFlow,
    CategoryBreakdown,
    CreditCard,
    CreditCardAnalysis,
    Goal,
    GoalProgress,
    MonthlyProjection,
    Overview,
    RiskLevel,
    Transaction,
    TransactionType,
)
from finance_engine.domain.money import assert_safe_integer, percentages, round_cents, sum_cents
from finance_engine.utils.date_utils import month_progress, utc_today

MINIMUM_PAYMENT_RATE = Decimal("0.03")
MINIMUM_PAYMENT_FLOOR_CENTS = 2_000  # $20
MAX_LIQUIDITY_DAYS = 999

IMPACT_DESCRIPTIONS = {
    RiskLevel.LOW: "Utilización saludable. Buen impacto en score crediticio.",
    RiskLevel.MEDIUM: "Utilización moderada. Considera reducir para mejorar score.",
    RiskLevel.HIGH: "Utilización alta. Tu score crediticio puede verse afectado negativamente.",
    RiskLevel.CRITICAL: "¡Utilización crítica! Alto riesgo de sobreendeudamiento.",
}


def calculate_cash_flow(transactions: Iterable[Transaction]) -> CashFlow:
    """
    Total income vs expenses for a set of transactions.

    Stored amounts are magnitudes; ``type`` decides direction. Savings rate is
    net / income as a signed percentage so a deficit shows as negative.
    """
    transactions = list(transactions)
    total_income = sum_cents(
        abs(t.amount_cents) for t in transactions if t.type == TransactionType.INCOME
    )
    total_expenses = sum_cents(
        abs(t.amount_cents) for t in transactions if t.type == TransactionType.EXPENSE
    )
    net_balance = total_income - total_expenses

    return CashFlow(
        total_income_cents=total_income,
        total_expenses_cents=total_expenses,
        net_balance_cents=net_balance,
        savings_rate=percentages(net_balance, total_income, clamp=False, decimals=2),
        is_deficit=net_balance < 0,
    )


def analyze_by_category(transactions: Iterable[Transaction]) -> List[CategoryBreakdown]:
    """
    Group expenses by category, largest first.

    Each percentage is rounded on its own, so the column may total 99.99 or
    100.01; that drift is left visible.
    """
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    total_expenses = sum_cents(abs(t.amount_cents) for t in expenses)

    grouped: Dict[str, List[int]] = {}
    for txn in expenses:
        grouped.setdefault(txn.category or DEFAULT_CATEGORY, []).append(abs(txn.amount_cents))

    breakdown = []
    for category, amounts in grouped.items():
        info = category_info(category)
        total = sum_cents(amounts)
        breakdown.append(
            CategoryBreakdown(
                category=category,
                label=info.label,
                color=info.color,
                total_cents=total,
                percentage=percentages(total, total_expenses, clamp=True, decimals=2),
                count=len(amounts),
            )
        )

    # sorted() is stable, ties keep first-seen order
    return sorted(breakdown, key=lambda b: b.total_cents, reverse=True)


def determine_risk_level(utilization: float | Decimal) -> RiskLevel:
    """
    Map utilization percentage to a risk tier.

    Tiers:
    - <= 30: low
    - <= 50: medium
    - <= 75: high
    - > 75:  critical
    """
    if utilization <= 30:
        return RiskLevel.LOW
    elif utilization <= 50:
        return RiskLevel.MEDIUM
    elif utilization <= 75:
        return RiskLevel.HIGH
    else:
        return RiskLevel.CRITICAL


def estimate_minimum_payment(balance_cents: int) -> int:
    """Greater of 3% of balance or a $20 floor, never above the balance itself"""
    assert_safe_integer(balance_cents, "Card balance")
    if balance_cents <= 0:
        return 0
    percent_payment = round_cents(balance_cents * MINIMUM_PAYMENT_RATE)
    return max(percent_payment, min(MINIMUM_PAYMENT_FLOOR_CENTS, balance_cents))


def analyze_credit_card(card: CreditCard) -> CreditCardAnalysis:
    """
    Utilization, risk tier and payment guidance for one card.

    Utilization is not capped: a card over its limit reports more than 100.
    """
    utilization = percentages(card.balance_cents, card.credit_limit_cents, clamp=False, decimals=2)
    # Tier from the exact ratio; the rounded figure is for display only
    if card.credit_limit_cents > 0:
        exact = Decimal(card.balance_cents * 100) / Decimal(card.credit_limit_cents)
    else:
        exact = Decimal(0)
    risk_level = determine_risk_level(exact)

    return CreditCardAnalysis(
        card_id=card.card_id,
        name=card.name,
        utilization=utilization,
        risk_level=risk_level,
        minimum_payment_cents=estimate_minimum_payment(card.balance_cents),
        no_interest_payment_cents=max(0, card.balance_cents),
        available_credit_cents=max(0, card.credit_limit_cents - card.balance_cents),
        impact_description=IMPACT_DESCRIPTIONS[risk_level],
    )


def project_end_of_month(
    current_balance_cents: int,
    month_expense_cents: int,
    days_passed: int,
    days_remaining: int,
) -> MonthlyProjection:
    """
    Project the end-of-month balance from the spending pace so far.

    Daily burn is month expenses / days passed (at least 1), rounded half-up
    to the cent, and is assumed to continue for the remaining days.

    Example:
        balance 500000, spent 200000 in 10 days, 20 days left
        -> burn 20000/day, projected balance 100000, no overdraft risk
    """
    assert_safe_integer(current_balance_cents, "Current balance")
    assert_safe_integer(month_expense_cents, "Month expenses")

    safe_days_passed = max(1, days_passed)
    safe_days_remaining = max(0, days_remaining)

    daily_burn = round_cents(Decimal(month_expense_cents) / safe_days_passed)
    projected_remaining = daily_burn * safe_days_remaining
    projected_balance = current_balance_cents - projected_remaining
    assert_safe_integer(projected_balance, "Projected balance")

    if daily_burn > 0:
        liquidity_days = max(0, min(current_balance_cents // daily_burn, MAX_LIQUIDITY_DAYS))
    else:
        liquidity_days = MAX_LIQUIDITY_DAYS

    return MonthlyProjection(
        daily_burn_cents=daily_burn,
        projected_remaining_expense_cents=projected_remaining,
        projected_balance_cents=projected_balance,
        overdraft_risk=projected_balance < 0,
        liquidity_days=liquidity_days,
        days_remaining=safe_days_remaining,
    )


def project_current_month(
    transactions: Iterable[Transaction],
    current_balance_cents: int,
    today: Optional[date] = None,
) -> MonthlyProjection:
    """Projection using the expenses dated in the month of ``today``"""
    today = today or utc_today()
    days_passed, days_remaining = month_progress(today)

    month_expenses = sum_cents(
        abs(t.amount_cents)
        for t in transactions
        if t.type == TransactionType.EXPENSE
        and (t.date.year, t.date.month) == (today.year, today.month)
    )

    return project_end_of_month(current_balance_cents, month_expenses, days_passed, days_remaining)


def spent_pct(total_income_cents: int, total_expenses_cents: int) -> float:
    """Share of income already spent, whole percent, capped at 100"""
    return percentages(total_expenses_cents, total_income_cents, clamp=True, decimals=0)


def clamp_percentage(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(100.0, value))


def account_distribution(accounts: Iterable[Account]) -> List[AccountShare]:
    """Each account's share of the combined balance"""
    accounts = list(accounts)
    total = sum_cents(a.balance_cents for a in accounts)

    if total <= 0:
        return [AccountShare(account_id=a.account_id, pct=0.0) for a in accounts]

    return [
        AccountShare(
            account_id=a.account_id,
            pct=percentages(a.balance_cents, total, clamp=True, decimals=2),
        )
        for a in accounts
    ]


def goal_progress(goal: Goal) -> GoalProgress:
    """Progress can exceed 100 once a goal is overfunded"""
    return GoalProgress(
        goal_id=goal.goal_id,
        name=goal.name,
        target_amount_cents=goal.target_amount_cents,
        current_amount_cents=goal.current_amount_cents,
        progress=percentages(
            goal.current_amount_cents, goal.target_amount_cents, clamp=False, decimals=2
        ),
        deadline=goal.deadline,
    )


def calculate_overview(accounts: Iterable[Account], cards: Iterable[CreditCard]) -> Overview:
    accounts = list(accounts)
    cards = list(cards)
    total_balance = sum_cents(a.balance_cents for a in accounts)
    total_debt = sum_cents(c.balance_cents for c in cards)

    return Overview(
        total_balance_cents=total_balance,
        total_debt_cents=total_debt,
        net_worth_cents=total_balance - total_debt,
        account_count=len(accounts),
        card_count=len(cards),
    )
