"""Prioritised advice derived from the monthly analytics"""

from typing import List

from finance_engine.domain.models import (
    CashFlow,
    CategoryBreakdown,
    CreditCardAnalysis,
    MonthlyProjection,
    Recommendation,
    RiskLevel,
)
from finance_engine.domain.money import DEFAULT_CURRENCY, DEFAULT_LOCALE, format_amount

TOP_CATEGORY_THRESHOLD_PCT = 40
LOW_SAVINGS_RATE_PCT = 20


def generate_recommendations(
    cash_flow: CashFlow,
    category_breakdown: List[CategoryBreakdown],
    credit_cards: List[CreditCardAnalysis],
    projection: MonthlyProjection,
    top_category_threshold_pct: float = TOP_CATEGORY_THRESHOLD_PCT,
    low_savings_rate_pct: float = LOW_SAVINGS_RATE_PCT,
    currency: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    min_fraction_digits: int = 0,
    max_fraction_digits: int = 2,
) -> List[Recommendation]:
    """
    Build recommendations in priority order (1 = most urgent).

    Order:
    1. Overdraft risk from the end-of-month projection
    2. High/critical cards, highest utilization first
    3. Spending more than earned
    4. A single category above the threshold share of expenses
    5. Positive but low savings rate
    """

    def money(cents: int) -> str:
        return format_amount(cents, currency, locale, min_fraction_digits, max_fraction_digits)

    recs: List[Recommendation] = []

    def add(category: str, title: str, description: str, impact: str) -> None:
        recs.append(
            Recommendation(
                priority=len(recs) + 1,
                category=category,
                title=title,
                description=description,
                impact=impact,
            )
        )

    if projection.overdraft_risk:
        add(
            "presupuesto",
            "Riesgo de sobregiro detectado",
            f"Al ritmo actual de gasto ({money(projection.daily_burn_cents)}/día), "
            "podrías quedarte sin fondos antes de fin de mes.",
            "Reducir gastos variables en al menos 30% esta semana.",
        )

    risky_cards = sorted(
        (c for c in credit_cards if c.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL)),
        key=lambda c: c.utilization,
        reverse=True,
    )
    for card in risky_cards:
        add(
            "pago",
            f"Pagar tarjeta {card.name}",
            f"Utilización al {card.utilization}% ({card.risk_level.value}). "
            f"Pago para no generar intereses: {money(card.no_interest_payment_cents)}. "
            f"Mínimo: {money(card.minimum_payment_cents)}.",
            card.impact_description,
        )

    if cash_flow.is_deficit:
        add(
            "ahorro",
            "Gastas más de lo que ganas",
            f"Déficit de {money(abs(cash_flow.net_balance_cents))}. "
            f"Tu tasa de ahorro es {cash_flow.savings_rate}%.",
            "Aplica la regla 50/30/20: 50% necesidades, 30% deseos, 20% ahorro.",
        )

    if category_breakdown:
        top = category_breakdown[0]
        if top.percentage > top_category_threshold_pct:
            add(
                "gasto",
                f"{top.label} consume {top.percentage}% de tus gastos",
                f"{money(top.total_cents)} en {top.count} transacciones. "
                "Considera establecer un tope mensual.",
                "Reducir esta categoría un 15% te ahorraría significativamente.",
            )

    if 0 < cash_flow.savings_rate < low_savings_rate_pct:
        add(
            "ahorro",
            "Tu tasa de ahorro es baja",
            f"Estás ahorrando solo el {cash_flow.savings_rate}% de tus ingresos. "
            f"La meta recomendada es {low_savings_rate_pct}%.",
            "Automatiza un ahorro del 10% el día de pago para empezar.",
        )

    return recs
