"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

from finance_engine.domain.recurrence import RecurrenceFrequency


class TransactionType(str, Enum):
    """Direction of a recorded movement"""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Recorded movement; amount is a magnitude, direction comes from type"""

    transaction_id: str
    date: date
    amount_cents: int
    type: TransactionType
    category: str
    merchant: str = ""
    description: str = ""
    is_fee_or_interest: bool = False


@dataclass(frozen=True)
class RecurringItem:
    """Subscription or income stream"""

    item_id: str
    name: str
    amount_cents: int
    frequency: RecurrenceFrequency
    next_date: date
    active: bool = True


@dataclass(frozen=True)
class Account:
    account_id: str
    name: str
    balance_cents: int


@dataclass(frozen=True)
class CreditCard:
    card_id: str
    name: str
    credit_limit_cents: int
    balance_cents: int
    apr: float = 0.0


@dataclass(frozen=True)
class Goal:
    goal_id: str
    name: str
    target_amount_cents: int
    current_amount_cents: int
    deadline: Optional[date] = None


class RiskLevel(str, Enum):
    """Credit utilization tier"""

    LOW = "low"  # <= 30%
    MEDIUM = "medium"  # <= 50%
    HIGH = "high"  # <= 75%
    CRITICAL = "critical"  # > 75%


@dataclass
class Overview:
    total_balance_cents: int
    total_debt_cents: int
    net_worth_cents: int
    account_count: int
    card_count: int


@dataclass
class CashFlow:
    total_income_cents: int
    total_expenses_cents: int
    net_balance_cents: int
    savings_rate: float
    is_deficit: bool


@dataclass
class CategoryBreakdown:
    category: str
    label: str
    color: str
    total_cents: int
    percentage: float
    count: int


@dataclass
class CreditCardAnalysis:
    card_id: str
    name: str
    utilization: float
    risk_level: RiskLevel
    minimum_payment_cents: int
    no_interest_payment_cents: int
    available_credit_cents: int
    impact_description: str


@dataclass
class MonthlyProjection:
    daily_burn_cents: int
    projected_remaining_expense_cents: int
    projected_balance_cents: int
    overdraft_risk: bool
    liquidity_days: int
    days_remaining: int


@dataclass
class AccountShare:
    account_id: str
    pct: float


@dataclass
class GoalProgress:
    goal_id: str
    name: str
    target_amount_cents: int
    current_amount_cents: int
    progress: float
    deadline: Optional[date] = None


class AnomalyType(str, Enum):
    DUPLICATE = "duplicate"
    SPIKE = "spike"
    UNUSUAL_FEE = "unusual_fee"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass
class Anomaly:
    type: AnomalyType
    severity: Severity
    description: str
    amount_cents: int
    related_ids: List[str] = field(default_factory=list)


@dataclass
class Recommendation:
    priority: int  # 1 = highest
    category: str  # "pago" | "ahorro" | "gasto" | "presupuesto"
    title: str
    description: str
    impact: str
    actionable: bool = True


@dataclass
class FinancialSummary:
    """Everything the dashboard shows for one month"""

    month_start: date
    month_end: date
    overview: Overview
    cash_flow: CashFlow
    category_breakdown: List[CategoryBreakdown]
    credit_cards: List[CreditCardAnalysis]
    projection: MonthlyProjection
    anomalies: List[Anomaly]
    recommendations: List[Recommendation]
    subscription_count: int
    subscriptions_monthly_cents: int
    expected_monthly_income_cents: int
    goals: List[GoalProgress]
    recent_transactions: List[Transaction]
