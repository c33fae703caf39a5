"""Domain models for derived financial views."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import BudgetStatus
from src.domain.models.ledger import Budget, DueAlert


@dataclass(frozen=True)
class BudgetSpend:
    """Budget paired with the spend rolled up for a period."""

    budget: Budget
    spent: Decimal


@dataclass(frozen=True)
class BudgetUtilization:
    """Presentation figures derived from a budget spend.

    Attributes:
        budget: Budget the figures refer to.
        spent: Spend for the viewed period.
        percent: Share of the limit used, clamped to [0, 100].
        status: NORMAL, NEAR or OVER.
        overage: Amount spent beyond the limit.
        remaining: Amount left before reaching the limit.
    """

    budget: Budget
    spent: Decimal
    percent: Decimal
    status: BudgetStatus
    overage: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class BudgetOverview:
    """Budget utilizations for a month with their totals."""

    month: int
    year: int
    total_budgeted: Decimal
    total_spent: Decimal
    items: list[BudgetUtilization]

    @property
    def remaining(self) -> Decimal:
        """Return what is left of the combined limit, never negative."""
        return max(Decimal("0"), self.total_budgeted - self.total_spent)


@dataclass(frozen=True)
class Delta:
    """Change between two scalar snapshots."""

    diff: Decimal
    percent: Decimal
    is_positive: bool


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for a month."""

    total_liquidity: Decimal
    total_credit_debt: Decimal
    monthly_income: Decimal
    monthly_expense: Decimal


@dataclass(frozen=True)
class MonthlyTrendPoint:
    month: int
    year: int
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class CategorySpend:
    """Expense total for a top-level category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard page renders."""

    month: int
    year: int
    summary: DashboardSummary
    income_delta: Delta
    expense_delta: Delta
    trend: list[MonthlyTrendPoint]
    breakdown: list[CategorySpend]
    pending_alerts: list[DueAlert]


__all__ = [
    "BudgetSpend",
    "BudgetUtilization",
    "BudgetOverview",
    "Delta",
    "DashboardSummary",
    "MonthlyTrendPoint",
    "CategorySpend",
    "DashboardView",
]
