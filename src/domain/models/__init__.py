"""Domain models package."""

from .finance import (
    BudgetOverview,
    BudgetSpend,
    BudgetUtilization,
    CategorySpend,
    DashboardSummary,
    DashboardView,
    Delta,
    MonthlyTrendPoint,
)
from .ledger import (
    Account,
    AlertSource,
    Budget,
    Category,
    DueAlert,
    LedgerSnapshot,
    SubCategory,
    TopLevelCategory,
    Transaction,
)

__all__ = [
    "Account",
    "Transaction",
    "TopLevelCategory",
    "SubCategory",
    "Category",
    "Budget",
    "AlertSource",
    "DueAlert",
    "LedgerSnapshot",
    "BudgetSpend",
    "BudgetUtilization",
    "BudgetOverview",
    "Delta",
    "DashboardSummary",
    "MonthlyTrendPoint",
    "CategorySpend",
    "DashboardView",
]
