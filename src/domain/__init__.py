"""Domain package for ledger rules and core models."""

from .constants import (
    AccountStatus,
    AccountType,
    AlertType,
    BudgetPeriod,
    BudgetStatus,
    TransactionType,
)
from .models import (
    Account,
    AlertSource,
    Budget,
    BudgetOverview,
    BudgetSpend,
    BudgetUtilization,
    Category,
    DueAlert,
    LedgerSnapshot,
    SubCategory,
    TopLevelCategory,
    Transaction,
)
from .services import (
    aggregate_budgets,
    calculate_delta,
    calculate_spent_for_category,
    compute_budget_utilization,
    recalculate_balances,
)

__all__ = [
    "AccountStatus",
    "AccountType",
    "AlertType",
    "BudgetPeriod",
    "BudgetStatus",
    "TransactionType",
    "Account",
    "AlertSource",
    "Budget",
    "BudgetOverview",
    "BudgetSpend",
    "BudgetUtilization",
    "Category",
    "DueAlert",
    "LedgerSnapshot",
    "SubCategory",
    "TopLevelCategory",
    "Transaction",
    "aggregate_budgets",
    "calculate_delta",
    "calculate_spent_for_category",
    "compute_budget_utilization",
    "recalculate_balances",
]
