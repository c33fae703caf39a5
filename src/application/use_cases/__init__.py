"""Application use cases package."""

from .due_alerts import FetchMarketAlertsUseCase, MarkAlertPaidUseCase
from .edit_transaction import (
    DeleteTransactionUseCase,
    UpdateTransactionUseCase,
)
from .get_account_balances import GetAccountBalancesUseCase
from .get_budget_overview import BudgetOverview, GetBudgetOverviewUseCase
from .get_dashboard_summary import DashboardView, GetDashboardSummaryUseCase
from .import_statement import ImportStatementResult, ImportStatementUseCase
from .manage_accounts import SaveAccountUseCase
from .manage_categories import (
    AddCategoryUseCase,
    DeleteCategoryUseCase,
    RenameCategoryUseCase,
)
from .record_transaction import RecordTransactionUseCase
from .upsert_budget import DeleteBudgetUseCase, UpsertBudgetUseCase

__all__ = [
    "GetAccountBalancesUseCase",
    "GetBudgetOverviewUseCase",
    "BudgetOverview",
    "GetDashboardSummaryUseCase",
    "DashboardView",
    "RecordTransactionUseCase",
    "UpdateTransactionUseCase",
    "DeleteTransactionUseCase",
    "ImportStatementUseCase",
    "ImportStatementResult",
    "SaveAccountUseCase",
    "AddCategoryUseCase",
    "RenameCategoryUseCase",
    "DeleteCategoryUseCase",
    "UpsertBudgetUseCase",
    "DeleteBudgetUseCase",
    "FetchMarketAlertsUseCase",
    "MarkAlertPaidUseCase",
]
