"""Domain constants for the personal ledger."""

from enum import Enum


class AccountType(str, Enum):
    """Kinds of accounts tracked in the ledger."""

    SAVINGS = "SAVINGS"
    CURRENT = "CURRENT"
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    LOAN = "LOAN"
    EMI = "EMI"


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class TransactionType(str, Enum):
    """Direction of a ledger movement."""

    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    TRANSFER = "TRANSFER"


class BudgetPeriod(str, Enum):
    MONTHLY = "MONTHLY"


class BudgetStatus(str, Enum):
    """Utilization classification of a budget for a period."""

    NORMAL = "NORMAL"
    NEAR = "NEAR"
    OVER = "OVER"


class AlertType(str, Enum):
    LOAN = "LOAN"
    EMI = "EMI"
    CREDIT_CARD = "CREDIT_CARD"
    SUBSCRIPTION = "SUBSCRIPTION"


DEBT_ACCOUNT_TYPES = (
    AccountType.CREDIT_CARD,
    AccountType.LOAN,
    AccountType.EMI,
)

CATEGORY_TRANSACTION_TYPES = (
    TransactionType.EXPENSE,
    TransactionType.INCOME,
)

DEFAULT_NEAR_THRESHOLD = 80

DEFAULT_TREND_MONTHS = 6

OTHER_CATEGORY_LABEL = "Other"


__all__ = [
    "AccountType",
    "AccountStatus",
    "TransactionType",
    "BudgetPeriod",
    "BudgetStatus",
    "AlertType",
    "DEBT_ACCOUNT_TYPES",
    "CATEGORY_TRANSACTION_TYPES",
    "DEFAULT_NEAR_THRESHOLD",
    "DEFAULT_TREND_MONTHS",
    "OTHER_CATEGORY_LABEL",
]
