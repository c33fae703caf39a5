"""Domain models for ledger entities."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.constants import (
    CATEGORY_TRANSACTION_TYPES,
    AccountStatus,
    AccountType,
    AlertType,
    BudgetPeriod,
    TransactionType,
)


@dataclass(frozen=True)
class Account:
    """Account holding an opening balance and a derived current balance.

    Attributes:
        id: Account identifier.
        name: Display name.
        account_type: Kind of account.
        opening_balance: Signed balance before any transaction.
        current_balance: Cached derived balance, stale until recomputed.
        status: Activity status.
        due_date: Optional due date for revolving or installment accounts.
    """

    id: str
    name: str
    account_type: AccountType
    opening_balance: Decimal
    current_balance: Decimal
    status: AccountStatus = AccountStatus.ACTIVE
    due_date: date | None = None


@dataclass(frozen=True)
class Transaction:
    """Ledger movement stored as a non-negative magnitude plus a type tag.

    Attributes:
        id: Transaction identifier.
        date: Calendar date of the movement.
        amount: Non-negative magnitude.
        transaction_type: EXPENSE, INCOME or TRANSFER.
        from_account_id: Source account reference.
        to_account_id: Destination account reference (TRANSFER only).
        category_id: Optional category reference.
        sub_category_id: Optional sub-category reference.
        notes: Free-text note.
    """

    id: str
    date: date
    amount: Decimal
    transaction_type: TransactionType
    from_account_id: str
    to_account_id: str | None = None
    category_id: str | None = None
    sub_category_id: str | None = None
    notes: str = ""

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(
                f"Transaction {self.id} amount must be non-negative: "
                f"{self.amount}"
            )


def _check_category_type(category_id: str, kind: TransactionType) -> None:
    if kind not in CATEGORY_TRANSACTION_TYPES:
        raise ValueError(
            f"Category {category_id} must be EXPENSE or INCOME, got {kind}"
        )


@dataclass(frozen=True)
class TopLevelCategory:
    """Category without a parent."""

    id: str
    name: str
    transaction_type: TransactionType

    def __post_init__(self) -> None:
        _check_category_type(self.id, self.transaction_type)

    @property
    def parent_id(self) -> None:
        return None


@dataclass(frozen=True)
class SubCategory:
    """Category nested exactly one level under a top-level category."""

    id: str
    name: str
    parent: TopLevelCategory

    def __post_init__(self) -> None:
        if not isinstance(self.parent, TopLevelCategory):
            raise TypeError(
                f"Sub-category {self.id} parent must be a top-level category"
            )

    @property
    def parent_id(self) -> str:
        return self.parent.id

    @property
    def transaction_type(self) -> TransactionType:
        return self.parent.transaction_type


Category = TopLevelCategory | SubCategory


@dataclass(frozen=True)
class Budget:
    """Monthly spending limit for a top-level category."""

    id: str
    category_id: str
    amount: Decimal
    period: BudgetPeriod = BudgetPeriod.MONTHLY


@dataclass(frozen=True)
class AlertSource:
    """Citation attached to a generated alert."""

    title: str
    uri: str


@dataclass(frozen=True)
class DueAlert:
    """Upcoming payment reminder.

    Only the paid flag changes over an alert's lifetime, by replacement.
    """

    id: str
    title: str
    amount: Decimal
    due_date: date
    alert_type: AlertType
    is_paid: bool = False
    sources: tuple[AlertSource, ...] = ()
    is_market_data: bool = False


@dataclass(frozen=True)
class LedgerSnapshot:
    """Entity collections for a single user at a point in time."""

    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)
    alerts: list[DueAlert] = field(default_factory=list)


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
]
