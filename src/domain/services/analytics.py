"""Dashboard aggregates over recalculated accounts and transactions."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.domain.constants import (
    DEBT_ACCOUNT_TYPES,
    DEFAULT_TREND_MONTHS,
    OTHER_CATEGORY_LABEL,
    AccountType,
    TransactionType,
)
from src.domain.models import (
    Account,
    Category,
    CategorySpend,
    DashboardSummary,
    MonthlyTrendPoint,
    Transaction,
)
from src.domain.services.rollup import resolve_top_level

_ZERO = Decimal("0")


def shift_month(month: int, year: int, offset: int) -> tuple[int, int]:
    """Move a (month, year) pair by a number of calendar months.

    Args:
        month: Calendar month, 1 to 12.
        year: Calendar year.
        offset: Months to add, negative to go back.

    Returns:
        tuple[int, int]: The shifted (month, year).
    """
    index = year * 12 + (month - 1) + offset
    return index % 12 + 1, index // 12


def _in_month(tx: Transaction, month: int, year: int) -> bool:
    return tx.date.month == month and tx.date.year == year


def _sum_type(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> Decimal:
    return sum(
        (tx.amount for tx in transactions
         if tx.transaction_type == transaction_type),
        start=_ZERO,
    )


def compute_dashboard_summary(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    month: int,
    year: int,
) -> DashboardSummary:
    """Compute liquidity, credit debt and the month's income and expense.

    Args:
        accounts: Accounts with recalculated balances.
        transactions: Full transaction ledger.
        month: Calendar month, 1 to 12.
        year: Calendar year.

    Returns:
        DashboardSummary: Headline figures for the month.
    """
    accounts = list(accounts)
    liquidity = sum(
        (acc.current_balance for acc in accounts
         if acc.account_type not in DEBT_ACCOUNT_TYPES),
        start=_ZERO,
    )
    credit_debt = abs(
        sum(
            (acc.current_balance for acc in accounts
             if acc.account_type == AccountType.CREDIT_CARD),
            start=_ZERO,
        )
    )
    monthly = [tx for tx in transactions if _in_month(tx, month, year)]
    return DashboardSummary(
        total_liquidity=liquidity,
        total_credit_debt=credit_debt,
        monthly_income=_sum_type(monthly, TransactionType.INCOME),
        monthly_expense=_sum_type(monthly, TransactionType.EXPENSE),
    )


def compute_monthly_trend(
    transactions: Sequence[Transaction],
    month: int,
    year: int,
    months: int = DEFAULT_TREND_MONTHS,
) -> list[MonthlyTrendPoint]:
    """Return income and expense per month, oldest first.

    Args:
        transactions: Full transaction ledger.
        month: Last calendar month of the window.
        year: Year of the last month.
        months: Window length.

    Returns:
        list[MonthlyTrendPoint]: One point per month of the window.
    """
    points = []
    for offset in range(months - 1, -1, -1):
        point_month, point_year = shift_month(month, year, -offset)
        monthly = [
            tx for tx in transactions
            if _in_month(tx, point_month, point_year)
        ]
        points.append(
            MonthlyTrendPoint(
                month=point_month,
                year=point_year,
                income=_sum_type(monthly, TransactionType.INCOME),
                expense=_sum_type(monthly, TransactionType.EXPENSE),
            )
        )
    return points


def compute_category_breakdown(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    month: int,
    year: int,
) -> list[CategorySpend]:
    """Group a month's expenses by top-level category name.

    Sub-categories fold into their parent; unknown categories are grouped
    under "Other".

    Returns:
        list[CategorySpend]: Totals sorted by amount, largest first.
    """
    totals: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.transaction_type != TransactionType.EXPENSE:
            continue
        if not _in_month(tx, month, year):
            continue
        category = resolve_top_level(tx.category_id, categories)
        label = category.name if category else OTHER_CATEGORY_LABEL
        totals[label] = totals.get(label, _ZERO) + tx.amount
    return [
        CategorySpend(category=label, amount=amount)
        for label, amount in sorted(
            totals.items(),
            key=lambda item: (-item[1], item[0]),
        )
    ]


__all__ = [
    "shift_month",
    "compute_dashboard_summary",
    "compute_monthly_trend",
    "compute_category_breakdown",
]
