"""Budget aggregation over category rollups."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.domain.constants import DEFAULT_NEAR_THRESHOLD, BudgetStatus
from src.domain.models import (
    Budget,
    BudgetOverview,
    BudgetSpend,
    BudgetUtilization,
    Category,
    Transaction,
)
from src.domain.services.rollup import calculate_spent_for_category

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def aggregate_budgets(
    budgets: Iterable[Budget],
    categories: Sequence[Category],
    transactions: Sequence[Transaction],
    month: int,
    year: int,
) -> list[BudgetSpend]:
    """Pair each budget with the spend of its category for a month.

    Duplicate budgets for a category are each aggregated independently.

    Args:
        budgets: Configured budgets.
        categories: Known categories.
        transactions: Full transaction ledger.
        month: Calendar month, 1 to 12.
        year: Calendar year.

    Returns:
        list[BudgetSpend]: One entry per budget, in input order.
    """
    return [
        BudgetSpend(
            budget=budget,
            spent=calculate_spent_for_category(
                transactions,
                budget.category_id,
                categories,
                month,
                year,
            ),
        )
        for budget in budgets
    ]


def compute_budget_utilization(
    spend: BudgetSpend,
    near_threshold: int | Decimal = DEFAULT_NEAR_THRESHOLD,
) -> BudgetUtilization:
    """Derive percent used, status, overage and remaining for a budget.

    Args:
        spend: Budget with its spend for the period.
        near_threshold: Percent from which a budget below its limit is
            flagged NEAR.

    Returns:
        BudgetUtilization: Presentation figures for the budget.
    """
    limit = spend.budget.amount
    spent = spend.spent
    if limit > 0:
        percent = min(max(spent / limit * _HUNDRED, _ZERO), _HUNDRED)
    else:
        percent = _ZERO

    if spent > limit:
        status = BudgetStatus.OVER
    elif Decimal(near_threshold) <= percent < _HUNDRED:
        status = BudgetStatus.NEAR
    else:
        status = BudgetStatus.NORMAL

    return BudgetUtilization(
        budget=spend.budget,
        spent=spent,
        percent=percent,
        status=status,
        overage=max(_ZERO, spent - limit),
        remaining=max(_ZERO, limit - spent),
    )


def summarize_budgets(
    utilizations: Sequence[BudgetUtilization],
    month: int,
    year: int,
) -> BudgetOverview:
    """Total the limits and spend of a month's budgets."""
    total_budgeted = sum(
        (item.budget.amount for item in utilizations),
        start=_ZERO,
    )
    total_spent = sum((item.spent for item in utilizations), start=_ZERO)
    return BudgetOverview(
        month=month,
        year=year,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        items=list(utilizations),
    )


__all__ = [
    "aggregate_budgets",
    "compute_budget_utilization",
    "summarize_budgets",
]
