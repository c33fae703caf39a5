"""Category rollup of expense totals."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from src.domain.constants import TransactionType
from src.domain.models import Category, Transaction


def child_category_ids(
    category_id: str,
    categories: Iterable[Category],
) -> set[str]:
    """Return the ids of the direct children of a category."""
    return {
        category.id
        for category in categories
        if category.parent_id == category_id
    }


def resolve_top_level(
    category_id: str | None,
    categories: Sequence[Category],
) -> Category | None:
    """Return the top-level category a category id belongs to.

    Args:
        category_id: Category or sub-category id, possibly dangling.
        categories: Known categories.

    Returns:
        Category | None: The category itself, its parent, or None when the
        id matches nothing.
    """
    if not category_id:
        return None
    by_id = {category.id: category for category in categories}
    category = by_id.get(category_id)
    if category is None:
        return None
    if category.parent_id is None:
        return category
    return by_id.get(category.parent_id, category.parent)


def calculate_spent_for_category(
    transactions: Iterable[Transaction],
    category_id: str,
    categories: Iterable[Category],
    month: int,
    year: int,
) -> Decimal:
    """Sum expenses booked on a category or its direct children.

    Only ``category_id`` on each transaction participates; the
    sub-category reference is informational.

    Args:
        transactions: Transactions to scan.
        category_id: Target category id.
        categories: Known categories used to find direct children.
        month: Calendar month, 1 to 12.
        year: Calendar year.

    Returns:
        Decimal: Total expense amount for the month.
    """
    target_ids = {category_id} | child_category_ids(category_id, categories)
    return sum(
        (
            tx.amount
            for tx in transactions
            if tx.transaction_type == TransactionType.EXPENSE
            and tx.category_id in target_ids
            and tx.date.month == month
            and tx.date.year == year
        ),
        start=Decimal("0"),
    )


__all__ = [
    "child_category_ids",
    "resolve_top_level",
    "calculate_spent_for_category",
]
