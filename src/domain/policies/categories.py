"""Category hierarchy policies."""

from collections.abc import Iterable

from src.domain.constants import TransactionType
from src.domain.models import Category, TopLevelCategory


def is_category_compatible(
    category: Category,
    transaction_type: TransactionType,
) -> bool:
    """Return True when a category may be used for a transaction type.

    Transfers ignore categories, so any category is accepted for them.
    """
    if transaction_type == TransactionType.TRANSFER:
        return True
    return category.transaction_type == transaction_type


def budgetable_categories(
    categories: Iterable[Category],
) -> list[TopLevelCategory]:
    """Return the top-level expense categories a budget may target."""
    return [
        category
        for category in categories
        if isinstance(category, TopLevelCategory)
        and category.transaction_type == TransactionType.EXPENSE
    ]


__all__ = ["is_category_compatible", "budgetable_categories"]
