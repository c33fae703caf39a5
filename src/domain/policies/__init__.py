"""Domain policies package."""

from .categories import budgetable_categories, is_category_compatible
from .transactions import filter_transactions, pending_alerts

__all__ = [
    "is_category_compatible",
    "budgetable_categories",
    "filter_transactions",
    "pending_alerts",
]
