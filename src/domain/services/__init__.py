"""Domain services package."""

from .analytics import (
    compute_category_breakdown,
    compute_dashboard_summary,
    compute_monthly_trend,
    shift_month,
)
from .balances import recalculate_balances
from .budgets import (
    aggregate_budgets,
    compute_budget_utilization,
    summarize_budgets,
)
from .categories import build_categories, category_to_record
from .delta import calculate_delta
from .normalization import (
    normalize_code,
    normalize_reference,
    parse_date,
    parse_enum,
)
from .rollup import (
    calculate_spent_for_category,
    child_category_ids,
    resolve_top_level,
)
from .validation import (
    find_dangling_references,
    validate_transaction,
    warn_dangling_references,
)

__all__ = [
    "recalculate_balances",
    "calculate_spent_for_category",
    "child_category_ids",
    "resolve_top_level",
    "aggregate_budgets",
    "compute_budget_utilization",
    "summarize_budgets",
    "build_categories",
    "category_to_record",
    "calculate_delta",
    "compute_dashboard_summary",
    "compute_monthly_trend",
    "compute_category_breakdown",
    "shift_month",
    "normalize_code",
    "normalize_reference",
    "parse_enum",
    "parse_date",
    "validate_transaction",
    "find_dangling_references",
    "warn_dangling_references",
]
