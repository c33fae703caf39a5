"""CLI adapter reporting budget utilization for one month."""

from datetime import date
import os

from src.application.use_cases.get_budget_overview import (
    GetBudgetOverviewUseCase,
)
from src.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import quantize_amount


def _parse_int(value: str | None, default: int, name: str, logger) -> int:
    """Parse an integer environment value.

    Args:
        value: Raw value, possibly missing.
        default: Value used when missing or invalid.
        name: Variable name used in warnings.
        logger: Logger used for warnings.

    Returns:
        int: Parsed value or the default.
    """
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid {name} '{value}'. Using {default}.")
        return default


def main() -> None:
    """Print the budget overview for BUDGET_MONTH/BUDGET_YEAR."""
    logger = get_app_logger()
    today = date.today()
    month = _parse_int(os.getenv("BUDGET_MONTH"), today.month,
                       "BUDGET_MONTH", logger)
    year = _parse_int(os.getenv("BUDGET_YEAR"), today.year,
                      "BUDGET_YEAR", logger)

    settings = build_settings()
    use_case = GetBudgetOverviewUseCase(
        ledger_repository=build_ledger_repository(settings=settings),
        logger=logger,
        near_threshold=settings.near_threshold,
    )
    try:
        overview = use_case.execute(month=month, year=year)
    except ValueError as exc:
        logger.error(str(exc))
        return

    print(f"Budgets for {year}-{month:02d}")
    for item in overview.items:
        print(
            f"{item.budget.category_id}: "
            f"spent={quantize_amount(item.spent)} "
            f"of {quantize_amount(item.budget.amount)} "
            f"({item.percent:.1f}%) {item.status.value}"
        )
    print(
        f"Total: budgeted={quantize_amount(overview.total_budgeted)}, "
        f"spent={quantize_amount(overview.total_spent)}, "
        f"remaining={quantize_amount(overview.remaining)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
