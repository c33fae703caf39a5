"""Use case to compute budget utilization for a month."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import DEFAULT_NEAR_THRESHOLD, BudgetStatus
from src.domain.models import BudgetOverview
from src.domain.services.budgets import (
    aggregate_budgets,
    compute_budget_utilization,
    summarize_budgets,
)
from src.infrastructure.logging.logger import get_app_logger


class GetBudgetOverviewUseCase:
    """Aggregate category spend against configured budgets."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        near_threshold: int = DEFAULT_NEAR_THRESHOLD,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing the ledger snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
            near_threshold: Percent from which a budget is flagged NEAR.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._near_threshold = near_threshold

    def execute(self, month: int, year: int) -> BudgetOverview:
        """Return utilizations and totals for the viewed month.

        Args:
            month: Calendar month, 1 to 12.
            year: Calendar year.

        Returns:
            BudgetOverview: Per-budget utilization and totals.

        Raises:
            ValueError: If month is outside 1 to 12.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        snapshot = self._ledger_repository.load_snapshot()
        spends = aggregate_budgets(
            snapshot.budgets,
            snapshot.categories,
            snapshot.transactions,
            month,
            year,
        )
        utilizations = [
            compute_budget_utilization(spend, self._near_threshold)
            for spend in spends
        ]
        overview = summarize_budgets(utilizations, month, year)
        over_count = sum(
            1 for item in utilizations if item.status == BudgetStatus.OVER
        )
        self._logger.info(
            f"Budget overview {year}-{month:02d}: "
            f"budgeted={overview.total_budgeted}, "
            f"spent={overview.total_spent}, over={over_count}"
        )
        return overview


__all__ = ["GetBudgetOverviewUseCase", "BudgetOverview"]
