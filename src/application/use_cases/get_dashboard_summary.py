"""Use case to assemble the dashboard view for a month."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import DashboardView
from src.domain.policies.transactions import pending_alerts
from src.domain.services.analytics import (
    compute_category_breakdown,
    compute_dashboard_summary,
    compute_monthly_trend,
    shift_month,
)
from src.domain.services.balances import recalculate_balances
from src.domain.services.delta import calculate_delta
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Compute headline figures, trends and alerts for the dashboard."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        trend_months: int = 6,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing the ledger snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
            trend_months: Number of months shown in the trend.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._trend_months = trend_months

    def execute(self, month: int, year: int) -> DashboardView:
        """Return the dashboard view for a month.

        Income and expense deltas compare the month with the one before.

        Args:
            month: Calendar month, 1 to 12.
            year: Calendar year.

        Returns:
            DashboardView: Summary, deltas, trend, breakdown and alerts.

        Raises:
            ValueError: If month is outside 1 to 12.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        snapshot = self._ledger_repository.load_snapshot()
        accounts = recalculate_balances(
            snapshot.accounts,
            snapshot.transactions,
        )
        summary = compute_dashboard_summary(
            accounts,
            snapshot.transactions,
            month,
            year,
        )
        previous_month, previous_year = shift_month(month, year, -1)
        previous = compute_dashboard_summary(
            accounts,
            snapshot.transactions,
            previous_month,
            previous_year,
        )
        view = DashboardView(
            month=month,
            year=year,
            summary=summary,
            income_delta=calculate_delta(
                summary.monthly_income,
                previous.monthly_income,
            ),
            expense_delta=calculate_delta(
                summary.monthly_expense,
                previous.monthly_expense,
            ),
            trend=compute_monthly_trend(
                snapshot.transactions,
                month,
                year,
                months=self._trend_months,
            ),
            breakdown=compute_category_breakdown(
                snapshot.transactions,
                snapshot.categories,
                month,
                year,
            ),
            pending_alerts=pending_alerts(snapshot.alerts),
        )
        self._logger.info(
            f"Dashboard {year}-{month:02d}: "
            f"liquidity={summary.total_liquidity}, "
            f"debt={summary.total_credit_debt}, "
            f"pending_alerts={len(view.pending_alerts)}"
        )
        return view


__all__ = ["GetDashboardSummaryUseCase", "DashboardView"]
