"""Use cases for due-date alerts."""

from collections.abc import Callable
from uuid import uuid4

from src.application.ports.alert_provider import (
    AlertCandidate,
    AlertProviderPort,
)
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import AlertType
from src.domain.models import AlertSource, DueAlert
from src.domain.services.normalization import parse_date, parse_enum
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def new_alert_id() -> str:
    return f"al_{uuid4().hex[:12]}"


def candidate_to_alert(candidate: AlertCandidate, alert_id: str) -> DueAlert:
    """Convert a provider candidate into a market-data alert.

    Raises:
        ValueError: If the due date, amount or type cannot be read.
    """
    due_date = parse_date(candidate.due_date)
    if due_date is None:
        raise ValueError("due date is required")
    return DueAlert(
        id=alert_id,
        title=candidate.title.strip(),
        amount=coerce_decimal(candidate.amount),
        due_date=due_date,
        alert_type=parse_enum(AlertType, candidate.type),
        sources=tuple(
            AlertSource(title=title, uri=uri)
            for title, uri in candidate.sources
        ),
        is_market_data=True,
    )


class FetchMarketAlertsUseCase:
    """Store alerts produced by an external alert generator."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        alert_provider: AlertProviderPort,
        logger=None,
        id_factory: Callable[[], str] = new_alert_id,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port storing the alerts.
            alert_provider: Port generating alert candidates.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Callable producing new alert ids.
        """
        self._ledger_repository = ledger_repository
        self._alert_provider = alert_provider
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self) -> list[DueAlert]:
        """Fetch, convert and store alert candidates.

        Returns:
            list[DueAlert]: Alerts that were stored.
        """
        alerts = []
        for candidate in self._alert_provider.fetch_alerts():
            try:
                alerts.append(candidate_to_alert(candidate, self._id_factory()))
            except ValueError as exc:
                self._logger.warning(
                    f"Skipping alert candidate '{candidate.title}': {exc}"
                )
        if alerts:
            self._ledger_repository.save_alerts(alerts)
        self._logger.info(f"Stored {len(alerts)} market alerts")
        return alerts


class MarkAlertPaidUseCase:
    """Flag an alert as paid."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, alert_id: str) -> None:
        """Mark an alert as paid.

        Raises:
            KeyError: If no alert has this id.
        """
        if not self._ledger_repository.mark_alert_paid(alert_id):
            raise KeyError(alert_id)
        self._logger.info(f"Alert {alert_id} marked as paid")


__all__ = [
    "FetchMarketAlertsUseCase",
    "MarkAlertPaidUseCase",
    "candidate_to_alert",
    "new_alert_id",
]
