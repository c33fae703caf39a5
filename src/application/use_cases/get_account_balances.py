"""Use case to derive account balances from the ledger."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import Account
from src.domain.services.balances import recalculate_balances
from src.domain.services.validation import warn_dangling_references
from src.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Recompute current balances from opening balances and transactions."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing the ledger snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self) -> list[Account]:
        """Return every account with a freshly derived balance.

        Returns:
            list[Account]: Accounts sorted by name.
        """
        snapshot = self._ledger_repository.load_snapshot()
        dangling = warn_dangling_references(snapshot, self._logger)
        if dangling:
            self._logger.info(
                f"{dangling} dangling references ignored by balance replay"
            )
        accounts = recalculate_balances(
            snapshot.accounts,
            snapshot.transactions,
        )
        accounts = sorted(
            accounts,
            key=lambda item: (item.name.lower(), item.id),
        )
        self._logger.info(f"Recalculated {len(accounts)} account balances")
        return accounts


__all__ = ["GetAccountBalancesUseCase"]
