"""Use cases to edit or delete a recorded transaction."""

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.ports.statement_parser import TransactionCandidate
from src.application.use_cases.record_transaction import check_candidate
from src.domain.models import Transaction
from src.infrastructure.logging.logger import get_app_logger


class UpdateTransactionUseCase:
    """Replace the fields of a stored transaction after validation."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        transaction_id: str,
        candidate: TransactionCandidate,
    ) -> Transaction:
        """Update a transaction, keeping its id.

        Args:
            transaction_id: Id of the stored transaction.
            candidate: Raw replacement fields.

        Returns:
            Transaction: The stored transaction.

        Raises:
            KeyError: If no transaction has this id.
            ValueError: If the new fields are invalid for the ledger.
        """
        snapshot = self._ledger_repository.load_snapshot()
        if not any(tx.id == transaction_id for tx in snapshot.transactions):
            raise KeyError(f"Unknown transaction {transaction_id}")
        transaction, problems = check_candidate(
            candidate,
            transaction_id,
            snapshot,
        )
        if problems:
            message = "; ".join(problems)
            self._logger.warning(
                f"Rejected update of {transaction_id}: {message}"
            )
            raise ValueError(f"Invalid transaction: {message}")
        self._ledger_repository.save_transactions([transaction])
        self._logger.info(f"Updated transaction {transaction_id}")
        return transaction


class DeleteTransactionUseCase:
    """Remove a transaction from the ledger."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, transaction_id: str) -> None:
        if not self._ledger_repository.delete_transaction(transaction_id):
            raise KeyError(f"Unknown transaction {transaction_id}")
        self._logger.info(f"Deleted transaction {transaction_id}")


__all__ = ["UpdateTransactionUseCase", "DeleteTransactionUseCase"]
