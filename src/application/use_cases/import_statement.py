"""Use case to import transactions parsed from a bank statement."""

from collections.abc import Callable
from dataclasses import dataclass, field

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.ports.statement_parser import StatementParserPort
from src.application.use_cases.record_transaction import (
    check_candidate,
    new_transaction_id,
)
from src.domain.models import Transaction
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ImportStatementResult:
    """Result of a statement import.

    Attributes:
        accepted: Transactions that passed validation.
        rejected: One message per skipped candidate.
        saved_count: Number of transactions written to the ledger.
    """

    accepted: list[Transaction] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)
    saved_count: int = 0


class ImportStatementUseCase:
    """Turn statement text into validated ledger transactions."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        statement_parser: StatementParserPort,
        logger=None,
        id_factory: Callable[[], str] = new_transaction_id,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing and storing the ledger.
            statement_parser: Port extracting candidates from text.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Callable producing new transaction ids.
        """
        self._ledger_repository = ledger_repository
        self._statement_parser = statement_parser
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, text: str, persist: bool = False) -> ImportStatementResult:
        """Parse a statement and optionally store the valid transactions.

        Parsed candidates are held to the same rules as manual entries;
        invalid ones are skipped with a warning.

        Args:
            text: Raw statement text.
            persist: Whether to save the accepted transactions.

        Returns:
            ImportStatementResult: Accepted and rejected candidates.
        """
        if not text.strip():
            return ImportStatementResult()
        snapshot = self._ledger_repository.load_snapshot()
        candidates = self._statement_parser.parse_statement(
            text,
            snapshot.accounts,
            snapshot.categories,
        )
        accepted: list[Transaction] = []
        rejected: list[str] = []
        for index, candidate in enumerate(candidates, start=1):
            transaction, problems = check_candidate(
                candidate,
                self._id_factory(),
                snapshot,
            )
            if problems:
                message = f"Candidate {index}: {'; '.join(problems)}"
                self._logger.warning(f"Skipping statement line. {message}")
                rejected.append(message)
                continue
            accepted.append(transaction)

        saved_count = 0
        if persist and accepted:
            saved_count = self._ledger_repository.save_transactions(accepted)
        self._logger.info(
            f"Statement import: {len(accepted)} accepted, "
            f"{len(rejected)} rejected, {saved_count} saved"
        )
        return ImportStatementResult(
            accepted=accepted,
            rejected=rejected,
            saved_count=saved_count,
        )


__all__ = ["ImportStatementUseCase", "ImportStatementResult"]
