"""Use case to validate and record a single transaction."""

from collections.abc import Callable
from dataclasses import replace
from uuid import uuid4

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.ports.statement_parser import TransactionCandidate
from src.domain.constants import TransactionType
from src.domain.models import LedgerSnapshot, Transaction
from src.domain.services.normalization import (
    normalize_reference,
    parse_date,
    parse_enum,
)
from src.domain.services.validation import validate_transaction
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def new_transaction_id() -> str:
    return f"tx_{uuid4().hex[:12]}"


def candidate_to_transaction(
    candidate: TransactionCandidate,
    transaction_id: str,
) -> Transaction:
    """Convert a raw candidate into a transaction.

    TRANSFERs lose their category fields and other types lose their
    destination, since those fields do not apply to them.

    Raises:
        ValueError: If the date, amount or type cannot be read.
    """
    tx_date = parse_date(candidate.date)
    if tx_date is None:
        raise ValueError("date is required")
    transaction = Transaction(
        id=transaction_id,
        date=tx_date,
        amount=coerce_decimal(candidate.amount),
        transaction_type=parse_enum(TransactionType, candidate.type),
        from_account_id=normalize_reference(candidate.from_account_id) or "",
        to_account_id=normalize_reference(candidate.to_account_id),
        category_id=normalize_reference(candidate.category_id),
        sub_category_id=normalize_reference(candidate.sub_category_id),
        notes=(candidate.notes or "").strip(),
    )
    if transaction.transaction_type == TransactionType.TRANSFER:
        return replace(transaction, category_id=None, sub_category_id=None)
    return replace(transaction, to_account_id=None)


def check_candidate(
    candidate: TransactionCandidate,
    transaction_id: str,
    snapshot: LedgerSnapshot,
) -> tuple[Transaction | None, list[str]]:
    """Convert and validate a candidate against a ledger.

    Returns:
        tuple: The transaction (None when conversion failed) and the list
        of problems found.
    """
    try:
        transaction = candidate_to_transaction(candidate, transaction_id)
    except ValueError as exc:
        return None, [str(exc)]
    return transaction, validate_transaction(transaction, snapshot)


class RecordTransactionUseCase:
    """Validate a manually entered transaction and store it."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_transaction_id,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing and storing the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Callable producing new transaction ids.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, candidate: TransactionCandidate) -> Transaction:
        """Record a transaction.

        Args:
            candidate: Raw transaction fields as entered.

        Returns:
            Transaction: The stored transaction.

        Raises:
            ValueError: If the transaction is invalid for the ledger.
        """
        snapshot = self._ledger_repository.load_snapshot()
        transaction, problems = check_candidate(
            candidate,
            self._id_factory(),
            snapshot,
        )
        if problems:
            message = "; ".join(problems)
            self._logger.warning(f"Rejected transaction: {message}")
            raise ValueError(f"Invalid transaction: {message}")
        self._ledger_repository.save_transactions([transaction])
        self._logger.info(
            f"Recorded {transaction.transaction_type.value} "
            f"{transaction.id} of {transaction.amount}"
        )
        return transaction


__all__ = [
    "RecordTransactionUseCase",
    "candidate_to_transaction",
    "check_candidate",
    "new_transaction_id",
]
