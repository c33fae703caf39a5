"""Tests for the RecordTransactionUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.ports.statement_parser import TransactionCandidate
from src.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
    candidate_to_transaction,
    check_candidate,
    new_transaction_id,
)
from src.domain.constants import AccountType, TransactionType
from src.domain.models import Account, LedgerSnapshot, TopLevelCategory

SNAPSHOT = LedgerSnapshot(
    accounts=[
        Account("bank", "Bank", AccountType.SAVINGS, Decimal("0"),
                Decimal("0")),
        Account("card", "Card", AccountType.CREDIT_CARD, Decimal("0"),
                Decimal("0")),
    ],
    categories=[TopLevelCategory("food", "Food", TransactionType.EXPENSE)],
)


def _build_repository() -> MagicMock:
    repository = MagicMock()
    repository.load_snapshot.return_value = SNAPSHOT
    repository.save_transactions.return_value = 1
    return repository


def test_candidate_to_transaction_strips_fields_by_type() -> None:
    transfer = candidate_to_transaction(
        TransactionCandidate(
            date="2024-05-01",
            amount="100",
            type="transfer",
            from_account_id="bank",
            to_account_id="card",
            category_id="food",
        ),
        "tx_1",
    )
    expense = candidate_to_transaction(
        TransactionCandidate(
            date="2024-05-01T08:00:00",
            amount=12.5,
            type="EXPENSE",
            from_account_id=" bank ",
            to_account_id="card",
            category_id="food",
            notes="  lunch ",
        ),
        "tx_2",
    )

    assert transfer.transaction_type == TransactionType.TRANSFER
    assert transfer.to_account_id == "card"
    assert transfer.category_id is None
    assert expense.to_account_id is None
    assert expense.from_account_id == "bank"
    assert expense.amount == Decimal("12.5")
    assert expense.notes == "lunch"


def test_check_candidate_reports_conversion_errors() -> None:
    candidate = TransactionCandidate(
        date="2024-05-01",
        amount="-5",
        type="EXPENSE",
        from_account_id="bank",
    )

    transaction, problems = check_candidate(candidate, "tx_1", SNAPSHOT)

    assert transaction is None
    assert len(problems) == 1


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity"])
def test_execute_rejects_non_finite_amounts(amount) -> None:
    repository = _build_repository()
    use_case = RecordTransactionUseCase(repository, logger=MagicMock())

    with pytest.raises(ValueError, match="finite"):
        use_case.execute(
            TransactionCandidate(
                date="2024-05-01",
                amount=amount,
                type="EXPENSE",
                from_account_id="bank",
            )
        )

    repository.save_transactions.assert_not_called()


def test_execute_saves_valid_transaction() -> None:
    repository = _build_repository()
    use_case = RecordTransactionUseCase(
        repository,
        logger=MagicMock(),
        id_factory=lambda: "tx_fixed",
    )

    transaction = use_case.execute(
        TransactionCandidate(
            date="2024-05-01",
            amount="250",
            type="EXPENSE",
            from_account_id="bank",
            category_id="food",
        )
    )

    assert transaction.id == "tx_fixed"
    repository.save_transactions.assert_called_once_with([transaction])


def test_execute_rejects_invalid_transaction() -> None:
    repository = _build_repository()
    logger = MagicMock()
    use_case = RecordTransactionUseCase(repository, logger=logger)

    with pytest.raises(ValueError, match="Invalid transaction"):
        use_case.execute(
            TransactionCandidate(
                date="2024-05-01",
                amount="10",
                type="TRANSFER",
                from_account_id="bank",
            )
        )

    repository.save_transactions.assert_not_called()
    logger.warning.assert_called_once()


def test_new_transaction_id_is_unique() -> None:
    assert new_transaction_id() != new_transaction_id()
    assert new_transaction_id().startswith("tx_")
