"""Tests for ledger record mapping."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.constants import AccountStatus, AccountType, AlertType
from src.infrastructure.ledger_records import (
    alert_to_record,
    record_to_account,
    record_to_alert,
    record_to_transaction,
    records_to_snapshot,
    snapshot_to_records,
)
from src.infrastructure.seed_data import default_snapshot


def test_record_to_account_defaults_current_and_status() -> None:
    account = record_to_account(
        {
            "id": "acc",
            "name": "Bank",
            "account_type": "savings",
            "opening_balance": 12.5,
            "due_date": "2024-06-01",
        }
    )

    assert account.account_type == AccountType.SAVINGS
    assert account.opening_balance == Decimal("12.5")
    assert account.current_balance == Decimal("12.5")
    assert account.status == AccountStatus.ACTIVE
    assert account.due_date == date(2024, 6, 1)


def test_record_to_transaction_requires_date() -> None:
    with pytest.raises(ValueError):
        record_to_transaction(
            {"id": "t", "amount": "1", "type": "EXPENSE",
             "from_account_id": "a"}
        )


def test_alert_sources_round_trip_through_json_text() -> None:
    alert = default_snapshot().alerts[0]
    record = alert_to_record(alert)
    record["sources"] = '[{"title": "Bank", "uri": "https://bank.example"}]'

    restored = record_to_alert(record)

    assert isinstance(alert_to_record(alert)["sources"], str)
    assert restored.alert_type == AlertType.EMI
    assert restored.sources[0].uri == "https://bank.example"


def test_record_to_alert_accepts_source_list() -> None:
    alert = record_to_alert(
        {
            "id": "al",
            "title": "Card",
            "amount": "10",
            "due_date": "2024-06-01",
            "type": "CREDIT_CARD",
            "is_paid": 1,
            "sources": [{"title": "t", "uri": "u"}],
        }
    )

    assert alert.is_paid is True
    assert alert.sources[0].title == "t"


def test_records_to_snapshot_skips_bad_records() -> None:
    logger = MagicMock()

    snapshot = records_to_snapshot(
        accounts=[{"id": "a", "name": "A", "account_type": "BOAT"}],
        transactions=[
            {"id": "t", "date": "2024-01-01", "amount": "-1",
             "type": "EXPENSE", "from_account_id": "a"},
        ],
        categories=[],
        budgets=[{"id": "b"}],
        alerts=[{"id": "al", "title": "x", "amount": "1", "type": "LOAN"}],
        logger=logger,
    )

    assert snapshot.accounts == []
    assert snapshot.transactions == []
    assert snapshot.budgets == []
    assert snapshot.alerts == []
    assert logger.warning.call_count == 4


@pytest.mark.parametrize("amount", ["NaN", "Infinity", "abc"])
def test_records_to_snapshot_skips_unreadable_amounts(amount) -> None:
    logger = MagicMock()
    good = {"id": "t1", "date": "2024-01-01", "amount": "12",
            "type": "EXPENSE", "from_account_id": "a"}
    bad = dict(good, id="t2", amount=amount)

    snapshot = records_to_snapshot(
        accounts=[],
        transactions=[good, bad],
        categories=[],
        budgets=[],
        alerts=[],
        logger=logger,
    )

    assert [tx.id for tx in snapshot.transactions] == ["t1"]
    logger.warning.assert_called_once()
    assert "t2" in logger.warning.call_args.args[0]


def test_snapshot_records_rebuild_the_same_snapshot() -> None:
    snapshot = default_snapshot()

    records = snapshot_to_records(snapshot)
    restored = records_to_snapshot(logger=MagicMock(), **records)

    assert restored == snapshot
