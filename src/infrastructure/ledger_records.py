"""Mapping between ledger entities and flat storage records.

Records are plain dicts with snake_case keys, ISO dates and string
amounts, shared by the SQL and JSON stores.
"""

from collections.abc import Iterable, Mapping
import json
from typing import Any

from src.domain.constants import (
    AccountStatus,
    AccountType,
    AlertType,
    BudgetPeriod,
    TransactionType,
)
from src.domain.models import (
    Account,
    AlertSource,
    Budget,
    DueAlert,
    LedgerSnapshot,
    Transaction,
)
from src.domain.services.categories import (
    build_categories,
    category_to_record,
)
from src.domain.services.normalization import (
    normalize_reference,
    parse_date,
    parse_enum,
)
from src.utils.decimal_utils import coerce_decimal

Record = Mapping[str, Any]


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def account_to_record(account: Account) -> dict[str, Any]:
    return {
        "id": account.id,
        "name": account.name,
        "account_type": account.account_type.value,
        "opening_balance": str(account.opening_balance),
        "current_balance": str(account.current_balance),
        "status": account.status.value,
        "due_date": _iso(account.due_date),
    }


def record_to_account(record: Record) -> Account:
    opening = coerce_decimal(record.get("opening_balance"))
    current = record.get("current_balance")
    return Account(
        id=record["id"],
        name=record["name"],
        account_type=parse_enum(AccountType, record.get("account_type")),
        opening_balance=opening,
        current_balance=(
            coerce_decimal(current) if current is not None else opening
        ),
        status=parse_enum(
            AccountStatus,
            record.get("status") or AccountStatus.ACTIVE.value,
        ),
        due_date=parse_date(record.get("due_date")),
    )


def transaction_to_record(transaction: Transaction) -> dict[str, Any]:
    return {
        "id": transaction.id,
        "date": transaction.date.isoformat(),
        "amount": str(transaction.amount),
        "type": transaction.transaction_type.value,
        "from_account_id": transaction.from_account_id,
        "to_account_id": transaction.to_account_id,
        "category_id": transaction.category_id,
        "sub_category_id": transaction.sub_category_id,
        "notes": transaction.notes,
    }


def record_to_transaction(record: Record) -> Transaction:
    tx_date = parse_date(record.get("date"))
    if tx_date is None:
        raise ValueError("transaction date is required")
    return Transaction(
        id=record["id"],
        date=tx_date,
        amount=coerce_decimal(record.get("amount")),
        transaction_type=parse_enum(TransactionType, record.get("type")),
        from_account_id=normalize_reference(record.get("from_account_id"))
        or "",
        to_account_id=normalize_reference(record.get("to_account_id")),
        category_id=normalize_reference(record.get("category_id")),
        sub_category_id=normalize_reference(record.get("sub_category_id")),
        notes=record.get("notes") or "",
    )


def budget_to_record(budget: Budget) -> dict[str, Any]:
    return {
        "id": budget.id,
        "category_id": budget.category_id,
        "amount": str(budget.amount),
        "period": budget.period.value,
    }


def record_to_budget(record: Record) -> Budget:
    return Budget(
        id=record["id"],
        category_id=record["category_id"],
        amount=coerce_decimal(record.get("amount")),
        period=parse_enum(
            BudgetPeriod,
            record.get("period") or BudgetPeriod.MONTHLY.value,
        ),
    )


def alert_to_record(alert: DueAlert) -> dict[str, Any]:
    return {
        "id": alert.id,
        "title": alert.title,
        "amount": str(alert.amount),
        "due_date": alert.due_date.isoformat(),
        "type": alert.alert_type.value,
        "is_paid": alert.is_paid,
        "sources": json.dumps(
            [{"title": s.title, "uri": s.uri} for s in alert.sources]
        ),
        "is_market_data": alert.is_market_data,
    }


def record_to_alert(record: Record) -> DueAlert:
    due_date = parse_date(record.get("due_date"))
    if due_date is None:
        raise ValueError("alert due date is required")
    raw_sources = record.get("sources") or "[]"
    if isinstance(raw_sources, str):
        raw_sources = json.loads(raw_sources)
    return DueAlert(
        id=record["id"],
        title=record["title"],
        amount=coerce_decimal(record.get("amount")),
        due_date=due_date,
        alert_type=parse_enum(AlertType, record.get("type")),
        is_paid=bool(record.get("is_paid")),
        sources=tuple(
            AlertSource(title=item["title"], uri=item["uri"])
            for item in raw_sources
        ),
        is_market_data=bool(record.get("is_market_data")),
    )


def _convert_all(records: Iterable[Record], converter, kind: str, logger):
    converted = []
    for record in records:
        try:
            converted.append(converter(record))
        except (KeyError, ValueError, TypeError) as exc:
            logger.warning(
                f"Skipping {kind} record {record.get('id')}: {exc}"
            )
    return converted


def records_to_snapshot(
    accounts: Iterable[Record],
    transactions: Iterable[Record],
    categories: Iterable[Record],
    budgets: Iterable[Record],
    alerts: Iterable[Record],
    logger,
) -> LedgerSnapshot:
    """Assemble a snapshot, skipping records that cannot be converted.

    Args:
        accounts: Account records.
        transactions: Transaction records.
        categories: Flat category records.
        budgets: Budget records.
        alerts: Alert records.
        logger: Logger used for warnings about skipped records.

    Returns:
        LedgerSnapshot: Entities built from the valid records.
    """
    return LedgerSnapshot(
        accounts=_convert_all(accounts, record_to_account, "account", logger),
        transactions=_convert_all(
            transactions,
            record_to_transaction,
            "transaction",
            logger,
        ),
        categories=build_categories(categories, logger),
        budgets=_convert_all(budgets, record_to_budget, "budget", logger),
        alerts=_convert_all(alerts, record_to_alert, "alert", logger),
    )


def snapshot_to_records(snapshot: LedgerSnapshot) -> dict[str, list[dict]]:
    """Flatten a snapshot into record lists keyed by collection name."""
    return {
        "accounts": [account_to_record(a) for a in snapshot.accounts],
        "transactions": [
            transaction_to_record(tx) for tx in snapshot.transactions
        ],
        "categories": [category_to_record(c) for c in snapshot.categories],
        "budgets": [budget_to_record(b) for b in snapshot.budgets],
        "alerts": [alert_to_record(a) for a in snapshot.alerts],
    }


__all__ = [
    "account_to_record",
    "record_to_account",
    "transaction_to_record",
    "record_to_transaction",
    "budget_to_record",
    "record_to_budget",
    "alert_to_record",
    "record_to_alert",
    "records_to_snapshot",
    "snapshot_to_records",
]
