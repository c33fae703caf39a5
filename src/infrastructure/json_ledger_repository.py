"""JSON vault repository keeping the whole ledger in one local file."""

from dataclasses import replace
import json
import os
from pathlib import Path
import tempfile

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import (
    Account,
    Budget,
    Category,
    DueAlert,
    LedgerSnapshot,
    Transaction,
)
from src.infrastructure.ledger_records import (
    records_to_snapshot,
    snapshot_to_records,
)
from src.infrastructure.logging.logger import get_app_logger

_COLLECTIONS = ("accounts", "transactions", "categories", "budgets", "alerts")


def _upsert(items: list, updates: list) -> list:
    """Replace items sharing an id with updates, appending new ones."""
    by_id = {item.id: item for item in updates}
    merged = [by_id.pop(item.id, item) for item in items]
    merged.extend(item for item in updates if item.id in by_id)
    return merged


class JsonLedgerRepository(LedgerRepositoryPort):
    """Ledger repository storing a snapshot as a JSON document.

    Every write rewrites the full document through a temporary file so a
    crash never leaves a half-written vault behind.
    """

    def __init__(self, path: Path | str, logger=None) -> None:
        """Initialize the repository.

        Args:
            path: Location of the JSON vault file.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._path = Path(path)
        self._logger = logger or get_app_logger()

    @property
    def path(self) -> Path:
        return self._path

    def prepare_schema(self) -> None:
        """Ensure the vault directory exists."""
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def is_empty(self) -> bool:
        """Return True when the vault file does not exist yet."""
        return not self._path.exists()

    def load_snapshot(self) -> LedgerSnapshot:
        """Return the stored ledger, or an empty one when no vault exists.

        Raises:
            RuntimeError: If the vault file is not valid JSON.
        """
        if not self._path.exists():
            self._logger.info(f"No ledger vault at {self._path}")
            return LedgerSnapshot()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RuntimeError(
                f"Ledger vault {self._path} is not valid JSON"
            ) from exc
        records = {
            name: payload.get(name) or [] for name in _COLLECTIONS
        }
        return records_to_snapshot(logger=self._logger, **records)

    def save_snapshot(self, snapshot: LedgerSnapshot) -> None:
        """Write a full snapshot to the vault."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        document = json.dumps(snapshot_to_records(snapshot), indent=2)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(document)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def save_account(self, account: Account) -> None:
        snapshot = self.load_snapshot()
        self.save_snapshot(
            replace(snapshot, accounts=_upsert(snapshot.accounts, [account]))
        )

    def save_category(self, category: Category) -> None:
        snapshot = self.load_snapshot()
        self.save_snapshot(
            replace(
                snapshot,
                categories=_upsert(snapshot.categories, [category]),
            )
        )

    def delete_categories(self, category_ids: list[str]) -> int:
        snapshot = self.load_snapshot()
        kept = [c for c in snapshot.categories if c.id not in category_ids]
        removed = len(snapshot.categories) - len(kept)
        if removed:
            self.save_snapshot(replace(snapshot, categories=kept))
        return removed

    def save_transactions(self, transactions: list[Transaction]) -> int:
        snapshot = self.load_snapshot()
        self.save_snapshot(
            replace(
                snapshot,
                transactions=_upsert(snapshot.transactions, transactions),
            )
        )
        return len(transactions)

    def save_budget(self, budget: Budget) -> None:
        snapshot = self.load_snapshot()
        self.save_snapshot(
            replace(snapshot, budgets=_upsert(snapshot.budgets, [budget]))
        )

    def delete_transaction(self, transaction_id: str) -> bool:
        snapshot = self.load_snapshot()
        kept = [tx for tx in snapshot.transactions if tx.id != transaction_id]
        if len(kept) == len(snapshot.transactions):
            return False
        self.save_snapshot(replace(snapshot, transactions=kept))
        return True

    def delete_budget(self, budget_id: str) -> bool:
        snapshot = self.load_snapshot()
        kept = [b for b in snapshot.budgets if b.id != budget_id]
        if len(kept) == len(snapshot.budgets):
            return False
        self.save_snapshot(replace(snapshot, budgets=kept))
        return True

    def save_alerts(self, alerts: list[DueAlert]) -> int:
        snapshot = self.load_snapshot()
        self.save_snapshot(
            replace(snapshot, alerts=_upsert(snapshot.alerts, alerts))
        )
        return len(alerts)

    def mark_alert_paid(self, alert_id: str) -> bool:
        snapshot = self.load_snapshot()
        if not any(alert.id == alert_id for alert in snapshot.alerts):
            return False
        alerts = [
            replace(alert, is_paid=True) if alert.id == alert_id else alert
            for alert in snapshot.alerts
        ]
        self.save_snapshot(replace(snapshot, alerts=alerts))
        return True


__all__ = ["JsonLedgerRepository"]
