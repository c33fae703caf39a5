"""Port for reading and writing the ledger."""

from typing import Protocol

from src.domain.models import (
    Account,
    Budget,
    Category,
    DueAlert,
    LedgerSnapshot,
    Transaction,
)


class LedgerRepositoryPort(Protocol):
    """Port exposing the persisted ledger of a single user."""

    def load_snapshot(self) -> LedgerSnapshot:
        """Return every stored entity collection."""

    def save_account(self, account: Account) -> None:
        """Insert or replace an account."""

    def save_category(self, category: Category) -> None:
        """Insert or replace a category."""

    def delete_categories(self, category_ids: list[str]) -> int:
        """Remove categories and return how many were removed."""

    def save_transactions(self, transactions: list[Transaction]) -> int:
        """Insert or replace transactions and return how many were written."""

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction; return False for unknown ids."""

    def save_budget(self, budget: Budget) -> None:
        """Insert or replace a budget."""

    def delete_budget(self, budget_id: str) -> bool:
        """Remove a budget; return False for unknown ids."""

    def save_alerts(self, alerts: list[DueAlert]) -> int:
        """Insert or replace alerts and return how many were written."""

    def mark_alert_paid(self, alert_id: str) -> bool:
        """Set the paid flag of an alert; return False for unknown ids."""

    def prepare_schema(self) -> None:
        """Create the backing storage when missing."""

    def is_empty(self) -> bool:
        """Return True when no ledger has been stored yet."""

    def save_snapshot(self, snapshot: LedgerSnapshot) -> None:
        """Insert or replace every entity of a snapshot."""


__all__ = ["LedgerRepositoryPort"]
