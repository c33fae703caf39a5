"""SQLAlchemy-backed repository for the ledger."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import (
    Account,
    Budget,
    Category,
    DueAlert,
    LedgerSnapshot,
    Transaction,
)
from src.domain.services.categories import category_to_record
from src.infrastructure.ledger_records import (
    account_to_record,
    alert_to_record,
    budget_to_record,
    records_to_snapshot,
    transaction_to_record,
)
from src.infrastructure.logging.logger import get_app_logger


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        account_type TEXT NOT NULL,
        opening_balance NUMERIC(14, 2) NOT NULL,
        current_balance NUMERIC(14, 2) NOT NULL,
        status TEXT NOT NULL,
        due_date TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        parent_id TEXT,
        type TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        type TEXT NOT NULL,
        from_account_id TEXT NOT NULL,
        to_account_id TEXT,
        category_id TEXT,
        sub_category_id TEXT,
        notes TEXT NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS budgets (
        id TEXT PRIMARY KEY,
        category_id TEXT NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        period TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS alerts (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        due_date TEXT NOT NULL,
        type TEXT NOT NULL,
        is_paid BOOLEAN NOT NULL DEFAULT FALSE,
        sources TEXT NOT NULL DEFAULT '[]',
        is_market_data BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
)

SELECT_SQL = {
    "accounts": text(
        """
        SELECT id, name, account_type, opening_balance, current_balance,
               status, due_date
        FROM accounts
        ORDER BY name, id
        """
    ),
    "transactions": text(
        """
        SELECT id, date, amount, type, from_account_id, to_account_id,
               category_id, sub_category_id, notes
        FROM transactions
        ORDER BY date DESC, id
        """
    ),
    "categories": text(
        """
        SELECT id, name, parent_id, type
        FROM categories
        ORDER BY id
        """
    ),
    "budgets": text(
        """
        SELECT id, category_id, amount, period
        FROM budgets
        ORDER BY id
        """
    ),
    "alerts": text(
        """
        SELECT id, title, amount, due_date, type, is_paid, sources,
               is_market_data
        FROM alerts
        ORDER BY due_date, id
        """
    ),
}

UPSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO accounts (
        id, name, account_type, opening_balance, current_balance, status,
        due_date
    )
    VALUES (
        :id, :name, :account_type, :opening_balance, :current_balance,
        :status, :due_date
    )
    ON CONFLICT (id) DO UPDATE SET
        name = excluded.name,
        account_type = excluded.account_type,
        opening_balance = excluded.opening_balance,
        current_balance = excluded.current_balance,
        status = excluded.status,
        due_date = excluded.due_date
    """
)

UPSERT_CATEGORY_SQL = text(
    """
    INSERT INTO categories (id, name, parent_id, type)
    VALUES (:id, :name, :parent_id, :type)
    ON CONFLICT (id) DO UPDATE SET
        name = excluded.name,
        parent_id = excluded.parent_id,
        type = excluded.type
    """
)

UPSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, date, amount, type, from_account_id, to_account_id,
        category_id, sub_category_id, notes
    )
    VALUES (
        :id, :date, :amount, :type, :from_account_id, :to_account_id,
        :category_id, :sub_category_id, :notes
    )
    ON CONFLICT (id) DO UPDATE SET
        date = excluded.date,
        amount = excluded.amount,
        type = excluded.type,
        from_account_id = excluded.from_account_id,
        to_account_id = excluded.to_account_id,
        category_id = excluded.category_id,
        sub_category_id = excluded.sub_category_id,
        notes = excluded.notes
    """
)

UPSERT_BUDGET_SQL = text(
    """
    INSERT INTO budgets (id, category_id, amount, period)
    VALUES (:id, :category_id, :amount, :period)
    ON CONFLICT (id) DO UPDATE SET
        category_id = excluded.category_id,
        amount = excluded.amount,
        period = excluded.period
    """
)

UPSERT_ALERT_SQL = text(
    """
    INSERT INTO alerts (
        id, title, amount, due_date, type, is_paid, sources, is_market_data
    )
    VALUES (
        :id, :title, :amount, :due_date, :type, :is_paid, :sources,
        :is_market_data
    )
    ON CONFLICT (id) DO UPDATE SET
        title = excluded.title,
        amount = excluded.amount,
        due_date = excluded.due_date,
        type = excluded.type,
        is_paid = excluded.is_paid,
        sources = excluded.sources,
        is_market_data = excluded.is_market_data
    """
)

MARK_ALERT_PAID_SQL = text("UPDATE alerts SET is_paid = TRUE WHERE id = :id")

DELETE_SQL = {
    "categories": text("DELETE FROM categories WHERE id = :id"),
    "transactions": text("DELETE FROM transactions WHERE id = :id"),
    "budgets": text("DELETE FROM budgets WHERE id = :id"),
}

COUNT_ACCOUNTS_SQL = text("SELECT COUNT(*) FROM accounts")


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Ledger repository backed by SQLAlchemy."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare_schema(self) -> None:
        """Ensure the ledger tables exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def is_empty(self) -> bool:
        """Return True when no account has been stored yet."""
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            return conn.execute(COUNT_ACCOUNTS_SQL).scalar_one() == 0

    def load_snapshot(self) -> LedgerSnapshot:
        """Return every stored entity collection."""
        engine = self._db_port.get_ledger_engine()
        records = {}
        with engine.connect() as conn:
            for name, query in SELECT_SQL.items():
                rows = conn.execute(query).all()
                records[name] = [dict(row._mapping) for row in rows]
        self._logger.info(
            f"Loaded ledger: {len(records['accounts'])} accounts, "
            f"{len(records['transactions'])} transactions"
        )
        return records_to_snapshot(logger=self._logger, **records)

    def save_snapshot(self, snapshot: LedgerSnapshot) -> None:
        """Insert or replace every entity of a snapshot."""
        engine = self._db_port.get_ledger_engine()
        batches = (
            (UPSERT_ACCOUNT_SQL, [account_to_record(a)
                                  for a in snapshot.accounts]),
            (UPSERT_CATEGORY_SQL, [category_to_record(c)
                                   for c in snapshot.categories]),
            (UPSERT_TRANSACTION_SQL, [transaction_to_record(tx)
                                      for tx in snapshot.transactions]),
            (UPSERT_BUDGET_SQL, [budget_to_record(b)
                                 for b in snapshot.budgets]),
            (UPSERT_ALERT_SQL, [alert_to_record(a)
                                for a in snapshot.alerts]),
        )
        with engine.begin() as conn:
            for statement, payload in batches:
                if payload:
                    conn.execute(statement, payload)

    def save_account(self, account: Account) -> None:
        """Insert or replace an account."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(UPSERT_ACCOUNT_SQL, account_to_record(account))

    def save_category(self, category: Category) -> None:
        """Insert or replace a category."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(UPSERT_CATEGORY_SQL, category_to_record(category))

    def delete_categories(self, category_ids: list[str]) -> int:
        """Remove categories.

        Returns:
            int: Number of categories removed.
        """
        return self._delete("categories", category_ids)

    def save_transactions(self, transactions: list[Transaction]) -> int:
        """Insert or replace transactions.

        Returns:
            int: Number of transactions written.
        """
        payload = [transaction_to_record(tx) for tx in transactions]
        if not payload:
            return 0
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(UPSERT_TRANSACTION_SQL, payload)
        return len(payload)

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction; False when no transaction has this id."""
        return self._delete("transactions", [transaction_id]) > 0

    def save_budget(self, budget: Budget) -> None:
        """Insert or replace a budget."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(UPSERT_BUDGET_SQL, budget_to_record(budget))

    def delete_budget(self, budget_id: str) -> bool:
        """Remove a budget; False when no budget has this id."""
        return self._delete("budgets", [budget_id]) > 0

    def save_alerts(self, alerts: list[DueAlert]) -> int:
        """Insert or replace alerts.

        Returns:
            int: Number of alerts written.
        """
        payload = [alert_to_record(alert) for alert in alerts]
        if not payload:
            return 0
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(UPSERT_ALERT_SQL, payload)
        return len(payload)

    def mark_alert_paid(self, alert_id: str) -> bool:
        """Set the paid flag of an alert.

        Returns:
            bool: False when no alert has this id.
        """
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(MARK_ALERT_PAID_SQL, {"id": alert_id})
        return result.rowcount > 0

    def _delete(self, table: str, ids: list[str]) -> int:
        if not ids:
            return 0
        engine = self._db_port.get_ledger_engine()
        removed = 0
        with engine.begin() as conn:
            for item_id in ids:
                result = conn.execute(DELETE_SQL[table], {"id": item_id})
                removed += result.rowcount
        self._logger.info(f"Deleted {removed} row(s) from {table}")
        return removed


__all__ = [
    "SqlAlchemyLedgerRepository",
    "CREATE_TABLES_SQL",
    "SELECT_SQL",
]
