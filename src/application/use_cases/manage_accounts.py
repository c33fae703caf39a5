"""Use case to add or edit ledger accounts."""

from collections.abc import Callable
from dataclasses import replace
from datetime import date
from uuid import uuid4

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import AccountStatus, AccountType
from src.domain.models import Account
from src.domain.services.normalization import parse_date, parse_enum
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def new_account_id() -> str:
    return f"acc_{uuid4().hex[:12]}"


class SaveAccountUseCase:
    """Create an account, or edit the details of an existing one."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_account_id,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(
        self,
        name: str,
        account_type: AccountType | str,
        opening_balance,
        due_date: date | str | None = None,
        status: AccountStatus | str = AccountStatus.ACTIVE,
        account_id: str | None = None,
    ) -> Account:
        """Store an account.

        New accounts start with their current balance equal to the opening
        balance. Edits keep the cached current balance, which the balance
        engine recomputes on the next read.

        Args:
            name: Display name, must not be blank.
            account_type: Kind of account.
            opening_balance: Signed balance before any transaction.
            due_date: Optional due date for revolving or installment accounts.
            status: Activity status.
            account_id: Id of the account to edit; None creates one.

        Returns:
            Account: The stored account.

        Raises:
            ValueError: If the name is blank or a field cannot be read.
            KeyError: If account_id names no stored account.
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValueError("Account name is required")
        kind = parse_enum(AccountType, account_type)
        opening = coerce_decimal(opening_balance)
        activity = parse_enum(AccountStatus, status)
        due = parse_date(due_date)

        if account_id is None:
            account = Account(
                id=self._id_factory(),
                name=clean_name,
                account_type=kind,
                opening_balance=opening,
                current_balance=opening,
                status=activity,
                due_date=due,
            )
            self._logger.info(
                f"Creating {kind.value} account {account.id} ({clean_name})"
            )
        else:
            snapshot = self._ledger_repository.load_snapshot()
            existing = next(
                (a for a in snapshot.accounts if a.id == account_id),
                None,
            )
            if existing is None:
                raise KeyError(f"Unknown account {account_id}")
            account = replace(
                existing,
                name=clean_name,
                account_type=kind,
                opening_balance=opening,
                status=activity,
                due_date=due,
            )
            self._logger.info(f"Updating account {account_id}")
        self._ledger_repository.save_account(account)
        return account


__all__ = ["SaveAccountUseCase", "new_account_id"]
