"""Use cases to add, rename and delete categories."""

from collections.abc import Callable
from dataclasses import replace
from uuid import uuid4

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import TransactionType
from src.domain.models import Category
from src.domain.services.categories import build_categories, category_to_record
from src.domain.services.normalization import normalize_reference
from src.domain.services.rollup import child_category_ids
from src.infrastructure.logging.logger import get_app_logger


def new_category_id() -> str:
    return f"cat_{uuid4().hex[:12]}"


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Category name is required")
    return cleaned


class AddCategoryUseCase:
    """Add a top-level category or a sub-category under one."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_category_id,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(
        self,
        name: str,
        transaction_type: TransactionType | str = TransactionType.EXPENSE,
        parent_id: str | None = None,
    ) -> Category:
        """Create a category.

        The new record goes through the same hierarchy rules used when the
        ledger is loaded: a sub-category inherits its parent's type and the
        parent must be a stored top-level category.

        Raises:
            ValueError: If the name is blank, the type is not EXPENSE or
                INCOME, or the parent is missing or not top-level.
        """
        snapshot = self._ledger_repository.load_snapshot()
        parent_id = normalize_reference(parent_id)
        raw_type = (
            transaction_type.value
            if isinstance(transaction_type, TransactionType)
            else transaction_type
        )
        record = {
            "id": self._id_factory(),
            "name": _clean_name(name),
            "parent_id": parent_id,
            "type": raw_type,
        }
        if parent_id is not None:
            parent = next(
                (c for c in snapshot.categories if c.id == parent_id),
                None,
            )
            if parent is not None:
                record["type"] = parent.transaction_type.value

        records = [category_to_record(c) for c in snapshot.categories]
        built = build_categories([*records, record], self._logger)
        category = next((c for c in built if c.id == record["id"]), None)
        if category is None:
            raise ValueError(
                f"Cannot add category {record['name']}: parent must be an "
                "existing top-level category and type EXPENSE or INCOME"
            )
        self._ledger_repository.save_category(category)
        self._logger.info(f"Added category {category.id} ({category.name})")
        return category


class RenameCategoryUseCase:
    """Change the display name of a category."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, category_id: str, name: str) -> Category:
        """Rename a category; unknown ids raise KeyError."""
        new_name = _clean_name(name)
        snapshot = self._ledger_repository.load_snapshot()
        existing = next(
            (c for c in snapshot.categories if c.id == category_id),
            None,
        )
        if existing is None:
            raise KeyError(f"Unknown category {category_id}")
        category = replace(existing, name=new_name)
        self._ledger_repository.save_category(category)
        self._logger.info(f"Renamed category {category_id} to {new_name}")
        return category


class DeleteCategoryUseCase:
    """Remove a category together with its sub-categories and budgets."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, category_id: str) -> list[str]:
        """Delete a category.

        Transactions keep their category references; the balance engine
        and rollup ignore references that point at nothing.

        Returns:
            list[str]: Ids of the removed categories.

        Raises:
            KeyError: If no category has this id.
        """
        snapshot = self._ledger_repository.load_snapshot()
        if not any(c.id == category_id for c in snapshot.categories):
            raise KeyError(f"Unknown category {category_id}")
        removed = [
            category_id,
            *sorted(child_category_ids(category_id, snapshot.categories)),
        ]
        self._ledger_repository.delete_categories(removed)
        for budget in snapshot.budgets:
            if budget.category_id in removed:
                self._ledger_repository.delete_budget(budget.id)
                self._logger.info(
                    f"Removed budget {budget.id} of deleted category "
                    f"{budget.category_id}"
                )
        self._logger.info(f"Deleted categories {', '.join(removed)}")
        return removed


__all__ = [
    "AddCategoryUseCase",
    "RenameCategoryUseCase",
    "DeleteCategoryUseCase",
    "new_category_id",
]
