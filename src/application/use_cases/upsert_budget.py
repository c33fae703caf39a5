"""Use cases to create, update or delete the budget of a category."""

from collections.abc import Callable
from dataclasses import replace
from decimal import Decimal
from uuid import uuid4

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.models import Budget
from src.domain.policies.categories import budgetable_categories
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


def new_budget_id() -> str:
    return f"b_{uuid4().hex[:12]}"


class UpsertBudgetUseCase:
    """Set the monthly limit of a top-level expense category."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_budget_id,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, category_id: str, amount) -> Budget:
        """Create a budget, or update the existing one for the category.

        Args:
            category_id: Top-level expense category to budget.
            amount: Monthly limit, must be positive.

        Returns:
            Budget: The stored budget.

        Raises:
            ValueError: If the amount is not positive or the category cannot
                carry a budget.
        """
        limit = coerce_decimal(amount)
        if limit <= Decimal("0"):
            raise ValueError(f"Budget amount must be positive, got {limit}")
        snapshot = self._ledger_repository.load_snapshot()
        allowed = {c.id for c in budgetable_categories(snapshot.categories)}
        if category_id not in allowed:
            raise ValueError(
                f"Category {category_id} is not a top-level expense category"
            )

        existing = next(
            (b for b in snapshot.budgets if b.category_id == category_id),
            None,
        )
        if existing is not None:
            budget = replace(existing, amount=limit)
            self._logger.info(
                f"Updating budget {budget.id} for {category_id} to {limit}"
            )
        else:
            budget = Budget(
                id=self._id_factory(),
                category_id=category_id,
                amount=limit,
            )
            self._logger.info(
                f"Creating budget {budget.id} for {category_id} at {limit}"
            )
        self._ledger_repository.save_budget(budget)
        return budget


class DeleteBudgetUseCase:
    """Remove a budget."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, budget_id: str) -> None:
        """Delete a budget; unknown ids raise KeyError."""
        if not self._ledger_repository.delete_budget(budget_id):
            raise KeyError(f"Unknown budget {budget_id}")
        self._logger.info(f"Deleted budget {budget_id}")


__all__ = ["UpsertBudgetUseCase", "DeleteBudgetUseCase", "new_budget_id"]
