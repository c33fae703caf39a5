"""Tests for the budget upsert and delete use cases."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases.upsert_budget import (
    DeleteBudgetUseCase,
    UpsertBudgetUseCase,
)
from src.domain.constants import TransactionType
from src.domain.models import (
    Budget,
    LedgerSnapshot,
    SubCategory,
    TopLevelCategory,
)

FOOD = TopLevelCategory("food", "Food", TransactionType.EXPENSE)
DINING = SubCategory("dining", "Dining", FOOD)
SALARY = TopLevelCategory("salary", "Salary", TransactionType.INCOME)


def _build_repository(budgets=None) -> MagicMock:
    repository = MagicMock()
    repository.load_snapshot.return_value = LedgerSnapshot(
        categories=[FOOD, DINING, SALARY],
        budgets=budgets or [],
    )
    return repository


def test_execute_creates_new_budget() -> None:
    repository = _build_repository()
    use_case = UpsertBudgetUseCase(
        repository,
        logger=MagicMock(),
        id_factory=lambda: "b_new",
    )

    budget = use_case.execute("food", "750")

    assert budget == Budget("b_new", "food", Decimal("750"))
    repository.save_budget.assert_called_once_with(budget)


def test_execute_updates_existing_budget() -> None:
    repository = _build_repository([Budget("b1", "food", Decimal("100"))])
    use_case = UpsertBudgetUseCase(repository, logger=MagicMock())

    budget = use_case.execute("food", 300)

    assert budget.id == "b1"
    assert budget.amount == Decimal("300")


@pytest.mark.parametrize("category_id", ["dining", "salary", "missing"])
def test_execute_rejects_non_budgetable_categories(category_id) -> None:
    repository = _build_repository()
    use_case = UpsertBudgetUseCase(repository, logger=MagicMock())

    with pytest.raises(ValueError):
        use_case.execute(category_id, "100")
    repository.save_budget.assert_not_called()


@pytest.mark.parametrize("amount", ["0", "-10"])
def test_execute_rejects_non_positive_amount(amount) -> None:
    repository = _build_repository()
    use_case = UpsertBudgetUseCase(repository, logger=MagicMock())

    with pytest.raises(ValueError):
        use_case.execute("food", amount)


def test_delete_budget_removes_stored_budget() -> None:
    repository = _build_repository()
    repository.delete_budget.return_value = True

    DeleteBudgetUseCase(repository, logger=MagicMock()).execute("b_1")

    repository.delete_budget.assert_called_once_with("b_1")


def test_delete_budget_rejects_unknown_id() -> None:
    repository = _build_repository()
    repository.delete_budget.return_value = False

    with pytest.raises(KeyError):
        DeleteBudgetUseCase(repository, logger=MagicMock()).execute("nope")
