"""Tests for the category management use cases."""

from decimal import Decimal
from unittest.mock import MagicMock, call

import pytest

from src.application.use_cases.manage_categories import (
    AddCategoryUseCase,
    DeleteCategoryUseCase,
    RenameCategoryUseCase,
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
GROCERIES = SubCategory("groceries", "Groceries", FOOD)
SALARY = TopLevelCategory("salary", "Salary", TransactionType.INCOME)


def _build_repository() -> MagicMock:
    repository = MagicMock()
    repository.load_snapshot.return_value = LedgerSnapshot(
        categories=[FOOD, DINING, GROCERIES, SALARY],
        budgets=[
            Budget("b_food", "food", Decimal("500")),
            Budget("b_other", "rent", Decimal("900")),
        ],
    )
    return repository


def _add_use_case(repository) -> AddCategoryUseCase:
    return AddCategoryUseCase(
        repository,
        logger=MagicMock(),
        id_factory=lambda: "cat_new",
    )


def test_add_top_level_category() -> None:
    repository = _build_repository()

    category = _add_use_case(repository).execute(" Travel ", "expense")

    assert category == TopLevelCategory(
        "cat_new",
        "Travel",
        TransactionType.EXPENSE,
    )
    repository.save_category.assert_called_once_with(category)


def test_sub_category_inherits_parent_type() -> None:
    repository = _build_repository()

    category = _add_use_case(repository).execute(
        "Bonus",
        TransactionType.EXPENSE,
        parent_id="salary",
    )

    assert isinstance(category, SubCategory)
    assert category.parent == SALARY
    assert category.transaction_type == TransactionType.INCOME


@pytest.mark.parametrize(
    ("name", "kind", "parent_id"),
    [
        ("Nested", "EXPENSE", "dining"),
        ("Orphan", "EXPENSE", "missing"),
        ("Moves", "TRANSFER", None),
        ("  ", "EXPENSE", None),
    ],
)
def test_add_rejects_invalid_categories(name, kind, parent_id) -> None:
    repository = _build_repository()

    with pytest.raises(ValueError):
        _add_use_case(repository).execute(name, kind, parent_id=parent_id)

    repository.save_category.assert_not_called()


def test_rename_keeps_hierarchy() -> None:
    repository = _build_repository()
    use_case = RenameCategoryUseCase(repository, logger=MagicMock())

    category = use_case.execute("dining", "Eating Out")

    assert category == SubCategory("dining", "Eating Out", FOOD)
    repository.save_category.assert_called_once_with(category)


def test_rename_unknown_category_raises() -> None:
    use_case = RenameCategoryUseCase(_build_repository(), logger=MagicMock())

    with pytest.raises(KeyError):
        use_case.execute("ghost", "Name")


def test_delete_parent_removes_children_and_budgets() -> None:
    repository = _build_repository()
    use_case = DeleteCategoryUseCase(repository, logger=MagicMock())

    removed = use_case.execute("food")

    assert removed == ["food", "dining", "groceries"]
    repository.delete_categories.assert_called_once_with(removed)
    assert repository.delete_budget.call_args_list == [call("b_food")]


def test_delete_sub_category_only_removes_it() -> None:
    repository = _build_repository()
    use_case = DeleteCategoryUseCase(repository, logger=MagicMock())

    assert use_case.execute("dining") == ["dining"]
    repository.delete_budget.assert_not_called()


def test_delete_unknown_category_raises() -> None:
    repository = _build_repository()
    use_case = DeleteCategoryUseCase(repository, logger=MagicMock())

    with pytest.raises(KeyError):
        use_case.execute("ghost")

    repository.delete_categories.assert_not_called()
