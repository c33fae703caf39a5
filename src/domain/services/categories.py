"""Conversion of flat category records into the two-tier hierarchy."""

from collections.abc import Iterable, Mapping
from typing import Any

from src.domain.constants import TransactionType
from src.domain.models import Category, SubCategory, TopLevelCategory
from src.domain.services.normalization import (
    normalize_reference,
    parse_enum,
)


def build_categories(
    rows: Iterable[Mapping[str, Any]],
    logger,
) -> list[Category]:
    """Build typed categories from flat storage records.

    Records carry ``id``, ``name``, ``parent_id`` and ``type``. A record
    whose parent is missing or is itself a sub-category is dropped with a
    warning, since only one level of nesting exists.

    Args:
        rows: Flat category records.
        logger: Logger used for warnings.

    Returns:
        list[Category]: Categories in input order, invalid ones removed.
    """
    rows = list(rows)
    parents: dict[str, TopLevelCategory] = {}
    for row in rows:
        if normalize_reference(row.get("parent_id")) is not None:
            continue
        try:
            parents[row["id"]] = TopLevelCategory(
                id=row["id"],
                name=row["name"],
                transaction_type=parse_enum(TransactionType, row.get("type")),
            )
        except ValueError as exc:
            logger.warning(f"Skipping category {row.get('id')}: {exc}")

    categories: list[Category] = []
    for row in rows:
        parent_id = normalize_reference(row.get("parent_id"))
        if parent_id is None:
            if row["id"] in parents:
                categories.append(parents[row["id"]])
            continue
        parent = parents.get(parent_id)
        if parent is None:
            logger.warning(
                f"Skipping sub-category {row['id']}: parent {parent_id} "
                "is missing or not top-level"
            )
            continue
        categories.append(
            SubCategory(id=row["id"], name=row["name"], parent=parent)
        )
    return categories


def category_to_record(category: Category) -> dict[str, str | None]:
    """Flatten a category into a storage record."""
    return {
        "id": category.id,
        "name": category.name,
        "parent_id": category.parent_id,
        "type": category.transaction_type.value,
    }


__all__ = ["build_categories", "category_to_record"]
