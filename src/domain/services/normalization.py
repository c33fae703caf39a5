"""Domain normalization helpers."""

from datetime import date, datetime
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def normalize_code(value: str | None) -> str | None:
    """Normalize enum-like codes coming from storage or parsers.

    Args:
        value: Raw code such as " expense ".

    Returns:
        str | None: Upper-cased code, or None when blank.
    """
    if not value:
        return None
    cleaned = str(value).strip()
    return cleaned.upper() if cleaned else None


def normalize_reference(value: str | None) -> str | None:
    """Return a stripped identifier, or None when blank."""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def parse_enum(enum_cls: type[E], value: str | None) -> E:
    """Convert a raw code into an enum member.

    Raises:
        ValueError: If the code is blank or not a member of enum_cls.
    """
    code = normalize_code(value)
    if code is None:
        raise ValueError(f"Missing {enum_cls.__name__} value")
    return enum_cls(code)


def parse_date(value: date | str | None) -> date | None:
    """Parse ISO dates, accepting full timestamps.

    Raises:
        ValueError: If the value is not ISO formatted.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        return datetime.fromisoformat(text).date()
    return date.fromisoformat(text)


__all__ = [
    "normalize_code",
    "normalize_reference",
    "parse_enum",
    "parse_date",
]
