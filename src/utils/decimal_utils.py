"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENTS = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Floats go through ``str`` so that 0.1 stays 0.1.

    Args:
        value: Raw numeric value from storage, parsers or callers.

    Returns:
        Decimal: Normalized finite numeric value.

    Raises:
        ValueError: If the value cannot be read as a number, or is NaN or
            infinite.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return result


def quantize_amount(value: Decimal) -> Decimal:
    """Round an amount to cents for display."""
    return coerce_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "quantize_amount"]
