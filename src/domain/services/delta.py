"""Period-over-period change calculation."""

from decimal import Decimal

from src.domain.models import Delta
from src.utils.decimal_utils import coerce_decimal


def calculate_delta(
    current: Decimal | int | float | str,
    previous: Decimal | int | float | str,
) -> Delta:
    """Return the absolute and relative change between two values.

    A zero baseline yields a percent change of 0 rather than an infinite
    or undefined value.

    Args:
        current: Value for the current snapshot.
        previous: Value for the baseline snapshot.

    Returns:
        Delta: Difference, percent change and direction.
    """
    current_value = coerce_decimal(current)
    previous_value = coerce_decimal(previous)
    diff = current_value - previous_value
    if previous_value == 0:
        percent = Decimal("0")
    else:
        percent = diff / abs(previous_value) * Decimal("100")
    return Delta(diff=diff, percent=percent, is_positive=diff >= 0)


__all__ = ["calculate_delta"]
