"""Tests for the delta calculator."""

from decimal import Decimal

import pytest

from src.domain.services.delta import calculate_delta


def test_delta_reports_increase() -> None:
    delta = calculate_delta(Decimal("150"), Decimal("100"))

    assert delta.diff == Decimal("50")
    assert delta.percent == Decimal("50")
    assert delta.is_positive is True


def test_delta_reports_decrease() -> None:
    delta = calculate_delta(Decimal("75"), Decimal("100"))

    assert delta.diff == Decimal("-25")
    assert delta.percent == Decimal("-25")
    assert delta.is_positive is False


@pytest.mark.parametrize("current", ["0", "12.5", "-3"])
def test_zero_baseline_yields_zero_percent(current) -> None:
    delta = calculate_delta(Decimal(current), Decimal("0"))

    assert delta.percent == Decimal("0")
    assert delta.diff == Decimal(current)


def test_equal_values_yield_zero_diff() -> None:
    delta = calculate_delta(Decimal("42"), Decimal("42"))

    assert delta.diff == Decimal("0")
    assert delta.is_positive is True


def test_negative_baseline_uses_absolute_value() -> None:
    delta = calculate_delta(Decimal("-50"), Decimal("-100"))

    assert delta.percent == Decimal("50")
    assert delta.is_positive is True


def test_accepts_numeric_inputs() -> None:
    delta = calculate_delta(0.3, 0.1)

    assert delta.diff == Decimal("0.2")


def test_rejects_non_numeric_inputs() -> None:
    with pytest.raises(ValueError):
        calculate_delta("abc", 1)
