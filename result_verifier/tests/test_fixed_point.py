"""Tests for fixed-point decimal parsing and conversion."""

from __future__ import annotations

import pytest

from result_verifier.analysis.fixed_point import FixedPointValue


def test_plain_values_are_scaled_to_precision() -> None:
    assert FixedPointValue.parse("10.50", 2) == FixedPointValue(10, 50, 2)
    assert FixedPointValue.parse("10.5", 2) == FixedPointValue(10, 50, 2)
    assert FixedPointValue.parse("10", 2) == FixedPointValue(10, 0, 2)
    assert FixedPointValue.parse("10.", 3) == FixedPointValue(10, 0, 3)
    assert FixedPointValue.parse(".25", 2) == FixedPointValue(0, 25, 2)


def test_round_half_up_on_boundary_digit_only() -> None:
    # third fractional digit 5 rounds up; stored fraction is 0 + 1
    assert FixedPointValue.parse("1.005", 2).fractional_part == 1
    assert FixedPointValue.parse("1.004", 2).fractional_part == 0
    # only the first extra digit counts
    assert FixedPointValue.parse("1.0049999", 2).fractional_part == 0
    assert FixedPointValue.parse("2.125", 2) == FixedPointValue(2, 13, 2)


def test_rounding_does_not_carry_into_integer_part() -> None:
    v = FixedPointValue.parse("1.995", 2)
    assert (v.integer_part, v.fractional_part) == (1, 100)


def test_precision_zero() -> None:
    assert FixedPointValue.parse("7", 0) == FixedPointValue(7, 0, 0)
    assert FixedPointValue.parse("7.4", 0) == FixedPointValue(7, 0, 0)
    assert FixedPointValue.parse("7.6", 0) == FixedPointValue(7, 1, 0)


def test_integer_part_is_unbounded() -> None:
    v = FixedPointValue.parse("123456789012345678901234567890.1", 1)
    assert v.integer_part == 123456789012345678901234567890


@pytest.mark.parametrize("text", ["", ".", "-1.0", "+1", "1e5", "1.2.3", "abc", "null", " 1"])
def test_malformed_text(text: str) -> None:
    with pytest.raises(ValueError):
        FixedPointValue.parse(text, 2)


def test_digits_after_rounding_position_are_not_inspected() -> None:
    assert FixedPointValue.parse("1.239xyz", 2) == FixedPointValue(1, 24, 2)


def test_to_float() -> None:
    assert FixedPointValue(100, 0, 1).to_float() == pytest.approx(100.0)
    assert FixedPointValue(10, 50, 2).to_float() == pytest.approx(10.5)
    assert FixedPointValue(3, 125, 3).to_float() == pytest.approx(3.125)


def test_to_float_uses_digit_count_of_fraction() -> None:
    # the scale follows the stored fraction's own digit count, not the precision
    assert FixedPointValue(1, 5, 2).to_float() == pytest.approx(1.5)


def test_to_float_overflow() -> None:
    with pytest.raises(OverflowError):
        FixedPointValue(10 ** 400, 0, 2).to_float()


def test_same_as_ignores_nothing_but_parts() -> None:
    a = FixedPointValue.parse("3.10", 2)
    b = FixedPointValue.parse("3.1", 2)
    c = FixedPointValue.parse("3.11", 2)
    assert a.same_as(b)
    assert not a.same_as(c)
