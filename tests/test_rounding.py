"""Tests for rounding policies and amount conversion.

Property-Based Tests:
    Idempotence of every rounding mode, ceil/floor bracketing.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given

from priceformatter.diagnostics import (
    DiagnosticCode,
    InvalidFormatError,
    InvalidRoundingModeError,
)
from priceformatter.enums import RoundingMode
from priceformatter.runtime.rounding import parse_rounding_mode, round_amount, to_decimal
from tests.strategies import amounts, decimals, rounding_modes


class TestRoundingModes:
    """Each policy on representative values."""

    def test_half_up_on_tie(self) -> None:
        assert round_amount(10.505, "half_up", 2) == Decimal("10.51")

    def test_half_down_on_tie(self) -> None:
        assert round_amount(10.505, "half_down", 2) == Decimal("10.50")

    @pytest.mark.parametrize(
        ("amount", "mode", "places", "expected"),
        [
            (Decimal("10.001"), RoundingMode.CEIL, 2, Decimal("10.01")),
            (Decimal("10.009"), RoundingMode.FLOOR, 2, Decimal("10.00")),
            (Decimal("-10.001"), RoundingMode.CEIL, 2, Decimal("-10.00")),
            (Decimal("-10.001"), RoundingMode.FLOOR, 2, Decimal("-10.01")),
            (Decimal("2.5"), RoundingMode.HALF_UP, 0, Decimal("3")),
            (Decimal("-2.5"), RoundingMode.HALF_UP, 0, Decimal("-3")),
            (Decimal("2.5"), RoundingMode.HALF_DOWN, 0, Decimal("2")),
            (Decimal("-2.5"), RoundingMode.HALF_DOWN, 0, Decimal("-2")),
            (Decimal("2.51"), RoundingMode.HALF_DOWN, 0, Decimal("3")),
            (1234, RoundingMode.HALF_UP, 2, Decimal("1234.00")),
            ("0.00012345", RoundingMode.HALF_UP, 8, Decimal("0.00012345")),
        ],
    )
    def test_policy(
        self, amount: object, mode: RoundingMode, places: int, expected: Decimal
    ) -> None:
        result = round_amount(amount, mode, places)  # type: ignore[arg-type]
        assert result == expected
        assert result.as_tuple().exponent == -places

    def test_float_uses_shortest_repr(self) -> None:
        """1.005 is binary 1.00499999...; it still rounds as written."""
        assert round_amount(1.005, RoundingMode.HALF_UP, 2) == Decimal("1.01")

    def test_large_amount_keeps_precision(self) -> None:
        value = Decimal("123456789012345678901234567890.125")
        assert round_amount(value, RoundingMode.HALF_UP, 2) == Decimal(
            "123456789012345678901234567890.13"
        )

    def test_mode_names_are_case_insensitive(self) -> None:
        assert parse_rounding_mode(" HALF_UP ") is RoundingMode.HALF_UP


class TestRoundingErrors:
    """Invalid modes and amounts fail before any numeric work."""

    def test_unknown_mode_raises(self) -> None:
        with pytest.raises(InvalidRoundingModeError) as exc_info:
            round_amount(10, "bankers", 2)
        assert exc_info.value.mode == "bankers"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_ROUNDING_MODE

    def test_mode_checked_before_amount(self) -> None:
        """A bad mode wins over a bad amount."""
        with pytest.raises(InvalidRoundingModeError):
            round_amount("not a number", "sideways", 2)

    def test_negative_decimals_rejected(self) -> None:
        with pytest.raises(InvalidFormatError):
            round_amount(1, RoundingMode.CEIL, -1)

    @pytest.mark.parametrize("value", [True, float("nan"), float("inf"), "abc", "", None, [1]])
    def test_invalid_amounts(self, value: object) -> None:
        with pytest.raises(InvalidFormatError):
            to_decimal(value)  # type: ignore[arg-type]

    def test_non_finite_decimal_rejected(self) -> None:
        with pytest.raises(InvalidFormatError):
            to_decimal(Decimal("NaN"))


class TestRoundingProperties:
    """Properties that hold for every mode."""

    @given(amount=amounts, mode=rounding_modes, places=decimals)
    def test_idempotent(self, amount: Decimal, mode: RoundingMode, places: int) -> None:
        once = round_amount(amount, mode, places)
        assert round_amount(once, mode, places) == once

    @given(amount=amounts, places=decimals)
    def test_floor_ceil_bracket_value(self, amount: Decimal, places: int) -> None:
        low = round_amount(amount, RoundingMode.FLOOR, places)
        high = round_amount(amount, RoundingMode.CEIL, places)
        assert low <= amount <= high
        assert high - low <= Decimal(1).scaleb(-places)

    @given(amount=amounts, mode=rounding_modes, places=decimals)
    def test_error_bounded_by_one_unit(
        self, amount: Decimal, mode: RoundingMode, places: int
    ) -> None:
        assert abs(round_amount(amount, mode, places) - amount) <= Decimal(1).scaleb(-places)
