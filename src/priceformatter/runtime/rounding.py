"""Rounding policies for monetary amounts.

All arithmetic happens on Decimal. Floats are converted through their
shortest repr, so 10.505 is treated as exactly 10.505 rather than the
binary approximation 10.50499999...

Modes:
    ceil      - toward positive infinity
    floor     - toward negative infinity
    half_up   - half away from zero
    half_down - half toward zero

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import decimal
from decimal import Decimal, InvalidOperation
from typing import TypeAlias

from priceformatter.diagnostics import ErrorTemplate, InvalidFormatError, InvalidRoundingModeError
from priceformatter.enums import RoundingMode

__all__ = [
    "Amount",
    "parse_rounding_mode",
    "round_amount",
    "to_decimal",
]

Amount: TypeAlias = int | float | Decimal | str
"""Values accepted wherever an amount is expected."""

_DECIMAL_ROUNDING: dict[RoundingMode, str] = {
    RoundingMode.CEIL: decimal.ROUND_CEILING,
    RoundingMode.FLOOR: decimal.ROUND_FLOOR,
    RoundingMode.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingMode.HALF_DOWN: decimal.ROUND_HALF_DOWN,
}


def parse_rounding_mode(mode: object) -> RoundingMode:
    """Validate a rounding mode value.

    Args:
        mode: RoundingMode member or its string value ("half_up", ...)

    Returns:
        The matching RoundingMode

    Raises:
        InvalidRoundingModeError: If mode is not one of the four policies
    """
    if isinstance(mode, RoundingMode):
        return mode
    if isinstance(mode, str):
        try:
            return RoundingMode(mode.strip().lower())
        except ValueError:
            pass
    diagnostic = ErrorTemplate.invalid_rounding_mode(mode)
    raise InvalidRoundingModeError(diagnostic, mode=str(mode))


def to_decimal(amount: Amount) -> Decimal:
    """Convert an amount to a finite Decimal.

    Raises:
        InvalidFormatError: For booleans, non-numeric strings, NaN and infinities
    """
    if isinstance(amount, bool):
        raise InvalidFormatError(ErrorTemplate.invalid_amount(amount))

    try:
        match amount:
            case Decimal():
                value = amount
            case int():
                value = Decimal(amount)
            case float():
                value = Decimal(repr(amount))
            case str():
                value = Decimal(amount.strip())
            case _:
                raise InvalidFormatError(ErrorTemplate.invalid_amount(amount))
    except InvalidOperation as e:
        raise InvalidFormatError(ErrorTemplate.invalid_amount(amount)) from e

    if not value.is_finite():
        raise InvalidFormatError(ErrorTemplate.invalid_amount(amount))
    return value


def round_amount(amount: Amount, mode: RoundingMode | str, decimals: int) -> Decimal:
    """Round an amount to a number of decimal places.

    The mode is validated before the amount is touched, so an invalid mode
    never yields a partially processed value.

    Args:
        amount: Value to round
        mode: Rounding policy
        decimals: Decimal places to keep (>= 0)

    Returns:
        Decimal quantized to exactly ``decimals`` places

    Raises:
        InvalidRoundingModeError: If mode is not a known policy
        InvalidFormatError: If decimals is negative or amount is not finite

    Examples:
        >>> round_amount(10.505, "half_up", 2)
        Decimal('10.51')
        >>> round_amount(10.505, "half_down", 2)
        Decimal('10.50')
        >>> round_amount(10.001, RoundingMode.CEIL, 2)
        Decimal('10.01')
    """
    rounding_mode = parse_rounding_mode(mode)
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise InvalidFormatError(
            ErrorTemplate.invalid_setting("decimals", decimals, "a non-negative integer")
        )

    value = to_decimal(amount)
    exponent = Decimal(1).scaleb(-decimals)
    with decimal.localcontext() as ctx:
        # Enough digits for the integer part plus the requested fraction
        ctx.prec = max(ctx.prec, value.adjusted() + decimals + 2)
        return value.quantize(exponent, rounding=_DECIMAL_ROUNDING[rounding_mode])
