"""Render resolved settings and an amount into the final string.

Pipeline:
    1. round with the configured mode and decimals
    2. record the sign, continue with the magnitude
    3. compact tier selection (optional), rounded at the compact precision
    4. digit grouping with the configured separators
    5. Eastern Arabic transcription when the numeral policy asks for it
    6. symbol composition
    7. sign: leading "-" or accounting parentheses

Grouping comes from Babel's format_decimal() with a fixed CLDR pattern in
the "en" locale; the "," and "." it emits are then mapped onto the
configured separators in one translation pass, so separators that are each
other's characters ("." grouping with "," decimals) cannot collide.

Python 3.13+. Uses Babel for digit grouping.
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import TYPE_CHECKING

from babel import numbers as babel_numbers

from priceformatter.enums import SymbolPosition

from .numerals import should_use_eastern_arabic, to_eastern_arabic
from .rounding import round_amount

if TYPE_CHECKING:
    from priceformatter.config import NumeralSettings

    from .rounding import Amount
    from .settings import FormatSettings

__all__ = ["compose", "format_number", "render"]

_GROUPING_LOCALE = "en"


def _precision_for(value: Decimal, decimals: int) -> int:
    """Context precision that holds every digit of value at decimals places."""
    return max(decimal.getcontext().prec, value.adjusted() + decimals + 2)


def format_number(
    value: Decimal,
    decimals: int,
    decimal_separator: str,
    thousand_separator: str,
) -> str:
    """Group an already rounded, non-negative value.

    Args:
        value: Magnitude quantized to ``decimals`` places
        decimals: Fraction digits to show
        decimal_separator: Fractional point
        thousand_separator: Grouping separator ("" for none)

    Examples:
        >>> format_number(Decimal("1234567.89"), 2, ",", ".")
        '1.234.567,89'
        >>> format_number(Decimal("1234.5"), 1, ".", "")
        '1234.5'
    """
    pattern = "#,##0" + ("." + "0" * decimals if decimals else "")
    with decimal.localcontext() as ctx:
        # Babel quantizes under the active context
        ctx.prec = _precision_for(value, decimals)
        grouped = str(
            babel_numbers.format_decimal(value, format=pattern, locale=_GROUPING_LOCALE)
        )
    return grouped.translate(
        str.maketrans({",": thousand_separator, ".": decimal_separator})
    )


def compose(number: str, symbol: str, position: SymbolPosition, separator: str) -> str:
    """Place the symbol around a formatted number."""
    if position is SymbolPosition.BEFORE:
        return f"{symbol}{separator}{number}"
    return f"{number}{separator}{symbol}"


def render(
    amount: Amount,
    settings: FormatSettings,
    language: str,
    numerals: NumeralSettings,
) -> str:
    """Render an amount with fully resolved settings.

    Args:
        amount: Value to render
        settings: Merged settings
        language: Rendering language (drives the numeral heuristic)
        numerals: Global numeral policy

    Returns:
        Formatted amount

    Raises:
        InvalidFormatError: If amount is not a finite number
        InvalidRoundingModeError: If the rounding mode is unknown

    Examples:
        >>> from priceformatter.config import NumeralSettings
        >>> from priceformatter.runtime.settings import FormatSettings
        >>> render(-10.5, FormatSettings(accounting_format=True), "en", NumeralSettings())
        '($10.50)'
    """
    value = round_amount(amount, settings.rounding_mode, settings.decimals)
    # Decimal("-0.00") < 0 is False: negative zero renders unsigned
    negative = value < 0
    magnitude = value.copy_abs()

    suffix = ""
    decimals = settings.decimals
    if settings.compact.enabled:
        divisor, suffix = settings.compact.select_tier(magnitude)
        decimals = settings.compact.precision
        with decimal.localcontext() as ctx:
            ctx.prec = _precision_for(magnitude, decimals)
            scaled = magnitude / divisor
        magnitude = round_amount(scaled, settings.rounding_mode, decimals)

    if settings.strip_zero_decimals and magnitude == magnitude.to_integral_value():
        decimals = 0
        magnitude = round_amount(magnitude, settings.rounding_mode, 0)

    number = format_number(
        magnitude, decimals, settings.decimal_separator, settings.thousand_separator
    )
    if should_use_eastern_arabic(settings.use_eastern_arabic_numerals, language, numerals):
        number = to_eastern_arabic(
            number, settings.decimal_separator, settings.thousand_separator
        )

    result = compose(number + suffix, settings.symbol, settings.position, settings.separator)
    if negative:
        return f"({result})" if settings.accounting_format else f"-{result}"
    return result
