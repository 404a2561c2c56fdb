"""Best-effort parsing of formatted money strings back to Decimal.

Meant for form inputs and stored display strings ("$1,234.56",
"(1,234.56 LE)", "١٬٢٣٤٫٥٦ ج م"), not for round-tripping every rendering:
currency symbols and compact suffixes are discarded, only the number
survives.

- parse_amount() returns tuple[Decimal | None, tuple[AmountParseError, ...]]
- Parse errors are returned, never raised

Python 3.13+.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from priceformatter.constants import ARABIC_DECIMAL_SEPARATOR, ARABIC_THOUSAND_SEPARATOR
from priceformatter.diagnostics import AmountParseError, ErrorTemplate, InvalidFormatError
from priceformatter.runtime.numerals import to_western_arabic
from priceformatter.runtime.rounding import to_decimal

__all__ = ["is_formatted_money", "parse_amount"]


def _number_pattern(decimal_separator: str) -> re.Pattern[str]:
    dec = re.escape(decimal_separator)
    return re.compile(rf"[0-9]+(?:{dec}[0-9]*)?|{dec}[0-9]+")


def parse_amount(
    value: object,
    *,
    decimal_separator: str = ".",
    thousand_separator: str = ",",
) -> tuple[Decimal | None, tuple[AmountParseError, ...]]:
    """Parse a formatted amount.

    Steps:
        1. numbers are accepted as they are (finite only)
        2. Arabic separators become the configured ones, Eastern Arabic
           and Persian digits become ASCII
        3. "-" anywhere or surrounding parentheses mark a negative amount
        4. grouping separators are dropped; exactly one numeric run must remain

    Args:
        value: String or number
        decimal_separator: Fractional point used in the input
        thousand_separator: Grouping separator used in the input

    Returns:
        Tuple of (result, errors):
        - result: Parsed Decimal, or None if parsing failed
        - errors: Tuple of AmountParseError (empty tuple on success)

    Examples:
        >>> parse_amount("$1,234.56")
        (Decimal('1234.56'), ())
        >>> parse_amount("(10.50 LE)")
        (Decimal('-10.50'), ())
        >>> parse_amount("١٬٢٣٤٫٥٦ ج م")
        (Decimal('1234.56'), ())
        >>> parse_amount("1.234,5 €", decimal_separator=",", thousand_separator=".")
        (Decimal('1234.5'), ())
    """
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        try:
            return to_decimal(value), ()
        except InvalidFormatError:
            return None, (
                AmountParseError(
                    ErrorTemplate.parse_amount_invalid(str(value), ""), input_value=str(value)
                ),
            )

    if not isinstance(value, str):
        text = repr(value)
        return None, (
            AmountParseError(ErrorTemplate.parse_amount_invalid(text, ""), input_value=text),
        )

    text = value.strip()
    if not text:
        return None, (AmountParseError(ErrorTemplate.parse_amount_empty(), input_value=value),)

    text = text.replace(ARABIC_DECIMAL_SEPARATOR, decimal_separator)
    if thousand_separator:
        text = text.replace(ARABIC_THOUSAND_SEPARATOR, thousand_separator)
    text = to_western_arabic(text)

    negative = "-" in text or (text.startswith("(") and text.endswith(")"))
    if thousand_separator and thousand_separator != decimal_separator:
        text = text.replace(thousand_separator, "")

    runs = _number_pattern(decimal_separator).findall(text)
    stripped = "".join(runs)
    if len(runs) != 1:
        return None, (
            AmountParseError(
                ErrorTemplate.parse_amount_invalid(value, stripped), input_value=value
            ),
        )

    try:
        result = Decimal(runs[0].replace(decimal_separator, "."))
    except InvalidOperation:
        return None, (
            AmountParseError(
                ErrorTemplate.parse_amount_invalid(value, stripped), input_value=value
            ),
        )
    return (-result if negative else result), ()


def is_formatted_money(
    value: object,
    *,
    decimal_separator: str = ".",
    thousand_separator: str = ",",
) -> bool:
    """True when value is a finite number or a string parse_amount() accepts.

    Example:
        >>> is_formatted_money("1,234.56 LE")
        True
        >>> is_formatted_money("twelve")
        False
    """
    result, _ = parse_amount(
        value, decimal_separator=decimal_separator, thousand_separator=thousand_separator
    )
    return result is not None
