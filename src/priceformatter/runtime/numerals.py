"""Numeral script transcription.

Converts Western-digit formatted numbers to Eastern Arabic digits and back.
Separators are swapped by their configured characters before digits are
substituted, so a "." used as a thousands separator becomes the Arabic
thousands mark rather than the Arabic decimal mark.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from priceformatter.constants import (
    ARABIC_DECIMAL_SEPARATOR,
    ARABIC_THOUSAND_SEPARATOR,
    EASTERN_ARABIC_DIGITS,
)

if TYPE_CHECKING:
    from priceformatter.config import NumeralSettings

__all__ = [
    "should_use_eastern_arabic",
    "to_eastern_arabic",
    "to_western_arabic",
]

_TO_EASTERN = str.maketrans(dict(EASTERN_ARABIC_DIGITS))

# Eastern Arabic (U+0660..) and Extended Arabic-Indic / Persian (U+06F0..)
# digits back to ASCII, plus the two Arabic separators.
_TO_WESTERN = str.maketrans(
    {
        **{eastern: western for western, eastern in EASTERN_ARABIC_DIGITS.items()},
        **{chr(0x06F0 + i): str(i) for i in range(10)},
        ARABIC_DECIMAL_SEPARATOR: ".",
        ARABIC_THOUSAND_SEPARATOR: ",",
    }
)


def to_eastern_arabic(numeric: str, decimal_separator: str, thousand_separator: str) -> str:
    """Transcribe a Western-digit formatted number to Eastern Arabic.

    Args:
        numeric: Formatted number (e.g., "1,234.56")
        decimal_separator: Decimal separator used in ``numeric``
        thousand_separator: Grouping separator used in ``numeric``

    Returns:
        Transcribed number (e.g., "١٬٢٣٤٫٥٦")

    Examples:
        >>> to_eastern_arabic("1,234.56", ".", ",")
        '١٬٢٣٤٫٥٦'
        >>> to_eastern_arabic("1.234,56", ",", ".")
        '١٬٢٣٤٫٥٦'
    """
    # Decimal first: with "," as decimal and "." as grouping the order matters
    if decimal_separator:
        numeric = numeric.replace(decimal_separator, ARABIC_DECIMAL_SEPARATOR)
    if thousand_separator:
        numeric = numeric.replace(thousand_separator, ARABIC_THOUSAND_SEPARATOR)
    return numeric.translate(_TO_EASTERN)


def to_western_arabic(numeric: str) -> str:
    """Map Eastern Arabic / Persian digits and Arabic separators to ASCII.

    Example:
        >>> to_western_arabic("١٬٢٣٤٫٥٦")
        '1,234.56'
    """
    return numeric.translate(_TO_WESTERN)


def should_use_eastern_arabic(
    flag: bool | None,
    language: str,
    numerals: NumeralSettings,
) -> bool:
    """Decide whether a formatted amount uses Eastern Arabic digits.

    Precedence:
    1. numerals.force_eastern (wins even when force_western is also set)
    2. numerals.force_western
    3. an explicit per-format flag
    4. the language heuristic (language in eastern_arabic_languages)

    Args:
        flag: Format's use_eastern_arabic_numerals (None = not decided)
        language: Language the amount is rendered for
        numerals: Global numeral settings

    Returns:
        True to transcribe digits
    """
    if numerals.force_eastern:
        return True
    if numerals.force_western:
        return False
    if flag is not None:
        return flag
    return language in numerals.eastern_arabic_languages
