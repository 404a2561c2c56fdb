"""Enumerations for priceformatter type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so configuration values such as
``"half_up"`` compare equal to their members.

Python 3.13+.
"""

from enum import StrEnum


class SymbolPosition(StrEnum):
    """Placement of the currency symbol relative to the amount.

    StrEnum provides automatic string conversion: str(SymbolPosition.BEFORE) == "before"
    """

    BEFORE = "before"
    """Symbol precedes the amount: $10.00"""

    AFTER = "after"
    """Symbol follows the amount: 10.00 LE"""


class RoundingMode(StrEnum):
    """Rounding policy applied before rendering.

    StrEnum provides automatic string conversion: str(RoundingMode.HALF_UP) == "half_up"
    """

    CEIL = "ceil"
    """Round toward positive infinity: 10.001 -> 10.01"""

    FLOOR = "floor"
    """Round toward negative infinity: 10.999 -> 10.99"""

    HALF_UP = "half_up"
    """Round half away from zero: 10.505 -> 10.51"""

    HALF_DOWN = "half_down"
    """Round half toward zero: 10.505 -> 10.50"""


class SettingsSource(StrEnum):
    """Configuration layer that supplied a resolved format.

    Used for debug logging of resolution decisions.
    """

    COUNTRY_LANGUAGE = "country_language"
    """Configured format for the requested country and language."""

    COUNTRY_ENGLISH = "country_english"
    """Configured English format for the requested country."""

    CATALOG = "catalog"
    """Format synthesized from the built-in currency catalog."""

    DEFAULT = "default"
    """Global default settings."""


__all__ = [
    "RoundingMode",
    "SettingsSource",
    "SymbolPosition",
]
