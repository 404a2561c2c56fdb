"""Shared constants for priceformatter.

This module provides centralized constants used across the catalog,
runtime and parsing packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Numeral tables: Western to Eastern Arabic digit mapping
- Locale defaults: Fallback language and Eastern Arabic languages
- Catalog defaults: Symbol placement for catalog-derived formats
- Cache limits: Memory bounds for caching subsystems

Python 3.13+. Zero external dependencies.
"""

from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Numeral tables
    "EASTERN_ARABIC_DIGITS",
    "ARABIC_DECIMAL_SEPARATOR",
    "ARABIC_THOUSAND_SEPARATOR",
    # Locale defaults
    "FALLBACK_LANGUAGE",
    "NATIVE_SYMBOL_KEY",
    "DEFAULT_EASTERN_ARABIC_LANGUAGES",
    # Catalog defaults
    "SYMBOL_BEFORE_CURRENCIES",
    "CATALOG_DEFAULT_SEPARATOR",
    # Compact notation defaults
    "DEFAULT_COMPACT_THRESHOLDS",
    "DEFAULT_COMPACT_SYMBOLS",
    "DEFAULT_COMPACT_PRECISION",
    # Cache limits
    "MAX_TERRITORY_CACHE_SIZE",
    "DEFAULT_RATE_CACHE_SIZE",
    "DEFAULT_RATE_TTL_SECONDS",
]

# ============================================================================
# NUMERAL TABLES
# ============================================================================

# Western digit -> Eastern Arabic digit (U+0660..U+0669).
EASTERN_ARABIC_DIGITS: MappingProxyType[str, str] = MappingProxyType({
    "0": "٠",
    "1": "١",
    "2": "٢",
    "3": "٣",
    "4": "٤",
    "5": "٥",
    "6": "٦",
    "7": "٧",
    "8": "٨",
    "9": "٩",
})

# Arabic decimal separator (U+066B) and thousands separator (U+066C).
ARABIC_DECIMAL_SEPARATOR: str = "٫"
ARABIC_THOUSAND_SEPARATOR: str = "٬"

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Language used when none is supplied and none can be detected.
# Also the second step of every symbol lookup (exact -> en -> native).
FALLBACK_LANGUAGE: str = "en"

# Reserved key in catalog symbol tables holding the currency's own symbol.
NATIVE_SYMBOL_KEY: str = "native"

# Languages whose formatted amounts use Eastern Arabic digits unless a
# format explicitly opts out.
DEFAULT_EASTERN_ARABIC_LANGUAGES: frozenset[str] = frozenset({"ar", "fa", "ur"})

# ============================================================================
# CATALOG DEFAULTS
# ============================================================================

# Currencies whose catalog-derived format places the symbol before the
# amount with no separator ("$10.00"). All others render "10.00 XYZ".
SYMBOL_BEFORE_CURRENCIES: frozenset[str] = frozenset({
    "USD", "GBP", "EUR", "JPY", "CAD", "AUD", "NZD", "HKD", "SGD",
})

CATALOG_DEFAULT_SEPARATOR: str = " "

# ============================================================================
# COMPACT NOTATION DEFAULTS
# ============================================================================

DEFAULT_COMPACT_THRESHOLDS: tuple[int, int, int] = (1_000, 1_000_000, 1_000_000_000)
DEFAULT_COMPACT_SYMBOLS: tuple[str, str, str] = ("K", "M", "B")
DEFAULT_COMPACT_PRECISION: int = 1

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached territory -> currency lookups.
# ~250 ISO 3166-1 territories exist; 256 holds all of them.
MAX_TERRITORY_CACHE_SIZE: int = 256

# Exchange rate cache bounds for CachingRateProvider.
# One hour matches typical upstream rate refresh intervals.
DEFAULT_RATE_CACHE_SIZE: int = 1024
DEFAULT_RATE_TTL_SECONDS: float = 3600.0
