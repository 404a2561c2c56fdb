"""ISO 3166 / ISO 4217 lookups via Babel CLDR data.

Used by CurrencyCatalog as the last lookup step, so that any two-letter
territory code ("JP", "BR") resolves to its legal-tender currency even when
the bundled dataset only records country names, and so that currencies
missing from the dataset still get an English symbol.

Results are cached; Babel is imported lazily on first lookup.

Python 3.13+. Uses Babel for CLDR data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from priceformatter.constants import FALLBACK_LANGUAGE, MAX_TERRITORY_CACHE_SIZE

__all__ = [
    "CldrCurrency",
    "clear_territory_cache",
    "get_cldr_currency",
    "get_territory_currency",
    "is_territory_code",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CldrCurrency:
    """ISO 4217 currency data from CLDR.

    Attributes:
        code: ISO 4217 currency code (e.g., 'BRL').
        name: English display name.
        symbol: English symbol (e.g., 'R$').
        decimals: Standard minor-unit digits.
    """

    code: str
    name: str
    symbol: str
    decimals: int


def is_territory_code(value: str) -> bool:
    """Check the ISO 3166-1 alpha-2 shape (two ASCII letters)."""
    return len(value) == 2 and value.isascii() and value.isalpha()


@lru_cache(maxsize=MAX_TERRITORY_CACHE_SIZE)
def _get_territory_currency_impl(territory_upper: str) -> str | None:
    """Internal cached implementation for get_territory_currency.

    Args:
        territory_upper: Pre-uppercased ISO 3166-1 alpha-2 code.

    Returns:
        First currently active legal-tender currency, or None.
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.numbers import get_territory_currencies  # noqa: PLC0415

    try:
        currencies = get_territory_currencies(territory_upper, tender=True)
    except (ValueError, LookupError, AttributeError) as e:
        # Babel raises LookupError/KeyError for missing data. Logic bugs propagate.
        logger.debug("No CLDR currency data for territory %s: %s", territory_upper, e)
        return None

    if not currencies:
        return None
    return str(currencies[0])


def get_territory_currency(territory: str) -> str | None:
    """Get the default currency for a territory.

    Args:
        territory: ISO 3166-1 alpha-2 code. Case-insensitive.

    Returns:
        ISO 4217 currency code or None if unknown.

    Example:
        >>> get_territory_currency("jp")
        'JPY'
        >>> get_territory_currency("XX") is None
        True

    Thread-safe. Result cached per normalized territory code.
    """
    if not is_territory_code(territory):
        return None
    return _get_territory_currency_impl(territory.upper())


@lru_cache(maxsize=MAX_TERRITORY_CACHE_SIZE)
def _get_cldr_currency_impl(code_upper: str) -> CldrCurrency | None:
    """Internal cached implementation for get_cldr_currency."""
    from babel import Locale  # noqa: PLC0415
    from babel.numbers import get_currency_precision, get_currency_symbol  # noqa: PLC0415

    locale = Locale.parse(FALLBACK_LANGUAGE)
    # Babel echoes unknown codes back, so check membership explicitly
    name = locale.currencies.get(code_upper)
    if name is None:
        return None

    return CldrCurrency(
        code=code_upper,
        name=str(name),
        symbol=str(get_currency_symbol(code_upper, locale=locale)),
        decimals=int(get_currency_precision(code_upper)),
    )


def get_cldr_currency(code: str) -> CldrCurrency | None:
    """Look up an ISO 4217 currency in CLDR.

    Args:
        code: ISO 4217 currency code. Case-insensitive.

    Returns:
        CldrCurrency if CLDR knows the code, None otherwise.

    Example:
        >>> get_cldr_currency("brl").symbol
        'R$'
    """
    if len(code) != 3 or not code.isascii() or not code.isalpha():
        return None
    return _get_cldr_currency_impl(code.upper())


def clear_territory_cache() -> None:
    """Clear all CLDR lookup caches.

    Call this to free memory or in tests that patch Babel.
    """
    _get_territory_currency_impl.cache_clear()
    _get_cldr_currency_impl.cache_clear()
