"""Currency catalog: dataset loading and country/currency lookups.

Exports:
    CurrencyCatalog: Explicitly loaded, read-only lookup table
    CurrencyEntry: Immutable catalog record
    get_territory_currency: CLDR territory -> currency code
    clear_territory_cache: Reset CLDR lookup caches

Python 3.13+. Uses Babel for CLDR data.
"""

from .currency_catalog import CurrencyCatalog, CurrencyEntry, parse_dataset
from .territories import (
    CldrCurrency,
    clear_territory_cache,
    get_cldr_currency,
    get_territory_currency,
)

__all__ = [
    "CldrCurrency",
    "CurrencyCatalog",
    "CurrencyEntry",
    "clear_territory_cache",
    "get_cldr_currency",
    "get_territory_currency",
    "parse_dataset",
]
