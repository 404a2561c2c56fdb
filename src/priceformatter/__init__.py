"""priceformatter - locale- and currency-aware price formatting.

Formats monetary amounts for a country and language: currency symbol and
its placement, digit grouping, rounding policy, Eastern Arabic numerals,
accounting negatives and compact notation (1.5K, 1.5M, 1.5B).

Public API:
    PriceFormatter - Formatting facade
    FormatterConfig - Immutable configuration root
    default_config - Bundled configuration (EG, US, GB, EU, SA, AE)
    FormatOverrides - Partial, per-call settings
    CurrencyCatalog - Built-in and custom currency data
    parse_amount - Formatted string back to Decimal

Exceptions:
    PriceFormatterError - Base exception class
    CurrencyNotFoundError - Strict lookup found no currency
    InvalidRoundingModeError - Unknown rounding mode
    RateUnavailableError - No usable exchange rate
    InvalidFormatError - Invalid configuration or input

Submodules:
    priceformatter.runtime - Rounding, numerals, resolution, rendering, providers
    priceformatter.catalog - Currency datasets and CLDR territory lookups
    priceformatter.diagnostics - Error codes, templates and exceptions
    priceformatter.parsing - Formatted amount parsing
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .catalog import CurrencyCatalog, CurrencyEntry
from .config import CountryFormats, FormatterConfig, LocaleSettings, NumeralSettings, default_config
from .diagnostics import (
    AmountParseError,
    CurrencyNotFoundError,
    InvalidFormatError,
    InvalidRoundingModeError,
    PriceFormatterError,
    RateUnavailableError,
)
from .enums import RoundingMode, SymbolPosition
from .parsing import is_formatted_money, parse_amount
from .runtime import (
    CachingRateProvider,
    CompactOverrides,
    FormatOverrides,
    FormatSettings,
    StaticLocaleProvider,
    StaticRateProvider,
    SystemLocaleProvider,
)
from .runtime.formatter import PriceFormatter

try:
    __version__ = _get_version("priceformatter")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AmountParseError",
    "CachingRateProvider",
    "CompactOverrides",
    "CountryFormats",
    "CurrencyCatalog",
    "CurrencyEntry",
    "CurrencyNotFoundError",
    "FormatOverrides",
    "FormatSettings",
    "FormatterConfig",
    "InvalidFormatError",
    "InvalidRoundingModeError",
    "LocaleSettings",
    "NumeralSettings",
    "PriceFormatter",
    "PriceFormatterError",
    "RateUnavailableError",
    "RoundingMode",
    "StaticLocaleProvider",
    "StaticRateProvider",
    "SymbolPosition",
    "SystemLocaleProvider",
    "__version__",
    "default_config",
    "is_formatted_money",
    "parse_amount",
]
