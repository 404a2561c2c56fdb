"""Formatting runtime: rounding, numerals, settings, resolution, rendering.

PriceFormatter lives in priceformatter.runtime.formatter (it depends on
priceformatter.config, which itself builds on this package).

Python 3.13+.
"""

from .numerals import should_use_eastern_arabic, to_eastern_arabic, to_western_arabic
from .providers import (
    CachingRateProvider,
    CurrentLocaleProvider,
    ExchangeRateProvider,
    SpellOutProvider,
    StaticLocaleProvider,
    StaticRateProvider,
    SystemLocaleProvider,
)
from .renderer import format_number, render
from .resolver import SettingsResolver
from .rounding import Amount, parse_rounding_mode, round_amount, to_decimal
from .settings import (
    DEFAULT_FORMAT_SETTINGS,
    CompactOverrides,
    CompactSettings,
    CompactSymbols,
    CompactThresholds,
    FormatOverrides,
    FormatSettings,
    merge_settings,
)

__all__ = [
    "DEFAULT_FORMAT_SETTINGS",
    "Amount",
    "CachingRateProvider",
    "CompactOverrides",
    "CompactSettings",
    "CompactSymbols",
    "CompactThresholds",
    "CurrentLocaleProvider",
    "ExchangeRateProvider",
    "FormatOverrides",
    "FormatSettings",
    "SettingsResolver",
    "SpellOutProvider",
    "StaticLocaleProvider",
    "StaticRateProvider",
    "SystemLocaleProvider",
    "format_number",
    "merge_settings",
    "parse_rounding_mode",
    "render",
    "round_amount",
    "should_use_eastern_arabic",
    "to_decimal",
    "to_eastern_arabic",
    "to_western_arabic",
]
