"""Settings resolution: which format applies to a (country, language) pair.

Priority, highest first:
    call overrides > country+language format > country+English format
    > catalog-derived format > global default

Each layer only sets the fields it names; merge_settings() fills every gap
from the layer below, so the result is always fully populated.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from priceformatter.constants import (
    CATALOG_DEFAULT_SEPARATOR,
    DEFAULT_EASTERN_ARABIC_LANGUAGES,
    FALLBACK_LANGUAGE,
    SYMBOL_BEFORE_CURRENCIES,
)
from priceformatter.diagnostics import CurrencyNotFoundError, ErrorTemplate
from priceformatter.enums import SettingsSource, SymbolPosition
from priceformatter.locale_utils import language_of

from .settings import FormatOverrides, FormatSettings, merge_settings

if TYPE_CHECKING:
    from priceformatter.catalog import CurrencyCatalog, CurrencyEntry
    from priceformatter.config import FormatterConfig

    from .providers import CurrentLocaleProvider

__all__ = ["SettingsResolver", "catalog_format"]

logger = logging.getLogger(__name__)


def catalog_format(
    entry: CurrencyEntry,
    language: str,
    eastern_arabic_languages: frozenset[str] = DEFAULT_EASTERN_ARABIC_LANGUAGES,
) -> FormatOverrides:
    """Synthesize a format for a currency known only to the catalog.

    The symbol follows the catalog language fallback (exact, en, native),
    then the currency code itself. A short list of currencies is written
    with the symbol first ("$5.00"); everything else trails ("5.00 EGP").
    The numeral flag is set from the language, so a global default that
    disables Eastern Arabic digits does not reach catalog-only countries.

    Args:
        entry: Catalog record
        language: Rendering language
        eastern_arabic_languages: Languages written with Eastern Arabic digits

    Returns:
        Partial format; decimals are set only when the catalog knows them
    """
    symbol = entry.symbol_for(language) or entry.currency_code
    if entry.currency_code in SYMBOL_BEFORE_CURRENCIES:
        position, separator = SymbolPosition.BEFORE, ""
    else:
        position, separator = SymbolPosition.AFTER, CATALOG_DEFAULT_SEPARATOR
    return FormatOverrides(
        symbol=symbol,
        position=position,
        separator=separator,
        decimals=entry.decimals,
        use_eastern_arabic_numerals=language in eastern_arabic_languages,
    )


class SettingsResolver:
    """Resolve merged FormatSettings from configuration, catalog and overrides.

    Read-only after construction; safe to share between threads.
    """

    __slots__ = ("_catalog", "_config", "_locale_provider")

    def __init__(
        self,
        config: FormatterConfig,
        catalog: CurrencyCatalog,
        locale_provider: CurrentLocaleProvider | None = None,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._locale_provider = locale_provider

    @property
    def config(self) -> FormatterConfig:
        """Configuration the resolver reads."""
        return self._config

    def ambient_locale(self) -> str | None:
        """Locale reported by the locale provider, if any."""
        if self._locale_provider is None:
            return None
        return self._locale_provider.current_locale() or None

    def resolve_locale(
        self, country_code: str | None, language: str | None
    ) -> tuple[str | None, str]:
        """Fill in a missing country and language.

        1. No language and ``use_app_locale``: ask the locale provider.
        2. No country: map the language through ``locale_to_country_map``,
           then take the configured default country.
        3. No language: English.

        Locale codes ("ar-EG", "ar_EG.UTF-8") are reduced to their
        language subtag.

        Returns:
            (country code or None, language)
        """
        if language is None and self._config.locale.use_app_locale:
            language = self.ambient_locale()
        if language is not None:
            language = language_of(language)

        if country_code is None and language is not None:
            country_code = self._config.locale.locale_to_country_map.get(language)
        if country_code is None:
            country_code = self._config.effective_default_country

        return country_code, language or FALLBACK_LANGUAGE

    def resolve(
        self,
        country_code: str | None = None,
        language: str | None = None,
        overrides: FormatOverrides | None = None,
    ) -> FormatSettings:
        """Merge every applicable layer into complete settings.

        Args:
            country_code: Configured country key, catalog country name,
                currency code or ISO territory
            language: Language or locale code
            overrides: Call-level overrides (highest priority)

        Returns:
            Fully populated FormatSettings

        Raises:
            CurrencyNotFoundError: If nothing matches the country and
                ``overrides.throw_if_not_found`` is set
            InvalidFormatError: If the merged settings are invalid
        """
        country_code, language = self.resolve_locale(country_code, language)
        found = self._country_layers(country_code, language)

        if found is None:
            if overrides is not None and overrides.throw_if_not_found:
                raise CurrencyNotFoundError(
                    ErrorTemplate.currency_not_found(country_code or ""),
                    country_code=country_code or "",
                )
            logger.debug(
                "No format for country %r; using global default", country_code
            )
            return merge_settings(self._config.default, overrides)

        layers, source = found
        logger.debug(
            "Format for country %r, language %r from %s", country_code, language, source
        )
        return merge_settings(self._config.default, *layers, overrides)

    def _country_layers(
        self, country_code: str | None, language: str
    ) -> tuple[tuple[FormatOverrides, ...], SettingsSource] | None:
        """Format layers for a country, lowest priority first.

        Returns None when neither the configuration nor the catalog knows
        the country.
        """
        if country_code is None:
            return None

        configured = self._config.currencies.get(country_code)
        if configured is not None:
            english = configured.format_for(FALLBACK_LANGUAGE)
            localized = configured.format_for(language)
            if localized is not None:
                # English fills the gaps the language format leaves
                layers = (localized,) if english is None else (english, localized)
                return layers, SettingsSource.COUNTRY_LANGUAGE
            if english is not None:
                return (english,), SettingsSource.COUNTRY_ENGLISH
            return (), SettingsSource.DEFAULT

        entry = self._catalog.lookup_by_country_code(country_code)
        if entry is None:
            return None
        layer = catalog_format(entry, language, self._config.numerals.eastern_arabic_languages)
        return (layer,), SettingsSource.CATALOG

    def currency_code(self, country_code: str) -> str | None:
        """Currency code for a country: configuration first, then catalog."""
        configured = self._config.currencies.get(country_code)
        if configured is not None and configured.currency_code:
            return configured.currency_code
        entry = self._catalog.lookup_by_country_code(country_code)
        return entry.currency_code if entry is not None else None

    def currency_symbol(self, country_code: str, language: str = FALLBACK_LANGUAGE) -> str | None:
        """Currency symbol for a country and language.

        Configured language format first, then the catalog symbol for the
        configured currency, then the catalog entry for the country.
        """
        language = language_of(language)
        configured = self._config.currencies.get(country_code)
        if configured is not None:
            fmt = configured.format_for(language)
            if fmt is not None and fmt.symbol:
                return fmt.symbol
            if configured.currency_code:
                symbol = self._catalog.symbol_for(configured.currency_code, language)
                if symbol is not None:
                    return symbol

        entry = self._catalog.lookup_by_country_code(country_code)
        return entry.symbol_for(language) if entry is not None else None
