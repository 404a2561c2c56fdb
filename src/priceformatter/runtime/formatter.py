"""PriceFormatter: the public formatting facade.

Wires configuration, currency catalog, settings resolution and rendering
together. Every operation is synchronous and stateless per call; the only
blocking point is the exchange rate provider consulted by convert().

Python 3.13+.
"""

from __future__ import annotations

import decimal
import logging
from collections.abc import Mapping
from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, TypeAlias

from priceformatter.catalog import CurrencyCatalog
from priceformatter.config import FormatterConfig, default_config
from priceformatter.constants import FALLBACK_LANGUAGE
from priceformatter.diagnostics import (
    ErrorTemplate,
    InvalidFormatError,
    RateUnavailableError,
)
from priceformatter.enums import SymbolPosition
from priceformatter.locale_utils import language_of, territory_of

from .renderer import render
from .resolver import SettingsResolver
from .rounding import to_decimal
from .settings import CompactOverrides, FormatOverrides, FormatSettings, merge_settings

if TYPE_CHECKING:
    from .providers import CurrentLocaleProvider, ExchangeRateProvider, SpellOutProvider
    from .rounding import Amount

__all__ = ["PriceFormatter"]

logger = logging.getLogger(__name__)

Overrides: TypeAlias = FormatOverrides | Mapping[str, Any] | None
"""Call overrides: an instance, the dictionary form, or nothing."""

_PERCENT_SYMBOL = "%"


def _exact_product(left: Decimal, right: Decimal) -> Decimal:
    """Multiply without rounding to the ambient context precision."""
    with decimal.localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(left.as_tuple().digits) + len(right.as_tuple().digits))
        return left * right


class PriceFormatter:
    """Locale- and currency-aware price formatting.

    Thread-safe after construction: configuration and catalog are
    read-only, and each call builds its own settings.

    Examples:
        >>> formatter = PriceFormatter()
        >>> formatter.format(10.50, "US", "en")
        '$10.50'
        >>> formatter.format(5, "EG", "ar")
        '٥ ج م'
        >>> formatter.format_accounting(-10.50, "US", "en")
        '($10.50)'
        >>> formatter.format_compact(1500000, "US", "en")
        '$1.5M'
    """

    __slots__ = (
        "_catalog",
        "_config",
        "_rate_provider",
        "_resolver",
        "_spell_out_provider",
    )

    def __init__(
        self,
        config: FormatterConfig | None = None,
        *,
        catalog: CurrencyCatalog | None = None,
        rate_provider: ExchangeRateProvider | None = None,
        locale_provider: CurrentLocaleProvider | None = None,
        spell_out_provider: SpellOutProvider | None = None,
    ) -> None:
        """Create a formatter and load its currency catalog.

        Args:
            config: Configuration (default: the bundled configuration)
            catalog: Currency catalog (default: built from
                ``config.custom_currencies_path``)
            rate_provider: Exchange rates for convert()
            locale_provider: Ambient locale for ``use_app_locale`` and
                format_localized()
            spell_out_provider: Backend for spell_out()
        """
        self._config = config if config is not None else default_config()
        if catalog is None:
            catalog = CurrencyCatalog(self._config.custom_currencies_path)
        self._catalog = catalog.load()
        self._rate_provider = rate_provider
        self._spell_out_provider = spell_out_provider
        self._resolver = SettingsResolver(self._config, self._catalog, locale_provider)
        logger.debug(
            "PriceFormatter ready: %d configured countries, %d catalog currencies",
            len(self._config.currencies),
            len(self._catalog),
        )

    @property
    def config(self) -> FormatterConfig:
        """Configuration in use."""
        return self._config

    @property
    def catalog(self) -> CurrencyCatalog:
        """Loaded currency catalog."""
        return self._catalog

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(
        self,
        amount: Amount,
        country_code: str | None = None,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Format a price for a country and language.

        Args:
            amount: Price (int, float, Decimal or numeric string)
            country_code: Configured country, catalog country name, ISO
                territory or currency code; defaults from the language or
                the configured default country
            language: Language or locale code; defaults to the ambient
                locale (when enabled) and then English
            overrides: Call-level settings, highest priority

        Returns:
            Formatted price

        Raises:
            CurrencyNotFoundError: Only with ``throw_if_not_found``
            InvalidRoundingModeError: For an unknown rounding mode
            InvalidFormatError: For invalid amounts or settings
        """
        return self._format(amount, country_code, language, FormatOverrides.coerce(overrides))

    def format_accounting(
        self,
        amount: Amount,
        country_code: str | None = None,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Format with negative amounts in parentheses: ($10.50)."""
        call = FormatOverrides.coerce(overrides) or FormatOverrides()
        return self._format(
            amount, country_code, language, call.with_changes(accounting_format=True)
        )

    def format_compact(
        self,
        amount: Amount,
        country_code: str | None = None,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Format in compact notation: $1.5M."""
        call = FormatOverrides.coerce(overrides) or FormatOverrides()
        compact = replace(call.compact or CompactOverrides(), enabled=True)
        return self._format(amount, country_code, language, call.with_changes(compact=compact))

    def format_percentage(
        self,
        value: Amount,
        decimals: int = 2,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Format a ratio as a percentage (0.25 -> "25.00%").

        Independent of currency resolution: the symbol is "%" after the
        number, separators come from the global default.

        Raises:
            InvalidFormatError: For invalid values or settings
        """
        _, language = self._resolver.resolve_locale(None, language)
        default = self._config.default
        settings = merge_settings(
            FormatSettings(
                symbol=_PERCENT_SYMBOL,
                position=SymbolPosition.AFTER,
                separator="",
                decimal_separator=default.decimal_separator,
                thousand_separator=default.thousand_separator,
                decimals=decimals,
            ),
            FormatOverrides.coerce(overrides),
        )
        percentage = _exact_product(to_decimal(value), Decimal(100))
        return render(percentage, settings, language, self._config.numerals)

    def format_localized(
        self,
        amount: Amount,
        country_code: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Format using the ambient locale from the locale provider.

        The language comes from the provider (English when it has none).
        Without a country, the language is mapped through
        ``locale_to_country_map``, then the locale's territory ("ar-SA"
        -> "SA") is used when it resolves to a currency.
        """
        ambient = self._resolver.ambient_locale()
        language = language_of(ambient) if ambient else FALLBACK_LANGUAGE

        if country_code is None:
            country_code = self._config.locale.locale_to_country_map.get(language)
        if country_code is None and ambient:
            territory = territory_of(ambient)
            if territory is not None and self._resolver.currency_code(territory) is not None:
                country_code = territory

        return self._format(amount, country_code, language, FormatOverrides.coerce(overrides))

    def _format(
        self,
        amount: Amount,
        country_code: str | None,
        language: str | None,
        overrides: FormatOverrides | None,
    ) -> str:
        country_code, language = self._resolver.resolve_locale(country_code, language)
        settings = self._resolver.resolve(country_code, language, overrides)
        return render(amount, settings, language, self._config.numerals)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def convert(
        self,
        amount: Amount,
        from_currency: str,
        to_currency: str,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> str:
        """Convert between currencies and format in the target currency.

        The target currency code doubles as the country key, so the
        catalog resolves it to that currency's format.

        Raises:
            RateUnavailableError: If no positive finite rate can be obtained
        """
        rate = self.exchange_rate(from_currency, to_currency)
        converted = _exact_product(to_decimal(amount), rate)
        return self.format(converted, to_currency, language, overrides)

    def exchange_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Rate from the configured provider, validated.

        Raises:
            RateUnavailableError: If there is no provider, the provider fails,
                or the rate is not a positive finite number
        """
        if from_currency == to_currency:
            return Decimal(1)

        if self._rate_provider is None:
            raise RateUnavailableError(
                ErrorTemplate.rate_unavailable(
                    from_currency, to_currency, "no exchange rate provider configured"
                ),
                from_currency=from_currency,
                to_currency=to_currency,
            )

        try:
            raw = self._rate_provider.rate(from_currency, to_currency)
        except RateUnavailableError:
            raise
        except Exception as e:
            raise RateUnavailableError(
                ErrorTemplate.rate_unavailable(from_currency, to_currency, str(e)),
                from_currency=from_currency,
                to_currency=to_currency,
            ) from e

        try:
            rate = to_decimal(raw)
        except InvalidFormatError as e:
            raise RateUnavailableError(
                ErrorTemplate.rate_invalid(from_currency, to_currency, raw),
                from_currency=from_currency,
                to_currency=to_currency,
            ) from e
        if rate <= 0:
            raise RateUnavailableError(
                ErrorTemplate.rate_invalid(from_currency, to_currency, raw),
                from_currency=from_currency,
                to_currency=to_currency,
            )
        return rate

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_currency_code(self, country_code: str) -> str | None:
        """Currency code for a country, or None."""
        return self._resolver.currency_code(country_code)

    def get_currency_symbol(self, country_code: str, language: str = FALLBACK_LANGUAGE) -> str | None:
        """Currency symbol for a country and language, or None."""
        return self._resolver.currency_symbol(country_code, language)

    def resolve_settings(
        self,
        country_code: str | None = None,
        language: str | None = None,
        overrides: Overrides = None,
    ) -> FormatSettings:
        """Merged settings format() would render with."""
        country_code, language = self._resolver.resolve_locale(country_code, language)
        return self._resolver.resolve(country_code, language, FormatOverrides.coerce(overrides))

    def spell_out(
        self,
        amount: Amount,
        language: str = FALLBACK_LANGUAGE,
        currency_code: str | None = None,
    ) -> str:
        """Amount in words through the configured SpellOutProvider.

        Raises:
            InvalidFormatError: If no spell-out provider is configured
        """
        if self._spell_out_provider is None:
            raise InvalidFormatError(ErrorTemplate.spell_out_unavailable())
        return self._spell_out_provider.spell_out(amount, language, currency_code)
