"""End-to-end tests for the PriceFormatter facade.

Covers every documented scenario, the numeral policy, ambient locale
handling, percentage formatting, conversion and lookups.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from typing import Any

import pytest
from hypothesis import given

from priceformatter import (
    CachingRateProvider,
    CurrencyNotFoundError,
    FormatOverrides,
    FormatterConfig,
    InvalidFormatError,
    InvalidRoundingModeError,
    PriceFormatter,
    RateUnavailableError,
    StaticLocaleProvider,
    StaticRateProvider,
)
from priceformatter.catalog import CurrencyCatalog
from priceformatter.config import default_config
from tests.strategies import country_codes, float_amounts, languages

_SHARED = PriceFormatter()


def _formatter(data: dict[str, Any], **kwargs: Any) -> PriceFormatter:
    return PriceFormatter(FormatterConfig.from_mapping(data), **kwargs)


# ============================================================================
# Scenarios
# ============================================================================


class TestScenarios:
    """Documented input/output pairs with the bundled configuration."""

    @pytest.mark.parametrize(
        ("amount", "country", "language", "expected"),
        [
            (5, "EG", "en", "5 LE"),
            (5, "EG", "ar", "٥ ج م"),
            (10.50, "US", "en", "$10.50"),
            (10.50, "US", "ar", "١٠٫٥٠ دولار"),
            (15, "XX", "en", "$15.00"),
            (1234.56, "EG", "en", "1,234.56 LE"),
            (1234.56, "EG", "ar", "١٬٢٣٤٫٥٦ ج م"),
            (1234567.89, "EG", "ar", "١٬٢٣٤٬٥٦٧٫٨٩ ج م"),
            (99.99, "GB", "en", "£99.99"),
            (20, "EU", "en", "20.00 €"),
            (20, "SA", "en", "20.00 SAR"),
            (20, "AE", "ar", "٢٠٫٠٠ د.إ"),
        ],
    )
    def test_format(
        self,
        formatter: PriceFormatter,
        amount: float,
        country: str,
        language: str,
        expected: str,
    ) -> None:
        assert formatter.format(amount, country, language) == expected

    def test_accounting(self, formatter: PriceFormatter) -> None:
        assert formatter.format_accounting(-10.50, "US", "en") == "($10.50)"
        assert formatter.format_accounting(10.50, "US", "en") == "$10.50"

    def test_compact(self, formatter: PriceFormatter) -> None:
        assert formatter.format_compact(1500000, "US", "en") == "$1.5M"

    def test_compact_with_symbol_after(self, formatter: PriceFormatter) -> None:
        assert formatter.format_compact(2500, "EG", "en") == "2.5K LE"
        assert formatter.format_compact(2000, "EG", "en") == "2K LE"

    def test_compact_keeps_other_compact_overrides(self, formatter: PriceFormatter) -> None:
        result = formatter.format_compact(1234567, "US", "en", {"compact": {"precision": 2}})
        assert result == "$1.23M"

    def test_compact_partial_thresholds_keep_configured_tiers(
        self, config_data: dict[str, Any]
    ) -> None:
        config_data["default"]["compact_format"]["thresholds"]["thousand"] = 10_000
        formatter = _formatter(config_data)
        call = {"compact": {"thresholds": {"million": 5_000_000}}}
        assert formatter.format_compact(5000, "US", "en", call) == "$5,000.0"
        assert formatter.format_compact(2_000_000, "US", "en", call) == "$200.0K"

    def test_rounding_modes(self, formatter: PriceFormatter) -> None:
        assert formatter.format(10.505, "US", "en", {"rounding_mode": "half_down"}) == "$10.50"
        assert formatter.format(10.505, "US", "en", {"rounding_mode": "half_up"}) == "$10.51"
        assert formatter.format(10.001, "US", "en", {"rounding_mode": "ceil"}) == "$10.01"
        assert formatter.format(10.009, "US", "en", {"rounding_mode": "floor"}) == "$10.00"

    def test_negative(self, formatter: PriceFormatter) -> None:
        assert formatter.format(-10.50, "US", "en") == "-$10.50"

    def test_amounts_beyond_default_precision(self, formatter: PriceFormatter) -> None:
        assert formatter.format(10**26, "US", "en") == "$100" + ",000" * 8 + ".00"
        result = formatter.format(Decimal("1.5"), "US", "en", {"decimals": 30})
        assert result == "$1.5" + "0" * 29


# ============================================================================
# Defaults and overrides
# ============================================================================


class TestDefaultsAndOverrides:
    """Missing arguments and call-level settings."""

    def test_no_country_or_language(self, formatter: PriceFormatter) -> None:
        assert formatter.format(5) == "5 LE"

    def test_unknown_country_in_arabic_uses_eastern_digits(
        self, formatter: PriceFormatter
    ) -> None:
        assert formatter.format(15, "XX", "ar") == "$١٥٫٠٠"

    def test_mapping_overrides(self, formatter: PriceFormatter) -> None:
        assert formatter.format(1234.5, "US", "en", {"decimals": 0}) == "$1,235"
        result = formatter.format(
            1234.5, "US", "en", {"decimal_separator": ",", "thousand_separator": " "}
        )
        assert result == "$1 234,50"

    def test_instance_overrides(self, formatter: PriceFormatter) -> None:
        result = formatter.format(10, "EG", "en", FormatOverrides(symbol="EGP", separator=" "))
        assert result == "10 EGP"

    def test_overrides_apply_on_default_path(self, formatter: PriceFormatter) -> None:
        assert formatter.format(15, "XX", "en", {"symbol": "¤"}) == "¤15.00"

    def test_strict_mode(self, formatter: PriceFormatter) -> None:
        with pytest.raises(CurrencyNotFoundError):
            formatter.format(5, "XX", "en", {"throw_if_not_found": True})

    def test_strict_mode_passes_for_catalog_country(self, formatter: PriceFormatter) -> None:
        assert formatter.format(5, "JP", "en", {"throw_if_not_found": True}) == "¥5"

    def test_invalid_rounding_mode(self, formatter: PriceFormatter) -> None:
        with pytest.raises(InvalidRoundingModeError):
            formatter.format(10, "US", "en", {"rounding_mode": "sideways"})

    def test_unknown_override(self, formatter: PriceFormatter) -> None:
        with pytest.raises(InvalidFormatError):
            formatter.format(10, "US", "en", {"colour": "red"})

    def test_invalid_amount(self, formatter: PriceFormatter) -> None:
        with pytest.raises(InvalidFormatError):
            formatter.format(float("nan"), "US", "en")

    def test_numeric_string_amount(self, formatter: PriceFormatter) -> None:
        assert formatter.format("1234.5", "US", "en") == "$1,234.50"

    def test_resolve_settings(self, formatter: PriceFormatter) -> None:
        settings = formatter.resolve_settings("EG", "ar", {"decimals": 3})
        assert settings.symbol == "ج م"
        assert settings.decimals == 3


# ============================================================================
# Numerals
# ============================================================================


class TestNumeralPolicy:
    """Global numeral switches through the facade."""

    def test_force_eastern(self, config_data: dict[str, Any]) -> None:
        config_data["numerals"]["force_eastern_arabic"] = True
        assert _formatter(config_data).format(1234.56, "US", "en") == "$١٬٢٣٤٫٥٦"

    def test_force_western(self, config_data: dict[str, Any]) -> None:
        config_data["numerals"]["force_western_arabic"] = True
        assert _formatter(config_data).format(1234.56, "EG", "ar") == "1,234.56 ج م"

    def test_both_forced_eastern_wins(self, config_data: dict[str, Any]) -> None:
        config_data["numerals"]["force_eastern_arabic"] = True
        config_data["numerals"]["force_western_arabic"] = True
        assert _formatter(config_data).format(5, "US", "en") == "$٥٫٠٠"

    def test_country_opt_out(self, config_data: dict[str, Any]) -> None:
        config_data["currencies"]["EG"]["formats"]["ar"]["use_eastern_arabic_numerals"] = False
        assert _formatter(config_data).format(1234.56, "EG", "ar") == "1,234.56 ج م"

    def test_catalog_country_with_western_default(self, config_data: dict[str, Any]) -> None:
        config_data["default"]["use_eastern_arabic_numerals"] = False
        formatter = _formatter(config_data)
        assert formatter.format(1000, "JP", "ar") == "ين١٬٠٠٠"
        assert formatter.format(1000, "JP", "en") == "¥1,000"


# ============================================================================
# Ambient locale
# ============================================================================


class TestAmbientLocale:
    """use_app_locale and format_localized."""

    def test_app_locale(self, config_data: dict[str, Any]) -> None:
        config_data["locale"] = {"use_app_locale": True, "locale_to_country_map": {"ar": "EG"}}
        formatter = _formatter(config_data, locale_provider=StaticLocaleProvider("ar"))
        assert formatter.format(5) == "٥ ج م"

    def test_localized_uses_locale_map(self, config_data: dict[str, Any]) -> None:
        config_data["locale"] = {"locale_to_country_map": {"ar": "SA"}}
        formatter = _formatter(config_data, locale_provider=StaticLocaleProvider("ar"))
        assert formatter.format_localized(10.5) == "١٠٫٥٠ ر.س"

    def test_localized_uses_territory(self) -> None:
        formatter = PriceFormatter(locale_provider=StaticLocaleProvider("ar-AE"))
        assert formatter.format_localized(10.5) == "١٠٫٥٠ د.إ"

    def test_localized_territory_from_catalog(self) -> None:
        formatter = PriceFormatter(locale_provider=StaticLocaleProvider("fr_FR.UTF-8"))
        assert formatter.format_localized(10.5) == "€10.50"

    def test_localized_explicit_country(self) -> None:
        formatter = PriceFormatter(locale_provider=StaticLocaleProvider("ar-AE"))
        assert formatter.format_localized(10.5, "US") == "١٠٫٥٠ دولار"

    def test_localized_without_provider(self, formatter: PriceFormatter) -> None:
        assert formatter.format_localized(5) == "5 LE"


# ============================================================================
# Percentages
# ============================================================================


class TestPercentage:
    """Percentages are independent of currency resolution."""

    def test_default_decimals(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(0.25) == "25.00%"

    def test_custom_decimals(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(0.255, 1) == "25.5%"

    def test_arabic(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(0.25, 2, "ar") == "٢٥٫٠٠%"

    def test_overrides(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(0.5, 0, "en", {"separator": " "}) == "50 %"

    def test_negative(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(-0.125, 1) == "-12.5%"

    def test_large(self, formatter: PriceFormatter) -> None:
        assert formatter.format_percentage(12.5, 0) == "1,250%"

    def test_beyond_default_precision(self, formatter: PriceFormatter) -> None:
        value = Decimal("123456789012345678901234567.891")
        result = formatter.format_percentage(value, 1)
        assert result == "12,345,678,901,234,567,890,123,456,789.1%"


# ============================================================================
# Conversion
# ============================================================================


class _FailingProvider:
    def rate(self, from_currency: str, to_currency: str) -> Decimal:
        msg = "service timeout"
        raise RuntimeError(msg)


class _FixedProvider:
    def __init__(self, value: object) -> None:
        self.value = value
        self.calls = 0

    def rate(self, from_currency: str, to_currency: str) -> Any:
        self.calls += 1
        return self.value


class TestConvert:
    """Currency conversion through the injected rate provider."""

    def test_convert_formats_target_currency(self) -> None:
        formatter = PriceFormatter(rate_provider=StaticRateProvider({("USD", "EGP"): "48.50"}))
        assert formatter.convert(100, "USD", "EGP") == "4,850.00 EGP"

    def test_convert_inverse_rate(self) -> None:
        formatter = PriceFormatter(rate_provider=StaticRateProvider({("USD", "EGP"): "48.50"}))
        assert formatter.convert(100, "EGP", "USD") == "$206.19"

    def test_same_currency_needs_no_provider(self, formatter: PriceFormatter) -> None:
        assert formatter.convert(10, "USD", "USD") == "$10.00"

    def test_missing_provider(self, formatter: PriceFormatter) -> None:
        with pytest.raises(RateUnavailableError) as exc_info:
            formatter.convert(10, "USD", "EGP")
        assert (exc_info.value.from_currency, exc_info.value.to_currency) == ("USD", "EGP")

    def test_provider_failure_chained(self) -> None:
        formatter = PriceFormatter(rate_provider=_FailingProvider())
        with pytest.raises(RateUnavailableError) as exc_info:
            formatter.convert(10, "USD", "EGP")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "service timeout" in str(exc_info.value)

    @pytest.mark.parametrize("value", [0, -1.5, float("nan"), float("inf"), None, "abc"])
    def test_unusable_rate(self, value: object) -> None:
        formatter = PriceFormatter(rate_provider=_FixedProvider(value))
        with pytest.raises(RateUnavailableError):
            formatter.convert(10, "USD", "EGP")

    def test_convert_with_language_and_overrides(self) -> None:
        formatter = PriceFormatter(rate_provider=_FixedProvider(Decimal("2")))
        assert formatter.convert(5, "USD", "SAR", "ar", {"decimals": 0}) == "١٠ ر.س"

    def test_convert_keeps_every_digit(self) -> None:
        formatter = PriceFormatter(rate_provider=_FixedProvider(Decimal("2")))
        result = formatter.convert(Decimal("123456789012345678901234567.89"), "USD", "EGP")
        assert result == "246,913,578,024,691,357,802,469,135.78 EGP"

    def test_caching_provider_reused(self) -> None:
        inner = _FixedProvider(Decimal("3.75"))
        formatter = PriceFormatter(rate_provider=CachingRateProvider(inner))
        first = formatter.convert(1, "USD", "SAR")
        second = formatter.convert(1, "USD", "SAR")
        assert first == second == "3.75 SAR"
        assert inner.calls == 1


# ============================================================================
# Lookups, spell-out, custom data
# ============================================================================


class _EchoSpeller:
    def spell_out(self, amount: object, language: str, currency_code: str | None) -> str:
        return f"{amount}|{language}|{currency_code}"


class TestLookupsAndExtras:
    """Read-only lookups and pass-through operations."""

    def test_currency_code(self, formatter: PriceFormatter) -> None:
        assert formatter.get_currency_code("EG") == "EGP"
        assert formatter.get_currency_code("JAPAN") == "JPY"
        assert formatter.get_currency_code("XX") is None

    def test_currency_symbol(self, formatter: PriceFormatter) -> None:
        assert formatter.get_currency_symbol("EG") == "LE"
        assert formatter.get_currency_symbol("EG", "ar") == "ج م"
        assert formatter.get_currency_symbol("XX", "en") is None

    def test_spell_out_pass_through(self) -> None:
        formatter = PriceFormatter(spell_out_provider=_EchoSpeller())
        assert formatter.spell_out(12, "ar", "EGP") == "12|ar|EGP"
        assert formatter.spell_out(12) == "12|en|None"

    def test_spell_out_without_provider(self, formatter: PriceFormatter) -> None:
        with pytest.raises(InvalidFormatError):
            formatter.spell_out(12)

    def test_configured_cryptocurrency(self, config_data: dict[str, Any]) -> None:
        config_data["currencies"]["BTC"] = {
            "code": "BTC",
            "formats": {"en": {"symbol": "₿", "position": "before", "separator": "", "decimals": 8}},
        }
        assert _formatter(config_data).format(0.00012345, "BTC", "en") == "₿0.00012345"

    def test_custom_dataset_from_config(self, config_data: dict[str, Any], write_json) -> None:
        path = write_json(
            {"currencies": {"BTC": {"country": "BITCOIN", "decimals": 8, "symbol": {"en": "₿"}}}}
        )
        config_data["custom_currencies_path"] = str(path)
        formatter = _formatter(config_data)
        assert formatter.catalog.custom_dataset_path == path
        assert formatter.format(1, "BITCOIN", "en") == "1.00000000 ₿"
        assert formatter.get_currency_code("BITCOIN") == "BTC"

    def test_injected_catalog_loaded(self) -> None:
        catalog = CurrencyCatalog()
        formatter = PriceFormatter(default_config(), catalog=catalog)
        assert formatter.catalog is catalog
        assert catalog.is_loaded


# ============================================================================
# Properties and concurrency
# ============================================================================


class TestFacadeProperties:
    """Totality and thread safety."""

    @given(amount=float_amounts, country=country_codes, language=languages)
    def test_fallback_totality(self, amount: float, country: str, language: str) -> None:
        assert isinstance(_SHARED.format(amount, country, language), str)

    def test_concurrent_formatting(self) -> None:
        formatter = PriceFormatter(catalog=CurrencyCatalog())
        expected = {
            ("EG", "ar"): "١٬٢٣٤٫٥٦ ج م",
            ("US", "en"): "$1,234.56",
            ("JP", "en"): "¥1,235",
        }
        failures: list[str] = []
        barrier = threading.Barrier(12)

        def worker(index: int) -> None:
            barrier.wait()
            for _ in range(50):
                for (country, language), want in expected.items():
                    got = formatter.format(1234.56, country, language)
                    if got != want:
                        failures.append(f"{index}: {got!r} != {want!r}")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(12)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert failures == []
