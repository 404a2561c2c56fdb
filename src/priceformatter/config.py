"""Formatter configuration root.

Configuration is an explicit, immutable value handed to PriceFormatter at
construction. Nothing in the package reads ambient global settings.

The dictionary layout accepted by FormatterConfig.from_mapping():

    {
      "currencies": {
        "EG": {
          "code": "EGP",
          "formats": {
            "en": {"symbol": "LE", "position": "after", "separator": " "},
            "ar": {"symbol": "ج م", "position": "after", "separator": " ",
                   "use_eastern_arabic_numerals": true}
          }
        }
      },
      "default": {"symbol": "$", "position": "before", "decimals": 2, ...},
      "numerals": {"eastern_arabic_languages": ["ar", "fa", "ur"],
                   "force_eastern_arabic": false, "force_western_arabic": false},
      "locale": {"use_app_locale": false, "locale_to_country_map": {"ar": "EG"}},
      "custom_currencies_path": null,
      "default_country": "EG"
    }

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self

from priceformatter.constants import DEFAULT_EASTERN_ARABIC_LANGUAGES
from priceformatter.diagnostics import ErrorTemplate, InvalidFormatError
from priceformatter.runtime.settings import (
    DEFAULT_FORMAT_SETTINGS,
    FormatOverrides,
    FormatSettings,
    merge_settings,
)

__all__ = [
    "CountryFormats",
    "FormatterConfig",
    "LocaleSettings",
    "NumeralSettings",
    "default_config",
]


def _mapping(name: str, value: object) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidFormatError(ErrorTemplate.invalid_setting(name, value, "an object"))
    return value


def _flag(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise InvalidFormatError(ErrorTemplate.invalid_setting(name, value, "true or false"))
    return value


@dataclass(frozen=True, slots=True)
class NumeralSettings:
    """Global numeral script policy.

    Attributes:
        eastern_arabic_languages: Languages rendered with Eastern Arabic
            digits unless a format opts out
        force_eastern: Eastern Arabic digits for every language
        force_western: Western digits for every language; ignored when
            force_eastern is also set
    """

    eastern_arabic_languages: frozenset[str] = DEFAULT_EASTERN_ARABIC_LANGUAGES
    force_eastern: bool = False
    force_western: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "eastern_arabic_languages", frozenset(self.eastern_arabic_languages)
        )
        _flag("force_eastern", self.force_eastern)
        _flag("force_western", self.force_western)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build from the "numerals" section.

        ``force_eastern_arabic`` / ``force_western_arabic`` are accepted as
        aliases of ``force_eastern`` / ``force_western``.
        """
        languages = data.get("eastern_arabic_languages", DEFAULT_EASTERN_ARABIC_LANGUAGES)
        if isinstance(languages, str) or not all(isinstance(lang, str) for lang in languages):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting(
                    "eastern_arabic_languages", languages, "a list of language codes"
                )
            )
        return cls(
            eastern_arabic_languages=frozenset(languages),
            force_eastern=data.get("force_eastern", data.get("force_eastern_arabic", False)),
            force_western=data.get("force_western", data.get("force_western_arabic", False)),
        )


@dataclass(frozen=True, slots=True)
class LocaleSettings:
    """Ambient locale handling.

    Attributes:
        use_app_locale: Ask the CurrentLocaleProvider for the language when
            a call does not pass one
        locale_to_country_map: Language -> country code used when a call
            passes no country
    """

    use_app_locale: bool = False
    locale_to_country_map: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        _flag("use_app_locale", self.use_app_locale)
        object.__setattr__(
            self, "locale_to_country_map", MappingProxyType(dict(self.locale_to_country_map))
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build from the "locale" section."""
        return cls(
            use_app_locale=data.get("use_app_locale", False),
            locale_to_country_map=_mapping(
                "locale_to_country_map", data.get("locale_to_country_map")
            ),
        )


@dataclass(frozen=True, slots=True)
class CountryFormats:
    """Configured formats for one country.

    Attributes:
        currency_code: Currency used in the country (e.g., 'EGP')
        formats: Language -> partial format
    """

    currency_code: str
    formats: Mapping[str, FormatOverrides] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "formats", MappingProxyType(dict(self.formats)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build from {"code": "EGP", "formats": {"en": {...}, ...}}."""
        code = data.get("code", "")
        if not isinstance(code, str):
            raise InvalidFormatError(ErrorTemplate.invalid_setting("code", code, "a string"))
        formats = {
            language: FormatOverrides.from_mapping(_mapping(f"formats.{language}", fmt))
            for language, fmt in _mapping("formats", data.get("formats")).items()
        }
        return cls(currency_code=code, formats=formats)

    def format_for(self, language: str) -> FormatOverrides | None:
        """Configured format for a language, if any."""
        return self.formats.get(language)


@dataclass(frozen=True, slots=True)
class FormatterConfig:
    """Root configuration, read-only for the formatter's lifetime.

    Attributes:
        currencies: Country code -> configured formats (insertion ordered)
        default: Global default settings, fully populated
        numerals: Numeral script policy
        locale: Ambient locale handling
        custom_currencies_path: JSON dataset merged over the built-in catalog
        default_country: Country used when a call passes none and the
            language maps to none; defaults to the first configured country
    """

    currencies: Mapping[str, CountryFormats] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    default: FormatSettings = DEFAULT_FORMAT_SETTINGS
    numerals: NumeralSettings = field(default_factory=NumeralSettings)
    locale: LocaleSettings = field(default_factory=LocaleSettings)
    custom_currencies_path: str | None = None
    default_country: str | None = None

    def __post_init__(self) -> None:
        """Freeze mappings and check the default country.

        Raises:
            InvalidFormatError: If default_country is not a configured country
        """
        object.__setattr__(self, "currencies", MappingProxyType(dict(self.currencies)))
        if not isinstance(self.default, FormatSettings):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("default", self.default, "FormatSettings")
            )
        if self.default_country is not None and self.default_country not in self.currencies:
            raise InvalidFormatError(ErrorTemplate.default_country_unknown(self.default_country))

    @property
    def effective_default_country(self) -> str | None:
        """Explicit default country, else the first configured country."""
        if self.default_country is not None:
            return self.default_country
        return next(iter(self.currencies), None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build the configuration from its dictionary layout.

        Countries mapped to null are dropped. Fields missing from
        "default" keep the built-in default values.

        Raises:
            InvalidFormatError: For malformed sections or values
            InvalidRoundingModeError: For an unknown rounding mode
        """
        data = _mapping("config", data)
        currencies = {
            code: CountryFormats.from_mapping(_mapping(f"currencies.{code}", country))
            for code, country in _mapping("currencies", data.get("currencies")).items()
            if country is not None
        }
        default = merge_settings(
            DEFAULT_FORMAT_SETTINGS,
            FormatOverrides.from_mapping(_mapping("default", data.get("default"))),
        )
        custom_path = data.get("custom_currencies_path")
        return cls(
            currencies=currencies,
            default=default,
            numerals=NumeralSettings.from_mapping(_mapping("numerals", data.get("numerals"))),
            locale=LocaleSettings.from_mapping(_mapping("locale", data.get("locale"))),
            custom_currencies_path=str(custom_path) if custom_path else None,
            default_country=data.get("default_country"),
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> Self:
        """Load the configuration from a JSON file.

        Raises:
            OSError: If the file cannot be read
            InvalidFormatError: If the file is not valid JSON or not a valid config
        """
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("config", str(path), "a JSON document")
            ) from e
        return cls.from_mapping(data)


DEFAULT_CONFIG_DATA: Mapping[str, Any] = MappingProxyType({
    "currencies": {
        "EG": {
            "code": "EGP",
            "formats": {
                "en": {
                    "symbol": "LE",
                    "position": "after",
                    "separator": " ",
                    "strip_zero_decimals": True,
                },
                "ar": {
                    "symbol": "ج م",
                    "position": "after",
                    "separator": " ",
                    "strip_zero_decimals": True,
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
        "US": {
            "code": "USD",
            "formats": {
                "en": {"symbol": "$", "position": "before", "separator": ""},
                "ar": {
                    "symbol": "دولار",
                    "position": "after",
                    "separator": " ",
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
        "GB": {
            "code": "GBP",
            "formats": {
                "en": {"symbol": "£", "position": "before", "separator": ""},
                "ar": {
                    "symbol": "جنيه استرليني",
                    "position": "after",
                    "separator": " ",
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
        "EU": {
            "code": "EUR",
            "formats": {
                "en": {"symbol": "€", "position": "after", "separator": " "},
                "ar": {
                    "symbol": "يورو",
                    "position": "after",
                    "separator": " ",
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
        "SA": {
            "code": "SAR",
            "formats": {
                "en": {"symbol": "SAR", "position": "after", "separator": " "},
                "ar": {
                    "symbol": "ر.س",
                    "position": "after",
                    "separator": " ",
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
        "AE": {
            "code": "AED",
            "formats": {
                "en": {"symbol": "AED", "position": "after", "separator": " "},
                "ar": {
                    "symbol": "د.إ",
                    "position": "after",
                    "separator": " ",
                    "use_eastern_arabic_numerals": True,
                },
            },
        },
    },
    "default": {
        "symbol": "$",
        "position": "before",
        "separator": "",
        "decimal_separator": ".",
        "thousand_separator": ",",
        "decimals": 2,
        "rounding_mode": "half_up",
        "accounting_format": False,
        "compact_format": {
            "enabled": False,
            "thresholds": {"thousand": 1_000, "million": 1_000_000, "billion": 1_000_000_000},
            "symbols": {"thousand": "K", "million": "M", "billion": "B"},
            "precision": 1,
        },
    },
    "numerals": {
        "eastern_arabic_languages": ["ar", "fa", "ur"],
        "force_eastern_arabic": False,
        "force_western_arabic": False,
    },
    "locale": {
        "use_app_locale": False,
        "locale_to_country_map": {},
    },
    "custom_currencies_path": None,
})


@lru_cache(maxsize=1)
def default_config() -> FormatterConfig:
    """Bundled configuration (EG, US, GB, EU, SA, AE in English and Arabic).

    Cached; the returned value is immutable.
    """
    return FormatterConfig.from_mapping(DEFAULT_CONFIG_DATA)
