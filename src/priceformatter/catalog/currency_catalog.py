"""Currency catalog: built-in dataset plus optional custom overrides.

The catalog answers lookups by currency code, by country name and by ISO
territory code. It is initialized explicitly through load() (the
PriceFormatter constructor calls it) and is read-only afterwards.

Dataset shape (built-in and custom files are identical):

    {
      "currencies": {
        "USD": {
          "name": "US Dollar",
          "country": "UNITED STATES",
          "decimals": 2,
          "symbol": {"en": "$", "ar": "دولار", "native": "$"}
        }
      }
    }

Custom entries are merged over built-in ones keyed by currency code; custom
wins on conflict. A custom dataset that cannot be read or parsed is logged
and ignored so that currency display never hard-fails on an optional
enrichment source.

Thread Safety:
    load() uses a double-checked single-initialization lock. Concurrent
    first callers trigger exactly one dataset parse; lookups after that
    are lock-free reads of an immutable mapping.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from priceformatter.constants import FALLBACK_LANGUAGE, NATIVE_SYMBOL_KEY

from .territories import get_cldr_currency, get_territory_currency

__all__ = ["CurrencyCatalog", "CurrencyEntry", "parse_dataset"]

logger = logging.getLogger(__name__)

_BUILTIN_DATASET = "currencies.json"


@dataclass(frozen=True, slots=True)
class CurrencyEntry:
    """Catalog record for one currency.

    Attributes:
        currency_code: ISO 4217 style code, uppercase (e.g., 'EGP').
        country: Country name or identifier, matched case-sensitively.
        symbols: Language -> symbol table; 'native' is the last resort.
        name: Display name (may be empty).
        decimals: Standard minor-unit digits when known.
    """

    currency_code: str
    country: str
    symbols: Mapping[str, str] = field(hash=False)
    name: str = ""
    decimals: int | None = None

    def symbol_for(self, language: str) -> str | None:
        """Symbol for a language: exact match, then 'en', then 'native'."""
        for key in (language, FALLBACK_LANGUAGE, NATIVE_SYMBOL_KEY):
            symbol = self.symbols.get(key)
            if symbol:
                return symbol
        return None


def _parse_entry(code: object, data: object, source: str) -> CurrencyEntry | None:
    """Build a CurrencyEntry from one dataset record, or None if malformed."""
    if not isinstance(code, str) or len(code) == 0:
        logger.warning("Skipping currency with invalid code %r in %s", code, source)
        return None
    if not isinstance(data, Mapping):
        logger.warning("Skipping currency %s in %s: record is not an object", code, source)
        return None

    symbols = data.get("symbol", {})
    if not isinstance(symbols, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in symbols.items()
    ):
        logger.warning("Skipping currency %s in %s: 'symbol' must map strings", code, source)
        return None

    country = data.get("country", "")
    name = data.get("name", "")
    decimals = data.get("decimals")
    if not isinstance(country, str) or not isinstance(name, str):
        logger.warning("Skipping currency %s in %s: 'country'/'name' must be strings", code, source)
        return None
    if decimals is not None and (
        isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0
    ):
        logger.warning("Ignoring invalid decimals %r for currency %s in %s", decimals, code, source)
        decimals = None

    return CurrencyEntry(
        currency_code=code.upper(),
        country=country,
        symbols=MappingProxyType(dict(symbols)),
        name=name,
        decimals=decimals,
    )


def parse_dataset(data: object, source: str = "<dataset>") -> dict[str, CurrencyEntry] | None:
    """Parse a decoded currency dataset.

    Accepts either the wrapped form ({"currencies": {...}}) or a bare
    mapping of currency codes. Malformed records are skipped.

    Args:
        data: Decoded JSON document
        source: Description of the origin, for log messages

    Returns:
        Mapping of currency code to entry, or None if the document root
        has the wrong shape.
    """
    if not isinstance(data, Mapping):
        return None
    table = data.get("currencies", data)
    if not isinstance(table, Mapping):
        return None

    entries: dict[str, CurrencyEntry] = {}
    for code, record in table.items():
        entry = _parse_entry(code, record, source)
        if entry is not None:
            entries[entry.currency_code] = entry
    return entries


class CurrencyCatalog:
    """Read-only currency lookup table.

    Example:
        >>> catalog = CurrencyCatalog().load()
        >>> catalog.lookup_by_country_code("JP").currency_code
        'JPY'
        >>> catalog.lookup_currency_code_by_country_name("UNITED STATES")
        'USD'
        >>> catalog.symbol_for("EGP", "ar")
        'ج.م'
    """

    __slots__ = ("_custom_dataset_path", "_entries", "_load_lock")

    def __init__(self, custom_dataset_path: str | Path | None = None) -> None:
        """Create an unloaded catalog.

        Args:
            custom_dataset_path: Optional JSON file merged over the built-in
                dataset on load().
        """
        self._custom_dataset_path = (
            Path(custom_dataset_path) if custom_dataset_path is not None else None
        )
        self._entries: Mapping[str, CurrencyEntry] | None = None
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        """True once load() has populated the catalog."""
        return self._entries is not None

    @property
    def custom_dataset_path(self) -> Path | None:
        """Custom dataset merged over the built-in data, if configured."""
        return self._custom_dataset_path

    def load(self) -> CurrencyCatalog:
        """Populate the catalog exactly once.

        Returns:
            self, to allow ``CurrencyCatalog().load()``
        """
        self._ensure_loaded()
        return self

    def _ensure_loaded(self) -> Mapping[str, CurrencyEntry]:
        entries = self._entries
        if entries is not None:
            return entries
        with self._load_lock:
            # Double-check: another thread may have loaded while we waited
            if self._entries is None:
                self._entries = self._build()
            return self._entries

    def _build(self) -> Mapping[str, CurrencyEntry]:
        source = resources.files("priceformatter").joinpath("data", _BUILTIN_DATASET)
        builtin = parse_dataset(json.loads(source.read_text(encoding="utf-8")), _BUILTIN_DATASET)
        entries: dict[str, CurrencyEntry] = dict(builtin or {})

        custom = self._read_custom_dataset()
        if custom:
            overridden = sorted(entries.keys() & custom.keys())
            entries.update(custom)
            logger.debug(
                "Merged %d custom currencies (%d overriding built-in: %s)",
                len(custom),
                len(overridden),
                ", ".join(overridden),
            )

        logger.debug("Currency catalog loaded with %d entries", len(entries))
        return MappingProxyType(entries)

    def _read_custom_dataset(self) -> dict[str, CurrencyEntry] | None:
        path = self._custom_dataset_path
        if path is None:
            return None

        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring custom currency dataset %s: %s", path, e)
            return None

        entries = parse_dataset(document, str(path))
        if entries is None:
            logger.warning(
                "Ignoring custom currency dataset %s: expected an object of currencies", path
            )
        return entries

    def __contains__(self, currency_code: object) -> bool:
        return currency_code in self._ensure_loaded()

    def __len__(self) -> int:
        return len(self._ensure_loaded())

    def __iter__(self) -> Iterator[CurrencyEntry]:
        return iter(self._ensure_loaded().values())

    def currency_codes(self) -> tuple[str, ...]:
        """All currency codes in the catalog, in dataset order."""
        return tuple(self._ensure_loaded())

    def get(self, currency_code: str) -> CurrencyEntry | None:
        """Entry for a currency code from the loaded datasets."""
        return self._ensure_loaded().get(currency_code)

    def lookup_currency_code_by_country_name(self, name: str) -> str | None:
        """Currency code of the first entry whose country equals name.

        Case-sensitive linear scan in dataset order; deterministic as long
        as country names are unique.
        """
        for entry in self._ensure_loaded().values():
            if entry.country == name:
                return entry.currency_code
        return None

    def lookup_by_country_code(self, code: str) -> CurrencyEntry | None:
        """Resolve a country identifier to a catalog entry.

        Resolution order:
        1. code is itself a currency code in the catalog ("JPY")
        2. an entry's country field equals code ("UNITED STATES")
        3. code is an ISO 3166-1 territory ("JP") with a CLDR currency

        Args:
            code: Country code, country name, or currency code

        Returns:
            CurrencyEntry, or None if nothing matches.
        """
        entries = self._ensure_loaded()
        entry = entries.get(code)
        if entry is not None:
            return entry

        currency_code = self.lookup_currency_code_by_country_name(code)
        if currency_code is not None:
            return entries[currency_code]

        currency_code = get_territory_currency(code)
        if currency_code is None:
            return None
        return entries.get(currency_code) or self._cldr_entry(currency_code, country=code)

    def symbol_for(self, currency_code: str, language: str) -> str | None:
        """Symbol for a currency in a language (exact -> en -> native).

        Currencies missing from the datasets fall back to the CLDR English
        symbol.
        """
        entry = self.get(currency_code) or self._cldr_entry(currency_code)
        if entry is None:
            return None
        return entry.symbol_for(language)

    @staticmethod
    def _cldr_entry(currency_code: str, country: str = "") -> CurrencyEntry | None:
        info = get_cldr_currency(currency_code)
        if info is None:
            return None
        return CurrencyEntry(
            currency_code=info.code,
            country=country,
            symbols=MappingProxyType({FALLBACK_LANGUAGE: info.symbol}),
            name=info.name,
            decimals=info.decimals,
        )
