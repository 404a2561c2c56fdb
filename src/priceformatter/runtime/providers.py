"""Injectable collaborators: exchange rates, spelled-out amounts, ambient locale.

The formatter never reaches for global state. Whatever it needs from the
outside world is passed in as an object satisfying one of the protocols
below.

Implementations shipped here:
    StaticLocaleProvider  - fixed locale, e.g. from a request header
    SystemLocaleProvider  - OS locale environment
    StaticRateProvider    - in-memory rate table with inverse derivation
    CachingRateProvider   - TTL + LRU cache around any rate provider

Thread Safety:
    All shipped implementations are safe for concurrent use. The caching
    provider guards its table with an RLock; the others are immutable.

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Mapping
from decimal import Decimal
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from priceformatter.constants import DEFAULT_RATE_CACHE_SIZE, DEFAULT_RATE_TTL_SECONDS
from priceformatter.diagnostics import ErrorTemplate, RateUnavailableError
from priceformatter.locale_utils import get_system_locale, normalize_locale

from .rounding import to_decimal

if TYPE_CHECKING:
    from .rounding import Amount

__all__ = [
    "CachingRateProvider",
    "CurrentLocaleProvider",
    "ExchangeRateProvider",
    "SpellOutProvider",
    "StaticLocaleProvider",
    "StaticRateProvider",
    "SystemLocaleProvider",
]

logger = logging.getLogger(__name__)


# ============================================================================
# PROTOCOLS
# ============================================================================


class ExchangeRateProvider(Protocol):
    """Source of exchange rates.

    Timeouts and retries are the provider's concern; any exception it
    raises is reported by PriceFormatter.convert() as RateUnavailableError.
    """

    def rate(self, from_currency: str, to_currency: str) -> Decimal | float:
        """Units of to_currency per one unit of from_currency."""
        ...  # pragma: no cover  # Protocol stub - not executable


class SpellOutProvider(Protocol):
    """Converts amounts to words ("one hundred dollars")."""

    def spell_out(self, amount: Amount, language: str, currency_code: str | None) -> str:
        """Amount in words for a language, optionally naming the currency."""
        ...  # pragma: no cover  # Protocol stub - not executable


class CurrentLocaleProvider(Protocol):
    """Reports the ambient application locale (request, user profile, OS)."""

    def current_locale(self) -> str | None:
        """Locale code such as 'ar-EG', or None when unknown."""
        ...  # pragma: no cover  # Protocol stub - not executable


# ============================================================================
# LOCALE PROVIDERS
# ============================================================================


class StaticLocaleProvider:
    """Always reports the same locale."""

    __slots__ = ("_locale",)

    def __init__(self, locale: str | None) -> None:
        self._locale = normalize_locale(locale) if locale else None

    def current_locale(self) -> str | None:
        return self._locale

    def __repr__(self) -> str:
        return f"StaticLocaleProvider({self._locale!r})"


class SystemLocaleProvider:
    """Reports the operating system locale (LC_ALL, LC_MESSAGES, LANG).

    Returns None when nothing usable is configured, so callers fall back
    to English.
    """

    __slots__ = ()

    def current_locale(self) -> str | None:
        try:
            return get_system_locale(raise_on_failure=True)
        except RuntimeError:
            logger.warning("System locale could not be determined")
            return None


# ============================================================================
# RATE PROVIDERS
# ============================================================================


class StaticRateProvider:
    """Rate table held in memory.

    A missing pair is derived from its inverse when that is present
    (USD->EUR from EUR->USD). Identical codes always yield 1.

    Example:
        >>> provider = StaticRateProvider({("USD", "EGP"): "48.50"})
        >>> provider.rate("USD", "EGP")
        Decimal('48.50')
        >>> provider.rate("EGP", "USD") == 1 / Decimal("48.50")
        True
    """

    __slots__ = ("_rates",)

    def __init__(self, rates: Mapping[tuple[str, str], Amount]) -> None:
        """Build the table.

        Raises:
            RateUnavailableError: If a rate is not a positive finite number
        """
        table: dict[tuple[str, str], Decimal] = {}
        for (from_currency, to_currency), raw in rates.items():
            value = to_decimal(raw)
            if value <= 0:
                raise RateUnavailableError(
                    ErrorTemplate.rate_invalid(from_currency, to_currency, raw),
                    from_currency=from_currency,
                    to_currency=to_currency,
                )
            table[(from_currency.upper(), to_currency.upper())] = value
        self._rates: Mapping[tuple[str, str], Decimal] = MappingProxyType(table)

    def rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Look up a rate.

        Raises:
            RateUnavailableError: If neither the pair nor its inverse is known
        """
        key = (from_currency.upper(), to_currency.upper())
        if key[0] == key[1]:
            return Decimal(1)
        direct = self._rates.get(key)
        if direct is not None:
            return direct
        inverse = self._rates.get((key[1], key[0]))
        if inverse is not None:
            return Decimal(1) / inverse
        raise RateUnavailableError(
            ErrorTemplate.rate_unavailable(from_currency, to_currency, "pair not in rate table"),
            from_currency=from_currency,
            to_currency=to_currency,
        )


class CachingRateProvider:
    """Thread-safe TTL + LRU cache in front of another rate provider.

    Successful lookups are kept for ``ttl_seconds``; failures are never
    cached and propagate unchanged. When full, the least recently used
    pair is evicted.

    Attributes:
        hits: Lookups answered from the cache
        misses: Lookups forwarded to the inner provider
    """

    __slots__ = ("_cache", "_clock", "_hits", "_inner", "_lock", "_max_size", "_misses", "_ttl")

    def __init__(
        self,
        inner: ExchangeRateProvider,
        *,
        ttl_seconds: float = DEFAULT_RATE_TTL_SECONDS,
        max_size: int = DEFAULT_RATE_CACHE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Wrap a provider.

        Args:
            inner: Provider consulted on a miss
            ttl_seconds: Lifetime of a cached rate
            max_size: Maximum cached pairs
            clock: Monotonic time source in seconds

        Raises:
            ValueError: If ttl_seconds or max_size is not positive
        """
        if ttl_seconds <= 0:
            msg = "ttl_seconds must be positive"
            raise ValueError(msg)
        if max_size <= 0:
            msg = "max_size must be positive"
            raise ValueError(msg)

        self._inner = inner
        self._ttl = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._cache: OrderedDict[tuple[str, str], tuple[Decimal | float, float]] = OrderedDict()
        self._lock = RLock()
        self._hits = 0
        self._misses = 0

    def rate(self, from_currency: str, to_currency: str) -> Decimal | float:
        key = (from_currency, to_currency)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                value, expires_at = cached
                if self._clock() < expires_at:
                    self._cache.move_to_end(key)
                    self._hits += 1
                    return value
                del self._cache[key]
            self._misses += 1

        # Outside the lock: the inner provider may block on I/O
        value = self._inner.rate(from_currency, to_currency)
        logger.debug("Fetched rate %s->%s: %s", from_currency, to_currency, value)

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif len(self._cache) >= self._max_size:
                self._cache.popitem(last=False)
            self._cache[key] = (value, self._clock() + self._ttl)
        return value

    def clear(self) -> None:
        """Drop every cached rate and reset the counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses
