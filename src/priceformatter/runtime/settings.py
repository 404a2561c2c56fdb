"""Typed formatting settings and their field-by-field merge.

FormatSettings is the fully populated record the renderer consumes.
FormatOverrides is the partial record used for every configuration layer
(country/language formats, catalog-derived formats, per-call overrides):
a field left as None is "not set" and leaves the lower layer untouched.

Merge order is explicit in merge_settings(): later layers win per field,
and the nested compact settings merge per field as well.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Self

from priceformatter.constants import (
    DEFAULT_COMPACT_PRECISION,
    DEFAULT_COMPACT_SYMBOLS,
    DEFAULT_COMPACT_THRESHOLDS,
)
from priceformatter.diagnostics import ErrorTemplate, InvalidFormatError
from priceformatter.enums import RoundingMode, SymbolPosition

from .rounding import parse_rounding_mode, to_decimal

__all__ = [
    "DEFAULT_FORMAT_SETTINGS",
    "CompactOverrides",
    "CompactSettings",
    "CompactSymbols",
    "CompactThresholds",
    "FormatOverrides",
    "FormatSettings",
    "merge_settings",
    "parse_position",
]

_TIERS = ("thousand", "million", "billion")


# ============================================================================
# VALIDATION HELPERS
# ============================================================================


def _require_str(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise InvalidFormatError(ErrorTemplate.invalid_setting(name, value, "a string"))


def _require_bool(name: str, value: object) -> None:
    if not isinstance(value, bool):
        raise InvalidFormatError(ErrorTemplate.invalid_setting(name, value, "true or false"))


def _require_count(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidFormatError(
            ErrorTemplate.invalid_setting(name, value, "a non-negative integer")
        )


def parse_position(value: object) -> SymbolPosition:
    """Validate a symbol position ("before" / "after").

    Raises:
        InvalidFormatError: For any other value
    """
    if isinstance(value, SymbolPosition):
        return value
    if isinstance(value, str):
        try:
            return SymbolPosition(value.strip().lower())
        except ValueError:
            pass
    raise InvalidFormatError(ErrorTemplate.invalid_setting("position", value, "'before' or 'after'"))


def _tier_values(name: str, data: object) -> dict[str, Any]:
    """Read the tiers present in a {thousand, million, billion} mapping."""
    if not isinstance(data, Mapping):
        raise InvalidFormatError(
            ErrorTemplate.invalid_setting(name, data, "an object with thousand/million/billion")
        )
    unknown = tuple(str(k) for k in data if k not in _TIERS)
    if unknown:
        raise InvalidFormatError(ErrorTemplate.unknown_override(unknown))
    return {tier: data[tier] for tier in _TIERS if tier in data}


# ============================================================================
# COMPACT NOTATION
# ============================================================================


@dataclass(frozen=True, slots=True)
class CompactThresholds:
    """Magnitudes at which compact tiers start.

    Must be positive and strictly increasing (thousand < million < billion)
    so that every magnitude selects exactly one tier.
    """

    thousand: Decimal = Decimal(DEFAULT_COMPACT_THRESHOLDS[0])
    million: Decimal = Decimal(DEFAULT_COMPACT_THRESHOLDS[1])
    billion: Decimal = Decimal(DEFAULT_COMPACT_THRESHOLDS[2])

    def __post_init__(self) -> None:
        """Normalize to Decimal and check ordering.

        Raises:
            InvalidFormatError: If thresholds are not numbers, not positive,
                or not strictly increasing.
        """
        for tier in _TIERS:
            object.__setattr__(self, tier, to_decimal(getattr(self, tier)))
        if not Decimal(0) < self.thousand < self.million < self.billion:
            raise InvalidFormatError(
                ErrorTemplate.invalid_compact_thresholds(self.thousand, self.million, self.billion)
            )

    def tiers(self) -> tuple[tuple[str, Decimal], ...]:
        """(tier, threshold) pairs from largest to smallest."""
        return (("billion", self.billion), ("million", self.million), ("thousand", self.thousand))


@dataclass(frozen=True, slots=True)
class CompactSymbols:
    """Suffixes appended to compact amounts (1.5K, 1.5M, 1.5B)."""

    thousand: str = DEFAULT_COMPACT_SYMBOLS[0]
    million: str = DEFAULT_COMPACT_SYMBOLS[1]
    billion: str = DEFAULT_COMPACT_SYMBOLS[2]

    def __post_init__(self) -> None:
        for tier in _TIERS:
            _require_str(f"symbols.{tier}", getattr(self, tier))

    def for_tier(self, tier: str) -> str:
        """Suffix for a tier name."""
        return str(getattr(self, tier))


@dataclass(frozen=True, slots=True)
class CompactSettings:
    """Compact notation settings (fully populated).

    Attributes:
        enabled: Render amounts in compact notation
        thresholds: Tier start magnitudes
        symbols: Tier suffixes
        precision: Decimal places of the compact amount
    """

    enabled: bool = False
    thresholds: CompactThresholds = field(default_factory=CompactThresholds)
    symbols: CompactSymbols = field(default_factory=CompactSymbols)
    precision: int = DEFAULT_COMPACT_PRECISION

    def __post_init__(self) -> None:
        _require_bool("compact.enabled", self.enabled)
        _require_count("compact.precision", self.precision)
        if not isinstance(self.thresholds, CompactThresholds):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("compact.thresholds", self.thresholds, "CompactThresholds")
            )
        if not isinstance(self.symbols, CompactSymbols):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("compact.symbols", self.symbols, "CompactSymbols")
            )

    def select_tier(self, magnitude: Decimal) -> tuple[Decimal, str]:
        """Pick the largest tier whose threshold is <= magnitude.

        Args:
            magnitude: Absolute amount

        Returns:
            (divisor, suffix); (1, "") when below the thousand threshold
        """
        for tier, threshold in self.thresholds.tiers():
            if magnitude >= threshold:
                return threshold, self.symbols.for_tier(tier)
        return Decimal(1), ""


def _partial_tiers(
    name: str, data: object, convert: Callable[[str, Any], Any]
) -> Mapping[str, Any]:
    """Validate the tiers a layer sets; complete tier records set all three."""
    if isinstance(data, (CompactThresholds, CompactSymbols)):
        data = {tier: getattr(data, tier) for tier in _TIERS}
    return MappingProxyType(
        {tier: convert(f"{name}.{tier}", value) for tier, value in _tier_values(name, data).items()}
    )


def _threshold_value(name: str, value: Any) -> Decimal:
    try:
        return to_decimal(value)
    except InvalidFormatError as e:
        raise InvalidFormatError(ErrorTemplate.invalid_setting(name, value, "a number")) from e


def _symbol_value(name: str, value: Any) -> str:
    _require_str(name, value)
    return str(value)


@dataclass(frozen=True, slots=True)
class CompactOverrides:
    """Partial compact settings; None fields are not set.

    ``thresholds`` and ``symbols`` hold only the tiers this layer sets;
    the others keep the value from the layer below.
    """

    enabled: bool | None = None
    thresholds: Mapping[str, Decimal] | None = field(default=None, hash=False)
    symbols: Mapping[str, str] | None = field(default=None, hash=False)
    precision: int | None = None

    def __post_init__(self) -> None:
        if self.enabled is not None:
            _require_bool("compact.enabled", self.enabled)
        if self.precision is not None:
            _require_count("compact.precision", self.precision)
        if self.thresholds is not None:
            object.__setattr__(
                self,
                "thresholds",
                _partial_tiers("compact.thresholds", self.thresholds, _threshold_value),
            )
        if self.symbols is not None:
            object.__setattr__(
                self, "symbols", _partial_tiers("compact.symbols", self.symbols, _symbol_value)
            )

    @classmethod
    def from_mapping(cls, data: object) -> Self:
        """Build from the dictionary form used in configuration.

        Example:
            >>> CompactOverrides.from_mapping({"enabled": True, "precision": 2})
            CompactOverrides(enabled=True, thresholds=None, symbols=None, precision=2)
        """
        if not isinstance(data, Mapping):
            raise InvalidFormatError(ErrorTemplate.invalid_setting("compact", data, "an object"))
        unknown = tuple(str(k) for k in data if k not in {"enabled", "thresholds", "symbols", "precision"})
        if unknown:
            raise InvalidFormatError(ErrorTemplate.unknown_override(unknown))

        return cls(
            enabled=data.get("enabled"),
            thresholds=data.get("thresholds"),
            symbols=data.get("symbols"),
            precision=data.get("precision"),
        )

    def apply_to(self, base: CompactSettings) -> CompactSettings:
        """Return base with every set field replaced, tiers merged one by one.

        Raises:
            InvalidFormatError: If the merged thresholds are not strictly increasing
        """
        changes: dict[str, Any] = {}
        if self.enabled is not None:
            changes["enabled"] = self.enabled
        if self.precision is not None:
            changes["precision"] = self.precision
        if self.thresholds:
            changes["thresholds"] = replace(base.thresholds, **self.thresholds)
        if self.symbols:
            changes["symbols"] = replace(base.symbols, **self.symbols)
        return replace(base, **changes) if changes else base


# ============================================================================
# FORMAT SETTINGS
# ============================================================================


@dataclass(frozen=True, slots=True)
class FormatSettings:
    """Fully populated rendering settings.

    Defaults equal the global default format: "$" before the amount, no
    separator, "." decimals, "," grouping, 2 decimals, half_up rounding.

    Attributes:
        symbol: Currency symbol
        position: Symbol before or after the amount
        separator: Text between symbol and amount
        decimal_separator: Fractional point
        thousand_separator: Grouping separator ("" disables grouping)
        decimals: Decimal places
        strip_zero_decimals: Drop the fraction when it rounds to all zeros
            ("5 LE" rather than "5.00 LE")
        use_eastern_arabic_numerals: True/False forces the digit script;
            None decides from the language
        rounding_mode: Rounding policy applied before rendering
        accounting_format: Wrap negative amounts in parentheses
        compact: Compact notation settings
    """

    symbol: str = "$"
    position: SymbolPosition = SymbolPosition.BEFORE
    separator: str = ""
    decimal_separator: str = "."
    thousand_separator: str = ","
    decimals: int = 2
    strip_zero_decimals: bool = False
    use_eastern_arabic_numerals: bool | None = None
    rounding_mode: RoundingMode = RoundingMode.HALF_UP
    accounting_format: bool = False
    compact: CompactSettings = field(default_factory=CompactSettings)

    def __post_init__(self) -> None:
        """Validate every field.

        Raises:
            InvalidFormatError: For wrongly typed or out-of-range values
            InvalidRoundingModeError: For an unknown rounding mode
        """
        for name in ("symbol", "separator", "decimal_separator", "thousand_separator"):
            _require_str(name, getattr(self, name))
        _require_count("decimals", self.decimals)
        _require_bool("accounting_format", self.accounting_format)
        _require_bool("strip_zero_decimals", self.strip_zero_decimals)
        if self.use_eastern_arabic_numerals is not None:
            _require_bool("use_eastern_arabic_numerals", self.use_eastern_arabic_numerals)
        object.__setattr__(self, "position", parse_position(self.position))
        object.__setattr__(self, "rounding_mode", parse_rounding_mode(self.rounding_mode))
        if not isinstance(self.compact, CompactSettings):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("compact", self.compact, "CompactSettings")
            )


DEFAULT_FORMAT_SETTINGS = FormatSettings()


@dataclass(frozen=True, slots=True)
class FormatOverrides:
    """Partial format settings for one configuration layer or call.

    Every field defaults to None (not set). ``throw_if_not_found`` is a
    call-level flag: when the country resolves to nothing, raise
    CurrencyNotFoundError instead of falling back to the global default.

    Example:
        >>> overrides = FormatOverrides(symbol="USD ", decimals=0)
        >>> overrides = FormatOverrides.from_mapping({"symbol": "LE", "position": "after"})
        >>> overrides.position
        <SymbolPosition.AFTER: 'after'>
    """

    symbol: str | None = None
    position: SymbolPosition | None = None
    separator: str | None = None
    decimal_separator: str | None = None
    thousand_separator: str | None = None
    decimals: int | None = None
    strip_zero_decimals: bool | None = None
    use_eastern_arabic_numerals: bool | None = None
    rounding_mode: RoundingMode | None = None
    accounting_format: bool | None = None
    compact: CompactOverrides | None = None
    throw_if_not_found: bool = False

    def __post_init__(self) -> None:
        for name in ("symbol", "separator", "decimal_separator", "thousand_separator"):
            if getattr(self, name) is not None:
                _require_str(name, getattr(self, name))
        if self.decimals is not None:
            _require_count("decimals", self.decimals)
        for name in (
            "use_eastern_arabic_numerals",
            "accounting_format",
            "strip_zero_decimals",
            "throw_if_not_found",
        ):
            if getattr(self, name) is not None:
                _require_bool(name, getattr(self, name))
        if self.position is not None:
            object.__setattr__(self, "position", parse_position(self.position))
        if self.rounding_mode is not None:
            object.__setattr__(self, "rounding_mode", parse_rounding_mode(self.rounding_mode))
        if self.compact is not None and not isinstance(self.compact, CompactOverrides):
            raise InvalidFormatError(
                ErrorTemplate.invalid_setting("compact", self.compact, "CompactOverrides")
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build overrides from the snake_case dictionary form.

        ``compact_format`` is accepted as an alias of ``compact``.

        Raises:
            InvalidFormatError: For unknown keys or invalid values
            InvalidRoundingModeError: For an unknown rounding mode

        Example:
            >>> FormatOverrides.from_mapping({"rounding_mode": "floor"}).rounding_mode
            <RoundingMode.FLOOR: 'floor'>
        """
        if not isinstance(data, Mapping):
            raise InvalidFormatError(ErrorTemplate.invalid_setting("format", data, "an object"))
        values = dict(data)
        if "compact_format" in values:
            values["compact"] = values.pop("compact_format")

        known = {f.name for f in fields(cls)}
        unknown = tuple(sorted(str(k) for k in values if k not in known))
        if unknown:
            raise InvalidFormatError(ErrorTemplate.unknown_override(unknown))

        compact = values.get("compact")
        if compact is not None and not isinstance(compact, CompactOverrides):
            values["compact"] = CompactOverrides.from_mapping(compact)
        if values.get("throw_if_not_found") is None:
            values.pop("throw_if_not_found", None)
        return cls(**values)

    @classmethod
    def coerce(cls, value: FormatOverrides | Mapping[str, Any] | None) -> Self | None:
        """Accept overrides as an instance, a mapping, or None."""
        if value is None or isinstance(value, cls):
            return value
        return cls.from_mapping(value)

    def with_changes(self, **changes: Any) -> Self:
        """Copy with some fields replaced."""
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        """True when no format field is set."""
        return all(getattr(self, name) is None for name in _FORMAT_FIELDS)


_FORMAT_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(FormatSettings))


def merge_settings(base: FormatSettings, *layers: FormatOverrides | None) -> FormatSettings:
    """Merge partial layers over complete settings.

    Later layers win per field; fields a layer leaves as None keep the
    value from below. The result is a new, fully populated FormatSettings.

    Args:
        base: Complete settings (normally the global default)
        *layers: Partial layers in increasing priority; None and empty
            layers are skipped

    Returns:
        Merged settings

    Raises:
        InvalidFormatError: If the merged compact settings are invalid

    Example:
        >>> merged = merge_settings(
        ...     FormatSettings(),
        ...     FormatOverrides(symbol="LE", position="after", separator=" "),
        ...     FormatOverrides(decimals=0),
        ... )
        >>> (merged.symbol, merged.decimals)
        ('LE', 0)
    """
    result = base
    for layer in layers:
        if layer is None or layer.is_empty:
            continue
        changes: dict[str, Any] = {}
        for name in _FORMAT_FIELDS:
            value = getattr(layer, name)
            if value is None:
                continue
            if name == "compact":
                value = value.apply_to(result.compact)
            changes[name] = value
        result = replace(result, **changes)
    return result
