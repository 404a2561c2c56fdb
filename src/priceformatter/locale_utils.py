"""Locale utilities for BCP-47 to POSIX conversion.

Centralizes locale normalization used by the resolver and the locale
providers. Callers may pass full locale codes ("ar-EG", "en_US.UTF-8")
wherever a language is expected; only the language subtag selects a format.

Python 3.13+.
"""

from __future__ import annotations

import os

from priceformatter.constants import FALLBACK_LANGUAGE

__all__ = [
    "get_system_locale",
    "language_of",
    "normalize_locale",
    "territory_of",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Encoding suffixes ("en_US.UTF-8") and modifiers ("sr_RS@latin") are
    stripped.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("ar_EG.UTF-8")
        'ar_EG'
        >>> normalize_locale("en")  # Already normalized
        'en'
    """
    code = locale_code.strip().split(".", 1)[0].split("@", 1)[0]
    return code.replace("-", "_")


def language_of(locale_code: str) -> str:
    """Extract the lowercase language subtag from a locale code.

    Example:
        >>> language_of("ar-EG")
        'ar'
        >>> language_of("EN")
        'en'
    """
    language = normalize_locale(locale_code).split("_", 1)[0].lower()
    return language or FALLBACK_LANGUAGE


def territory_of(locale_code: str) -> str | None:
    """Extract the uppercase territory subtag from a locale code, if any.

    Script subtags ("zh_Hant_TW") are skipped; only two-letter alphabetic
    or three-digit region subtags count as territories.

    Example:
        >>> territory_of("ar_EG")
        'EG'
        >>> territory_of("zh-Hant-TW")
        'TW'
        >>> territory_of("en") is None
        True
    """
    for part in normalize_locale(locale_code).split("_")[1:]:
        if (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            return part.upper()
    return None


# Locale environment variables, most specific first
_LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG")

# Values that name no language and cannot pick a currency format
_PSEUDO_LOCALES: frozenset[str] = frozenset({"C", "POSIX"})

_SYSTEM_LOCALE_FALLBACK = "en_US"


def _system_locale_candidates() -> list[str]:
    """Locale codes the process was started with, in priority order."""
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str] = []
    try:
        os_locale, _ = locale_module.getlocale()
    except (ValueError, AttributeError):
        os_locale = None
    if os_locale:
        candidates.append(os_locale)
    candidates.extend(os.environ.get(var, "") for var in _LOCALE_ENV_VARS)
    return candidates


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Locale of the running process, for SystemLocaleProvider.

    The first usable value wins: the OS locale reported by
    locale.getlocale(), then LC_ALL, LC_MESSAGES and LANG. Values are
    normalized ("ar_EG.UTF-8" -> "ar_EG"); the "C" and "POSIX"
    pseudo-locales are skipped because they carry no language for
    format selection and no territory for format_localized().

    Args:
        raise_on_failure: Raise instead of returning the "en_US" fallback

    Returns:
        POSIX locale code

    Raises:
        RuntimeError: If raise_on_failure is set and nothing usable is found
    """
    for candidate in _system_locale_candidates():
        code = normalize_locale(candidate)
        if code and code not in _PSEUDO_LOCALES:
            return code

    if raise_on_failure:
        msg = (
            "Could not determine system locale for price formatting. "
            "Set LC_ALL, LC_MESSAGES, or LANG, or pass a StaticLocaleProvider."
        )
        raise RuntimeError(msg)

    return _SYSTEM_LOCALE_FALLBACK
