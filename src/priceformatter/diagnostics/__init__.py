"""Diagnostic system for price formatter errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    AmountParseError,
    CurrencyNotFoundError,
    InvalidFormatError,
    InvalidRoundingModeError,
    PriceFormatterError,
    RateUnavailableError,
)
from .templates import ErrorTemplate

__all__ = [
    "AmountParseError",
    "CurrencyNotFoundError",
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
    "InvalidFormatError",
    "InvalidRoundingModeError",
    "PriceFormatterError",
    "RateUnavailableError",
]
