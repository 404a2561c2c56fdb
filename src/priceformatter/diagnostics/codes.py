"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Resolution errors (country, currency, settings lookup)
        2000-2999: Rendering errors (rounding, amounts, configuration values)
        3000-3999: Conversion errors (exchange rates)
        4000-4999: Parsing errors (formatted amount stripping)
    """

    # Resolution errors (1000-1999)
    CURRENCY_NOT_FOUND = 1001
    DEFAULT_COUNTRY_UNKNOWN = 1002

    # Rendering errors (2000-2999)
    INVALID_ROUNDING_MODE = 2001
    INVALID_AMOUNT = 2002
    INVALID_COMPACT_THRESHOLDS = 2003
    INVALID_SETTING = 2004
    UNKNOWN_OVERRIDE = 2005
    SPELL_OUT_UNAVAILABLE = 2006

    # Conversion errors (3000-3999)
    RATE_UNAVAILABLE = 3001
    RATE_INVALID = 3002

    # Parsing errors (4000-4999)
    PARSE_AMOUNT_EMPTY = 4001
    PARSE_AMOUNT_INVALID = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[CURRENCY_NOT_FOUND]: Currency for 'XX' not found
              = help: Add 'XX' to the currencies configuration
        """
        lines = [f"{self.severity}[{self.code.name}]: {self.message}"]
        if self.hint:
            lines.append(f"  = help: {self.hint}")
        return "\n".join(lines)
