"""Price formatter exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object.
Build diagnostics through ErrorTemplate rather than formatting messages
at the raise site.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "AmountParseError",
    "CurrencyNotFoundError",
    "InvalidFormatError",
    "InvalidRoundingModeError",
    "PriceFormatterError",
    "RateUnavailableError",
]


class PriceFormatterError(Exception):
    """Base exception for all price formatter errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize PriceFormatterError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class CurrencyNotFoundError(PriceFormatterError):
    """No country or currency settings resolved in strict mode.

    Only raised when the caller sets ``throw_if_not_found``; the default
    behavior falls back to the global default settings.
    """

    def __init__(self, message: str | Diagnostic, *, country_code: str = "") -> None:
        super().__init__(message)
        self.country_code = country_code


class InvalidRoundingModeError(PriceFormatterError):
    """Rounding mode outside ceil, floor, half_up, half_down.

    Raised before any numeric transformation happens.
    """

    def __init__(self, message: str | Diagnostic, *, mode: str = "") -> None:
        super().__init__(message)
        self.mode = mode


class RateUnavailableError(PriceFormatterError):
    """Exchange rate provider could not supply a usable rate.

    The original provider failure, if any, is chained as ``__cause__``.
    No retry happens inside the formatter.
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        from_currency: str = "",
        to_currency: str = "",
    ) -> None:
        super().__init__(message)
        self.from_currency = from_currency
        self.to_currency = to_currency


class InvalidFormatError(PriceFormatterError):
    """Invalid formatting configuration or input.

    Examples:
    - Compact thresholds not strictly increasing
    - Negative decimals
    - Non-finite amount (NaN, Infinity)
    - Unknown override key
    """


class AmountParseError(PriceFormatterError):
    """Formatted amount could not be reduced to a number.

    Returned (not raised) by the parsing functions, consistent with their
    never-raise contract.

    Attributes:
        input_value: The string that failed to parse
    """

    def __init__(self, message: str | Diagnostic, *, input_value: str = "") -> None:
        super().__init__(message)
        self.input_value = input_value
