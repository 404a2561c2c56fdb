"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def currency_not_found(country_code: str) -> Diagnostic:
        """No configured or catalog currency for a country identifier.

        Args:
            country_code: The identifier that failed to resolve

        Returns:
            Diagnostic for CURRENCY_NOT_FOUND
        """
        msg = f"Currency with code '{country_code}' not found."
        return Diagnostic(
            code=DiagnosticCode.CURRENCY_NOT_FOUND,
            message=msg,
            hint=f"Add '{country_code}' to the currencies configuration or a custom dataset",
        )

    @staticmethod
    def default_country_unknown(country_code: str) -> Diagnostic:
        """Configured default country missing from the currencies table."""
        msg = f"Default country '{country_code}' is not a configured currency"
        return Diagnostic(
            code=DiagnosticCode.DEFAULT_COUNTRY_UNKNOWN,
            message=msg,
            hint="Set default_country to one of the keys under 'currencies'",
        )

    @staticmethod
    def invalid_rounding_mode(mode: object) -> Diagnostic:
        """Rounding mode outside the supported set.

        Args:
            mode: The rejected rounding mode value

        Returns:
            Diagnostic for INVALID_ROUNDING_MODE
        """
        msg = (
            f"Invalid rounding mode '{mode}'. "
            "Supported modes are: 'ceil', 'floor', 'half_up', 'half_down'."
        )
        return Diagnostic(code=DiagnosticCode.INVALID_ROUNDING_MODE, message=msg)

    @staticmethod
    def invalid_amount(value: object) -> Diagnostic:
        """Amount is not a finite number."""
        msg = f"Amount must be a finite number, got {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_AMOUNT,
            message=msg,
            hint="Pass an int, float, Decimal or numeric string",
        )

    @staticmethod
    def invalid_compact_thresholds(thousand: object, million: object, billion: object) -> Diagnostic:
        """Compact thresholds not strictly increasing or not positive."""
        msg = (
            "Compact thresholds must be positive and strictly increasing, "
            f"got thousand={thousand}, million={million}, billion={billion}"
        )
        return Diagnostic(code=DiagnosticCode.INVALID_COMPACT_THRESHOLDS, message=msg)

    @staticmethod
    def invalid_setting(name: str, value: object, expected: str) -> Diagnostic:
        """Setting value of the wrong type or out of range.

        Args:
            name: Setting name (e.g., "decimals")
            value: Rejected value
            expected: Description of accepted values

        Returns:
            Diagnostic for INVALID_SETTING
        """
        msg = f"Invalid value {value!r} for setting '{name}': expected {expected}"
        return Diagnostic(code=DiagnosticCode.INVALID_SETTING, message=msg)

    @staticmethod
    def unknown_override(keys: tuple[str, ...]) -> Diagnostic:
        """Override mapping contains keys that are not format settings."""
        names = ", ".join(repr(k) for k in keys)
        msg = f"Unknown format setting(s): {names}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_OVERRIDE,
            message=msg,
            hint="Check the spelling against FormatOverrides field names",
        )

    @staticmethod
    def spell_out_unavailable() -> Diagnostic:
        """Spell-out requested without a provider."""
        return Diagnostic(
            code=DiagnosticCode.SPELL_OUT_UNAVAILABLE,
            message="Spelling out amounts requires a SpellOutProvider.",
            hint="Pass spell_out_provider=... to PriceFormatter",
        )

    @staticmethod
    def rate_unavailable(from_currency: str, to_currency: str, reason: str) -> Diagnostic:
        """Exchange rate could not be obtained.

        Args:
            from_currency: Source currency code
            to_currency: Target currency code
            reason: Provider failure description

        Returns:
            Diagnostic for RATE_UNAVAILABLE
        """
        msg = f"Failed to get exchange rate from {from_currency} to {to_currency}: {reason}"
        return Diagnostic(code=DiagnosticCode.RATE_UNAVAILABLE, message=msg)

    @staticmethod
    def rate_invalid(from_currency: str, to_currency: str, rate: object) -> Diagnostic:
        """Provider returned a rate that is not a positive finite number."""
        msg = f"Exchange rate from {from_currency} to {to_currency} is not usable: {rate!r}"
        return Diagnostic(
            code=DiagnosticCode.RATE_INVALID,
            message=msg,
            hint="Rates must be positive finite numbers",
        )

    @staticmethod
    def parse_amount_empty() -> Diagnostic:
        """Formatted amount contained no digits."""
        return Diagnostic(
            code=DiagnosticCode.PARSE_AMOUNT_EMPTY,
            message="No digits found in formatted amount",
        )

    @staticmethod
    def parse_amount_invalid(value: str, stripped: str) -> Diagnostic:
        """Stripped amount is not a valid decimal number.

        Args:
            value: Original input
            stripped: Input after removing non-numeric characters

        Returns:
            Diagnostic for PARSE_AMOUNT_INVALID
        """
        msg = f"Cannot read '{value}' as an amount (stripped to '{stripped}')"
        return Diagnostic(code=DiagnosticCode.PARSE_AMOUNT_INVALID, message=msg)
