"""Parsing of formatted money strings.

Functions return (result, errors) tuples and never raise on bad input.

Python 3.13+.
"""

from .amounts import is_formatted_money, parse_amount

__all__ = ["is_formatted_money", "parse_amount"]
