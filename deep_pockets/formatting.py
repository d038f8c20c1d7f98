"""Formatting utilities for currency text in summaries."""

from __future__ import annotations

from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = True, decimals: int = 0) -> str:
    """Format a currency amount for human-readable summaries.

    Amounts are rounded only here, at presentation time; the engine keeps
    full precision internally.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign
        decimals: Digits after the decimal point (whole dollars by default)

    Returns:
        Formatted currency string (e.g., "$1,235" or "1,234.56")

    Example:
        >>> format_currency(1234.56)
        '$1,235'
        >>> format_currency(1234.56, include_sign=False, decimals=2)
        '1,234.56'
        >>> format_currency(-50)
        '-$50'
    """
    formatted = f"{abs(amount):,.{decimals}f}"
    sign = '-' if amount < 0 and float(formatted.replace(',', '')) != 0 else ''
    return f"{sign}${formatted}" if include_sign else f"{sign}{formatted}"
