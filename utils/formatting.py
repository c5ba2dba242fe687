"""Output formatting utilities for the records app.

Provides the small set of display helpers used by the Jinja templates:
- Formatting money-like amounts in the grid
- Formatting legend percentages
"""

from typing import Optional


def format_amount(value: Optional[float], max_decimals: int = 3) -> str:
    """Format an amount for a grid cell.

    Uses thousands separators and up to ``max_decimals`` fractional digits,
    trimming trailing zeros. Absent values render as an empty cell.

    Args:
        value: Amount (can be None)
        max_decimals: Maximum fractional digits kept (default: 3)

    Returns:
        Formatted string like "1,234.5"

    Examples:
        format_amount(1234567) -> "1,234,567"
        format_amount(1234.5) -> "1,234.5"
        format_amount(None) -> ""
    """
    if value is None:
        return ""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return ""
    text = f"{v:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_percent(value: Optional[float], precision: int = 1) -> str:
    """Format a percentage for display.

    Args:
        value: Percentage value (0.0 to 100.0)
        precision: Decimal places (default: 1)

    Returns:
        Formatted string like "42.5%"

    Examples:
        format_percent(42.5) -> "42.5%"
        format_percent(0) -> "0.0%"
        format_percent(None) -> "-"
    """
    if value is None:
        return "-"
    return f"{value:.{precision}f}%"
