"""String and numeric coercion helpers for the records app.

The aggregator and the chart renderers must stay total over whatever ends up
in a record, so numeric reads go through safe_float(), which never raises.
Cell edits use the stricter parse_optional_number(), which keeps the
"not yet recorded" distinction by returning None instead of 0.
"""

import math
import re

# Currency symbols for stripping during numeric conversion
CURRENCY_SYMBOLS = re.compile(r'[\$€£¥₹₽]')


def safe_float(val, default: float = 0.0) -> float:
    """Safely convert value to float with fallback default.

    Handles:
    - None, empty strings -> default
    - Numeric types -> float
    - Strings with currency symbols, whitespace, commas
    - NaN / infinity and invalid input -> default

    Args:
        val: Value to convert (any type)
        default: Value to return on failure (default: 0.0)

    Returns:
        float: Parsed value or default
    """
    if val is None or val == '' or isinstance(val, bool):
        return default
    if isinstance(val, (int, float)):
        f = float(val)
        return f if math.isfinite(f) else default

    try:
        s = CURRENCY_SYMBOLS.sub('', str(val))
        s = s.replace(',', '').strip()
        f = float(s) if s else default
    except (ValueError, TypeError):
        return default
    return f if math.isfinite(f) else default


def parse_optional_number(val) -> float | None:
    """Parse an edited numeric cell.

    Empty input clears the value; anything that is not a finite number
    also clears it rather than failing the edit.

    Examples:
        parse_optional_number("")      -> None
        parse_optional_number(" 12.5") -> 12.5
        parse_optional_number("abc")   -> None
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        f = float(val)
    else:
        s = str(val).strip()
        if not s:
            return None
        try:
            f = float(s)
        except ValueError:
            return None
    return f if math.isfinite(f) else None


def display_text(val) -> str:
    """Render a cell value as plain text for matching.

    Whole-number floats drop their fractional part so that a stored
    ``150.0`` is found by searching for ``"150"``.
    """
    if val is None:
        return ""
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val)
