"""Type conversion utilities for raw field values coming from form inputs.

This module is the single source of truth for numeric coercion.
Blank or non-numeric input becomes None, never zero, so that "unknown"
stays distinguishable from a real 0 all the way through the engine.
"""

import math
from typing import Any


def optional_float(val: Any) -> float | None:
    """Convert a raw field value to float, or None if it is not a usable number.

    Args:
        val: Value to convert (can be str, int, float, None, etc.)

    Returns:
        Converted float, or None for blanks, garbage, NaN and infinities

    Examples:
        >>> optional_float("7.5")
        7.5
        >>> optional_float("")
        >>> optional_float("abc")
        >>> optional_float(0)
        0.0
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if val == "":
            return None
    try:
        result = float(val)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(result):
        return None
    return result
