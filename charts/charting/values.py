"""Value coercion and number formatting shared by tooltips, legends and labels."""

from __future__ import annotations

import math
from collections.abc import Callable

MAX_FRACTION_DIGITS = 3


def to_number(value: object) -> float | None:
    """Return `value` as a float, or None when it is missing or non-numeric.

    Booleans and NaN are treated as missing so they never leak into totals.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    return None


def format_number(value: object) -> str:
    """Format a number with thousands grouping.

    Integers keep no fraction; floats keep at most three fraction digits with
    trailing zeros trimmed (``1234.5 -> "1,234.5"``). Non-numbers are returned
    as ``str(value)``.
    """

    number = to_number(value)
    if number is None:
        return "" if value is None else str(value)
    if math.isinf(number):
        return "∞" if number > 0 else "-∞"
    if number.is_integer():
        return f"{int(number):,}"
    text = f"{number:,.{MAX_FRACTION_DIGITS}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_with(formatter: Callable[[float], str] | None, value: object) -> str:
    """Apply `formatter` to numeric values, falling back to `format_number`."""

    number = to_number(value)
    if formatter is not None and number is not None:
        return formatter(number)
    return format_number(value)
