"""Lenient numeric parsing and plain-decimal rendering.

Export cells carry thousand separators and occasional junk, so parsing
never raises. Rendering keeps integral values free of a trailing ``.0``
so partition files and identity hashes stay stable across runs.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: str | float | int | None) -> float:
    """Parse a numeric cell, defaulting to zero.

    Thousand separators are stripped and the longest leading numeric
    prefix is used, so ``"12 gp"`` parses as 12.

    Args:
        value: Raw cell value, number, or None.

    Returns:
        Parsed float, or 0.0 when the value is empty or unparseable.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(value.replace(",", ""))
    if match is None:
        return 0.0
    return float(match.group(0))


def format_number(value: float) -> str:
    """Render a number in plain decimal form.

    Non-integral values keep their shortest round-trip digits but never
    use exponent notation.

    Args:
        value: Number to render.

    Returns:
        ``"100"`` for integral values, plain decimal digits otherwise.
    """
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    if not math.isfinite(number):
        return repr(number)
    return format(Decimal(repr(number)), "f")


def json_number(value: float) -> int | float:
    """Return an int for integral values so JSON output omits ``.0``."""
    number = float(value)
    if math.isfinite(number) and number.is_integer():
        return int(number)
    return number
