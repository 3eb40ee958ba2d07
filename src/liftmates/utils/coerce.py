"""Lenient conversion of stored values for aggregation."""

import math


def as_number(value) -> float:
    """Convert a stored numeric value, treating anything malformed as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def as_flag(value) -> bool:
    """Convert a stored boolean; only true-like values count as True."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1")
    return False


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up.

    Python's round() uses banker's rounding, so 62.5 would become 62.
    """
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Integer percentage of part/whole, 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)
