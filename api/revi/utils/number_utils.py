"""
Numeric helpers shared by the analytics and review services.
"""
import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 always rounding up.

    Python's built-in round() uses banker's rounding (round(2.5) == 2), which
    does not match how percentages are displayed to users.
    """
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Integer percentage of part in whole; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty iterable."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
