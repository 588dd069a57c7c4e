"""
Shared weight-table types and scoring helpers.
"""

import math
from typing import Any, NamedTuple, Sequence

INFINITY = math.inf


class Band(NamedTuple):
    """One row of a weight table: ``lower < value < upper`` yields ``value``."""

    lower: float
    upper: float
    points: Any


def above(threshold: float, points: Any) -> Band:
    """Band matching values strictly greater than ``threshold``."""
    return Band(threshold, INFINITY, points)


def below(threshold: float, points: Any) -> Band:
    """Band matching values strictly less than ``threshold``."""
    return Band(-INFINITY, threshold, points)


def first_band(value: float, table: Sequence[Band], default: Any = 0) -> Any:
    """
    Evaluate a weight table top-down.

    Returns the points of the first band containing ``value``, or ``default``
    when no band matches.
    """
    for band in table:
        if band.lower < value < band.upper:
            return band.points
    return default


def clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(value, upper))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding towards +inf."""
    return math.floor(value + 0.5)


def bounded_score(value: float, lower: float = 0, upper: float = 100) -> int:
    """Clamp then round a raw point total into an integer score."""
    return round_half_up(clamp(value, lower, upper))
