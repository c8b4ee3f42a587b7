"""Derived statistics over the accumulated message counters and series.

Statistics that cannot be computed are reported with an `Unavailable` marker
instead of a number. The markers are falsy and print as "NaN".

Two conventions are kept per statistic rather than unified:
  - response probability is 0.0 (not UNDEFINED) when no response was requested;
  - the integer hop-count median is 0 (not NO_DATA) for an empty series.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence, Union


class Unavailable(Enum):
    UNDEFINED = "undefined"  # zero denominator
    NO_DATA = "no data"  # empty series

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "NaN"


UNDEFINED = Unavailable.UNDEFINED
NO_DATA = Unavailable.NO_DATA

Stat = Union[float, Unavailable]


def delivery_probability(delivered: int, created: int) -> Stat:
    if created > 0:
        return delivered / created
    return UNDEFINED


def overhead_ratio(relayed: int, delivered: int) -> Stat:
    if delivered > 0:
        return (relayed - delivered) / delivered
    return UNDEFINED


def response_probability(response_delivered: int, response_requested_created: int) -> float:
    # Defaults to 0.0, unlike the two ratios above.
    if response_requested_created > 0:
        return response_delivered / response_requested_created
    return 0.0


def average(series: Sequence[float]) -> Stat:
    if not series:
        return NO_DATA
    return sum(series) / len(series)


def _middle(series: Sequence[float]) -> float:
    values = sorted(series)
    n = len(values)
    mid = n // 2
    if n % 2 == 1:
        return values[mid]
    return (values[mid - 1] + values[mid]) / 2


def median(series: Sequence[float]) -> Stat:
    """Median of a real-valued series; NO_DATA when empty."""
    if not series:
        return NO_DATA
    return _middle(series)


def int_median(series: Sequence[int]) -> float:
    """Median of an integer series (hop counts); 0 when empty."""
    if not series:
        return 0
    return _middle(series)


def format_stat(value: Stat | int, precision: int = 4) -> str:
    if isinstance(value, Unavailable):
        return str(value)
    if isinstance(value, float):
        return f"{value:.{precision}f}"
    return str(value)
