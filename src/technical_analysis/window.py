"""Sliding-window reducers shared by the indicator algorithms."""

from __future__ import annotations

import math
from collections.abc import Sequence

from technical_analysis.domain.models import Bar


def window_ending_at(series: Sequence[Bar], index: int, length: int) -> Sequence[Bar]:
    """Return the ``length`` bars ending at ``index`` (inclusive).

    Raises ValueError when the window does not fit inside the series.
    """
    if length < 1:
        raise ValueError(f"window length must be positive, got {length}")
    if index < 0 or index >= len(series):
        raise ValueError(f"index {index} is outside a series of {len(series)} bars")
    start = index - length + 1
    if start < 0:
        raise ValueError(
            f"window of {length} bars ending at index {index} starts before the series"
        )
    return series[start : index + 1]


def _require_bars(window: Sequence[Bar]) -> None:
    if not window:
        raise ValueError("window is empty")


def lowest_low(window: Sequence[Bar]) -> float:
    _require_bars(window)
    return min(bar.low for bar in window)


def highest_high(window: Sequence[Bar]) -> float:
    _require_bars(window)
    return max(bar.high for bar in window)


def mean(window: Sequence[Bar], price_key: str) -> float:
    """Arithmetic mean of the ``price_key`` field."""
    _require_bars(window)
    return sum(bar.price(price_key) for bar in window) / len(window)


def population_stddev(window: Sequence[Bar], window_mean: float, price_key: str) -> float:
    """Standard deviation with divisor equal to the window length."""
    _require_bars(window)
    squared = sum((bar.price(price_key) - window_mean) ** 2 for bar in window)
    return math.sqrt(squared / len(window))


def midpoint(series: Sequence[Bar], index: int, period: int) -> float:
    """Average of the highest high and lowest low over the window ending at ``index``."""
    window = window_ending_at(series, index, period)
    return (highest_high(window) + lowest_low(window)) / 2.0
