"""Core price bar and indicator result models."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any

from technical_analysis.errors import ValidationError

PRICE_FIELDS = ("open", "high", "low", "close", "volume")


def is_number(value: object) -> bool:
    """Return True for finite real numbers, excluding bools."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


@dataclass(frozen=True)
class Bar:
    """One historical OHLCV observation.

    Only the fields an indicator reads have to be present; absent fields are
    ``None``. Fields that are present must be real numbers.
    """

    date: Any
    high: float | None = None
    low: float | None = None
    close: float | None = None
    open: float | None = None
    volume: float | None = None

    def __post_init__(self) -> None:
        if self.date is None:
            raise ValidationError("bar is missing a date")
        for name in PRICE_FIELDS:
            value = getattr(self, name)
            if value is not None and not is_number(value):
                raise ValidationError(
                    f"bar {self.date}: field '{name}' must be numeric, got {value!r}"
                )

    def price(self, price_key: str) -> float:
        """Return the numeric field selected by ``price_key``."""
        value = getattr(self, price_key)
        if value is None:
            raise ValidationError(f"bar {self.date}: field '{price_key}' is missing")
        return value


@dataclass(frozen=True)
class ResultRecord:
    """One indicator output row keyed by date."""

    date: Any

    def to_record(self) -> dict[str, Any]:
        """Convert the row to a flat mapping."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


@dataclass(frozen=True)
class BollingerBandsValue(ResultRecord):
    """Bollinger Bands for one date."""

    lower_band: float
    middle_band: float
    upper_band: float


@dataclass(frozen=True)
class IchimokuValue(ResultRecord):
    """Ichimoku Kinko Hyo lines for one date."""

    tenkan_sen: float
    kijun_sen: float
    senkou_span_a: float
    senkou_span_b: float
    chikou_span: float
