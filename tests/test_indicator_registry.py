from __future__ import annotations

from datetime import date, timedelta

import pytest

from technical_analysis.domain.models import Bar
from technical_analysis.errors import ValidationError
from technical_analysis.indicators.bollinger_bands import BollingerBands
from technical_analysis.indicators.ichimoku import Ichimoku
from technical_analysis.indicators.registry import (
    available_indicator_symbols,
    calculate,
    describe,
    get_indicator,
)


def _bars(count: int) -> list[Bar]:
    start = date(2024, 1, 1)
    return [
        Bar(date=start + timedelta(days=i), high=i + 2.0, low=i + 0.5, close=i + 1.0)
        for i in range(count)
    ]


def test_registry_discovers_indicator_modules() -> None:
    assert available_indicator_symbols() == ["bb", "ichimoku"]


def test_registry_lookup_is_case_insensitive() -> None:
    assert isinstance(get_indicator("BB"), BollingerBands)
    assert isinstance(get_indicator(" Ichimoku "), Ichimoku)


def test_registry_rejects_unknown_symbol() -> None:
    with pytest.raises(ValidationError, match="Supported: bb, ichimoku"):
        get_indicator("rsi")


def test_registry_calculate_dispatches_by_symbol() -> None:
    bars = _bars(10)

    assert calculate("bb", bars, period=3) == BollingerBands().calculate(bars, period=3)
    assert calculate(
        "ichimoku", bars, low_period=2, medium_period=3, high_period=4
    ) == Ichimoku().calculate(bars, low_period=2, medium_period=3, high_period=4)


def test_describe_reports_options_and_defaults() -> None:
    assert describe("bb") == {
        "symbol": "bb",
        "name": "Bollinger Bands",
        "valid_options": ["period", "standard_deviations", "price_key"],
        "defaults": {"period": 20, "standard_deviations": 2, "price_key": "close"},
        "min_data_size": 20,
    }
    assert describe("ichimoku")["min_data_size"] == 77
