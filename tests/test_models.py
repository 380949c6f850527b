from __future__ import annotations

from datetime import date

import pytest

from technical_analysis.domain.models import Bar, BollingerBandsValue, IchimokuValue
from technical_analysis.errors import ValidationError


def test_bar_accepts_partial_numeric_fields() -> None:
    bar = Bar(date=date(2024, 1, 2), close=10)

    assert bar.close == 10
    assert bar.high is None
    assert bar.price("close") == 10


@pytest.mark.parametrize("value", ["10.5", True, float("nan"), float("inf"), float("-inf")])
def test_bar_rejects_non_numeric_values(value: object) -> None:
    with pytest.raises(ValidationError, match="must be numeric"):
        Bar(date=date(2024, 1, 2), close=value)


def test_bar_requires_date() -> None:
    with pytest.raises(ValidationError, match="date"):
        Bar(date=None, close=1.0)


def test_bar_price_rejects_missing_field() -> None:
    with pytest.raises(ValidationError, match="'open' is missing"):
        Bar(date=date(2024, 1, 2), close=1.0).price("open")


def test_result_records_flatten_to_mappings() -> None:
    bands = BollingerBandsValue(
        date=date(2024, 1, 2), lower_band=1.0, middle_band=2.0, upper_band=3.0
    )
    cloud = IchimokuValue(
        date=date(2024, 1, 2),
        tenkan_sen=1.0,
        kijun_sen=2.0,
        senkou_span_a=3.0,
        senkou_span_b=4.0,
        chikou_span=5.0,
    )

    assert bands.to_record() == {
        "date": date(2024, 1, 2),
        "lower_band": 1.0,
        "middle_band": 2.0,
        "upper_band": 3.0,
    }
    assert list(cloud.to_record()) == [
        "date",
        "tenkan_sen",
        "kijun_sen",
        "senkou_span_a",
        "senkou_span_b",
        "chikou_span",
    ]
