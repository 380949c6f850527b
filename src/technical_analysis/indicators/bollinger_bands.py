"""Bollinger Bands (rolling mean with population standard deviation bands)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from technical_analysis.domain.models import PRICE_FIELDS, Bar, BollingerBandsValue
from technical_analysis.indicators.base import Indicator
from technical_analysis.validation import choice, positive_int, positive_number
from technical_analysis.window import mean, population_stddev, window_ending_at


@dataclass(frozen=True)
class BollingerBandsParams:
    """Parameter set for Bollinger Bands."""

    period: int = 20
    standard_deviations: float = 2
    price_key: str = "close"


def default_bollinger_bands_params() -> BollingerBandsParams:
    return BollingerBandsParams()


class BollingerBands(Indicator):
    """Middle band is the rolling mean; outer bands sit k population deviations away."""

    indicator_symbol = "bb"
    indicator_name = "Bollinger Bands"
    params_type = BollingerBandsParams

    def default_options(self) -> BollingerBandsParams:
        return default_bollinger_bands_params()

    def check_params(self, params: BollingerBandsParams) -> BollingerBandsParams:
        positive_int("period", params.period)
        positive_number("standard_deviations", params.standard_deviations)
        price_key = choice("price_key", params.price_key, PRICE_FIELDS)
        return replace(params, price_key=price_key)

    def min_data_size_for(self, params: BollingerBandsParams) -> int:
        return params.period

    def required_fields(self, params: BollingerBandsParams) -> tuple[str, ...]:
        return (params.price_key,)

    def compute(
        self,
        series: Sequence[Bar],
        params: BollingerBandsParams,
    ) -> list[BollingerBandsValue]:
        output: list[BollingerBandsValue] = []
        for index in range(params.period - 1, len(series)):
            window = window_ending_at(series, index, params.period)
            middle_band = mean(window, params.price_key)
            deviation = population_stddev(window, middle_band, params.price_key)
            spread = params.standard_deviations * deviation
            output.append(
                BollingerBandsValue(
                    date=series[index].date,
                    lower_band=middle_band - spread,
                    middle_band=middle_band,
                    upper_band=middle_band + spread,
                )
            )
        return output
