"""Ichimoku Kinko Hyo five-line system."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from technical_analysis.domain.models import Bar, IchimokuValue
from technical_analysis.errors import ValidationError
from technical_analysis.indicators.base import Indicator
from technical_analysis.validation import positive_int
from technical_analysis.window import midpoint


@dataclass(frozen=True)
class IchimokuParams:
    """Window lengths for the conversion, base and leading span B lines."""

    low_period: int = 9
    medium_period: int = 26
    high_period: int = 52


def default_ichimoku_params() -> IchimokuParams:
    return IchimokuParams()


class Ichimoku(Indicator):
    """Ichimoku Kinko Hyo.

    Lines per date ``i``:

    * tenkan_sen: midpoint of the last ``low_period`` bars.
    * kijun_sen: midpoint of the last ``medium_period`` bars.
    * senkou_span_a: mean of tenkan_sen and kijun_sen taken ``medium_period - 1``
      bars earlier.
    * senkou_span_b: midpoint of ``high_period`` bars, same lag.
    * chikou_span: close price at the same lag.

    Leading spans are reported against date ``i``; they are not shifted forward.
    """

    indicator_symbol = "ichimoku"
    indicator_name = "Ichimoku Kinko Hyo"
    params_type = IchimokuParams

    def default_options(self) -> IchimokuParams:
        return default_ichimoku_params()

    def check_params(self, params: IchimokuParams) -> IchimokuParams:
        positive_int("low_period", params.low_period)
        positive_int("medium_period", params.medium_period)
        positive_int("high_period", params.high_period)
        # The first lag index is high_period - 1, so every lagged window must fit in it.
        if params.low_period > params.high_period or params.medium_period > params.high_period:
            raise ValidationError(
                "high_period must be at least as long as low_period and medium_period "
                f"(got {params.low_period}, {params.medium_period}, {params.high_period})"
            )
        return params

    def min_data_size_for(self, params: IchimokuParams) -> int:
        return params.high_period + params.medium_period - 1

    def required_fields(self, params: IchimokuParams) -> tuple[str, ...]:
        return ("high", "low", "close")

    def compute(self, series: Sequence[Bar], params: IchimokuParams) -> list[IchimokuValue]:
        lag = params.medium_period - 1
        output: list[IchimokuValue] = []
        for index in range(self.min_data_size_for(params) - 1, len(series)):
            lag_index = index - lag
            senkou_span_a = (
                midpoint(series, lag_index, params.low_period)
                + midpoint(series, lag_index, params.medium_period)
            ) / 2.0
            output.append(
                IchimokuValue(
                    date=series[index].date,
                    tenkan_sen=midpoint(series, index, params.low_period),
                    kijun_sen=midpoint(series, index, params.medium_period),
                    senkou_span_a=senkou_span_a,
                    senkou_span_b=midpoint(series, lag_index, params.high_period),
                    chikou_span=series[lag_index].close,
                )
            )
        return output
