"""Technical-analysis indicators over historical price bars."""

from .domain.models import Bar, BollingerBandsValue, IchimokuValue, ResultRecord
from .errors import ValidationError
from .indicators import (
    BollingerBands,
    Ichimoku,
    Indicator,
    available_indicator_symbols,
    calculate,
    get_indicator,
)

__all__ = [
    "Bar",
    "BollingerBands",
    "BollingerBandsValue",
    "Ichimoku",
    "IchimokuValue",
    "Indicator",
    "ResultRecord",
    "ValidationError",
    "available_indicator_symbols",
    "calculate",
    "get_indicator",
]
