"""Indicator implementations and registry."""

from .base import Indicator
from .bollinger_bands import BollingerBands, BollingerBandsParams
from .ichimoku import Ichimoku, IchimokuParams
from .registry import available_indicator_symbols, calculate, describe, get_indicator

__all__ = [
    "BollingerBands",
    "BollingerBandsParams",
    "Ichimoku",
    "IchimokuParams",
    "Indicator",
    "available_indicator_symbols",
    "calculate",
    "describe",
    "get_indicator",
]
