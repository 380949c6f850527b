"""Domain value types."""

from .models import PRICE_FIELDS, Bar, BollingerBandsValue, IchimokuValue, ResultRecord

__all__ = ["PRICE_FIELDS", "Bar", "BollingerBandsValue", "IchimokuValue", "ResultRecord"]
