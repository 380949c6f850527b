"""Bar coercion and historical data loading."""

from .bars import bars_from_frame, bars_to_frame, coerce_bars
from .csv_data import CsvBarLoader

__all__ = ["CsvBarLoader", "bars_from_frame", "bars_to_frame", "coerce_bars"]
