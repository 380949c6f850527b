"""Conversion between caller-supplied bar data and Bar value objects."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from technical_analysis.domain.models import PRICE_FIELDS, Bar, ResultRecord
from technical_analysis.errors import ValidationError

DATE_KEY_CANDIDATES = ("date", "datetime", "timestamp", "date_time")


def _native(value: Any) -> Any:
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _bar_from_mapping(row: Mapping[Any, Any]) -> Bar:
    lowered = {str(key).strip().lower(): value for key, value in row.items()}
    date = None
    for candidate in DATE_KEY_CANDIDATES:
        if lowered.get(candidate) is not None:
            date = lowered[candidate]
            break
    if date is None:
        expected = ", ".join(DATE_KEY_CANDIDATES)
        raise ValidationError(f"bar is missing a date. Expected one of: {expected}")
    values = {name: _native(lowered.get(name)) for name in PRICE_FIELDS}
    return Bar(date=date, **values)


def _bar_from_object(item: object) -> Bar:
    date = getattr(item, "date", None)
    if date is None:
        raise ValidationError(f"unsupported bar type: {type(item).__name__}")
    values = {name: _native(getattr(item, name, None)) for name in PRICE_FIELDS}
    return Bar(date=date, **values)


def _pick_date_column(lower_to_original: Mapping[str, str]) -> str | None:
    for candidate in DATE_KEY_CANDIDATES:
        if candidate in lower_to_original:
            return lower_to_original[candidate]
    return None


def bars_from_frame(frame: pd.DataFrame) -> list[Bar]:
    """Build bars from an OHLCV frame with a date column or DatetimeIndex."""
    lower_to_original = {str(column).strip().lower(): column for column in frame.columns}
    date_column = _pick_date_column(lower_to_original)
    if date_column is not None:
        try:
            dates = pd.to_datetime(frame[date_column], utc=False)
        except (ValueError, TypeError) as exc:
            raise ValidationError(
                f"unparseable bar dates in column '{date_column}': {exc}"
            ) from exc
    elif isinstance(frame.index, pd.DatetimeIndex):
        dates = frame.index.to_series()
    else:
        candidates = ", ".join(DATE_KEY_CANDIDATES)
        raise ValidationError(
            f"frame needs a DatetimeIndex or a date column. Expected one of: {candidates}"
        )

    columns = {
        name: frame[lower_to_original[name]].tolist()
        for name in PRICE_FIELDS
        if name in lower_to_original
    }
    bars: list[Bar] = []
    for position, date in enumerate(dates.tolist()):
        values = {name: _native(column[position]) for name, column in columns.items()}
        bars.append(Bar(date=date, **values))
    return bars


def coerce_bars(data: pd.DataFrame | Iterable[Bar | Mapping[Any, Any] | object]) -> list[Bar]:
    """Normalize supported inputs into a new list of bars.

    Accepts a DataFrame, or an iterable of Bar objects, mappings, or
    bar-like objects exposing ``date`` and price attributes.
    """
    if isinstance(data, pd.DataFrame):
        return bars_from_frame(data)
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        raise ValidationError(f"unsupported bar data: {type(data).__name__}")

    bars: list[Bar] = []
    for item in data:
        if isinstance(item, Bar):
            bars.append(item)
        elif isinstance(item, Mapping):
            bars.append(_bar_from_mapping(item))
        else:
            bars.append(_bar_from_object(item))
    return bars


def bars_to_frame(records: Sequence[ResultRecord]) -> pd.DataFrame:
    """Convert result records to a DataFrame indexed by date."""
    if not records:
        return pd.DataFrame()
    frame = pd.DataFrame([record.to_record() for record in records])
    return frame.set_index("date")
