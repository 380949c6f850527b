"""Indicator contract shared by every calculation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import fields, replace
from typing import Any, ClassVar

import pandas as pd

from technical_analysis.data.bars import bars_to_frame, coerce_bars
from technical_analysis.domain.models import Bar, ResultRecord
from technical_analysis.validation import (
    sort_by_date,
    validate_length,
    validate_numeric_data,
    validate_option_keys,
)

logger = logging.getLogger("technical_analysis.indicators")

BarData = pd.DataFrame | Iterable[Any]


class Indicator(ABC):
    """Base indicator interface.

    Subclasses declare ``indicator_symbol``, ``indicator_name`` and a frozen
    params dataclass whose field order defines the accepted option keys.
    Instances hold no state, so one instance can serve any number of calls.
    """

    indicator_symbol: ClassVar[str]
    indicator_name: ClassVar[str]
    params_type: ClassVar[type]

    @classmethod
    def valid_options(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls.params_type))

    def default_options(self) -> Any:
        return self.params_type()

    def build_params(self, options: Mapping[str, object] | None = None) -> Any:
        """Merge ``options`` onto the defaults and validate the result."""
        supplied = dict(options or {})
        validate_option_keys(supplied, self.valid_options())
        return self.check_params(replace(self.default_options(), **supplied))

    def validate_options(self, options: Mapping[str, object]) -> bool:
        self.build_params(options)
        return True

    def min_data_size(self, options: Mapping[str, object] | None = None) -> int:
        """Return the shortest series that yields one result record."""
        return self.min_data_size_for(self.build_params(options))

    def calculate(self, data: BarData, **options: object) -> list[ResultRecord]:
        """Validate inputs, order bars by date, and compute one record per eligible index."""
        params = self.build_params(options)
        series = coerce_bars(data)
        validate_numeric_data(series, *self.required_fields(params))
        validate_length(series, self.min_data_size_for(params))
        series = sort_by_date(series)
        records = self.compute(series, params)
        logger.debug(
            "%s | %s bars -> %s records | %s",
            self.indicator_symbol,
            len(series),
            len(records),
            params,
        )
        return records

    def calculate_frame(self, data: BarData, **options: object) -> pd.DataFrame:
        """Same as ``calculate`` but returned as a DataFrame indexed by date."""
        return bars_to_frame(self.calculate(data, **options))

    def describe(self) -> dict[str, object]:
        defaults = self.default_options()
        return {
            "symbol": self.indicator_symbol,
            "name": self.indicator_name,
            "valid_options": list(self.valid_options()),
            "defaults": {name: getattr(defaults, name) for name in self.valid_options()},
            "min_data_size": self.min_data_size_for(defaults),
        }

    @abstractmethod
    def check_params(self, params: Any) -> Any:
        """Validate option values, returning the params on success."""

    @abstractmethod
    def min_data_size_for(self, params: Any) -> int:
        """Minimum series length for already validated params."""

    @abstractmethod
    def required_fields(self, params: Any) -> tuple[str, ...]:
        """Numeric bar fields read by the calculation."""

    @abstractmethod
    def compute(self, series: Sequence[Bar], params: Any) -> list[ResultRecord]:
        """Run the calculation over a validated, date-sorted series."""
