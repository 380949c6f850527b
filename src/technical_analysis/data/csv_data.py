"""CSV-backed historical bar loader."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from technical_analysis.data.bars import DATE_KEY_CANDIDATES, bars_from_frame
from technical_analysis.domain.models import Bar
from technical_analysis.errors import DataLoadError, ValidationError
from technical_analysis.validation import sort_by_date


class CsvBarLoader:
    """Load date-sorted bars from local CSV files."""

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)
        self.logger = logging.getLogger("technical_analysis.data.csv")
        self._bars_cache: dict[str, list[Bar]] = {}

    def load(self, symbol: str) -> list[Bar]:
        cached = self._bars_cache.get(symbol)
        if cached is not None:
            return list(cached)

        path = self._resolve_path(symbol)
        if path is None:
            raise DataLoadError(f"No CSV found for {symbol} under {self.data_dir}")
        try:
            frame = pd.read_csv(path)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise DataLoadError(f"{symbol}: unreadable CSV {path}: {exc}") from exc
        bars = self._normalize_csv(frame, symbol)
        self.logger.debug("loaded %s bars for %s from %s", len(bars), symbol, path)
        self._bars_cache[symbol] = bars
        return list(bars)

    def _resolve_path(self, symbol: str) -> Path | None:
        market, bare_symbol = self._split_market_symbol(symbol)
        symbol_upper = bare_symbol.upper()
        symbol_lower = bare_symbol.lower()
        candidates: list[Path] = []
        if market is not None:
            for market_dir in (market.upper(), market.lower()):
                candidates.extend(
                    [
                        self.data_dir / market_dir / f"{symbol_upper}.csv",
                        self.data_dir / market_dir / f"{symbol_lower}.csv",
                    ]
                )
        candidates.extend(
            [
                self.data_dir / f"{symbol_upper}.csv",
                self.data_dir / f"{symbol_lower}.csv",
            ]
        )
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return None

    @staticmethod
    def _split_market_symbol(symbol: str) -> tuple[str | None, str]:
        value = symbol.strip()
        if ":" not in value:
            return None, value
        market, bare_symbol = value.split(":", 1)
        market = market.strip()
        bare_symbol = bare_symbol.strip()
        if not market or not bare_symbol:
            return None, value
        return market, bare_symbol

    def _normalize_csv(self, frame: pd.DataFrame, symbol: str) -> list[Bar]:
        lowered = {str(column).strip().lower() for column in frame.columns}
        if not lowered.intersection(DATE_KEY_CANDIDATES):
            candidates = ", ".join(DATE_KEY_CANDIDATES)
            raise DataLoadError(f"{symbol}: CSV missing date column. Expected one of: {candidates}")
        if frame.empty:
            raise DataLoadError(f"{symbol}: CSV has no rows")
        try:
            return sort_by_date(bars_from_frame(frame))
        except ValidationError as exc:
            raise DataLoadError(f"{symbol}: {exc}") from exc
