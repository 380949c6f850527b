"""Indicator registry keyed by indicator symbol."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from functools import lru_cache
from pathlib import Path
from types import ModuleType

from technical_analysis.domain.models import ResultRecord
from technical_analysis.errors import ValidationError
from technical_analysis.indicators.base import BarData, Indicator

_SKIPPED_MODULES = {
    "__init__",
    "base",
    "registry",
}
_INDICATORS_PACKAGE_NAME = "technical_analysis.indicators"


def _indicators_directory() -> Path:
    return Path(__file__).resolve().parent


def _iter_indicator_module_names() -> list[str]:
    names: list[str] = []
    for module in pkgutil.iter_modules([str(_indicators_directory())]):
        name = module.name
        if name.startswith("_") or name in _SKIPPED_MODULES:
            continue
        names.append(name)
    return sorted(names)


def _normalize_symbol(value: str) -> str:
    return value.strip().lower().replace("-", "_")


def _indicator_types_in_module(module: ModuleType) -> list[type[Indicator]]:
    discovered: list[type[Indicator]] = []
    for _, candidate in inspect.getmembers(module, inspect.isclass):
        if candidate is Indicator or not issubclass(candidate, Indicator):
            continue
        if candidate.__module__ != module.__name__ or inspect.isabstract(candidate):
            continue
        symbol = getattr(candidate, "indicator_symbol", None)
        if not isinstance(symbol, str) or not symbol.strip():
            continue
        discovered.append(candidate)
    return discovered


@lru_cache(maxsize=1)
def _discover_registry() -> dict[str, Indicator]:
    registry: dict[str, Indicator] = {}
    for module_name in _iter_indicator_module_names():
        module = importlib.import_module(f"{_INDICATORS_PACKAGE_NAME}.{module_name}")
        for indicator_type in _indicator_types_in_module(module):
            symbol = _normalize_symbol(indicator_type.indicator_symbol)
            if symbol in registry:
                raise ValueError(f"Duplicate indicator symbol discovered: '{symbol}'")
            registry[symbol] = indicator_type()
    return registry


def available_indicator_symbols() -> list[str]:
    """Return supported indicator symbols."""
    return sorted(_discover_registry().keys())


def get_indicator(symbol: str) -> Indicator:
    """Return the indicator registered under ``symbol``."""
    indicator = _discover_registry().get(_normalize_symbol(symbol))
    if indicator is None:
        supported = ", ".join(available_indicator_symbols())
        raise ValidationError(f"Unknown indicator '{symbol}'. Supported: {supported}")
    return indicator


def calculate(symbol: str, data: BarData, **options: object) -> list[ResultRecord]:
    """Run the indicator registered under ``symbol``."""
    return get_indicator(symbol).calculate(data, **options)


def describe(symbol: str) -> dict[str, object]:
    return get_indicator(symbol).describe()
