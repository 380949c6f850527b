"""Series ordering and input validation helpers."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence
from operator import attrgetter

from technical_analysis.domain.models import Bar, is_number
from technical_analysis.errors import ValidationError


def validate_numeric_data(series: Sequence[Bar], *required_fields: str) -> None:
    """Reject bars missing any required field or holding a non-numeric value."""
    for position, bar in enumerate(series):
        for name in required_fields:
            value = getattr(bar, name, None)
            if value is None:
                raise ValidationError(
                    f"bar {position} ({bar.date}) is missing required field '{name}'"
                )
            if not is_number(value):
                raise ValidationError(
                    f"bar {position} ({bar.date}) has non-numeric '{name}': {value!r}"
                )


def validate_length(series: Sequence[Bar], minimum: int) -> None:
    """Reject series shorter than ``minimum`` bars."""
    if len(series) < minimum:
        raise ValidationError(
            f"not enough data: {len(series)} bars given, at least {minimum} required"
        )


def sort_by_date(series: Iterable[Bar]) -> list[Bar]:
    """Return a new list sorted ascending by date; duplicate dates are rejected."""
    try:
        ordered = sorted(series, key=attrgetter("date"))
    except TypeError as exc:
        raise ValidationError(f"bar dates are not mutually comparable: {exc}") from exc
    for previous, current in zip(ordered, ordered[1:]):
        if previous.date == current.date:
            raise ValidationError(f"duplicate bar date: {current.date}")
    return ordered


def validate_option_keys(options: Mapping[str, object], valid_options: Collection[str]) -> None:
    """Reject option keys that are not declared by the indicator."""
    unknown = sorted(str(key) for key in options if key not in valid_options)
    if unknown:
        supported = ", ".join(valid_options)
        raise ValidationError(
            f"invalid option(s): {', '.join(unknown)}. Valid options: {supported}"
        )


def positive_int(name: str, value: object) -> int:
    """Validate a period-like option."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value}")
    return value


def positive_number(name: str, value: object) -> float:
    """Validate a strictly positive numeric option."""
    if not is_number(value):
        raise ValidationError(f"{name} must be numeric, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def choice(name: str, value: object, allowed: Collection[str]) -> str:
    """Validate an option restricted to a fixed set of strings."""
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {value!r}")
    normalized = value.strip().lower().lstrip(":")
    if normalized not in allowed:
        raise ValidationError(
            f"{name} must be one of {', '.join(allowed)}, got {value!r}"
        )
    return normalized
