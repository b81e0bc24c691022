"""Named constraint predicates used by the manifest validators.

Each predicate checks one rule against one value and returns a
:class:`Violation` or ``None``. Format predicates skip absent values; pair
them with :func:`required` when the field is mandatory.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Sized
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict

DATE_WITH_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
_DATE_WITH_TIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")

# OpenSLO duration shorthand: 1h, 30d, 4w, 1M, 1Q, 1Y
_DURATION_RE = re.compile(r"^[1-9][0-9]*[mhdwMQY]$")


class Violation(BaseModel):
    """A single broken rule on a manifest field."""

    model_config = ConfigDict(frozen=True)

    field: str
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message} ({self.rule})"


def is_present(value: Any) -> bool:
    """``None`` and the empty string count as absent; empty sequences do not."""
    return value is not None and value != ""


def required(value: Any, field: str) -> Violation | None:
    if is_present(value):
        return None
    return Violation(field=field, rule="required", message="field is required")


def required_if(
    value: Any, field: str, *, other: str, other_value: Any, expected: Any
) -> Violation | None:
    """``field`` is required when ``other`` equals ``expected``."""
    if other_value != expected or is_present(value):
        return None
    return Violation(
        field=field,
        rule="required_if",
        message=f"field is required when {other} is {_render(expected)}",
    )


def required_without(
    value: Any, field: str, *, other: str, other_value: Any
) -> Violation | None:
    """``field`` is required when ``other`` is absent."""
    if is_present(other_value) or is_present(value):
        return None
    return Violation(
        field=field,
        rule="required_without",
        message=f"field is required when {other} is not set",
    )


def excluded_with(
    value: Any, field: str, *, other: str, other_value: Any
) -> Violation | None:
    """``field`` must be absent when ``other`` is set."""
    if not (is_present(value) and is_present(other_value)):
        return None
    return Violation(
        field=field,
        rule="excluded_with",
        message=f"field must not be set together with {other}",
    )


def max_length(value: Sized | None, field: str, limit: int) -> Violation | None:
    if value is None or len(value) <= limit:
        return None
    return Violation(
        field=field,
        rule="max",
        message=f"length must be at most {limit}, got {len(value)}",
    )


def exact_length(value: Sized | None, field: str, length: int) -> Violation | None:
    if value is None or len(value) == length:
        return None
    return Violation(
        field=field,
        rule="len",
        message=f"must contain exactly {length} element(s), got {len(value)}",
    )


def one_of(value: Any, field: str, allowed: Collection[str]) -> Violation | None:
    if not is_present(value) or value in allowed:
        return None
    return Violation(
        field=field,
        rule="oneof",
        message=f"must be one of {', '.join(allowed)}, got {value!r}",
    )


def equals(value: Any, field: str, expected: Any) -> Violation | None:
    if not is_present(value) or value == expected:
        return None
    return Violation(
        field=field,
        rule="eq",
        message=f"must be {expected!r}, got {value!r}",
    )


def gte(value: float | None, field: str, bound: float) -> Violation | None:
    if value is None or value >= bound:
        return None
    return Violation(
        field=field, rule="gte", message=f"must be >= {bound}, got {value}"
    )


def lt(value: float | None, field: str, bound: float) -> Violation | None:
    if value is None or value < bound:
        return None
    return Violation(
        field=field, rule="lt", message=f"must be < {bound}, got {value}"
    )


def lte(value: float | None, field: str, bound: float) -> Violation | None:
    if value is None or value <= bound:
        return None
    return Violation(
        field=field, rule="lte", message=f"must be <= {bound}, got {value}"
    )


def date_with_time(value: str | None, field: str) -> Violation | None:
    """Value must be a ``YYYY-MM-DD HH:MM:SS`` timestamp."""
    if not is_present(value):
        return None
    if _DATE_WITH_TIME_RE.match(value):
        try:
            datetime.strptime(value, DATE_WITH_TIME_LAYOUT)
            return None
        except ValueError:
            pass
    return Violation(
        field=field,
        rule="date_with_time",
        message=f"must be a date with time formatted as YYYY-MM-DD HH:MM:SS, got {value!r}",
    )


def time_zone(value: str | None, field: str) -> Violation | None:
    """Value must name an IANA time zone."""
    if not is_present(value):
        return None
    try:
        ZoneInfo(value)
        return None
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return Violation(
            field=field,
            rule="time_zone",
            message=f"unknown time zone {value!r}",
        )


def duration(value: str | None, field: str) -> Violation | None:
    """Value must be a duration shorthand such as ``30d`` or ``1w``."""
    if not is_present(value) or _DURATION_RE.match(value):
        return None
    return Violation(
        field=field,
        rule="duration",
        message=f"invalid duration {value!r}, use e.g. '1h', '30d', '4w', '1M'",
    )


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
