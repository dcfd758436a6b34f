"""Coercion helpers for loosely typed front matter and sidecar values.

Authors write ``order: "2"`` as often as ``order: 2``, and ``updatedAt`` may
arrive as a YAML timestamp, a date, or a free-form string. These helpers turn
such values into the narrow types the ordering engine compares, returning
``None`` for anything that cannot be interpreted rather than raising.
"""

from __future__ import annotations

import datetime as dt
import math
import typing as typ

Order = int | float


def coerce_order(value: object) -> Order | None:
    """Return ``value`` as a finite number, or ``None`` when not numeric.

    Examples
    --------
    >>> coerce_order(3)
    3
    >>> coerce_order(" 2.5 ")
    2.5
    >>> coerce_order(True) is None
    True
    >>> coerce_order("first") is None
    True
    """
    match value:
        case bool():
            return None
        case int():
            return value
        case float():
            return value if math.isfinite(value) else None
        case str() as text:
            stripped = text.strip()
            if not stripped:
                return None
            try:
                return int(stripped)
            except ValueError:
                pass
            try:
                number = float(stripped)
            except ValueError:
                return None
            return number if math.isfinite(number) else None
        case _:
            return None


def coerce_order_mapping(value: object) -> dict[str, Order] | None:
    """Return a ``name -> order`` mapping, dropping non-numeric entries.

    ``None`` is returned when ``value`` is not a mapping at all so callers can
    tell "absent" apart from "present but empty".
    """
    if not isinstance(value, typ.Mapping):
        return None
    result: dict[str, Order] = {}
    for key, raw in value.items():
        order = coerce_order(raw)
        if order is not None:
            result[str(key)] = order
    return result


def optional_text(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_timestamp(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None.

    Examples
    --------
    >>> parse_timestamp("2024-05-01T10:00:00Z").isoformat()
    '2024-05-01T10:00:00+00:00'
    >>> parse_timestamp(dt.date(2024, 5, 1)).isoformat()
    '2024-05-01T00:00:00+00:00'
    >>> parse_timestamp("soon") is None
    True
    """
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "Order",
    "coerce_order",
    "coerce_order_mapping",
    "optional_text",
    "parse_timestamp",
]
