"""
Field coercion helpers shared by every importer.

All functions here are total: they never raise on bad input, they fall back
to the supplied default instead. Keeping the defaulting rules in one place
means every format fills gaps the same way.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Callable, TypeVar

T = TypeVar("T")

# Leading integer, as a character sheet would write it: "17", "+2", "12 (base)"
_LEADING_INT = re.compile(r"^[+-]?\d+")


def parse_int_or(raw: Any, default: int, minimum: int | None = None) -> int:
    """Parse an integer from a loosely typed value.

    Args:
        raw: An int, float, numeric string, or anything else.
        default: Value returned when ``raw`` holds no usable integer.
        minimum: Optional lower bound; smaller values also yield ``default``.

    Returns:
        The parsed integer, or ``default``.
    """
    value: int | None = None

    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        value = int(raw) if math.isfinite(raw) else None
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw.strip())
        if match:
            try:
                value = int(match.group(0))
            except ValueError:
                # Longer than the interpreter's int string conversion limit
                value = None

    if value is None:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def string_or(raw: Any, default: str) -> str:
    """Return ``raw`` stripped if it is a non-blank string, else ``default``."""
    if isinstance(raw, str):
        stripped = raw.strip()
        if stripped:
            return stripped
    return default


def id_or(raw: Any, default: str) -> str:
    """Return a source id as text.

    Strings are stripped; integer ids (JSON numbers) are kept as their decimal
    text. Anything else, blank strings included, yields ``default``.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        try:
            return str(raw)
        except ValueError:
            return default
    return string_or(raw, default)


def list_or(
    raw: Any,
    map_fn: Callable[[Any], T | None],
    default: list[T] | None = None,
) -> list[T]:
    """Map a list through ``map_fn``, dropping entries it rejects.

    Args:
        raw: Candidate list from the source document.
        map_fn: Converts one element; returns None for unusable elements.
        default: Returned (as a copy) when ``raw`` is not a list.

    Returns:
        A new list; never None.
    """
    if not isinstance(raw, list):
        return list(default) if default else []

    result: list[T] = []
    for element in raw:
        mapped = map_fn(element)
        if mapped is not None:
            result.append(mapped)
    return result


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts and lists, returning None at the first missing step.

    >>> dig({"data": {"hp": {"value": 7}}}, "data", "hp", "value")
    7
    >>> dig({"stats": [{"value": 16}]}, "stats", 3, "value") is None
    True
    """
    current = data
    for step in path:
        if isinstance(step, int) and isinstance(current, list):
            if -len(current) <= step < len(current):
                current = current[step]
            else:
                return None
        elif isinstance(step, str) and isinstance(current, dict):
            current = current.get(step)
        else:
            return None
        if current is None:
            return None
    return current


def parse_datetime_or(raw: Any, default_factory: Callable[[], datetime]) -> datetime:
    """Parse a timestamp, falling back to ``default_factory()``.

    Accepts datetime instances, ISO-8601 strings (a trailing ``Z`` included),
    and epoch milliseconds as written by JavaScript ``Date.getTime()``.
    """
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw.strip():
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return default_factory()
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000)
        except (OverflowError, OSError, ValueError):
            return default_factory()
    return default_factory()
