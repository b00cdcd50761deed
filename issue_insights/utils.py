"""Shared utility helpers for the issue insights toolkit."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Hashable, Iterable, List, Optional, TypeVar

from .constants import SECONDS_PER_DAY, SECONDS_PER_HOUR

T = TypeVar('T', bound=Hashable)

__all__ = [
    "utc_now",
    "parse_timestamp",
    "hours_between",
    "days_between",
    "unique_in_order",
    "clamp",
    "truncate_text",
]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a tracker timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects and ISO-8601 strings, including the ``Z``
    suffix GitHub uses. Naive values are assumed to be UTC.

    Args:
        value: Raw timestamp value

    Returns:
        Parsed datetime, or None when the value is missing or unparsable
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def hours_between(start: datetime, end: datetime) -> float:
    """Return the signed number of hours from ``start`` to ``end``."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def days_between(start: datetime, end: datetime) -> float:
    """Return the signed number of days from ``start`` to ``end``."""
    return (end - start).total_seconds() / SECONDS_PER_DAY


def unique_in_order(items: Iterable[T]) -> List[T]:
    """Drop duplicates while keeping first-seen order."""
    return list(dict.fromkeys(items))


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def truncate_text(text: str, max_length: int) -> str:
    """Shorten ``text`` to ``max_length`` characters with a trailing ellipsis."""
    if len(text) <= max_length:
        return text
    if max_length <= 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."
