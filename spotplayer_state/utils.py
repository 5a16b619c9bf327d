"""Small formatting and URI helpers."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def format_duration(seconds: float | timedelta) -> str:
    """Format a duration as ``minutes:seconds``, seconds zero-padded to two digits."""
    total = seconds.total_seconds() if isinstance(seconds, timedelta) else seconds
    secs = int(total)
    minutes = abs(secs) // 60
    if secs < 0:
        minutes = -minutes
    remainder = secs - minutes * 60
    return f"{minutes}:{remainder:02}"


def map_join(items: Iterable[T], func: Callable[[T], str], sep: str) -> str:
    """Join ``func(item)`` for every item, placing ``sep`` only after a non-empty prefix."""
    result = ""
    for item in items:
        piece = func(item)
        result = result + piece if not result else result + sep + piece
    return result


def parse_uri(uri: str) -> str:
    """Normalise a ``spotify:user:{user}:{type}:{id}`` URI into ``spotify:{type}:{id}``."""
    parts = uri.split(":")
    if len(parts) == 5:
        return ":".join((parts[0], parts[3], parts[4]))
    return uri