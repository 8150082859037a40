"""Offset pagination: limit/cursor parsing and ``hasMore`` inference."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, Sequence, TypeVar

from core.constants import DEFAULT_CURSOR, DEFAULT_LIMIT, MAX_LIMIT

T = TypeVar("T")

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # Reads the leading integer like parseInt: "10abc" -> 10, "3.7" -> 3.
    match = _LEADING_INT.match(str(value).strip())
    return int(match.group(), 10) if match else None


def clamp_limit(value: Any = None) -> int:
    """Clamp a raw ``limit`` to 1..100; unset, without leading digits or <= 0 gives 25."""
    parsed = _parse_int(value)
    if parsed is None or parsed <= 0:
        return DEFAULT_LIMIT
    return min(parsed, MAX_LIMIT)


def parse_cursor(value: Any = None) -> int:
    """Parse a raw ``cursor`` offset; unset, without leading digits or negative gives 0."""
    parsed = _parse_int(value)
    if parsed is None or parsed < 0:
        return DEFAULT_CURSOR
    return parsed


def page_window(cursor: int, limit: int) -> tuple[int, int]:
    """Inclusive ``(start, end)`` row range for a page."""
    return cursor, cursor + limit - 1


def compute_has_more(cursor: int, returned: int, limit: int, total: Optional[int] = None) -> bool:
    # An exact count from the store wins; the full-page check is only a fallback.
    if total is not None:
        return cursor + returned < total
    return returned == limit


@dataclass(slots=True)
class Page(Generic[T]):
    items: Sequence[T]
    cursor: int
    limit: int
    total: Optional[int] = None
    next_cursor: int = field(init=False)
    has_more: bool = field(init=False)

    def __post_init__(self) -> None:
        self.next_cursor = self.cursor + len(self.items)
        self.has_more = compute_has_more(self.cursor, len(self.items), self.limit, self.total)

    def to_body(self, items: Optional[list[Any]] = None) -> dict[str, Any]:
        return {
            "data": list(self.items) if items is None else items,
            "cursor": self.next_cursor,
            "hasMore": self.has_more,
        }


__all__ = ["Page", "clamp_limit", "compute_has_more", "page_window", "parse_cursor"]
