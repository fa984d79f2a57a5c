"""Ordering helpers shared by the registry, the print hook and the marshaller."""

from __future__ import annotations

from typing import Iterable, List, Optional, TypeVar

from .break_point import PRINT, Breakpoint

__all__ = [
    "priority_of",
    "sort_descending_priority",
    "sort_ascending_priority",
    "is_print_breakpoint",
]

T = TypeVar("T")


def priority_of(item: object) -> int:
    """Priority of a breakpoint-like object; ``None`` and missing count as 0."""
    return int(getattr(item, "priority", 0) or 0)


def sort_descending_priority(items: Iterable[T]) -> List[T]:
    """Return a new list ordered by descending priority.

    ``sorted`` is stable, so equal priorities keep their input order (alias
    configuration order must survive ties).
    """
    return sorted(items, key=lambda it: -priority_of(it))


def sort_ascending_priority(items: Iterable[T]) -> List[T]:
    return sorted(items, key=priority_of)


def is_print_breakpoint(bp: Optional[Breakpoint]) -> bool:
    """True when the breakpoint's media query denotes the print context."""
    return bp.media_query.startswith(PRINT) if bp else False
