"""Breakpoint registry.

Maps aliases and media queries to :class:`Breakpoint` descriptors. Lookups by
alias or query return ``None`` when nothing matches; callers treat that as an
expected outcome. ``get`` is the strict variant raising ``KeyError``.

Lookups are memoised per key; the memo is dropped whenever a breakpoint is
registered.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .break_point import DEFAULT_BREAKPOINTS, Breakpoint
from .tools import sort_ascending_priority

__all__ = ["BreakpointRegistry"]


class BreakpointRegistry:
    """Lookup service for breakpoints, keyed by alias and by media query."""

    def __init__(self, breakpoints: Iterable[Breakpoint] | None = None) -> None:
        self._items: List[Breakpoint] = []
        self._by_alias: Dict[str, Breakpoint] = {}
        self._by_query: Dict[str, Breakpoint] = {}
        self._memo: Dict[str, Optional[Breakpoint]] = {}
        source = DEFAULT_BREAKPOINTS if breakpoints is None else breakpoints
        for bp in source:
            self.register(bp)

    def register(self, bp: Breakpoint) -> None:
        if bp.alias and bp.alias in self._by_alias:
            raise ValueError(f"Duplicate breakpoint alias: {bp.alias}")
        if bp.media_query in self._by_query:
            raise ValueError(f"Duplicate breakpoint media query: {bp.media_query}")
        self._items.append(bp)
        if bp.alias:
            self._by_alias[bp.alias] = bp
        self._by_query[bp.media_query] = bp
        self._memo.clear()

    # Lookup ------------------------------------------------------------
    def find_by_alias(self, alias: str) -> Optional[Breakpoint]:
        return self._find(f"alias:{alias}", lambda: self._by_alias.get(alias))

    def find_by_query(self, query: str) -> Optional[Breakpoint]:
        return self._find(f"query:{query}", lambda: self._by_query.get(query))

    def get(self, alias: str) -> Breakpoint:
        bp = self.find_by_alias(alias)
        if bp is None:
            raise KeyError(f"Unknown breakpoint alias: {alias}")
        return bp

    def _find(self, key: str, lookup) -> Optional[Breakpoint]:
        if key not in self._memo:
            self._memo[key] = lookup()
        return self._memo[key]

    # Introspection -----------------------------------------------------
    @property
    def items(self) -> List[Breakpoint]:
        """All breakpoints, ascending priority (stable)."""
        return sort_ascending_priority(self._items)

    @property
    def aliases(self) -> List[str]:
        return [bp.alias for bp in self.items if bp.alias]

    @property
    def media_queries(self) -> List[str]:
        return [bp.media_query for bp in self.items]

    @property
    def overlappings(self) -> List[Breakpoint]:
        return [bp for bp in self.items if bp.overlapping]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Breakpoint]:
        return iter(self.items)

    def __contains__(self, alias_or_query: object) -> bool:
        return alias_or_query in self._by_alias or alias_or_query in self._by_query
