"""Media change notification value.

One ``MediaChange`` describes a single media query transition as delivered
by the change source. The value is immutable; transformations (alias
merging, print substitution) return copies so the emitter's instance is never
altered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .breakpoints import OptionalBreakpoint

__all__ = ["MediaChange", "merge_alias"]


@dataclass(frozen=True)
class MediaChange:
    """Single activation / deactivation notification.

    Attributes
    ----------
    matches: bool
        Whether the condition holds now.
    media_query: str
        The condition that changed.
    mq_alias: str
        Alias of the breakpoint registered for ``media_query`` (if any).
    suffix: str
        Breakpoint suffix, copied from the resolved breakpoint.
    priority: int
        Breakpoint priority, copied from the resolved breakpoint.
    property: str
        Pass-through metadata for consumers.
    value: Any
        Pass-through metadata for consumers.
    """

    matches: bool = False
    media_query: str = "all"
    mq_alias: str = ""
    suffix: str = ""
    priority: int = 0
    property: str = ""
    value: Any = None

    def clone(self, **changes: Any) -> "MediaChange":
        return replace(self, **changes)


def merge_alias(change: MediaChange, bp: OptionalBreakpoint) -> MediaChange:
    """Return a copy of ``change`` carrying the breakpoint's alias metadata."""
    if bp is None:
        return change.clone()
    return change.clone(
        mq_alias=bp.alias,
        media_query=bp.media_query,
        suffix=bp.suffix,
        priority=bp.priority,
    )
