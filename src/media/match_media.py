"""Media query evaluation and change source.

``MatchMedia`` plays the host role: it knows the current viewport width and
whether the document is being rendered for print, evaluates every registered
media query against that state, and publishes a ``MediaChange`` on the event
bus for each query whose result flipped.

Delivery order per update: all deactivations first, then all activations,
each group in registration order. Entering print therefore reports the
screen breakpoints going away before ``print`` starts matching.

Supported query grammar (subset of CSS media queries)::

    query_list := query ("," query)*
    query      := ["only" | "not"] [media_type] ("and" feature)*
                | feature ("and" feature)*
    media_type := "all" | "screen" | "print"
    feature    := "(" ("min-width" | "max-width") ":" number "px" ")"
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Set

from .media_change import MediaChange
from .services.event_bus import EventBus, MediaEvent

__all__ = ["MediaQueryError", "evaluate_query", "MatchMedia"]

_logger = logging.getLogger(__name__)

_MEDIA_TYPES = {"all", "screen", "print"}
_FEATURE_RE = re.compile(r"^\(\s*(min|max)-width\s*:\s*(\d+(?:\.\d+)?)px\s*\)$")
_AND_RE = re.compile(r"\s+and\s+")


class MediaQueryError(ValueError):
    """Raised for media queries outside the supported grammar."""


def _evaluate_single(query: str, width: float, printing: bool) -> bool:
    text = query.strip().lower()
    if not text:
        raise MediaQueryError("empty media query")
    negate = False
    head, _, rest = text.partition(" ")
    if head in ("not", "only"):
        negate = head == "not"
        text = rest.strip()
    parts = _AND_RE.split(text)
    result = True
    if not parts[0].startswith("("):
        media_type = parts.pop(0)
        if media_type not in _MEDIA_TYPES:
            raise MediaQueryError(f"unknown media type: {media_type!r}")
        if media_type == "print":
            result = printing
        elif media_type == "screen":
            result = not printing
    elif negate:
        raise MediaQueryError("'not' requires a media type")
    for feature in parts:
        m = _FEATURE_RE.match(feature.strip())
        if m is None:
            raise MediaQueryError(f"unsupported media feature: {feature!r}")
        bound = float(m.group(2))
        result = result and (width >= bound if m.group(1) == "min" else width <= bound)
    return not result if negate else result


def evaluate_query(query: str, width: float, printing: bool = False) -> bool:
    """True when any query in the comma separated list matches."""
    return any(_evaluate_single(q, width, printing) for q in query.split(","))


class MatchMedia:
    """Evaluates registered queries and publishes their transitions."""

    def __init__(self, bus: EventBus, *, width: float = 0, printing: bool = False) -> None:
        self._bus = bus
        self._width = width
        self._printing = printing
        self._states: Dict[str, bool] = {}
        self._invalid: Set[str] = set()

    @property
    def width(self) -> float:
        return self._width

    @property
    def printing(self) -> bool:
        return self._printing

    @property
    def activations(self) -> List[str]:
        """Currently matching queries, registration order."""
        return [q for q, active in self._states.items() if active]

    @property
    def registered(self) -> List[str]:
        return list(self._states)

    def is_active(self, query: str) -> bool:
        return self._states.get(query, False)

    def register_query(self, queries: str | Iterable[str]) -> List[str]:
        """Register queries silently; returns the newly added ones."""
        items = [queries] if isinstance(queries, str) else list(queries)
        added = []
        for query in items:
            if query in self._states:
                continue
            self._states[query] = self._matches(query)
            added.append(query)
        return added

    def observe(self, queries: str | Iterable[str]) -> List[MediaChange]:
        """Register queries and publish activations for those already matching."""
        changes = [
            MediaChange(matches=True, media_query=q)
            for q in self.register_query(queries)
            if self._states[q]
        ]
        for change in changes:
            self._bus.publish(MediaEvent.MEDIA_CHANGED, change)
        return changes

    def update(
        self, width: Optional[float] = None, printing: Optional[bool] = None
    ) -> List[MediaChange]:
        """Apply a new viewport state and publish every flipped query."""
        if width is not None:
            self._width = width
        if printing is not None:
            self._printing = printing
        deactivated: List[MediaChange] = []
        activated: List[MediaChange] = []
        for query, was_active in self._states.items():
            now = self._matches(query)
            if now == was_active:
                continue
            change = MediaChange(matches=now, media_query=query)
            (activated if now else deactivated).append(change)
        changes = deactivated + activated
        for change in changes:
            self._states[change.media_query] = change.matches
            self._bus.publish(MediaEvent.MEDIA_CHANGED, change)
        return changes

    def _matches(self, query: str) -> bool:
        try:
            return evaluate_query(query, self._width, self._printing)
        except MediaQueryError as exc:
            if query not in self._invalid:
                self._invalid.add(query)
                _logger.warning("Ignoring media query %r: %s", query, exc)
            return False
