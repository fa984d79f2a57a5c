"""Print interception for media breakpoint activations.

Hosts report print rendering only as a ``print`` media query that starts or
stops matching; there is no "about to print" signal. Breakpoints that were
active before printing are deactivated *before* the print activation arrives,
so the state to restore afterwards is rebuilt from deactivations:

 When not printing:
   - clear the restore cache when a non-print breakpoint activates
   - record (and sort) a breakpoint when it deactivates

 When printing:
   - force the print breakpoints onto the target when print starts
   - restore the cached breakpoints and clear the queue when print stops

The policy assumes the change source delivers those deactivations before the
print activation; it cannot verify that order.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Protocol

from .breakpoints import (
    BREAKPOINT_PRINT,
    PRINT,
    Breakpoint,
    BreakpointRegistry,
    OptionalBreakpoint,
    is_print_breakpoint,
    sort_descending_priority,
)
from .config_store import LayoutConfig
from .media_change import MediaChange, merge_alias

__all__ = [
    "HookTarget",
    "InterceptionPolicy",
    "PrintActivationQueue",
    "RestoreCache",
    "BREAKPOINT_PRINT",
]

_logger = logging.getLogger(__name__)


class HookTarget(Protocol):
    """Consumer whose active breakpoints the policy replaces."""

    activated_breakpoints: List[Breakpoint]

    def update_styles(self) -> None: ...  # pragma: no cover - structural


class PrintActivationQueue:
    """Deduplicated, priority ordered breakpoints forced while printing."""

    def __init__(self) -> None:
        self._bps: List[Breakpoint] = []

    def add_all(self, candidates: Iterable[OptionalBreakpoint]) -> List[Breakpoint]:
        bp_list = sort_descending_priority([*candidates, BREAKPOINT_PRINT])
        for bp in bp_list:
            self.add(bp)
        return self.snapshot()

    def add(self, bp: OptionalBreakpoint) -> None:
        if not bp or bp in self:
            return
        # True print breakpoints take the top slot; forced aliases queue behind.
        if is_print_breakpoint(bp):
            self._bps.insert(0, bp)
        else:
            self._bps.append(bp)

    def clear(self) -> None:
        self._bps.clear()

    @property
    def is_empty(self) -> bool:
        return not self._bps

    def snapshot(self) -> List[Breakpoint]:
        return list(self._bps)

    def __len__(self) -> int:
        return len(self._bps)

    def __iter__(self) -> Iterator[Breakpoint]:
        return iter(self.snapshot())

    def __contains__(self, bp: object) -> bool:
        query = getattr(bp, "media_query", None)
        return any(it.media_query == query for it in self._bps)


class RestoreCache:
    """Breakpoints known to be active right before printing began."""

    def __init__(self) -> None:
        self._bps: List[Breakpoint] = []

    def record(self, bp: Breakpoint) -> None:
        if any(it.media_query == bp.media_query for it in self._bps):
            return
        self._bps = sort_descending_priority([*self._bps, bp])

    def clear(self) -> None:
        self._bps = []

    def snapshot(self) -> List[Breakpoint]:
        return list(self._bps)

    def __len__(self) -> int:
        return len(self._bps)

    def __iter__(self) -> Iterator[Breakpoint]:
        return iter(self.snapshot())


class InterceptionPolicy:
    """Intercept print media activations and force print breakpoints.

    Parameters
    ----------
    registry: BreakpointRegistry
        Lookup service for aliases and media queries.
    config: LayoutConfig
        Source of ``print_with_breakpoints``.
    """

    def __init__(self, registry: BreakpointRegistry, config: LayoutConfig) -> None:
        self.registry = registry
        self.config = config
        self.restore_cache = RestoreCache()
        self.queue = PrintActivationQueue()

    def with_print_query(self, queries: Iterable[str]) -> List[str]:
        """Add the ``print`` media query so print transitions get reported."""
        return [*queries, PRINT]

    def is_print_event(self, event: MediaChange) -> bool:
        return event.media_query.startswith(PRINT)

    @property
    def is_printing(self) -> bool:
        return not self.queue.is_empty

    @property
    def print_alias(self) -> List[str]:
        return list(self.config.print_with_breakpoints or [])

    @property
    def print_breakpoints(self) -> List[Breakpoint]:
        found = (self.registry.find_by_alias(alias) for alias in self.print_alias)
        return [bp for bp in found if bp is not None]

    def get_event_breakpoints(self, event: MediaChange) -> List[Breakpoint]:
        """Breakpoints about to become active for a print transition."""
        bp = self.registry.find_by_query(event.media_query)
        candidates = self.print_breakpoints
        if bp is not None:
            candidates.append(bp)
        return sort_descending_priority(candidates)

    def update_event(self, event: MediaChange) -> MediaChange:
        """Return ``event`` with alias metadata; print events point at the top print breakpoint."""
        bp = self.registry.find_by_query(event.media_query)
        if self.is_print_event(event):
            candidates = self.get_event_breakpoints(event)
            bp = candidates[0] if candidates else None
            event = event.clone(media_query=bp.media_query if bp else "")
        return merge_alias(event, bp)

    def intercept(self, target: HookTarget) -> Callable[[MediaChange], bool]:
        """Build a filter predicate; ``False`` means the event must not propagate."""

        def predicate(event: MediaChange) -> bool:
            if self.is_print_event(event):
                if event.matches:
                    self.start_printing(target, self.get_event_breakpoints(event))
                else:
                    self.stop_printing(target)
                target.update_styles()
            else:
                self.collect_activations(event)
            return not (self.is_printing or self.is_print_event(event))

        return predicate

    def start_printing(self, target: HookTarget, candidates: Iterable[OptionalBreakpoint]) -> None:
        target.activated_breakpoints = self.queue.add_all(candidates)
        _logger.info(
            "Print started; forcing %s",
            [bp.alias or bp.media_query for bp in target.activated_breakpoints],
        )
        if not len(self.restore_cache):
            _logger.debug("Print started with an empty restore cache")

    def stop_printing(self, target: HookTarget) -> None:
        if not self.is_printing:
            return
        self.queue.clear()
        target.activated_breakpoints = self.restore_cache.snapshot()
        _logger.info(
            "Print stopped; restoring %s",
            [bp.alias or bp.media_query for bp in target.activated_breakpoints],
        )

    def collect_activations(self, event: MediaChange) -> None:
        if event.matches:
            # A new activation invalidates the deactivation history.
            self.restore_cache.clear()
            return
        bp = self.registry.find_by_query(event.media_query)
        if bp is not None:
            self.restore_cache.record(bp)
            _logger.debug("Recorded deactivation of %s", bp.alias or bp.media_query)
