"""Media marshaller: keeps the list of active breakpoints for the UI.

The marshaller is the default :class:`~media.print_hook.HookTarget`. It
listens to ``MEDIA_CHANGED`` events, passes every change through the print
hook's predicate, and only applies the changes that predicate lets through.
While printing, the hook owns ``activated_breakpoints`` outright.

Every re-render request is published as ``MediaEvent.STYLES_UPDATED`` with the
active aliases; actual styling happens in subscribers (e.g. the Qt bridge).
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .breakpoints import Breakpoint, BreakpointRegistry, sort_descending_priority
from .match_media import MatchMedia
from .media_change import MediaChange
from .print_hook import InterceptionPolicy
from .services.event_bus import Event, EventBus, MediaEvent, Subscription

__all__ = ["MediaMarshaller"]

_logger = logging.getLogger(__name__)


class MediaMarshaller:
    def __init__(
        self,
        registry: BreakpointRegistry,
        hook: InterceptionPolicy,
        bus: EventBus,
        match_media: MatchMedia,
    ) -> None:
        self.registry = registry
        self.hook = hook
        self._bus = bus
        self._match_media = match_media
        self.activated_breakpoints: List[Breakpoint] = []
        self.renders = 0
        self._gate: Callable[[MediaChange], bool] = hook.intercept(self)
        self._subscription: Optional[Subscription] = None

    # HookTarget ------------------------------------------------------
    def update_styles(self) -> None:
        self.renders += 1
        self._bus.publish(
            MediaEvent.STYLES_UPDATED,
            {
                "aliases": self.activated_aliases,
                "renders": self.renders,
                "printing": self.hook.is_printing,
            },
        )

    # Lifecycle -------------------------------------------------------
    def observe(self) -> None:
        """Subscribe to media changes and register all breakpoint queries."""
        if self._subscription is not None:
            return
        self._subscription = self._bus.subscribe(MediaEvent.MEDIA_CHANGED, self._on_event)
        self._match_media.observe(self.hook.with_print_query(self.registry.media_queries))

    def close(self) -> None:
        if self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
            self._subscription = None

    # Introspection ---------------------------------------------------
    @property
    def activated_aliases(self) -> List[str]:
        return [bp.alias for bp in self.activated_breakpoints]

    @property
    def activated_alias(self) -> str:
        return self.activated_breakpoints[0].alias if self.activated_breakpoints else ""

    def is_active(self, alias: str) -> bool:
        return alias in self.activated_aliases

    # Internal --------------------------------------------------------
    def _on_event(self, event: Event) -> None:
        change: MediaChange = event.payload
        if self._gate(change):
            self.on_media_change(change)

    def on_media_change(self, change: MediaChange) -> None:
        """Apply one propagated change to the active list."""
        bp = self.registry.find_by_query(change.media_query)
        if bp is None:
            return
        queries = [it.media_query for it in self.activated_breakpoints]
        if change.matches and bp.media_query not in queries:
            self.activated_breakpoints = sort_descending_priority(
                [*self.activated_breakpoints, bp]
            )
        elif not change.matches and bp.media_query in queries:
            self.activated_breakpoints = [
                it for it in self.activated_breakpoints if it.media_query != bp.media_query
            ]
        else:
            return
        _logger.debug("Active breakpoints: %s", self.activated_aliases)
        self.update_styles()
