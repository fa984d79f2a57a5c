"""Media observer: publishes the full set of current activations.

Where the marshaller tracks breakpoints for rendering, the observer answers
"what is active right now" in ``MediaChange`` form. Print activations are
replaced by the highest-priority print breakpoint through
:meth:`InterceptionPolicy.update_event`, so observers see ``md`` (or
``print.md``) rather than a bare ``print`` query.
"""

from __future__ import annotations

from typing import List, Optional

from .breakpoints import BreakpointRegistry, sort_descending_priority
from .match_media import MatchMedia
from .media_change import MediaChange, merge_alias
from .print_hook import InterceptionPolicy
from .services.event_bus import Event, EventBus, MediaEvent, Subscription

__all__ = ["MediaObserver"]


class MediaObserver:
    def __init__(
        self,
        registry: BreakpointRegistry,
        hook: InterceptionPolicy,
        match_media: MatchMedia,
        bus: EventBus,
        *,
        filter_overlaps: bool = False,
    ) -> None:
        self.registry = registry
        self.hook = hook
        self.filter_overlaps = filter_overlaps
        self._match_media = match_media
        self._bus = bus
        self._subscription: Optional[Subscription] = None
        self.last: List[MediaChange] = []

    def observe(self) -> None:
        if self._subscription is not None:
            return
        self._match_media.register_query(self.hook.with_print_query(self.registry.media_queries))
        self._subscription = self._bus.subscribe(MediaEvent.MEDIA_CHANGED, self._on_event)

    def close(self) -> None:
        if self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
            self._subscription = None

    def find_all_activations(self) -> List[MediaChange]:
        changes = []
        for query in self._match_media.activations:
            change = MediaChange(matches=True, media_query=query)
            if self.hook.is_print_event(change):
                change = self.hook.update_event(change)
            if not change.media_query:
                # Print with nothing to stand in for it.
                continue
            changes.append(merge_alias(change, self.registry.find_by_query(change.media_query)))
        if self.filter_overlaps:
            overlapping = {bp.media_query for bp in self.registry.overlappings}
            changes = [c for c in changes if c.media_query not in overlapping]
        return sort_descending_priority(changes)

    def is_active(self, alias_or_query: str) -> bool:
        bp = self.registry.find_by_alias(alias_or_query)
        query = bp.media_query if bp else alias_or_query
        return any(c.media_query == query for c in self.find_all_activations())

    def _on_event(self, event: Event) -> None:
        change: MediaChange = event.payload
        if not change.matches:
            return
        activations = self.find_all_activations()
        if activations:
            self.last = activations
            self._bus.publish(MediaEvent.MEDIA_ACTIVATIONS, activations)
