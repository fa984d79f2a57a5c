"""Synchronous in-process event bus for media notifications.

Carries media query changes from the change source to its subscribers, and
re-render / activation notices from the marshaller and observer to the UI.

Properties:
 - Delivery is synchronous, in subscription order, on the publisher's thread.
 - A failing handler never stops the remaining handlers; the failure is kept
   in ``errors`` and logged.
 - One-shot (``once``) subscriptions and cancellable handles.
 - Optional tracing ring buffer of recent events for diagnostics.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
from threading import RLock
from time import perf_counter
from typing import Any, Deque, Dict, List, Protocol, Tuple

__all__ = [
    "MediaEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
    "TraceEntry",
]

_logger = logging.getLogger(__name__)


class MediaEvent(str, Enum):
    MEDIA_CHANGED = "media_changed"  # payload: MediaChange
    MEDIA_ACTIVATIONS = "media_activations"  # payload: list[MediaChange]
    STYLES_UPDATED = "styles_updated"  # payload: dict(aliases, renders, printing)
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(frozen=True)
class TraceEntry:
    name: str
    timestamp: float
    summary: str


def _key(name: str | MediaEvent) -> str:
    return name.value if isinstance(name, MediaEvent) else name


class EventBus:
    """Publish/subscribe dispatcher.

    Handlers are called with the lock released (subscribers are snapshotted
    first), so a handler may publish or (un)subscribe without deadlocking.
    """

    DEFAULT_TRACE_CAPACITY = 50

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []
        self._tracing_enabled = False
        self._traces: Deque[Tuple[str, float, str]] = deque(maxlen=self.DEFAULT_TRACE_CAPACITY)

    # Subscriptions -----------------------------------------------------
    def subscribe(
        self, name: str | MediaEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = [s for s in self._subs.get(sub.event, ()) if s is not sub]
            if bucket:
                self._subs[sub.event] = bucket
            else:
                self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # Publishing --------------------------------------------------------
    def publish(self, name: str | MediaEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
            if self._tracing_enabled:
                text = "-" if payload is None else str(payload)
                summary = text if len(text) <= 40 else text[:37] + "..."
                self._traces.append((evt.name, evt.timestamp, summary))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.exception("Handler for %s failed", evt.name)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    # Introspection -----------------------------------------------------
    def subscriber_count(self, name: str | MediaEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    def list_events(self) -> list[str]:
        with self._lock:
            return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)

    # Tracing -----------------------------------------------------------
    def enable_tracing(self, enabled: bool = True, *, capacity: int | None = None) -> None:
        with self._lock:
            self._tracing_enabled = enabled
            if capacity is not None and capacity != self._traces.maxlen:
                self._traces = deque(self._traces, maxlen=capacity)

    def recent_trace_entries(self) -> list[TraceEntry]:
        with self._lock:
            return [TraceEntry(name=n, timestamp=ts, summary=s) for (n, ts, s) in self._traces]

    @property
    def tracing_enabled(self) -> bool:
        with self._lock:
            return self._tracing_enabled
