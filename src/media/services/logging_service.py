"""In-process log capture for the media layer.

Attaches a ring-buffer handler to the ``media`` logger so diagnostics panels
and tests can inspect recent print start/stop decisions without configuring
global logging. Each captured record is re-published as
``MediaEvent.LOG_RECORD_ADDED`` when an event bus is supplied.
"""

from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass
import json
import logging
from pathlib import Path
from threading import RLock
from typing import Deque, List, Optional

from .event_bus import EventBus, MediaEvent

__all__ = ["LogEntry", "LoggingService"]


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float
    lineno: int


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__(level=logging.DEBUG)
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(
        self,
        capacity: int = 500,
        *,
        bus: EventBus | None = None,
        logger_name: str = "media",
    ) -> None:
        self._lock = RLock()
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._bus = bus
        self._logger_name = logger_name
        self._attached = False
        self._publishing = False

    # Lifecycle --------------------------------------------------------
    def attach(self) -> None:
        if self._attached:
            return
        logger = logging.getLogger(self._logger_name)
        logger.addHandler(self._handler)
        if logger.getEffectiveLevel() > logging.DEBUG:
            logger.setLevel(logging.DEBUG)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(self._logger_name).removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Ingestion --------------------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
            lineno=record.lineno,
        )
        with self._lock:
            self._entries.append(entry)
        # A failing LOG_RECORD_ADDED handler logs too; don't republish that.
        if self._bus is None or self._publishing:
            return
        self._publishing = True
        try:
            self._bus.publish(
                MediaEvent.LOG_RECORD_ADDED,
                {"level": entry.level, "name": entry.name, "message": entry.message[:120]},
            )
        finally:
            self._publishing = False

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        with self._lock:
            data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(self, *, level: str | None = None, name_contains: str | None = None) -> List[LogEntry]:
        return [
            e
            for e in self.recent()
            if (not level or e.level == level) and (not name_contains or name_contains in e.name)
        ]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def export_jsonl(self, path: str | Path, *, level: str | None = None) -> int:
        """Write (filtered) entries as JSON Lines; returns number of lines written."""
        entries = self.filter(level=level)
        with open(path, "w", encoding="utf-8") as fh:
            for e in entries:
                fh.write(json.dumps(asdict(e), sort_keys=True) + "\n")
        return len(entries)
