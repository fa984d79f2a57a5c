"""Shared lookup for the collaborators wired by ``create_media_context``.

GUI code that cannot be handed a ``MediaContext`` fetches the live objects by
name instead::

    from media.services.service_locator import services
    hook = services.get_typed("print_hook", InterceptionPolicy)

``MEDIA_SERVICE_KEYS`` lists the names bootstrap fills in. Tests substitute
fakes for a block of code with ``override_context``.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Iterator, Type, TypeVar

T = TypeVar("T")

__all__ = [
    "MEDIA_SERVICE_KEYS",
    "ServiceLocator",
    "services",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
]

MEDIA_SERVICE_KEYS = (
    "event_bus",
    "layout_config",
    "breakpoint_registry",
    "print_hook",
    "match_media",
    "media_marshaller",
    "media_observer",
    "logging_service",
)

_MISSING = object()


class ServiceAlreadyRegisteredError(RuntimeError):
    pass


class ServiceNotFoundError(KeyError):
    pass


class ServiceLocator:
    """Name -> media collaborator mapping, safe to share across threads."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if not allow_override and key in self._entries:
                raise ServiceAlreadyRegisteredError(f"'{key}' is already wired")
            self._entries[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            raise ServiceNotFoundError(key)
        return value

    def get_typed(self, key: str, expected_type: Type[T]) -> T:
        value = self.get(key)
        if not isinstance(value, expected_type):
            raise TypeError(f"'{key}' is {type(value).__name__}, not {expected_type.__name__}")
        return value

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    @contextmanager
    def override_context(self, **overrides: Any) -> Iterator[None]:
        """Swap in ``overrides`` for the duration of the block."""
        with self._lock:
            saved = {key: self._entries.get(key, _MISSING) for key in overrides}
            self._entries.update(overrides)
        try:
            yield
        finally:
            with self._lock:
                for key, prior in saved.items():
                    if prior is _MISSING:
                        self._entries.pop(key, None)
                    else:
                        self._entries[key] = prior

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


services = ServiceLocator()
