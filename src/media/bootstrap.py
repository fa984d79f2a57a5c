"""Media layer bootstrap.

Builds the collaborators in dependency order and registers them on the
service locator:

    event_bus -> layout_config -> breakpoint_registry -> print_hook
      -> match_media -> media_marshaller / media_observer

Every call produces fresh instances and overrides earlier registrations so
tests get isolated contexts. Qt is not touched here; the Qt bridge is wired by
the GUI layer on top of the returned context.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import time
from typing import Optional

from .breakpoints import BreakpointRegistry
from .config_store import LayoutConfig, build_registry, load_config
from .marshaller import MediaMarshaller
from .match_media import MatchMedia
from .observer import MediaObserver
from .print_hook import InterceptionPolicy
from .services.event_bus import EventBus
from .services.logging_service import LoggingService
from .services.service_locator import MEDIA_SERVICE_KEYS, ServiceLocator, services

__all__ = ["MediaContext", "create_media_context"]

_logger = logging.getLogger(__name__)


@dataclass
class MediaContext:
    """References created during bootstrap.

    Attributes
    ----------
    bus: Event bus carrying media changes and style updates
    config: Layout configuration in effect
    registry: Breakpoint registry
    hook: Print interception policy
    match_media: Media query change source
    marshaller: Active breakpoint tracker (HookTarget)
    observer: Activation list publisher
    logging_service: Ring buffer of ``media`` log records (None if disabled)
    services: Service locator holding the above
    duration_s: Elapsed bootstrap time
    """

    bus: EventBus
    config: LayoutConfig
    registry: BreakpointRegistry
    hook: InterceptionPolicy
    match_media: MatchMedia
    marshaller: MediaMarshaller
    observer: MediaObserver
    logging_service: Optional[LoggingService]
    services: ServiceLocator
    duration_s: float

    def close(self) -> None:
        """Unsubscribe listeners and detach log capture."""
        self.observer.close()
        self.marshaller.close()
        if self.logging_service is not None:
            self.logging_service.detach()


def create_media_context(
    *,
    config: LayoutConfig | None = None,
    base_dir: str | Path | None = None,
    registry: BreakpointRegistry | None = None,
    width: float = 0,
    capture_logs: bool = True,
    locator: ServiceLocator | None = None,
) -> MediaContext:
    """Create, wire and register the media layer.

    Parameters
    ----------
    config: Explicit config; loaded from ``base_dir`` when None.
    registry: Explicit registry; built from the config when None.
    width: Initial viewport width reported to ``MatchMedia``.
    capture_logs: Attach a ``LoggingService`` to the ``media`` logger.
    locator: Service locator to register into (global ``services`` by default).
    """
    started = time.perf_counter()
    loc = locator if locator is not None else services
    bus = EventBus()
    cfg = config if config is not None else load_config(base_dir)
    reg = registry if registry is not None else build_registry(cfg)
    hook = InterceptionPolicy(reg, cfg)
    match_media = MatchMedia(bus, width=width)
    log_svc = None
    if capture_logs:
        log_svc = LoggingService(bus=bus)
        log_svc.attach()
    marshaller = MediaMarshaller(reg, hook, bus, match_media)
    observer = MediaObserver(reg, hook, match_media, bus)
    # Marshaller first: it registers the queries and publishes initial activations.
    marshaller.observe()
    observer.observe()

    wired = (bus, cfg, reg, hook, match_media, marshaller, observer, log_svc)
    for key, value in zip(MEDIA_SERVICE_KEYS, wired):
        loc.register(key, value, allow_override=True)

    duration = time.perf_counter() - started
    _logger.debug("Media context ready in %.2f ms", duration * 1000)
    return MediaContext(
        bus=bus,
        config=cfg,
        registry=reg,
        hook=hook,
        match_media=match_media,
        marshaller=marshaller,
        observer=observer,
        logging_service=log_svc,
        services=loc,
        duration_s=duration,
    )
