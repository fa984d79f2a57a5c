"""Service layer exports.

 - Service locator (`services`)
 - EventBus publish/subscribe core
 - LoggingService ring-buffer capture
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, MediaEvent  # noqa: F401
from .logging_service import LoggingService  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "MediaEvent",
    "LoggingService",
]
