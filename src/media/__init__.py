"""Print-aware media breakpoint layer.

Small public surface: breakpoint model and registry, the print interception
policy, the change source and the bootstrap helper. The Qt bridge lives in
``media.qt_bridge`` and is not imported here so headless callers never load
PyQt6.
"""

from __future__ import annotations

from .breakpoints import (  # noqa: F401
    BREAKPOINT_PRINT,
    DEFAULT_BREAKPOINTS,
    Breakpoint,
    BreakpointRegistry,
)
from .config_store import LayoutConfig, load_config, save_config  # noqa: F401
from .media_change import MediaChange, merge_alias  # noqa: F401
from .print_hook import (  # noqa: F401
    HookTarget,
    InterceptionPolicy,
    PrintActivationQueue,
    RestoreCache,
)
from .match_media import MatchMedia, evaluate_query  # noqa: F401
from .marshaller import MediaMarshaller  # noqa: F401
from .observer import MediaObserver  # noqa: F401
from .bootstrap import MediaContext, create_media_context  # noqa: F401
from .services import EventBus, MediaEvent, services  # noqa: F401

__all__ = [
    "BREAKPOINT_PRINT",
    "DEFAULT_BREAKPOINTS",
    "Breakpoint",
    "BreakpointRegistry",
    "LayoutConfig",
    "load_config",
    "save_config",
    "MediaChange",
    "merge_alias",
    "HookTarget",
    "InterceptionPolicy",
    "PrintActivationQueue",
    "RestoreCache",
    "MatchMedia",
    "evaluate_query",
    "MediaMarshaller",
    "MediaObserver",
    "MediaContext",
    "create_media_context",
    "EventBus",
    "MediaEvent",
    "services",
]
