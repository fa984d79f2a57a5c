"""Breakpoint descriptors, registry and ordering helpers."""

from .break_point import (  # noqa: F401
    BREAKPOINT_PRINT,
    DEFAULT_BREAKPOINTS,
    PRINT,
    PRINT_BREAKPOINTS,
    Breakpoint,
    OptionalBreakpoint,
)
from .registry import BreakpointRegistry  # noqa: F401
from .tools import (  # noqa: F401
    is_print_breakpoint,
    sort_ascending_priority,
    sort_descending_priority,
)

__all__ = [
    "Breakpoint",
    "OptionalBreakpoint",
    "BreakpointRegistry",
    "BREAKPOINT_PRINT",
    "DEFAULT_BREAKPOINTS",
    "PRINT",
    "PRINT_BREAKPOINTS",
    "is_print_breakpoint",
    "sort_ascending_priority",
    "sort_descending_priority",
]
