"""Breakpoint descriptor and the default breakpoint scale.

A breakpoint pairs a short alias (``md``, ``lt-lg``) with the media query that
activates it. Priority decides precedence when several breakpoints match at
once: higher priority wins, equal priorities keep their original order.

Default scale (pixel ranges, lower bound inclusive):
 - xs: 0 - 639
 - sm: 640 - 959
 - md: 960 - 1279
 - lg: 1280 - 1599
 - xl: 1600 - 4999

Overlapping ``lt-*`` / ``gt-*`` aliases cover open-ended ranges. All default
priorities stay below the synthetic print priority (1000) so the print
breakpoint always ranks ahead of screen breakpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

__all__ = [
    "Breakpoint",
    "OptionalBreakpoint",
    "PRINT",
    "BREAKPOINT_PRINT",
    "DEFAULT_BREAKPOINTS",
    "PRINT_BREAKPOINTS",
    "alias_to_suffix",
]

PRINT = "print"


def alias_to_suffix(alias: str) -> str:
    """Return CamelCase suffix for an alias (``lt-md`` -> ``LtMd``)."""
    parts = [p for p in alias.replace(".", "-").split("-") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


@dataclass(frozen=True)
class Breakpoint:
    """Named media condition with a precedence value.

    Attributes
    ----------
    alias: str
        Short name (may be empty).
    media_query: str
        Condition string; identity key for comparisons.
    priority: int
        Higher values sort first.
    suffix: str
        Alias derived suffix used by consumers building per-breakpoint keys.
    overlapping: bool
        True for ranges that overlap others (``lt-*``, ``gt-*``).
    """

    alias: str
    media_query: str
    priority: int = 0
    suffix: str = field(default="")
    overlapping: bool = False

    def __post_init__(self) -> None:
        if not self.suffix and self.alias:
            object.__setattr__(self, "suffix", alias_to_suffix(self.alias))


OptionalBreakpoint = Optional[Breakpoint]

BREAKPOINT_PRINT = Breakpoint(alias=PRINT, media_query=PRINT, priority=1000)


def _screen(min_px: int | None, max_px: int | None) -> str:
    parts = ["screen"]
    if min_px is not None:
        parts.append(f"(min-width: {min_px}px)")
    if max_px is not None:
        parts.append(f"(max-width: {max_px - 0.02:.2f}px)")
    return " and ".join(parts)


def _print(min_px: int | None, max_px: int | None) -> str:
    return PRINT + _screen(min_px, max_px)[len("screen"):]


DEFAULT_BREAKPOINTS: List[Breakpoint] = [
    Breakpoint("xs", _screen(0, 640), priority=900),
    Breakpoint("sm", _screen(640, 960), priority=800),
    Breakpoint("md", _screen(960, 1280), priority=700),
    Breakpoint("lg", _screen(1280, 1600), priority=600),
    Breakpoint("xl", _screen(1600, 5000), priority=500),
    Breakpoint("lt-sm", _screen(None, 640), priority=850, overlapping=True),
    Breakpoint("lt-md", _screen(None, 960), priority=750, overlapping=True),
    Breakpoint("lt-lg", _screen(None, 1280), priority=650, overlapping=True),
    Breakpoint("lt-xl", _screen(None, 1600), priority=550, overlapping=True),
    Breakpoint("gt-xs", _screen(640, None), priority=-850, overlapping=True),
    Breakpoint("gt-sm", _screen(960, None), priority=-750, overlapping=True),
    Breakpoint("gt-md", _screen(1280, None), priority=-650, overlapping=True),
    Breakpoint("gt-lg", _screen(1600, None), priority=-550, overlapping=True),
]

# Print-scoped variants; opt-in, not part of the default registry. Priorities
# sit between the screen scale and the synthetic print breakpoint.
PRINT_BREAKPOINTS: List[Breakpoint] = [
    Breakpoint("print.xs", _print(0, 640), priority=990),
    Breakpoint("print.sm", _print(640, 960), priority=980),
    Breakpoint("print.md", _print(960, 1280), priority=970),
    Breakpoint("print.lg", _print(1280, 1600), priority=960),
    Breakpoint("print.xl", _print(1600, 5000), priority=950),
]
