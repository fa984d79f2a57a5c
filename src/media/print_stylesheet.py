"""Print stylesheet generator.

Builds the Qt stylesheet applied while the print breakpoint is active:
animations off, white surfaces, black text, a legible font baseline, and
optional high-contrast overrides for grayscale printers. The forced
breakpoint aliases are written into a header comment so a printed layout can
be traced back to the breakpoints that produced it.

Output is deterministic for snapshot testing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

__all__ = ["PrintStylesheetMeta", "build_print_stylesheet"]


@dataclass(frozen=True)
class PrintStylesheetMeta:
    lines: int
    high_contrast: bool
    included_tokens: int
    aliases: tuple[str, ...]


_BASE_RULES = [
    "* {\n  animation: none;\n  transition: none;\n}",
    "QWidget {\n  background: #FFFFFF;\n  color: #000000;\n  font-size: 11pt;\n}",
    "QTableView, QTreeView {\n  gridline-color: #000000;\n}",
]

_HIGH_CONTRAST_RULES = [
    "QPushButton { background: #FFFFFF; border: 2px solid #000000; color: #000000; }",
]


def build_print_stylesheet(
    aliases: Sequence[str] = (),
    tokens: Optional[Dict[str, str]] = None,
    high_contrast: bool = True,
) -> tuple[str, PrintStylesheetMeta]:
    """Return ``(stylesheet, meta)`` for the given forced breakpoint aliases.

    Parameters
    ----------
    aliases: Active breakpoint aliases, highest priority first.
    tokens: Optional design token overrides, emitted in sorted key order.
    high_contrast: Whether to include high contrast overrides.
    """
    parts = [f"/* breakpoints: {', '.join(aliases) or '-'} */"]
    parts.extend(_BASE_RULES)
    if high_contrast:
        parts.extend(_HIGH_CONTRAST_RULES)
    token_rules = [f"/* token:{k} */ :root {{ --{k}: {tokens[k]}; }}" for k in sorted(tokens or {})]
    parts.extend(token_rules)
    stylesheet = "\n\n".join(parts) + "\n"
    meta = PrintStylesheetMeta(
        lines=len(stylesheet.strip().splitlines()),
        high_contrast=high_contrast,
        included_tokens=len(token_rules),
        aliases=tuple(aliases),
    )
    return stylesheet, meta
