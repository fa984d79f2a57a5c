"""Layout configuration persistence.

Holds the options the print hook and registry read at startup: which
breakpoint aliases to force while printing and which breakpoints exist.

Design principles:
- Pure logic (no Qt import) so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
- Environment override for the print alias list (``MEDIA_PRINT_WITH_BREAKPOINTS``,
  comma separated) so deployments can change print layout without a file.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .breakpoints import DEFAULT_BREAKPOINTS, Breakpoint, BreakpointRegistry

__all__ = [
    "LayoutConfig",
    "load_config",
    "save_config",
    "build_registry",
    "CONFIG_VERSION",
    "PRINT_ALIAS_ENV",
]

_logger = logging.getLogger(__name__)

CONFIG_VERSION = 1  # Increment when structure changes

DEFAULT_FILENAME = "layout_config.json"
PRINT_ALIAS_ENV = "MEDIA_PRINT_WITH_BREAKPOINTS"


@dataclass(slots=True)
class LayoutConfig:
    """Serializable layout configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    print_with_breakpoints: Aliases forced while printing (None = none forced).
    disable_default_breakpoints: Skip the built-in xs..xl scale.
    breakpoints: Extra breakpoint definitions as dicts
        (``alias``, ``media_query``, ``priority``, optional ``overlapping``).
    """

    version: int = CONFIG_VERSION
    print_with_breakpoints: Optional[List[str]] = None
    disable_default_breakpoints: bool = False
    breakpoints: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            print_with_breakpoints=_coerce_aliases(data.get("print_with_breakpoints")),
            disable_default_breakpoints=bool(data.get("disable_default_breakpoints", False)),
            breakpoints=_valid_breakpoints(data.get("breakpoints") or []),
        )


def _split_aliases(raw: str) -> List[str]:
    return [a.strip() for a in raw.split(",") if a.strip()]


def _coerce_aliases(value: Any) -> Optional[List[str]]:
    """Normalise the print alias list; a bare string is read as comma separated."""
    if value is None:
        return None
    if isinstance(value, str):
        return _split_aliases(value)
    if isinstance(value, (list, tuple)):
        return [str(a) for a in value]
    _logger.warning("Ignoring print_with_breakpoints of type %s", type(value).__name__)
    return None


def _valid_breakpoints(entries: Any) -> List[Dict[str, Any]]:
    """Keep breakpoint dicts that carry a media query and an integer priority."""
    if not isinstance(entries, list):
        _logger.warning("Ignoring breakpoints of type %s", type(entries).__name__)
        return []
    valid: List[Dict[str, Any]] = []
    for entry in entries:
        if not isinstance(entry, dict) or not str(entry.get("media_query") or "").strip():
            _logger.warning("Skipping breakpoint without media_query: %r", entry)
            continue
        try:
            int(entry.get("priority", 0))
        except (TypeError, ValueError):
            _logger.warning("Skipping breakpoint with invalid priority: %r", entry)
            continue
        valid.append(dict(entry))
    return valid


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / DEFAULT_FILENAME


def _apply_env(cfg: LayoutConfig) -> LayoutConfig:
    raw = os.environ.get(PRINT_ALIAS_ENV)
    if raw is not None:
        cfg.print_with_breakpoints = _split_aliases(raw)
    return cfg


def load_config(base_dir: str | Path | None = None) -> LayoutConfig:
    """Load layout config from directory (defaults to CWD)."""
    path = _resolve_path(base_dir)
    if not path.exists():
        return _apply_env(LayoutConfig())
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = LayoutConfig.from_dict(data)
    except Exception:  # noqa: BLE001
        _logger.warning("Unreadable layout config at %s; using defaults", path)
        return _apply_env(LayoutConfig())
    if cfg.version != CONFIG_VERSION:
        # Reset to defaults while preserving the print alias list.
        cfg = LayoutConfig(print_with_breakpoints=cfg.print_with_breakpoints)
    return _apply_env(cfg)


def save_config(cfg: LayoutConfig, base_dir: str | Path | None = None) -> Path:
    """Persist layout config to directory. Returns the path written."""
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path


def build_registry(cfg: LayoutConfig) -> BreakpointRegistry:
    """Create a registry from the defaults (unless disabled) plus extras."""
    base: List[Breakpoint] = [] if cfg.disable_default_breakpoints else list(DEFAULT_BREAKPOINTS)
    registry = BreakpointRegistry(base)
    for entry in _valid_breakpoints(cfg.breakpoints):
        registry.register(
            Breakpoint(
                alias=str(entry.get("alias", "")),
                media_query=str(entry["media_query"]),
                priority=int(entry.get("priority", 0)),
                overlapping=bool(entry.get("overlapping", False)),
            )
        )
    return registry
