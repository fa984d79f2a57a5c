import json
from pathlib import Path

import pytest

from media.config_store import (
    CONFIG_VERSION,
    PRINT_ALIAS_ENV,
    LayoutConfig,
    build_registry,
    load_config,
    save_config,
)


@pytest.fixture(autouse=True)
def _no_env(monkeypatch):
    monkeypatch.delenv(PRINT_ALIAS_ENV, raising=False)


def test_load_returns_defaults_when_missing(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.print_with_breakpoints is None
    assert cfg.breakpoints == []


def test_save_and_reload_round_trip(tmp_path: Path):
    cfg = LayoutConfig(
        print_with_breakpoints=["md", "lg"],
        breakpoints=[{"alias": "tablet", "media_query": "screen and (min-width: 700px)"}],
    )
    path = save_config(cfg, tmp_path)
    assert path.name == "layout_config.json"
    assert load_config(tmp_path).to_dict() == cfg.to_dict()


def test_corrupt_file_graceful_fallback(tmp_path: Path):
    (tmp_path / "layout_config.json").write_text("not json", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert isinstance(cfg, LayoutConfig)
    assert cfg.print_with_breakpoints is None


def test_version_mismatch_resets_but_keeps_print_aliases(tmp_path: Path):
    data = {
        "version": CONFIG_VERSION + 1,
        "print_with_breakpoints": ["sm"],
        "disable_default_breakpoints": True,
    }
    (tmp_path / "layout_config.json").write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.print_with_breakpoints == ["sm"]
    assert cfg.disable_default_breakpoints is False


def test_env_overrides_print_aliases(tmp_path: Path, monkeypatch):
    save_config(LayoutConfig(print_with_breakpoints=["sm"]), tmp_path)
    monkeypatch.setenv(PRINT_ALIAS_ENV, " md, lg ,")
    assert load_config(tmp_path).print_with_breakpoints == ["md", "lg"]


def test_build_registry_with_extras_and_without_defaults():
    cfg = LayoutConfig(
        disable_default_breakpoints=True,
        breakpoints=[{"alias": "tablet", "media_query": "Q_T", "priority": 3}],
    )
    reg = build_registry(cfg)
    assert reg.aliases == ["tablet"]
    assert reg.get("tablet").priority == 3


def test_build_registry_duplicate_alias_raises():
    cfg = LayoutConfig(breakpoints=[{"alias": "md", "media_query": "Q"}])
    with pytest.raises(ValueError):
        build_registry(cfg)


def test_breakpoint_entry_without_query_is_dropped(tmp_path: Path, caplog):
    data = {
        "version": CONFIG_VERSION,
        "breakpoints": [
            {"alias": "tablet"},
            "not a dict",
            {"alias": "wide", "media_query": "Q_W", "priority": "high"},
            {"alias": "phablet", "media_query": "screen and (max-width: 700px)"},
        ],
    }
    (tmp_path / "layout_config.json").write_text(json.dumps(data), encoding="utf-8")
    with caplog.at_level("WARNING", logger="media.config_store"):
        cfg = load_config(tmp_path)
    assert [b["alias"] for b in cfg.breakpoints] == ["phablet"]
    assert "Skipping breakpoint" in caplog.text
    assert build_registry(cfg).get("phablet").priority == 0


def test_build_registry_skips_entries_without_query():
    cfg = LayoutConfig(breakpoints=[{"alias": "tablet"}])
    assert "tablet" not in build_registry(cfg)


def test_print_aliases_bare_string_is_wrapped(tmp_path: Path):
    data = {"version": CONFIG_VERSION, "print_with_breakpoints": "md"}
    (tmp_path / "layout_config.json").write_text(json.dumps(data), encoding="utf-8")
    assert load_config(tmp_path).print_with_breakpoints == ["md"]
    assert LayoutConfig.from_dict({"print_with_breakpoints": "md, lg"}).print_with_breakpoints == [
        "md",
        "lg",
    ]


def test_print_aliases_of_unknown_type_are_ignored():
    assert LayoutConfig.from_dict({"print_with_breakpoints": 5}).print_with_breakpoints is None
