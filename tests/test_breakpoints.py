"""Tests for breakpoint descriptors, defaults and the registry."""

import pytest

from media.breakpoints import (
    BREAKPOINT_PRINT,
    DEFAULT_BREAKPOINTS,
    PRINT_BREAKPOINTS,
    Breakpoint,
    BreakpointRegistry,
    is_print_breakpoint,
    sort_ascending_priority,
    sort_descending_priority,
)


def test_defaults_rank_below_print():
    assert all(bp.priority < BREAKPOINT_PRINT.priority for bp in DEFAULT_BREAKPOINTS)
    top_screen = max(bp.priority for bp in DEFAULT_BREAKPOINTS)
    assert all(top_screen < bp.priority < BREAKPOINT_PRINT.priority for bp in PRINT_BREAKPOINTS)


def test_default_queries_are_screen_scoped():
    md = BreakpointRegistry().get("md")
    assert md.media_query == "screen and (min-width: 960px) and (max-width: 1279.98px)"
    assert not is_print_breakpoint(md)
    assert PRINT_BREAKPOINTS[2].media_query.startswith("print and (min-width: 960px)")


def test_default_registry_builds_with_unique_queries():
    reg = BreakpointRegistry()
    queries = [bp.media_query for bp in DEFAULT_BREAKPOINTS]
    assert len(set(queries)) == len(queries)
    assert len(reg) == len(DEFAULT_BREAKPOINTS)
    assert reg.get("xl").media_query != reg.get("gt-lg").media_query
    print_queries = [bp.media_query for bp in PRINT_BREAKPOINTS]
    assert len(set(print_queries + queries)) == len(print_queries) + len(queries)


def test_suffix_derived_from_alias():
    assert Breakpoint("lt-md", "q").suffix == "LtMd"
    assert Breakpoint("print.sm", "print").suffix == "PrintSm"
    assert Breakpoint("", "q").suffix == ""
    assert Breakpoint("md", "q", suffix="Custom").suffix == "Custom"


def test_is_print_breakpoint():
    assert is_print_breakpoint(BREAKPOINT_PRINT)
    assert not is_print_breakpoint(Breakpoint("md", "screen"))
    assert not is_print_breakpoint(None)


def test_sort_descending_is_stable():
    a = Breakpoint("a", "QA", 1)
    b = Breakpoint("b", "QB", 3)
    c = Breakpoint("c", "QC", 1)
    assert sort_descending_priority([a, b, c]) == [b, a, c]
    assert sort_ascending_priority([b, c, a]) == [c, a, b]


def test_registry_lookups():
    reg = BreakpointRegistry()
    md = reg.find_by_alias("md")
    assert md is not None
    assert reg.find_by_query(md.media_query) is md
    assert reg.find_by_alias("mega") is None
    assert reg.find_by_query("print") is None
    assert "md" in reg
    assert md.media_query in reg


def test_registry_get_unknown_raises():
    with pytest.raises(KeyError):
        BreakpointRegistry().get("mega")


def test_registry_items_ascending():
    reg = BreakpointRegistry()
    priorities = [bp.priority for bp in reg.items]
    assert priorities == sorted(priorities)
    assert len(reg) == len(DEFAULT_BREAKPOINTS)
    assert set(reg.aliases) == {bp.alias for bp in DEFAULT_BREAKPOINTS}
    assert all(bp.overlapping for bp in reg.overlappings)


def test_registry_rejects_duplicates():
    reg = BreakpointRegistry([Breakpoint("md", "Q_MD")])
    with pytest.raises(ValueError):
        reg.register(Breakpoint("md", "Q_OTHER"))
    with pytest.raises(ValueError):
        reg.register(Breakpoint("other", "Q_MD"))


def test_registry_memo_refreshed_on_register():
    reg = BreakpointRegistry([])
    assert reg.find_by_alias("md") is None
    bp = Breakpoint("md", "Q_MD")
    reg.register(bp)
    assert reg.find_by_alias("md") is bp
