from media.bootstrap import create_media_context
from media.config_store import LayoutConfig, save_config
from media.print_hook import InterceptionPolicy
from media.services.event_bus import EventBus
from media.services.service_locator import MEDIA_SERVICE_KEYS, ServiceLocator, services


def test_services_registered_globally():
    ctx = create_media_context(config=LayoutConfig(), width=1000)
    try:
        assert services.get_typed("print_hook", InterceptionPolicy) is ctx.hook
        assert isinstance(services.get("event_bus"), EventBus)
        assert services.get("media_marshaller") is ctx.marshaller
        assert ctx.duration_s >= 0
        assert all(key in services for key in MEDIA_SERVICE_KEYS)
        assert services.get("media_observer") is ctx.observer
    finally:
        ctx.close()


def test_each_bootstrap_gets_fresh_instances():
    a = create_media_context(config=LayoutConfig(), capture_logs=False)
    b = create_media_context(config=LayoutConfig(), capture_logs=False)
    assert a.bus is not b.bus
    assert services.get("event_bus") is b.bus


def test_config_loaded_from_directory(tmp_path, monkeypatch):
    monkeypatch.delenv("MEDIA_PRINT_WITH_BREAKPOINTS", raising=False)
    save_config(LayoutConfig(print_with_breakpoints=["sm"]), tmp_path)
    ctx = create_media_context(base_dir=tmp_path, width=1000, locator=ServiceLocator())
    try:
        assert ctx.hook.print_alias == ["sm"]
        ctx.match_media.update(printing=True)
        assert ctx.marshaller.activated_aliases == ["print", "sm"]
        assert [c.mq_alias for c in ctx.observer.last] == ["sm"]
        assert ctx.logging_service is not None
        assert any(e.message.startswith("Print started") for e in ctx.logging_service.recent())
    finally:
        ctx.close()
    assert not ctx.logging_service.attached


def test_initial_width_activates_breakpoints():
    ctx = create_media_context(config=LayoutConfig(), width=1400, capture_logs=False)
    assert ctx.marshaller.activated_alias == "lg"
    assert ctx.observer.is_active("lg")
    ctx.close()


def test_default_registry_bootstraps_with_bad_config_entries(tmp_path, monkeypatch):
    monkeypatch.delenv("MEDIA_PRINT_WITH_BREAKPOINTS", raising=False)
    (tmp_path / "layout_config.json").write_text(
        '{"version": 1, "print_with_breakpoints": "xl", "breakpoints": [{"alias": "x"}]}',
        encoding="utf-8",
    )
    ctx = create_media_context(base_dir=tmp_path, width=2000, locator=ServiceLocator())
    try:
        assert ctx.hook.print_alias == ["xl"]
        assert ctx.marshaller.activated_alias == "xl"
        assert "x" not in ctx.registry
    finally:
        ctx.close()
