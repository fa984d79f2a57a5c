import os

import pytest

# Qt widgets in tests render offscreen; must be set before QApplication exists.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from media.breakpoints import Breakpoint, BreakpointRegistry  # noqa: E402
from media.config_store import LayoutConfig  # noqa: E402
from media.print_hook import InterceptionPolicy  # noqa: E402
from media.services.service_locator import services  # noqa: E402


class FakeTarget:
    """Minimal HookTarget recording re-render requests."""

    def __init__(self, activated=None):
        self.activated_breakpoints = list(activated or [])
        self.update_count = 0

    def update_styles(self):
        self.update_count += 1


@pytest.fixture(autouse=True)
def _reset_services():
    yield
    services.clear()


@pytest.fixture
def scenario_registry():
    return BreakpointRegistry(
        [
            Breakpoint("sm", "Q_SM", priority=5),
            Breakpoint("md", "Q_MD", priority=10),
            Breakpoint("lg", "Q_LG", priority=20),
            Breakpoint("xl", "Q_XL", priority=15),
        ]
    )


@pytest.fixture
def hook(scenario_registry):
    return InterceptionPolicy(scenario_registry, LayoutConfig(print_with_breakpoints=["md", "lg"]))


@pytest.fixture
def target():
    return FakeTarget()
