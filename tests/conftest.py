"""Pytest configuration and fixtures."""

import sys
from unittest.mock import MagicMock

import pytest

from menuclock.clock.preferences import ClockPreferences, MemoryPreferenceStore
from menuclock.clock.renderer import REFERENCE_EPOCH
from menuclock.utils.config import Config, reset_config

# Modules that import PyObjC at import time
MACOS_MODULES = (
    "menuclock.clock.formatter",
    "menuclock.macos.defaults",
    "menuclock.macos.menu_app",
)


def _forget_macos_modules():
    for name in MACOS_MODULES:
        sys.modules.pop(name, None)
        # Drop the package attribute too, or "from pkg import mod" returns the stale module
        parent_name, _, child = name.rpartition(".")
        parent = sys.modules.get(parent_name)
        if parent is not None and hasattr(parent, child):
            delattr(parent, child)


class MockNSObject:
    """Stand-in for NSObject supporting the alloc().init() pattern."""

    @classmethod
    def alloc(cls):
        instance = cls()
        return instance

    def init(self):
        return self


@pytest.fixture
def mock_objc_modules(monkeypatch):
    """Mock PyObjC, AppKit and Foundation for testing on non-macOS systems."""
    mock_objc = MagicMock()
    mock_appkit = MagicMock()
    mock_foundation = MagicMock()

    mock_objc.python_method = lambda x: x

    # Mock objc.super to return a working object
    def mock_super(cls, obj):
        mock_super_obj = MagicMock()
        mock_super_obj.init = MagicMock(return_value=obj)
        return mock_super_obj

    mock_objc.super = mock_super

    mock_appkit.NSObject = MockNSObject
    mock_appkit.NSVariableStatusItemLength = -1
    mock_foundation.NSObject = MockNSObject
    mock_foundation.NSKeyValueObservingOptionNew = 1

    monkeypatch.setitem(sys.modules, "objc", mock_objc)
    monkeypatch.setitem(sys.modules, "AppKit", mock_appkit)
    monkeypatch.setitem(sys.modules, "Foundation", mock_foundation)

    # Re-import the PyObjC dependent modules against these mocks
    _forget_macos_modules()
    yield {
        "objc": mock_objc,
        "AppKit": mock_appkit,
        "Foundation": mock_foundation,
    }
    _forget_macos_modules()


class FakeTimer:
    """One-shot timer handle recorded by FakeRunLoop."""

    def __init__(self, fire_at, delay, callback):
        self.fire_at = fire_at
        self.delay = delay
        self.callback = callback
        self.invalidated = False
        self.fired = False

    def invalidate(self):
        self.invalidated = True


class FakeRunLoop:
    """Deterministic clock and timer source for scheduler tests."""

    def __init__(self, now):
        self.now = now
        self.timers = []

    def clock(self):
        return self.now

    def schedule(self, delay, callback):
        timer = FakeTimer(self.now + delay, delay, callback)
        self.timers.append(timer)
        return timer

    def pending(self):
        return [t for t in self.timers if not t.invalidated and not t.fired]

    def advance(self, seconds):
        """Move the clock without firing anything."""
        self.now += seconds

    def fire_next(self):
        """Advance to the earliest pending timer and fire it."""
        timer = min(self.pending(), key=lambda t: t.fire_at)
        self.now = timer.fire_at
        timer.fired = True
        timer.callback()
        return timer


@pytest.fixture
def run_loop():
    """Run loop starting a quarter second into an even reference second."""
    return FakeRunLoop(REFERENCE_EPOCH + 2.25)


@pytest.fixture
def memory_store():
    return MemoryPreferenceStore()


@pytest.fixture
def preferences(memory_store):
    return ClockPreferences(memory_store)


@pytest.fixture(scope="function")
def test_config():
    """Create a test configuration."""
    reset_config()
    config = Config(
        preferences={"suite_name": "com.example.menuclock.tests"},
        logging={"level": "debug"},
    )
    yield config
    reset_config()
