"""Unit tests for the NSUserDefaults preference store."""

from unittest.mock import MagicMock

import pytest

from menuclock.clock.preferences import ClockPreferences
from menuclock.exceptions import PreferenceStoreError


@pytest.fixture
def defaults_module(mock_objc_modules):
    from menuclock.macos import defaults

    return defaults


@pytest.fixture
def ns_defaults(defaults_module):
    """The NSUserDefaults instance returned for any suite."""
    return defaults_module.NSUserDefaults.alloc.return_value.initWithSuiteName_.return_value


class TestUserDefaultsStore:
    """Tests for UserDefaultsStore."""

    def test_opens_suite(self, defaults_module):
        """Test that the store opens the named suite."""
        store = defaults_module.UserDefaultsStore("com.apple.menuextra.clock")

        defaults_module.NSUserDefaults.alloc.return_value.initWithSuiteName_.assert_called_once_with(
            "com.apple.menuextra.clock"
        )
        assert store.suite_name == "com.apple.menuextra.clock"

    def test_missing_suite_fails(self, defaults_module):
        """Test that a suite that cannot be opened raises."""
        defaults_module.NSUserDefaults.alloc.return_value.initWithSuiteName_.return_value = None

        with pytest.raises(PreferenceStoreError):
            defaults_module.UserDefaultsStore("bad")

    def test_get(self, defaults_module, ns_defaults):
        """Test that reads go through objectForKey_."""
        ns_defaults.objectForKey_.return_value = "HH:mm"
        store = defaults_module.UserDefaultsStore("suite")

        assert store.get("DateFormat") == "HH:mm"
        ns_defaults.objectForKey_.assert_called_once_with("DateFormat")

    def test_set_and_remove(self, defaults_module, ns_defaults):
        """Test writes and removals."""
        store = defaults_module.UserDefaultsStore("suite")

        store.set("FlashDateSeparators", True)
        store.remove("DateFormat")

        ns_defaults.setObject_forKey_.assert_called_once_with(True, "FlashDateSeparators")
        ns_defaults.removeObjectForKey_.assert_called_once_with("DateFormat")

    def test_typed_reads(self, defaults_module, ns_defaults):
        """Test ClockPreferences over NSUserDefaults values."""
        ns_defaults.objectForKey_.side_effect = {
            "DateFormat": None,
            "FlashDateSeparators": 1,
            "IsAnalog": None,
        }.get
        preferences = ClockPreferences(defaults_module.UserDefaultsStore("suite"))

        assert preferences.date_format() is None
        assert preferences.flash_date_separators() is True
        assert preferences.is_analog() is False


class TestObservation:
    """Tests for key-value observation."""

    def test_observe_registers_kvo(self, defaults_module, ns_defaults):
        """Test that observing a key adds a KVO observer."""
        store = defaults_module.UserDefaultsStore("suite")

        subscription = store.observe("DateFormat", MagicMock())

        ns_defaults.addObserver_forKeyPath_options_context_.assert_called_once_with(
            subscription.observer, "DateFormat", defaults_module.NSKeyValueObservingOptionNew, None
        )

    def test_change_forwards_key(self, defaults_module):
        """Test that KVO callbacks invoke the Python callback with the key."""
        callback = MagicMock()
        store = defaults_module.UserDefaultsStore("suite")
        subscription = store.observe("FlashDateSeparators", callback)

        subscription.observer.observeValueForKeyPath_ofObject_change_context_(
            "FlashDateSeparators", store.defaults, {}, None
        )

        callback.assert_called_once_with("FlashDateSeparators")

    def test_cancel_removes_observer_once(self, defaults_module, ns_defaults):
        """Test that cancelling removes the KVO observer exactly once."""
        store = defaults_module.UserDefaultsStore("suite")
        subscription = store.observe("DateFormat", MagicMock())

        subscription.cancel()
        subscription.cancel()

        ns_defaults.removeObserver_forKeyPath_.assert_called_once_with(subscription.observer, "DateFormat")
        assert subscription.active is False
