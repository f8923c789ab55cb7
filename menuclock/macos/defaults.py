"""NSUserDefaults-backed preference store.

Reads the clock preferences from their defaults suite and observes the keys
with key-value observing, so changes written by other processes (System
Settings, ``defaults write``) are delivered on the main thread.
"""

import logging
from typing import Any, Callable

import objc
from Foundation import NSKeyValueObservingOptionNew, NSObject, NSUserDefaults

from menuclock.exceptions import PreferenceStoreError

logger = logging.getLogger(__name__)


class DefaultsObserver(NSObject):
    """KVO receiver forwarding key changes to a Python callback."""

    def initWithCallback_(self, callback):
        self = objc.super(DefaultsObserver, self).init()
        if self is None:
            return None
        self.callback = callback
        return self

    def observeValueForKeyPath_ofObject_change_context_(self, key_path, obj, change, context):
        self.callback(str(key_path))


class DefaultsSubscription:
    """Active observation of one key; ``cancel`` removes it."""

    def __init__(self, defaults: Any, key: str, observer: DefaultsObserver):
        self.defaults = defaults
        self.key = key
        self.observer = observer
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.defaults.removeObserver_forKeyPath_(self.observer, self.key)
            self.active = False


class UserDefaultsStore:
    """Preference store over an NSUserDefaults suite."""

    def __init__(self, suite_name: str):
        self.suite_name = suite_name
        self.defaults = NSUserDefaults.alloc().initWithSuiteName_(suite_name)
        if self.defaults is None:
            raise PreferenceStoreError(f"Cannot open defaults suite {suite_name!r}")

    def get(self, key: str) -> Any:
        return self.defaults.objectForKey_(key)

    def set(self, key: str, value: Any) -> None:
        self.defaults.setObject_forKey_(value, key)
        logger.info(f"Set {self.suite_name} {key} = {value!r}")

    def remove(self, key: str) -> None:
        self.defaults.removeObjectForKey_(key)
        logger.info(f"Removed {self.suite_name} {key}")

    def observe(self, key: str, callback: Callable[[str], None]) -> DefaultsSubscription:
        observer = DefaultsObserver.alloc().initWithCallback_(callback)
        self.defaults.addObserver_forKeyPath_options_context_(
            observer, key, NSKeyValueObservingOptionNew, None
        )
        logger.debug(f"Observing {self.suite_name} {key}")
        return DefaultsSubscription(self.defaults, key, observer)
