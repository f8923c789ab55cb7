"""Clock preference reader.

The preferences are owned by the system clock's defaults suite and can be
changed at any time by other processes (System Settings, ``defaults write``).
This module only reads them and forwards change notifications to observers.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

DATE_FORMAT_KEY = "DateFormat"
FLASH_DATE_SEPARATORS_KEY = "FlashDateSeparators"
IS_ANALOG_KEY = "IsAnalog"

PREFERENCE_KEYS = (DATE_FORMAT_KEY, FLASH_DATE_SEPARATORS_KEY, IS_ANALOG_KEY)

PreferenceCallback = Callable[[str], None]

# NSString boolValue: optional sign and leading zeros, then Y, T or a non-zero digit
TRUTHY_STRING = re.compile(r"\s*[+-]?0*[YyTt1-9]")


class Subscription(Protocol):
    """Handle returned by ``PreferenceStore.observe``."""

    def cancel(self) -> None: ...


class PreferenceStore(Protocol):
    """Key/value store scoped to the clock preference suite."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def observe(self, key: str, callback: PreferenceCallback) -> Subscription: ...


@dataclass(frozen=True)
class PreferenceSnapshot:
    """Preference values read at one point in time."""

    date_format: Optional[str]
    flash_date_separators: bool
    is_analog: bool


class ClockPreferences:
    """Typed, read-only view over the clock preference store."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    def date_format(self) -> Optional[str]:
        """Custom date format, or None to use the locale template.

        Follows ``-[NSUserDefaults stringForKey:]``: numbers are read as
        their string value, other non-string values as absent.
        """
        value = self.store.get(DATE_FORMAT_KEY)
        if value is None:
            return None
        if isinstance(value, bool):
            value = str(int(value))
        elif isinstance(value, int):
            value = str(value)
        elif isinstance(value, float):
            value = str(int(value)) if value.is_integer() else repr(value)
        elif not isinstance(value, str):
            logger.warning(f"Ignoring non-string {DATE_FORMAT_KEY}: {value!r}")
            return None
        return value or None

    def flash_date_separators(self) -> bool:
        return self._bool(FLASH_DATE_SEPARATORS_KEY)

    def is_analog(self) -> bool:
        return self._bool(IS_ANALOG_KEY)

    def snapshot(self) -> PreferenceSnapshot:
        return PreferenceSnapshot(
            date_format=self.date_format(),
            flash_date_separators=self.flash_date_separators(),
            is_analog=self.is_analog(),
        )

    def observe(self, key: str, callback: PreferenceCallback) -> Subscription:
        """Register ``callback`` for changes to ``key``."""
        if key not in PREFERENCE_KEYS:
            raise KeyError(f"Unknown clock preference: {key}")
        return self.store.observe(key, callback)

    def _bool(self, key: str) -> bool:
        # Same coercion as -[NSUserDefaults boolForKey:]
        value = self.store.get(key)
        if value is None:
            return False
        if isinstance(value, (bool, int, float)):
            return bool(value)
        if isinstance(value, str):
            return TRUTHY_STRING.match(value) is not None
        logger.warning(f"Ignoring non-boolean {key}: {value!r}")
        return False


class _CallbackSubscription:
    def __init__(self, observers: list[PreferenceCallback], callback: PreferenceCallback):
        self._observers = observers
        self._callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._observers.remove(self._callback)
            self.active = False


class MemoryPreferenceStore:
    """In-process preference store.

    Observers are called synchronously, in registration order, whenever a
    key is set or removed.
    """

    def __init__(self, values: Optional[dict[str, Any]] = None):
        self._values: dict[str, Any] = dict(values or {})
        self._observers: dict[str, list[PreferenceCallback]] = {}

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._notify(key)

    def remove(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._notify(key)

    def observe(self, key: str, callback: PreferenceCallback) -> _CallbackSubscription:
        observers = self._observers.setdefault(key, [])
        observers.append(callback)
        return _CallbackSubscription(observers, callback)

    def _notify(self, key: str) -> None:
        # Copy so observers may unsubscribe while being notified
        for callback in list(self._observers.get(key, [])):
            callback(key)
