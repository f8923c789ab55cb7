"""Custom exceptions for the menu clock application."""


class MenuClockError(Exception):
    """Base exception for menu clock errors."""

    pass


class PlatformNotSupportedError(MenuClockError):
    """Raised when the menu bar app is started outside macOS or without PyObjC."""

    pass


class PreferenceStoreError(MenuClockError):
    """Raised when the clock preference suite cannot be opened."""

    pass
