"""Launcher for the macOS menu bar clock.

Checks the platform and PyObjC before importing any AppKit code.
"""

import logging
import platform
from typing import Optional

from menuclock.exceptions import PlatformNotSupportedError
from menuclock.utils.config import Config, get_config

logger = logging.getLogger(__name__)


def check_platform() -> None:
    """Raise PlatformNotSupportedError when not running on macOS."""
    if platform.system() != "Darwin":
        raise PlatformNotSupportedError("Menu Clock is only available on macOS.")


def open_preference_store(config: Optional[Config] = None):
    """Open the clock preference suite.

    Raises:
        PlatformNotSupportedError: If not on macOS or PyObjC is missing
        PreferenceStoreError: If the suite cannot be opened
    """
    check_platform()
    config = config or get_config()
    try:
        from menuclock.macos.defaults import UserDefaultsStore
    except ImportError as e:
        raise PlatformNotSupportedError(
            f"Failed to import PyObjC: {e}\n"
            "Make sure PyObjC is installed: pip install pyobjc-framework-Cocoa"
        )
    return UserDefaultsStore(config.preferences.suite_name)


def launch(config: Optional[Config] = None) -> None:
    """Launch the menu bar clock.

    Args:
        config: Application configuration. Defaults to the global config.

    Raises:
        PlatformNotSupportedError: If not on macOS or PyObjC is missing
    """
    check_platform()
    config = config or get_config()
    try:
        from menuclock.macos.menu_app import run_menu_app
    except ImportError as e:
        raise PlatformNotSupportedError(
            f"Failed to import menu app: {e}\n"
            "Make sure PyObjC is installed: pip install pyobjc-framework-Cocoa"
        )

    logger.info(f"Starting menu clock with suite {config.preferences.suite_name}")
    run_menu_app(config)
