"""macOS integration module.

Provides the menu bar clock application and its launcher.
"""

from menuclock.macos.launcher import launch, open_preference_store

__all__ = ["launch", "open_preference_store"]
