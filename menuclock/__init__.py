"""Menu Clock - a macOS menu bar clock."""

__version__ = "0.1.0"
