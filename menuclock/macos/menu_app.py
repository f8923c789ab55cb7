"""macOS menu bar clock.

Shows the current time in the status bar and a dropdown with:
- The full date
- A shortcut to the Date & Time settings
- Quit
"""

import logging
import signal
from typing import Any, Callable, Optional

import objc
from AppKit import (
    NSApp,
    NSApplication,
    NSApplicationActivationPolicyAccessory,
    NSColor,
    NSFont,
    NSFontAttributeName,
    NSFontWeightRegular,
    NSForegroundColorAttributeName,
    NSMenu,
    NSMenuItem,
    NSMutableAttributedString,
    NSStatusBar,
    NSVariableStatusItemLength,
    NSWorkspace,
)
from Foundation import (
    NSCurrentLocaleDidChangeNotification,
    NSNotificationCenter,
    NSObject,
    NSSystemClockDidChangeNotification,
    NSSystemTimeZoneDidChangeNotification,
    NSTimer,
    NSTimeZone,
)

from menuclock.clock.formatter import ClockFormatters
from menuclock.clock.preferences import ClockPreferences, PreferenceStore
from menuclock.clock.presenter import ClockPresenter
from menuclock.clock.renderer import StyledTitle
from menuclock.clock.scheduler import TickScheduler
from menuclock.macos.defaults import UserDefaultsStore
from menuclock.utils.config import Config, get_config

logger = logging.getLogger(__name__)


def utf16_range(text: str, start: int, length: int) -> tuple[int, int]:
    """Convert a Python string slice to an NSString (UTF-16) range."""
    location = len(text[:start].encode("utf-16-le")) // 2
    span = len(text[start:start + length].encode("utf-16-le")) // 2
    return location, span


def nstimer_factory(delay: float, callback: Callable[[], None]) -> Any:
    """One-shot NSTimer on the current (main) run loop."""
    return NSTimer.scheduledTimerWithTimeInterval_repeats_block_(
        delay, False, lambda timer: callback()
    )


def menu_bar_font(monospaced_digits: bool = True) -> Any:
    """The menu bar font, optionally with fixed-width digits."""
    font = NSFont.menuBarFontOfSize_(0)
    if monospaced_digits:
        font = NSFont.monospacedDigitSystemFontOfSize_weight_(font.pointSize(), NSFontWeightRegular)
    return font


class StatusItemSurface:
    """Writes rendered values into the status item button and full-date menu item."""

    def __init__(self, status_item: Any, full_date_item: Any, font: Any = None):
        self.status_item = status_item
        self.full_date_item = full_date_item
        self.font = font

    def attributed_title(self, title: StyledTitle) -> Any:
        attributes = {NSForegroundColorAttributeName: NSColor.controlTextColor()}
        if self.font is not None:
            attributes[NSFontAttributeName] = self.font

        attributed = NSMutableAttributedString.alloc().initWithString_attributes_(
            title.text, attributes
        )
        for span in title.spans:
            if not span.visible:
                attributed.addAttribute_value_range_(
                    NSForegroundColorAttributeName,
                    NSColor.clearColor(),
                    utf16_range(title.text, span.start, span.length),
                )
        return attributed

    def set_title(self, title: StyledTitle) -> None:
        self.status_item.button().setAttributedTitle_(self.attributed_title(title))

    def set_full_date(self, text: str) -> None:
        self.full_date_item.setTitle_(text)


class ClockMenuApp(NSObject):
    """macOS menu bar application showing the clock."""

    def init(self):
        """Initialize the menu bar app."""
        self = objc.super(ClockMenuApp, self).init()
        if self is None:
            return None

        # Initialize with defaults - will be set by configure method
        self.config = None
        self.status_bar = NSStatusBar.systemStatusBar()
        self.status_item = None
        self.menu = None
        self.full_date_item = None
        self.preferences = None
        self.presenter = None
        return self

    @objc.python_method
    def configure(self, config: Config, store: Optional[PreferenceStore] = None) -> None:
        """Configure the app after initialization.

        Args:
            config: Application configuration
            store: Preference store. Defaults to the configured defaults suite.
        """
        self.config = config
        if store is None:
            store = UserDefaultsStore(config.preferences.suite_name)
        self.preferences = ClockPreferences(store)

    @objc.python_method
    def setup_menu_bar(self) -> None:
        """Set up the status item, its menu and the presenter."""
        NSApplication.sharedApplication().setActivationPolicy_(NSApplicationActivationPolicyAccessory)

        self.status_item = self.status_bar.statusItemWithLength_(NSVariableStatusItemLength)
        self._build_menu()
        self.status_item.setMenu_(self.menu)

        surface = StatusItemSurface(
            self.status_item,
            self.full_date_item,
            font=menu_bar_font(self.config.display.monospaced_digits),
        )
        self.presenter = ClockPresenter(
            preferences=self.preferences,
            formatters=ClockFormatters(self.config.display.title_template),
            surface=surface,
            scheduler=TickScheduler(nstimer_factory),
        )

    @objc.python_method
    def _build_menu(self) -> None:
        self.menu = NSMenu.alloc().init()
        self.menu.setAutoenablesItems_(False)

        # Full date, written on every render
        self.full_date_item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_("", None, "")
        self.full_date_item.setEnabled_(False)
        self.menu.addItem_(self.full_date_item)

        self.menu.addItem_(NSMenuItem.separatorItem())

        settings_item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
            "Open Date & Time Settings…", None, ""
        )
        settings_item.setTarget_(self)
        settings_item.setAction_("openDateAndTimePreferences:")
        settings_item.setEnabled_(True)
        self.menu.addItem_(settings_item)

        self.menu.addItem_(NSMenuItem.separatorItem())

        # Quit item (with Cmd+Q keyboard shortcut)
        quit_item = NSMenuItem.alloc().initWithTitle_action_keyEquivalent_(
            "Quit Menu Clock", None, "q"
        )
        quit_item.setKeyEquivalentModifierMask_(0x100000)  # Cmd key
        quit_item.setTarget_(self)
        quit_item.setAction_("quitApp:")
        quit_item.setEnabled_(True)
        self.menu.addItem_(quit_item)

    @objc.python_method
    def observe_system_events(self) -> None:
        """Re-render on locale, clock and time zone changes."""
        center = NSNotificationCenter.defaultCenter()
        center.addObserver_selector_name_object_(
            self, "localeDidChange:", NSCurrentLocaleDidChangeNotification, None
        )
        center.addObserver_selector_name_object_(
            self, "clockDidChange:", NSSystemClockDidChangeNotification, None
        )
        center.addObserver_selector_name_object_(
            self, "timeZoneDidChange:", NSSystemTimeZoneDidChangeNotification, None
        )

    def localeDidChange_(self, notification: Any) -> None:
        self.presenter.locale_changed()

    def clockDidChange_(self, notification: Any) -> None:
        self.presenter.clock_changed()

    def timeZoneDidChange_(self, notification: Any) -> None:
        NSTimeZone.resetSystemTimeZone()
        self.presenter.clock_changed()

    def openDateAndTimePreferences_(self, sender: Any) -> None:
        """Open the Date & Time settings."""
        NSWorkspace.sharedWorkspace().openFile_(self.config.display.settings_pane_path)

    def quitApp_(self, sender: Any) -> None:
        """Quit the application."""
        if self.presenter is not None:
            self.presenter.stop()
        NSNotificationCenter.defaultCenter().removeObserver_(self)
        NSApp.terminate_(self)

    @objc.python_method
    def run(self) -> None:
        """Run the application main loop."""
        # Set up signal handler for graceful shutdown
        def signal_handler(sig, frame):
            logger.info("Shutting down...")
            self.quitApp_(None)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        self.setup_menu_bar()
        self.observe_system_events()
        self.presenter.start()
        logger.info(f"Analog clock preference: {self.preferences.is_analog()}")

        # Run NSApplication on the main thread (required for macOS Cocoa)
        NSApplication.sharedApplication().run()


def run_menu_app(config: Optional[Config] = None) -> None:
    """Start the menu bar clock.

    Args:
        config: Application configuration. Defaults to the global config.
    """
    app = ClockMenuApp.alloc().init()
    app.configure(config or get_config())
    app.run()


if __name__ == "__main__":
    run_menu_app()
