"""Clock presenter: keeps the status bar title and full date current.

Everything here runs on the main thread. Each render re-arms the tick
scheduler, so preference, locale or clock changes between ticks never leave
more than one wake-up pending.
"""

import logging
from typing import Any, Optional, Protocol

from menuclock.clock.preferences import (
    DATE_FORMAT_KEY,
    FLASH_DATE_SEPARATORS_KEY,
    ClockPreferences,
    Subscription,
)
from menuclock.clock.renderer import StyledTitle, TitleRenderer
from menuclock.clock.scheduler import TickScheduler

logger = logging.getLogger(__name__)

OBSERVED_KEYS = (DATE_FORMAT_KEY, FLASH_DATE_SEPARATORS_KEY)


class ClockSurface(Protocol):
    """Where rendered values go: the status item title and the full-date menu item."""

    def set_title(self, title: StyledTitle) -> None: ...

    def set_full_date(self, text: str) -> None: ...


class Formatters(Protocol):
    def rebuild(self, date_format: Optional[str] = None, locale: Any = None) -> None: ...

    def title_string(self, instant: float) -> str: ...

    def full_date_string(self, instant: float) -> str: ...


class ClockPresenter:
    """Formats the current time and pushes it to a ClockSurface."""

    def __init__(
        self,
        preferences: ClockPreferences,
        formatters: Formatters,
        surface: ClockSurface,
        scheduler: TickScheduler,
    ):
        self.preferences = preferences
        self.formatters = formatters
        self.surface = surface
        self.scheduler = scheduler
        self.renderer = TitleRenderer(preferences)
        self._subscriptions: list[Subscription] = []

    @property
    def started(self) -> bool:
        return bool(self._subscriptions)

    def start(self) -> None:
        """Subscribe to preference changes and show the first title."""
        if self.started:
            return
        for key in OBSERVED_KEYS:
            self._subscriptions.append(self.preferences.observe(key, self.preference_changed))
        self.update_formatters()
        self.render()
        logger.info("Clock presenter started")

    def stop(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []
        self.scheduler.cancel()
        logger.info("Clock presenter stopped")

    def update_formatters(self) -> None:
        self.formatters.rebuild(self.preferences.date_format())

    def render(self) -> None:
        """Render both titles for now and arm the next tick."""
        now = self.scheduler.clock()
        title = self.renderer.render(self.formatters.title_string(now), now)
        self.surface.set_title(title)
        self.surface.set_full_date(self.formatters.full_date_string(now))
        self.scheduler.arm(self.tick, now=now)

    def tick(self) -> None:
        self.render()

    def preference_changed(self, key: str) -> None:
        logger.debug(f"Clock preference changed: {key}")
        if key == DATE_FORMAT_KEY:
            self.update_formatters()
        self.render()

    def locale_changed(self) -> None:
        logger.debug("Current locale changed")
        self.update_formatters()
        self.render()

    def clock_changed(self) -> None:
        logger.debug("System clock or time zone changed")
        self.render()
