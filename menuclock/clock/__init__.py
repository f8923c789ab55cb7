"""Clock core: preferences, title rendering, tick scheduling and the presenter.

The formatter module depends on Foundation and is imported explicitly.
"""

from menuclock.clock.preferences import ClockPreferences, MemoryPreferenceStore
from menuclock.clock.presenter import ClockPresenter
from menuclock.clock.renderer import StyledTitle, TitleRenderer, render_title
from menuclock.clock.scheduler import SchedulerState, TickScheduler

__all__ = [
    "ClockPreferences",
    "ClockPresenter",
    "MemoryPreferenceStore",
    "SchedulerState",
    "StyledTitle",
    "TickScheduler",
    "TitleRenderer",
    "render_title",
]
