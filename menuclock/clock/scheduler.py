"""One-shot tick scheduling aligned to whole seconds."""

import enum
import time
from typing import Any, Callable, Optional, Protocol

from menuclock.clock.renderer import REFERENCE_EPOCH


class TimerHandle(Protocol):
    """A pending one-shot timer. NSTimer satisfies this."""

    def invalidate(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class SchedulerState(str, enum.Enum):
    """Tick scheduler state."""

    IDLE = "idle"
    ARMED = "armed"


def delay_until_next_second(instant: float) -> float:
    """Seconds from ``instant`` to the next whole reference second, in (0, 1]."""
    return 1.0 - (instant - REFERENCE_EPOCH) % 1.0


class TickScheduler:
    """Keeps at most one pending wake-up at the next whole second.

    Every ``arm`` invalidates the previous timer before creating a new one,
    so an early re-render never leaves a second timer in flight.
    """

    def __init__(self, timer_factory: TimerFactory, clock: Callable[[], float] = time.time):
        self.timer_factory = timer_factory
        self.clock = clock
        self._timer: Optional[TimerHandle] = None
        self.pending_delay: Optional[float] = None
        self.next_fire_at: Optional[float] = None

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.ARMED if self._timer is not None else SchedulerState.IDLE

    def arm(self, callback: Callable[[], Any], now: Optional[float] = None) -> float:
        """Schedule ``callback`` at the next whole second and return the delay."""
        self.cancel()
        if now is None:
            now = self.clock()
        delay = delay_until_next_second(now)

        timer: Optional[TimerHandle] = None

        def fire() -> None:
            # A fired one-shot timer is spent; only clear it if it is still ours
            if self._timer is timer:
                self._timer = None
                self.pending_delay = None
                self.next_fire_at = None
            callback()

        timer = self.timer_factory(delay, fire)
        self._timer = timer
        self.pending_delay = delay
        self.next_fire_at = now + delay
        return delay

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.invalidate()
            self._timer = None
        self.pending_delay = None
        self.next_fire_at = None
