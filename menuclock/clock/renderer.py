"""Status bar title rendering with optional flashing separators."""

import unicodedata
from dataclasses import dataclass
from typing import Optional

from menuclock.clock.preferences import ClockPreferences

# 2001-01-01T00:00:00Z, the Foundation reference date
REFERENCE_EPOCH = 978307200.0


@dataclass(frozen=True)
class TitleSpan:
    """A run of characters sharing one visibility."""

    start: int
    length: int
    visible: bool


@dataclass(frozen=True)
class StyledTitle:
    """Title text plus the visibility of each character run.

    Spans are contiguous, in order, and cover the whole text.
    """

    text: str
    spans: tuple[TitleSpan, ...]

    def hidden_indices(self) -> set[int]:
        return {
            i
            for span in self.spans
            if not span.visible
            for i in range(span.start, span.start + span.length)
        }

    def visible_text(self, placeholder: str = " ") -> str:
        """Text with hidden characters replaced by ``placeholder``."""
        hidden = self.hidden_indices()
        return "".join(placeholder if i in hidden else ch for i, ch in enumerate(self.text))


def reference_seconds(instant: float) -> int:
    """Whole seconds elapsed since the reference epoch."""
    return int(instant - REFERENCE_EPOCH)


def is_separator(ch: str) -> bool:
    """True for Unicode punctuation (general categories Pc, Pd, Ps, Pe, Pi, Pf, Po)."""
    return unicodedata.category(ch).startswith("P")


def separators_hidden(instant: float, flash: bool) -> bool:
    return flash and reference_seconds(instant) % 2 == 0


def render_title(text: str, instant: float, flash: bool) -> StyledTitle:
    """Build the styled title for ``instant``.

    With ``flash`` set, punctuation is hidden on even reference seconds and
    shown on odd ones.
    """
    if not text:
        return StyledTitle(text, ())
    if not separators_hidden(instant, flash):
        return StyledTitle(text, (TitleSpan(0, len(text), True),))

    spans: list[TitleSpan] = []
    start = 0
    visible = not is_separator(text[0])
    for i, ch in enumerate(text[1:], start=1):
        ch_visible = not is_separator(ch)
        if ch_visible != visible:
            spans.append(TitleSpan(start, i - start, visible))
            start, visible = i, ch_visible
    spans.append(TitleSpan(start, len(text) - start, visible))
    return StyledTitle(text, tuple(spans))


class TitleRenderer:
    """Renders titles using the current FlashDateSeparators preference."""

    def __init__(self, preferences: ClockPreferences):
        self.preferences = preferences

    def render(self, text: str, instant: float, flash: Optional[bool] = None) -> StyledTitle:
        if flash is None:
            flash = self.preferences.flash_date_separators()
        return render_title(text, instant, flash)
