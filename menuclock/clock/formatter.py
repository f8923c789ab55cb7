"""Locale-aware title and full-date formatters.

Both formatters show the same weekday every day: each weekday symbol array
is replaced by seven copies of the locale's name for the third day of the
week. It is always Tuesday.
"""

import logging
from typing import Any, Optional, Sequence

from Foundation import (
    NSDate,
    NSDateFormatter,
    NSDateFormatterFullStyle,
    NSDateFormatterNoStyle,
    NSLocale,
)

from menuclock.utils.config import DEFAULT_TITLE_TEMPLATE

logger = logging.getLogger(__name__)

FIXED_WEEKDAY_INDEX = 2

# (getter, setter) pairs for every weekday symbol array on NSDateFormatter
WEEKDAY_SYMBOL_ACCESSORS = (
    ("weekdaySymbols", "setWeekdaySymbols_"),
    ("shortWeekdaySymbols", "setShortWeekdaySymbols_"),
    ("veryShortWeekdaySymbols", "setVeryShortWeekdaySymbols_"),
    ("standaloneWeekdaySymbols", "setStandaloneWeekdaySymbols_"),
    ("shortStandaloneWeekdaySymbols", "setShortStandaloneWeekdaySymbols_"),
    ("veryShortStandaloneWeekdaySymbols", "setVeryShortStandaloneWeekdaySymbols_"),
)


def fixed_weekday_symbols(symbols: Sequence[str]) -> list[str]:
    """Replace every entry with the symbol at ``FIXED_WEEKDAY_INDEX``."""
    fixed = symbols[FIXED_WEEKDAY_INDEX]
    return [fixed] * len(symbols)


def apply_fixed_weekday(formatter: Any) -> None:
    """Make ``formatter`` print the same weekday name for every day."""
    for getter, setter in WEEKDAY_SYMBOL_ACCESSORS:
        symbols = getattr(formatter, getter)()
        if symbols is None:
            continue
        getattr(formatter, setter)(fixed_weekday_symbols(list(symbols)))


def make_formatter(full_date: bool = False) -> Any:
    formatter = NSDateFormatter.alloc().init()
    if full_date:
        formatter.setDateStyle_(NSDateFormatterFullStyle)
        formatter.setTimeStyle_(NSDateFormatterNoStyle)
    apply_fixed_weekday(formatter)
    return formatter


def to_nsdate(instant: float) -> Any:
    return NSDate.dateWithTimeIntervalSince1970_(instant)


class ClockFormatters:
    """The title formatter and the full-date formatter, rebuilt together."""

    def __init__(self, template: str = DEFAULT_TITLE_TEMPLATE):
        self.template = template
        self.title_formatter = make_formatter()
        self.full_date_formatter = make_formatter(full_date=True)
        self.custom_format: Optional[str] = None

    def rebuild(self, date_format: Optional[str] = None, locale: Any = None) -> None:
        """Pick up the current locale and the custom date format, if any.

        Args:
            date_format: Custom pattern used verbatim for the title, or None
                to derive one from the template for the locale.
            locale: NSLocale to use. Defaults to the current locale.
        """
        if locale is None:
            locale = NSLocale.currentLocale()

        self.title_formatter.setLocale_(locale)
        if date_format:
            self.title_formatter.setDateFormat_(date_format)
        else:
            self.title_formatter.setLocalizedDateFormatFromTemplate_(self.template)
        self.custom_format = date_format or None

        self.full_date_formatter.setLocale_(locale)
        self.full_date_formatter.setDateStyle_(NSDateFormatterFullStyle)
        self.full_date_formatter.setTimeStyle_(NSDateFormatterNoStyle)

        # Changing the locale reloads the symbol arrays
        apply_fixed_weekday(self.title_formatter)
        apply_fixed_weekday(self.full_date_formatter)

        logger.debug(f"Title pattern is now {self.title_pattern!r}")

    @property
    def title_pattern(self) -> str:
        return str(self.title_formatter.dateFormat())

    def title_string(self, instant: float) -> str:
        return str(self.title_formatter.stringFromDate_(to_nsdate(instant)))

    def full_date_string(self, instant: float) -> str:
        return str(self.full_date_formatter.stringFromDate_(to_nsdate(instant)))
