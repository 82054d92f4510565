# src/jalali_range_picker/services/range_validation.py
"""
Date range value types, typed-text parsing, range checks and the label
formatting used by the picker header and input fields.
"""
import datetime
import re
from dataclasses import dataclass
from typing import Optional

import jdatetime

from ..date_utils import (
    date_only, persian_to_latin, gregorian_to_jalali,
    format_input_date, format_jalali_date, format_month_day,
)


class PickerError(Exception):
    """Base exception for date range picker errors."""
    pass


class PickerPreconditionError(PickerError, ValueError):
    """Raised when the caller opens the picker with inconsistent arguments."""
    pass


class SessionClosedError(PickerError):
    """Raised when an operation reaches a session that has already resolved."""
    pass


class DateInputError(PickerError):
    """Base class for errors shown inline next to a date field."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class FormatError(DateInputError):
    """Typed text does not parse as a date."""
    pass


class InvalidDateError(DateInputError):
    """Parsed date lies outside the selectable bounds."""
    pass


class InvalidRangeError(DateInputError):
    """Start date is after the end date."""
    pass


@dataclass(frozen=True)
class SelectionBounds:
    """Inclusive interval of selectable dates."""
    first_date: jdatetime.date
    last_date: jdatetime.date

    def __post_init__(self):
        object.__setattr__(self, "first_date", date_only(self.first_date))
        object.__setattr__(self, "last_date", date_only(self.last_date))
        if self.last_date < self.first_date:
            raise PickerPreconditionError(
                f"Last date {self.last_date} must be on or after first date {self.first_date}."
            )

    def contains(self, value: jdatetime.date) -> bool:
        return self.first_date <= value <= self.last_date


@dataclass(frozen=True)
class DateRange:
    """
    A selected (start, end) pair.

    Ordering is not enforced here: ranges confirmed from the calendar grid
    keep the endpoints in the order they were tapped.
    """
    start: jdatetime.date
    end: jdatetime.date

    @property
    def days(self) -> int:
        """Inclusive number of days covered."""
        return abs((self.end - self.start).days) + 1


# --- Parsing ---
_SEPARATED_RE = re.compile(r"^(\d{4})[^\d]+(\d{1,2})[^\d]+(\d{1,2})$")
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def parse_date_text(text: str, accept_gregorian: bool = True, field: str = None) -> Optional[jdatetime.date]:
    """
    Parse a typed date. Empty text means "unset" and returns None.

    Accepts Persian or Latin digits with any separator, e.g. 1400/03/10,
    1400-3-10 or 14000310. Years from 1200 to 1600 are Jalali; other years
    are read as Gregorian when accept_gregorian is set.
    """
    if text is None:
        return None
    text = persian_to_latin(text.strip())
    if not text:
        return None
    m = _SEPARATED_RE.match(text) or _COMPACT_RE.match(text)
    if not m:
        raise FormatError(f"Cannot parse '{text}' as a date.", field)
    y, mo, d = int(m.group(1)), int(m.group(2)), int(m.group(3))
    try:
        if 1200 <= y <= 1600:
            return jdatetime.date(y, mo, d)
        if accept_gregorian:
            return gregorian_to_jalali(datetime.date(y, mo, d))
    except ValueError as e:
        raise FormatError(f"'{text}' is not a valid date: {e}", field) from e
    raise FormatError(f"Year {y} is outside the Jalali range.", field)


def check_range(start: Optional[jdatetime.date], end: Optional[jdatetime.date],
                bounds: SelectionBounds) -> None:
    """Raise InvalidDateError or InvalidRangeError for a bad (start, end) pair."""
    if start is not None and not bounds.contains(start):
        raise InvalidDateError(f"Start date {start} is outside {bounds.first_date}..{bounds.last_date}.", "start")
    if end is not None and not bounds.contains(end):
        raise InvalidDateError(f"End date {end} is outside {bounds.first_date}..{bounds.last_date}.", "end")
    if start is not None and end is not None and start > end:
        raise InvalidRangeError(f"Start date {start} is after end date {end}.", "end")


# --- Range label formatting ---
def format_range_start_date(start: Optional[jdatetime.date], end: Optional[jdatetime.date],
                            hint: str, today_text: str = None, current_date: jdatetime.date = None,
                            language: str = "fa", persian_digits: bool = True) -> str:
    """Header label for the start endpoint; hint when unset."""
    if start is None:
        return hint
    if today_text and current_date is not None and start == current_date:
        return today_text
    if end is None or start.year == end.year:
        return format_month_day(start, language, persian_digits)
    return format_jalali_date(start, language, persian_digits)


def format_range_end_date(start: Optional[jdatetime.date], end: Optional[jdatetime.date],
                          current_date: jdatetime.date, hint: str, today_text: str = None,
                          language: str = "fa", persian_digits: bool = True) -> str:
    """Header label for the end endpoint; hint when unset."""
    if end is None:
        return hint
    if today_text and end == current_date:
        return today_text
    if start is not None and start.year == end.year == current_date.year:
        return format_month_day(end, language, persian_digits)
    return format_jalali_date(end, language, persian_digits)


def format_date_range(start: Optional[jdatetime.date], end: Optional[jdatetime.date],
                      current_date: jdatetime.date, unspecified_text: str, rtl: bool = True,
                      language: str = "fa", persian_digits: bool = True) -> str:
    """Single-line label for the whole range, ordered by text direction."""
    if start is None or end is None:
        return unspecified_text
    start_text = format_range_start_date(start, end, "", language=language, persian_digits=persian_digits)
    end_text = format_range_end_date(start, end, current_date, "", language=language, persian_digits=persian_digits)
    if rtl:
        return f"{end_text} – {start_text}"
    return f"{start_text} – {end_text}"


def format_field_text(value: Optional[jdatetime.date], persian_digits: bool = False) -> str:
    """Text placed in an input field for an endpoint; empty when unset."""
    return "" if value is None else format_input_date(value, persian_digits)
