# src/jalali_range_picker/services/range_selection.py
"""
Selection state machine behind the date range picker.

A SelectionState is created per picker invocation, mutated by the active
presentation surface (calendar grid or text fields) and resolved exactly
once, by confirm() or cancel().
"""
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

import jdatetime

from ..date_utils import date_only, today
from .range_validation import (
    DateRange, SelectionBounds, PickerPreconditionError, SessionClosedError,
    DateInputError, FormatError, parse_date_text, check_range, format_field_text,
)

logger = logging.getLogger(__name__)


class EntryMode(enum.Enum):
    CALENDAR = "calendar"
    INPUT = "input"


class Unset:
    """An endpoint that has not been chosen yet."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"


UNSET = Unset()


@dataclass(frozen=True)
class Selected:
    """An endpoint holding a chosen date."""
    date: jdatetime.date


Endpoint = Union[Unset, Selected]


def endpoint_date(endpoint: Endpoint) -> Optional[jdatetime.date]:
    if isinstance(endpoint, Selected):
        return endpoint.date
    if isinstance(endpoint, Unset):
        return None
    raise TypeError(f"Not an endpoint: {endpoint!r}")


def as_endpoint(value: Optional[jdatetime.date]) -> Endpoint:
    return UNSET if value is None else Selected(date_only(value))


@dataclass(frozen=True)
class SelectionSnapshot:
    """Read-only view handed to presentation surfaces."""
    selected_start: Endpoint
    selected_end: Endpoint
    entry_mode: EntryMode
    bounds: SelectionBounds
    current_date: jdatetime.date
    auto_validate: bool

    @property
    def start_date(self) -> Optional[jdatetime.date]:
        return endpoint_date(self.selected_start)

    @property
    def end_date(self) -> Optional[jdatetime.date]:
        return endpoint_date(self.selected_end)

    @property
    def has_complete_range(self) -> bool:
        return isinstance(self.selected_start, Selected) and isinstance(self.selected_end, Selected)


class RangeTextInput:
    """
    Model of the two text fields shown in input mode.

    Every text change is parsed and forwarded to the selection (None when
    the text does not parse). Errors are recomputed on every change but are
    only reported through visible_error() once the selection's
    auto_validate flag is on.
    """

    def __init__(self, selection: "SelectionState", persian_digits: bool = False,
                 accept_gregorian: bool = True):
        self.selection = selection
        self.accept_gregorian = accept_gregorian
        self.start_text = format_field_text(selection.start_date, persian_digits)
        self.end_text = format_field_text(selection.end_date, persian_digits)
        self.errors = {"start": None, "end": None}
        self._recompute_errors()

    def set_start_text(self, text: str):
        self.start_text = text
        self.selection.set_start(self._parse_or_none(text, "start"))
        self._recompute_errors()

    def set_end_text(self, text: str):
        self.end_text = text
        self.selection.set_end(self._parse_or_none(text, "end"))
        self._recompute_errors()

    def _parse_or_none(self, text, field):
        try:
            return parse_date_text(text, self.accept_gregorian, field)
        except FormatError:
            return None

    def _recompute_errors(self):
        errors = {"start": None, "end": None}
        parsed = {}
        for field, text in (("start", self.start_text), ("end", self.end_text)):
            try:
                parsed[field] = parse_date_text(text, self.accept_gregorian, field)
            except FormatError as e:
                errors[field] = e
                parsed[field] = None
        bounds = self.selection.bounds
        for field in ("start", "end"):
            if errors[field] is None:
                try:
                    check_range(parsed["start"] if field == "start" else None,
                                parsed["end"] if field == "end" else None, bounds)
                except DateInputError as e:
                    errors[field] = e
        if errors["start"] is None and errors["end"] is None:
            try:
                check_range(parsed["start"], parsed["end"], bounds)
            except DateInputError as e:
                errors[e.field or "end"] = e
        self.errors = errors

    def validate(self) -> bool:
        """Recompute errors; True when both fields are acceptable."""
        self._recompute_errors()
        return self.errors["start"] is None and self.errors["end"] is None

    def visible_error(self, field: str) -> Optional[DateInputError]:
        if not self.selection.auto_validate:
            return None
        return self.errors.get(field)


def _check_initial_range(initial_range: DateRange, bounds: SelectionBounds):
    if initial_range.start > initial_range.end:
        raise PickerPreconditionError("The initial range's start date must not be after its end date.")
    for name, value in (("start", initial_range.start), ("end", initial_range.end)):
        if not bounds.contains(value):
            raise PickerPreconditionError(
                f"The initial range's {name} date {value} must be between "
                f"{bounds.first_date} and {bounds.last_date}."
            )


class SelectionState:
    """In-progress date range selection for one picker session."""

    def __init__(self, bounds: SelectionBounds, current_date: jdatetime.date,
                 initial_range: Optional[DateRange] = None,
                 entry_mode: EntryMode = EntryMode.CALENDAR,
                 persian_digits: bool = False, accept_gregorian_input: bool = True):
        if initial_range is not None:
            initial_range = DateRange(date_only(initial_range.start), date_only(initial_range.end))
            _check_initial_range(initial_range, bounds)
        self._observers: List[Callable[[str], None]] = []
        self.is_resolved = False
        self.result: Optional[DateRange] = None
        self.bounds = bounds
        self.current_date = date_only(current_date)
        self._selected_start = as_endpoint(initial_range.start if initial_range else None)
        self._selected_end = as_endpoint(initial_range.end if initial_range else None)
        self.entry_mode = entry_mode
        self.auto_validate = False
        self.persian_digits = persian_digits
        self.accept_gregorian_input = accept_gregorian_input
        self.text_input = self._new_text_input() if entry_mode is EntryMode.INPUT else None

    @classmethod
    def open(cls, first_date, last_date, initial_range: Optional[DateRange] = None,
             current_date=None, entry_mode: EntryMode = EntryMode.CALENDAR, **kwargs) -> "SelectionState":
        """
        Normalize the caller's arguments and start a session.

        Raises PickerPreconditionError before any state exists when the
        initial range is reversed, the bounds are reversed, or the initial
        range falls outside the bounds.
        """
        bounds = SelectionBounds(first_date, last_date)
        current_date = date_only(current_date) if current_date is not None else today()
        logger.debug(f"Opening range selection in {entry_mode.value} mode, bounds {bounds.first_date}..{bounds.last_date}")
        return cls(bounds, current_date, initial_range, entry_mode, **kwargs)

    # --- observers ---
    def subscribe(self, callback: Callable[[str], None]) -> Callable[[], None]:
        """Register callback(field_name); returns a function that unsubscribes it."""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)
        return unsubscribe

    def _notify(self, field: str):
        for callback in list(self._observers):
            callback(field)

    # --- read access ---
    @property
    def selected_start(self) -> Endpoint:
        return self._selected_start

    @property
    def selected_end(self) -> Endpoint:
        return self._selected_end

    @property
    def start_date(self) -> Optional[jdatetime.date]:
        return endpoint_date(self._selected_start)

    @property
    def end_date(self) -> Optional[jdatetime.date]:
        return endpoint_date(self._selected_end)

    @property
    def has_complete_range(self) -> bool:
        return isinstance(self._selected_start, Selected) and isinstance(self._selected_end, Selected)

    @property
    def can_confirm(self) -> bool:
        """Whether the confirm control is actionable for the current mode."""
        if self.entry_mode is EntryMode.CALENDAR:
            return self.has_complete_range
        return True

    def snapshot(self) -> SelectionSnapshot:
        return SelectionSnapshot(self._selected_start, self._selected_end, self.entry_mode,
                                 self.bounds, self.current_date, self.auto_validate)

    # --- operations ---
    def _ensure_open(self):
        if self.is_resolved:
            raise SessionClosedError("The date range picker session has already been resolved.")

    def set_start(self, value: Optional[jdatetime.date]):
        self._ensure_open()
        self._selected_start = as_endpoint(value)
        self._notify("start")

    def set_end(self, value: Optional[jdatetime.date]):
        self._ensure_open()
        self._selected_end = as_endpoint(value)
        self._notify("end")

    def calendar_tap(self, value: jdatetime.date):
        """
        Two-tap selection from the calendar grid.

        With no start, or with a complete selection, the tap starts a fresh
        range. Otherwise it becomes the end, stored as tapped even when it is
        before the start.
        """
        value = date_only(value)
        if not self.bounds.contains(value):
            logger.warning(f"Ignoring tap on {value}, outside {self.bounds.first_date}..{self.bounds.last_date}")
            return
        if isinstance(self._selected_start, Unset) or isinstance(self._selected_end, Selected):
            self.set_start(value)
            self.set_end(None)
        else:
            self.set_end(value)

    def toggle_entry_mode(self):
        self._ensure_open()
        if self.entry_mode is EntryMode.CALENDAR:
            self.auto_validate = False
            self.entry_mode = EntryMode.INPUT
            self.text_input = self._new_text_input()
        else:
            # A reversed range keeps the start; the end is dropped, never swapped.
            if self.has_complete_range and self.start_date > self.end_date:
                self._selected_end = UNSET
                self._notify("end")
            self.entry_mode = EntryMode.CALENDAR
            self.text_input = None
        self._notify("entry_mode")

    def confirm(self) -> bool:
        """
        Try to finish the session. Returns False when input-mode validation
        failed and the session stays open.
        """
        self._ensure_open()
        if self.entry_mode is EntryMode.INPUT and not self.text_input.validate():
            self.auto_validate = True
            logger.info(f"Confirm rejected: start={self.text_input.errors['start']!r}, end={self.text_input.errors['end']!r}")
            self._notify("auto_validate")
            return False
        if self.has_complete_range:
            result = DateRange(self.start_date, self.end_date)
        else:
            logger.warning("Confirm reached with an incomplete selection; resolving without a range.")
            result = None
        self._resolve(result)
        return True

    def cancel(self):
        self._ensure_open()
        self._resolve(None)

    def _resolve(self, result: Optional[DateRange]):
        self.is_resolved = True
        self.result = result
        self.text_input = None
        logger.info(f"Date range picker resolved with {result}")
        self._notify("resolved")

    def _new_text_input(self) -> RangeTextInput:
        return RangeTextInput(self, self.persian_digits, self.accept_gregorian_input)
