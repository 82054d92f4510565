# src/jalali_range_picker/ui/dialogs/date_range_picker_dialog.py
"""Dialog shell for picking a Jalali date range, plus the public entry call."""
import logging
from dataclasses import dataclass, fields
from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QWidget, QApplication
)
from PyQt6.QtCore import Qt

from ...config import config
from ...locale import _, RTL_LANGUAGES
from ...services.range_selection import SelectionState, EntryMode
from ...services.range_validation import (
    DateRange, format_range_start_date, format_range_end_date, format_date_range,
)
from ...date_utils import format_jalali_date
from ..widgets.calendar_range_grid import CalendarRangeGrid
from ..widgets.range_input_fields import RangeInputFields

logger = logging.getLogger(__name__)


@dataclass
class PickerLabels:
    """Optional text overrides. Anything left as None uses the locale's default."""
    help_text_start: Optional[str] = None
    help_text_end: Optional[str] = None
    confirm_text: Optional[str] = None
    cancel_text: Optional[str] = None
    save_text: Optional[str] = None
    error_format_text: Optional[str] = None
    error_invalid_text: Optional[str] = None
    error_invalid_range_text: Optional[str] = None
    field_start_hint_text: Optional[str] = None
    field_end_hint_text: Optional[str] = None
    field_start_label_text: Optional[str] = None
    field_end_label_text: Optional[str] = None
    start_date_text_hint: Optional[str] = None
    end_date_text_hint: Optional[str] = None
    today_text: Optional[str] = None

    def resolve(self, language: str) -> dict:
        resolved = {}
        for f in fields(self):
            value = getattr(self, f.name)
            resolved[f.name] = value if value is not None else _(f.name, language)
        for key in ("unspecified_range", "entry_mode_input_tooltip", "entry_mode_calendar_tooltip", "window_title"):
            resolved[key] = _(key, language)
        return resolved


class DateRangePickerDialog(QDialog):
    """Modal dialog forwarding user gestures into a SelectionState."""

    def __init__(self, selection: SelectionState, labels: PickerLabels = None, language: str = "fa",
                 text_direction: str = None, show_entry_mode_icon: bool = True,
                 space_today_text: float = 0, persian_digits: bool = True, parent=None):
        super().__init__(parent)
        self.selection = selection
        self.language = language
        self.persian_digits = persian_digits
        self.labels = (labels or PickerLabels()).resolve(language)
        self.show_entry_mode_icon = show_entry_mode_icon
        self.space_today_text = space_today_text
        self.rtl = (text_direction == "rtl") if text_direction else language in RTL_LANGUAGES
        self._confirmed = False

        self.setWindowTitle(self.labels["window_title"])
        self.setModal(True)
        self.setLayoutDirection(Qt.LayoutDirection.RightToLeft if self.rtl else Qt.LayoutDirection.LeftToRight)

        self.grid = None
        self.input_fields = None
        self.init_ui()
        self._unsubscribe = self.selection.subscribe(self._on_selection_changed)

    def init_ui(self):
        """Initialize the dialog UI."""
        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        # Header: help texts, endpoint labels and the entry mode toggle
        header = QHBoxLayout()
        header_text = QVBoxLayout()
        help_row = QHBoxLayout()
        self.help_start_label = QLabel(self.labels["help_text_start"])
        self.help_end_label = QLabel(self.labels["help_text_end"])
        help_row.addWidget(self.help_start_label)
        help_row.addStretch()
        help_row.addWidget(self.help_end_label)
        header_text.addLayout(help_row)

        dates_row = QHBoxLayout()
        self.start_date_label = QLabel("")
        self.end_date_label = QLabel("")
        self.range_label = QLabel("")
        for lbl in (self.start_date_label, self.end_date_label, self.range_label):
            lbl.setStyleSheet("font-size: 16px; font-weight: bold;")
        if self.space_today_text:
            self.start_date_label.setMinimumWidth(int(self.space_today_text))
            self.end_date_label.setMinimumWidth(int(self.space_today_text))
        dates_row.addWidget(self.start_date_label)
        dates_row.addStretch()
        dates_row.addWidget(self.end_date_label)
        dates_row.addWidget(self.range_label)
        header_text.addLayout(dates_row)
        header.addLayout(header_text, 1)

        self.entry_mode_button = QPushButton("✎")
        self.entry_mode_button.setFixedWidth(32)
        self.entry_mode_button.clicked.connect(self.selection.toggle_entry_mode)
        self.entry_mode_button.setVisible(self.show_entry_mode_icon)
        header.addWidget(self.entry_mode_button)
        layout.addLayout(header)

        # Body: calendar grid or text fields, rebuilt on entry mode changes
        self.body = QWidget()
        self.body_layout = QVBoxLayout(self.body)
        self.body_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.body, 1)

        # Buttons
        button_layout = QHBoxLayout()
        self.cancel_button = QPushButton(self.labels["cancel_text"])
        self.cancel_button.clicked.connect(self.reject)
        self.confirm_button = QPushButton(self.labels["confirm_text"])
        self.confirm_button.clicked.connect(self.handle_confirm)
        self.confirm_button.setDefault(True)
        button_layout.addStretch()
        button_layout.addWidget(self.confirm_button)
        button_layout.addWidget(self.cancel_button)
        layout.addLayout(button_layout)

        self._build_body()
        self._refresh_header()

    def _build_body(self):
        while self.body_layout.count():
            item = self.body_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self.grid = None
        self.input_fields = None

        if self.selection.entry_mode is EntryMode.CALENDAR:
            self.grid = CalendarRangeGrid(self.language, self.persian_digits)
            self.grid.dateTapped.connect(self.selection.calendar_tap)
            self.grid.set_snapshot(self.selection.snapshot())
            self.body_layout.addWidget(self.grid)
            self.confirm_button.setText(self.labels["save_text"])
            self.entry_mode_button.setToolTip(self.labels["entry_mode_input_tooltip"])
        else:
            self.input_fields = RangeInputFields(self.selection.text_input, self.labels)
            self.body_layout.addWidget(self.input_fields)
            self.input_fields.focus_start()
            self.confirm_button.setText(self.labels["confirm_text"])
            self.entry_mode_button.setToolTip(self.labels["entry_mode_calendar_tooltip"])

    def _refresh_header(self):
        selection = self.selection
        start, end = selection.start_date, selection.end_date
        calendar_mode = selection.entry_mode is EntryMode.CALENDAR
        self.help_end_label.setVisible(calendar_mode)
        self.start_date_label.setVisible(calendar_mode)
        self.end_date_label.setVisible(calendar_mode)
        self.range_label.setVisible(not calendar_mode)
        if calendar_mode:
            self.start_date_label.setText(format_range_start_date(
                start, end, self.labels["start_date_text_hint"], self.labels["today_text"],
                selection.current_date, self.language, self.persian_digits))
            self.end_date_label.setText(format_range_end_date(
                start, end, selection.current_date, self.labels["end_date_text_hint"],
                self.labels["today_text"], self.language, self.persian_digits))
        else:
            self.range_label.setText(format_date_range(
                start, end, selection.current_date, self.labels["unspecified_range"],
                self.rtl, self.language, self.persian_digits))
        if start is not None and end is not None:
            self.range_label.setAccessibleName(
                f"{format_jalali_date(start, self.language, self.persian_digits)} – "
                f"{format_jalali_date(end, self.language, self.persian_digits)}")
        self.confirm_button.setEnabled(selection.can_confirm)

    def _on_selection_changed(self, field: str):
        if field == "resolved":
            self._unsubscribe()
            code = QDialog.DialogCode.Accepted if self._confirmed else QDialog.DialogCode.Rejected
            self.done(code.value)
            return
        if field == "entry_mode":
            self._build_body()
        elif field == "auto_validate" and self.input_fields is not None:
            self.input_fields.refresh_errors()
        elif field in ("start", "end") and self.grid is not None:
            self.grid.set_snapshot(self.selection.snapshot())
        self._refresh_header()

    def handle_confirm(self):
        if self.selection.is_resolved:
            return
        self._confirmed = True
        if not self.selection.confirm():
            self._confirmed = False

    def reject(self):
        """Escape, window close and the cancel button all end the session without a range."""
        if self.selection.is_resolved:
            super().reject()
            return
        self.selection.cancel()

    def selected_range(self) -> Optional[DateRange]:
        return self.selection.result


def show_persian_date_range_picker(first_date, last_date, initial_date_range: DateRange = None,
                                   current_date=None, initial_entry_mode: EntryMode = None,
                                   locale: str = None, text_direction: str = None,
                                   labels: PickerLabels = None, show_entry_mode_icon: bool = None,
                                   space_today_text: float = 0, parent=None) -> Optional[DateRange]:
    """
    Show the picker modally and return the chosen DateRange, or None on cancel.

    Raises PickerPreconditionError before any window is created when the
    bounds or the initial range are inconsistent.
    """
    settings = config.settings
    language = locale or settings.get("language", "fa")
    if initial_entry_mode is None:
        mode_value = settings.get("initial_entry_mode", "calendar")
        try:
            initial_entry_mode = EntryMode(mode_value)
        except ValueError:
            logger.warning(f"Unknown initial_entry_mode '{mode_value}' in settings, using calendar.")
            initial_entry_mode = EntryMode.CALENDAR
    if show_entry_mode_icon is None:
        show_entry_mode_icon = settings.get("show_entry_mode_icon", True)
    persian_digits = settings.get("persian_digits", True) and language == "fa"

    try:
        selection = SelectionState.open(
            first_date, last_date, initial_date_range, current_date, initial_entry_mode,
            persian_digits=persian_digits,
            accept_gregorian_input=settings.get("accept_gregorian_input", True),
        )
    except ValueError as e:
        logger.error(f"Date range picker opened with invalid arguments: {e}")
        raise

    if QApplication.instance() is None:
        raise RuntimeError("A QApplication must exist before showing the date range picker.")

    dialog = DateRangePickerDialog(
        selection, labels, language, text_direction, show_entry_mode_icon,
        space_today_text, persian_digits, parent,
    )
    dialog.exec()
    result = dialog.selected_range()
    logger.info(f"Date range picker returned {result}")
    return result
