# src/jalali_range_picker/ui/widgets/calendar_range_grid.py
from PyQt6.QtWidgets import (
    QPushButton, QHBoxLayout, QVBoxLayout, QLabel, QGridLayout, QFrame
)
from PyQt6.QtCore import Qt, pyqtSignal
import jdatetime

from ...date_utils import (
    days_in_month, first_weekday_index, shift_month, get_weekday_names,
    format_month_year, format_jalali_date, to_persian_digits,
)
from ...locale import _
from ...services.range_selection import SelectionSnapshot


class CalendarRangeGrid(QFrame):
    """Month grid for picking a Jalali range with two taps.

    Saturday..Friday columns, shown right-to-left when the layout direction is RTL.
    Renders a SelectionSnapshot and emits dateTapped(jdatetime.date); the
    selection itself decides whether a tap is a start or an end.
    """
    dateTapped = pyqtSignal(object)

    def __init__(self, language: str = "fa", persian_digits: bool = True, parent=None):
        super().__init__(parent)
        self.language = language
        self.persian_digits = persian_digits
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setObjectName("jalaliRangeGrid")

        self.setStyleSheet("""
        QFrame#jalaliRangeGrid {
            background: #ffffff;
            border: 1px solid #cfd8dc;
            border-radius: 8px;
            padding: 8px;
        }
        QLabel#monthLabel {
            font-weight: 700;
            color: #1f3a57;
            font-size: 12pt;
        }
        QLabel[class="weekday"] {
            color: #1f7ae0;
            min-width: 36px;
            font-weight: bold;
        }
        QPushButton[role="nav"] {
            background: #1f7ae0;
            color: white;
            border: none;
            border-radius: 6px;
            min-width: 28px;
            min-height: 28px;
            padding: 0;
            font-weight: bold;
        }
        QPushButton[role="nav"]:hover { background: #185fb8; }
        QPushButton[role="nav"]:disabled { background: #b0bec5; }
        QPushButton[role="day"] {
            background: transparent;
            border: none;
            min-width: 36px;
            min-height: 32px;
            border-radius: 6px;
            color: #1c2430;
        }
        QPushButton[role="day"]:hover { background: #e9f4ff; }
        QPushButton[role="day"]:disabled { color: #b0bec5; }
        QPushButton[role="day"][today="true"] {
            border: 1px solid #2f98ff;
        }
        QPushButton[role="day"][inRange="true"] {
            background: #ffe0e0;
        }
        QPushButton[role="day"][selected="true"] {
            background: #2f98ff;
            color: #ffffff;
            font-weight: 700;
        }
        """)

        self.vbox = QVBoxLayout(self)
        self.vbox.setSpacing(8)

        # header: nav buttons + month label
        header = QHBoxLayout()
        header.setSpacing(6)
        self.btn_next = QPushButton("▶")
        self.btn_next.setProperty("role", "nav")
        self.btn_next.setToolTip(_("next_month", language))
        self.btn_prev = QPushButton("◀")
        self.btn_prev.setProperty("role", "nav")
        self.btn_prev.setToolTip(_("previous_month", language))
        self.lbl_month = QLabel("")
        self.lbl_month.setObjectName("monthLabel")
        self.lbl_month.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self.btn_next)
        header.addWidget(self.lbl_month, 1)
        header.addWidget(self.btn_prev)
        self.vbox.addLayout(header)

        # weekday header (Saturday .. Friday)
        weekday_layout = QHBoxLayout()
        weekday_layout.setSpacing(4)
        for wd in get_weekday_names(language):
            lbl = QLabel(wd)
            lbl.setProperty("class", "weekday")
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
            lbl.setFixedWidth(36)
            weekday_layout.addWidget(lbl)
        self.vbox.addLayout(weekday_layout)

        # grid of day buttons (6 rows x 7 columns)
        self.grid = QGridLayout()
        self.grid.setSpacing(6)
        self.day_buttons = []
        for r in range(6):
            row = []
            for c in range(7):
                b = QPushButton("")
                b.setProperty("role", "day")
                b.setCursor(Qt.CursorShape.PointingHandCursor)
                b.clicked.connect(self._on_day_clicked)
                b.setObjectName(f"dayBtn_{r}_{c}")
                self.grid.addWidget(b, r, c)
                row.append(b)
            self.day_buttons.append(row)
        self.vbox.addLayout(self.grid)

        # state
        self._snapshot = None
        self._current_jyear = None
        self._current_jmonth = None

        self.btn_prev.clicked.connect(self.go_prev_month)
        self.btn_next.clicked.connect(self.go_next_month)

    @property
    def displayed_month(self):
        return self._current_jyear, self._current_jmonth

    def set_snapshot(self, snapshot: SelectionSnapshot):
        """Render a selection; the first call also picks the month to show."""
        first_render = self._snapshot is None
        self._snapshot = snapshot
        if first_render:
            anchor = snapshot.start_date if snapshot.start_date is not None else snapshot.current_date
            bounds = snapshot.bounds
            if anchor < bounds.first_date:
                anchor = bounds.first_date
            elif anchor > bounds.last_date:
                anchor = bounds.last_date
            self._current_jyear, self._current_jmonth = anchor.year, anchor.month
        self._refresh()

    def go_prev_month(self):
        if self._can_show(*shift_month(self._current_jyear, self._current_jmonth, -1)):
            self._current_jyear, self._current_jmonth = shift_month(self._current_jyear, self._current_jmonth, -1)
            self._refresh()

    def go_next_month(self):
        if self._can_show(*shift_month(self._current_jyear, self._current_jmonth, 1)):
            self._current_jyear, self._current_jmonth = shift_month(self._current_jyear, self._current_jmonth, 1)
            self._refresh()

    def _can_show(self, year, month) -> bool:
        bounds = self._snapshot.bounds
        first = (bounds.first_date.year, bounds.first_date.month)
        last = (bounds.last_date.year, bounds.last_date.month)
        return first <= (year, month) <= last

    def button_for_day(self, day: int) -> QPushButton:
        for row in self.day_buttons:
            for btn in row:
                if btn.property("jalali_day") == day:
                    return btn
        return None

    def _refresh(self):
        """Render the month: day labels, enabled state, today and range markers."""
        year, month = self._current_jyear, self._current_jmonth
        snapshot = self._snapshot
        start, end = snapshot.start_date, snapshot.end_date
        if start is not None and end is not None:
            low, high = min(start, end), max(start, end)
        else:
            low = high = None

        self.lbl_month.setText(format_month_year(year, month, self.language, self.persian_digits))
        self.btn_prev.setEnabled(self._can_show(*shift_month(year, month, -1)))
        self.btn_next.setEnabled(self._can_show(*shift_month(year, month, 1)))

        # Clear all buttons first
        for row in self.day_buttons:
            for btn in row:
                btn.setText("")
                btn.setProperty("jalali_day", None)
                btn.setProperty("selected", "false")
                btn.setProperty("inRange", "false")
                btn.setProperty("today", "false")
                btn.setEnabled(False)
                btn.setToolTip("")
                btn.hide()

        start_index = first_weekday_index(year, month)
        for day in range(1, days_in_month(year, month) + 1):
            idx = start_index + (day - 1)
            row, col = idx // 7, idx % 7
            if not (0 <= row < 6):
                continue
            jd = jdatetime.date(year, month, day)
            btn = self.day_buttons[row][col]
            btn.setText(to_persian_digits(str(day)) if self.persian_digits else str(day))
            btn.setProperty("jalali_day", day)
            is_endpoint = (start is not None and jd == start) or (end is not None and jd == end)
            btn.setProperty("selected", "true" if is_endpoint else "false")
            btn.setProperty("inRange", "true" if low is not None and low < jd < high else "false")
            btn.setProperty("today", "true" if jd == snapshot.current_date else "false")
            btn.setEnabled(snapshot.bounds.contains(jd))
            btn.setToolTip(format_jalali_date(jd, self.language, self.persian_digits))
            btn.show()

        for row in self.day_buttons:
            for btn in row:
                # re-polish so stylesheet updates are applied
                btn.style().unpolish(btn)
                btn.style().polish(btn)

    def _on_day_clicked(self):
        b = self.sender()
        day = b.property("jalali_day")
        if not day:
            return
        self.dateTapped.emit(jdatetime.date(self._current_jyear, self._current_jmonth, int(day)))
