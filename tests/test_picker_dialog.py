# tests/test_picker_dialog.py
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import unittest
from unittest import mock

import jdatetime

try:
    from PyQt6.QtWidgets import QApplication, QDialog
    from PyQt6.QtCore import Qt
    from PyQt6.QtTest import QTest
    HAVE_QT = True
except ImportError:
    HAVE_QT = False

from jalali_range_picker.config import config
from jalali_range_picker.services.range_selection import SelectionState, EntryMode, UNSET
from jalali_range_picker.services.range_validation import DateRange, PickerPreconditionError

FIRST = jdatetime.date(1400, 1, 1)
LAST = jdatetime.date(1400, 12, 29)
TODAY = jdatetime.date(1400, 3, 1)


@unittest.skipUnless(HAVE_QT, "PyQt6 is not available")
class TestDateRangePickerDialog(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance() or QApplication([])

    def make_dialog(self, entry_mode=EntryMode.CALENDAR, initial_range=None):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import DateRangePickerDialog
        state = SelectionState.open(FIRST, LAST, initial_range, TODAY, entry_mode)
        dialog = DateRangePickerDialog(state, language="en", persian_digits=False)
        return state, dialog

    def test_grid_taps_select_and_confirm(self):
        """Two taps on the grid make the save button actionable and confirm the pair as tapped."""
        state, dialog = self.make_dialog()
        self.assertEqual(dialog.grid.displayed_month, (1400, 3))
        self.assertFalse(dialog.confirm_button.isEnabled())

        dialog.grid.button_for_day(10).click()
        self.assertFalse(dialog.confirm_button.isEnabled())
        self.assertEqual(dialog.start_date_label.text(), "10 Khordad")
        self.assertEqual(dialog.end_date_label.text(), "End Date")

        dialog.grid.button_for_day(5).click()
        self.assertTrue(dialog.confirm_button.isEnabled())

        dialog.confirm_button.click()
        self.assertTrue(state.is_resolved)
        self.assertEqual(dialog.selected_range(), DateRange(jdatetime.date(1400, 3, 10), jdatetime.date(1400, 3, 5)))
        self.assertEqual(dialog.result(), QDialog.DialogCode.Accepted.value)

    def test_month_navigation_respects_bounds(self):
        state, dialog = self.make_dialog(initial_range=DateRange(FIRST, FIRST))
        self.assertEqual(dialog.grid.displayed_month, (1400, 1))
        self.assertFalse(dialog.grid.btn_prev.isEnabled())
        dialog.grid.btn_next.click()
        self.assertEqual(dialog.grid.displayed_month, (1400, 2))
        self.assertTrue(dialog.grid.btn_prev.isEnabled())

    def test_input_mode_shows_range_error(self):
        state, dialog = self.make_dialog()
        dialog.entry_mode_button.click()
        self.assertIs(state.entry_mode, EntryMode.INPUT)
        self.assertIsNone(dialog.grid)

        fields = dialog.input_fields
        fields.start_line.setText("1400-03-10")
        fields.end_line.setText("1400-03-05")
        self.assertTrue(fields.end_error.isHidden())

        dialog.confirm_button.click()
        self.assertFalse(state.is_resolved)
        self.assertTrue(state.auto_validate)
        self.assertFalse(fields.end_error.isHidden())
        self.assertEqual(fields.end_error.text(), dialog.labels["error_invalid_range_text"])

    def test_toggle_back_drops_reversed_end(self):
        state, dialog = self.make_dialog(EntryMode.INPUT)
        dialog.input_fields.start_line.setText("1400/03/10")
        dialog.input_fields.end_line.setText("1400/03/05")
        dialog.entry_mode_button.click()
        self.assertIsNotNone(dialog.grid)
        self.assertIs(state.selected_end, UNSET)
        self.assertFalse(dialog.confirm_button.isEnabled())

    def test_cancel_returns_nothing(self):
        state, dialog = self.make_dialog(initial_range=DateRange(FIRST, LAST))
        dialog.cancel_button.click()
        self.assertTrue(state.is_resolved)
        self.assertIsNone(dialog.selected_range())
        self.assertEqual(dialog.result(), QDialog.DialogCode.Rejected.value)

    def test_escape_cancels(self):
        state, dialog = self.make_dialog(initial_range=DateRange(FIRST, LAST))
        dialog.show()
        QTest.keyClick(dialog, Qt.Key.Key_Escape)
        self.assertTrue(state.is_resolved)
        self.assertIsNone(dialog.selected_range())
        self.assertEqual(dialog.result(), QDialog.DialogCode.Rejected.value)

    def test_closing_window_cancels(self):
        state, dialog = self.make_dialog(initial_range=DateRange(FIRST, LAST))
        dialog.show()
        dialog.close()
        self.assertTrue(state.is_resolved)
        self.assertIsNone(dialog.selected_range())
        self.assertEqual(dialog.result(), QDialog.DialogCode.Rejected.value)

    def test_reject_after_resolution_does_not_reopen(self):
        state, dialog = self.make_dialog(initial_range=DateRange(FIRST, LAST))
        dialog.confirm_button.click()
        dialog.reject()
        self.assertEqual(state.result, DateRange(FIRST, LAST))

    def test_text_direction_overrides_locale(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import DateRangePickerDialog
        dialog = DateRangePickerDialog(SelectionState.open(FIRST, LAST, None, TODAY), language="fa", text_direction="ltr")
        self.assertFalse(dialog.rtl)
        self.assertEqual(dialog.layoutDirection(), Qt.LayoutDirection.LeftToRight)

        dialog = DateRangePickerDialog(SelectionState.open(FIRST, LAST, None, TODAY), language="en", text_direction="rtl")
        self.assertTrue(dialog.rtl)
        self.assertEqual(dialog.layoutDirection(), Qt.LayoutDirection.RightToLeft)

    def test_entry_mode_icon_can_be_hidden(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import DateRangePickerDialog
        state, dialog = self.make_dialog()
        self.assertFalse(dialog.entry_mode_button.isHidden())
        dialog = DateRangePickerDialog(SelectionState.open(FIRST, LAST, None, TODAY), show_entry_mode_icon=False)
        self.assertTrue(dialog.entry_mode_button.isHidden())

    def test_space_today_text_reserves_label_width(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import DateRangePickerDialog
        dialog = DateRangePickerDialog(SelectionState.open(FIRST, LAST, None, TODAY), space_today_text=120)
        self.assertEqual(dialog.start_date_label.minimumWidth(), 120)
        self.assertEqual(dialog.end_date_label.minimumWidth(), 120)

    def test_label_overrides(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import DateRangePickerDialog, PickerLabels
        state = SelectionState.open(FIRST, LAST, None, TODAY)
        dialog = DateRangePickerDialog(state, PickerLabels(save_text="Done", cancel_text="Back"), language="fa")
        self.assertEqual(dialog.confirm_button.text(), "Done")
        self.assertEqual(dialog.cancel_button.text(), "Back")
        self.assertEqual(dialog.help_start_label.text(), "انتخاب تاریخ")
        self.assertTrue(dialog.rtl)

    def test_entry_call_rejects_bad_arguments_before_showing(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import show_persian_date_range_picker
        with self.assertRaises(PickerPreconditionError):
            show_persian_date_range_picker(LAST, FIRST)

    def test_bad_entry_mode_setting_falls_back_to_calendar(self):
        from jalali_range_picker.ui.dialogs.date_range_picker_dialog import show_persian_date_range_picker
        logger_name = "jalali_range_picker.ui.dialogs.date_range_picker_dialog"
        with mock.patch.dict(config.settings, {"initial_entry_mode": "sideways"}):
            with self.assertLogs(logger_name, "WARNING") as logs:
                with self.assertRaises(PickerPreconditionError):
                    show_persian_date_range_picker(LAST, FIRST)
        self.assertTrue(any("sideways" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
