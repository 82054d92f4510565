# tests/test_date_utils.py
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import datetime
import unittest

import jdatetime

from jalali_range_picker.date_utils import (
    date_only, days_in_month, shift_month, first_weekday_index,
    to_persian_digits, persian_to_latin, format_input_date, format_jalali_date,
    format_month_day, gregorian_to_jalali,
)


class TestDateOnly(unittest.TestCase):

    def test_drops_time_of_day(self):
        """A Jalali datetime is reduced to its calendar day."""
        value = date_only(jdatetime.datetime(1400, 3, 10, 17, 45, 12))
        self.assertEqual(type(value), jdatetime.date)
        self.assertEqual((value.year, value.month, value.day), (1400, 3, 10))

    def test_converts_gregorian_values(self):
        self.assertEqual(date_only(datetime.date(2021, 3, 21)), jdatetime.date(1400, 1, 1))
        self.assertEqual(date_only(datetime.datetime(2021, 3, 21, 23, 59)), jdatetime.date(1400, 1, 1))

    def test_plain_dates_compare_equal(self):
        self.assertEqual(date_only(jdatetime.date(1400, 1, 1)), jdatetime.date(1400, 1, 1))

    def test_rejects_other_types(self):
        with self.assertRaises(TypeError):
            date_only("1400/01/01")

    def test_gregorian_conversion(self):
        self.assertEqual(gregorian_to_jalali(datetime.date(2022, 6, 1)), jdatetime.date(1401, 3, 11))
        self.assertEqual(gregorian_to_jalali(datetime.datetime(2022, 6, 1, 9, 0)), jdatetime.date(1401, 3, 11))


class TestCalendarMath(unittest.TestCase):

    def test_days_in_month(self):
        self.assertEqual(days_in_month(1400, 1), 31)
        self.assertEqual(days_in_month(1400, 7), 30)
        self.assertEqual(days_in_month(1400, 12), 29)
        self.assertEqual(days_in_month(1399, 12), 30)  # leap year

    def test_shift_month_wraps_years(self):
        self.assertEqual(shift_month(1400, 12, 1), (1401, 1))
        self.assertEqual(shift_month(1400, 1, -1), (1399, 12))
        self.assertEqual(shift_month(1400, 5, 14), (1401, 7))

    def test_first_weekday_index_is_saturday_based(self):
        # 1 Farvardin 1400 was a Sunday
        self.assertEqual(first_weekday_index(1400, 1), 1)


class TestFormatting(unittest.TestCase):

    def test_digit_conversion(self):
        self.assertEqual(to_persian_digits("1400/03/10"), "۱۴۰۰/۰۳/۱۰")
        self.assertEqual(persian_to_latin("۱۴۰۰/۰۳/۱۰"), "1400/03/10")

    def test_input_date_format(self):
        self.assertEqual(format_input_date(jdatetime.date(1400, 3, 5)), "1400/03/05")
        self.assertEqual(format_input_date(jdatetime.date(1400, 3, 5), persian_digits=True), "۱۴۰۰/۰۳/۰۵")

    def test_display_formats(self):
        jd = jdatetime.date(1403, 3, 7)
        self.assertEqual(format_jalali_date(jd), "۷ خرداد ۱۴۰۳")
        self.assertEqual(format_jalali_date(jd, "en", persian_digits=False), "7 Khordad 1403")
        self.assertEqual(format_month_day(jd, "en", persian_digits=False), "7 Khordad")


if __name__ == '__main__':
    unittest.main()
