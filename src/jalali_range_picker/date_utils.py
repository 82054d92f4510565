import jdatetime
import datetime
from typing import Union, List, Tuple

PERSIAN_MONTHS = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند"
]

ENGLISH_MONTHS = [
    "Farvardin", "Ordibehesht", "Khordad", "Tir", "Mordad", "Shahrivar",
    "Mehr", "Aban", "Azar", "Dey", "Bahman", "Esfand"
]

# Saturday ... Friday short names
PERSIAN_WEEKDAYS = ["ش", "ی", "د", "س", "چ", "پ", "ج"]
ENGLISH_WEEKDAYS = ["Sa", "Su", "Mo", "Tu", "We", "Th", "Fr"]

# Persian digits map and reverse map
_PERSIAN_DIGITS = {str(i): ch for i, ch in enumerate("۰۱۲۳۴۵۶۷۸۹")}
_LATIN_FROM_PERSIAN = {v: k for k, v in _PERSIAN_DIGITS.items()}
# Arabic-Indic digits show up from some keyboards
_LATIN_FROM_PERSIAN.update({ch: str(i) for i, ch in enumerate("٠١٢٣٤٥٦٧٨٩")})

DateLike = Union[jdatetime.date, datetime.date]


def to_persian_digits(s: str) -> str:
    return "".join(_PERSIAN_DIGITS.get(ch, ch) for ch in s)


def persian_to_latin(s: str) -> str:
    return "".join(_LATIN_FROM_PERSIAN.get(ch, ch) for ch in s)


# --- Date Conversion Utilities ---
def gregorian_to_jalali(greg_date: Union[datetime.date, datetime.datetime]) -> jdatetime.date:
    """Convert Gregorian date/datetime to Jalali date."""
    if isinstance(greg_date, datetime.datetime):
        greg_date = greg_date.date()
    if not isinstance(greg_date, datetime.date):
        raise TypeError("Input must be a datetime.date or datetime.datetime object")
    return jdatetime.date.fromgregorian(date=greg_date)


def date_only(value: DateLike) -> jdatetime.date:
    """
    Normalize any supported date value to a plain Jalali date.

    Time-of-day is dropped, so only (year, month, day) takes part in
    comparisons. Gregorian values are converted.
    """
    if isinstance(value, jdatetime.datetime):
        return value.date()
    if isinstance(value, jdatetime.date):
        return jdatetime.date(value.year, value.month, value.day)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return gregorian_to_jalali(value)
    raise TypeError(f"Unsupported date value: {value!r}")


def today() -> jdatetime.date:
    return jdatetime.date.today()


def is_jalali_leap(year: int) -> bool:
    return jdatetime.date(year, 1, 1).isleap()


def days_in_month(year: int, month: int) -> int:
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_jalali_leap(year) else 29


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def first_weekday_index(year: int, month: int) -> int:
    """Column of day 1 in a Saturday-first week (Saturday=0 .. Friday=6)."""
    gfirst = jdatetime.date(year, month, 1).togregorian()
    # Mon=0..Sun=6 -> Saturday=0, Sunday=1, ..., Friday=6
    return (gfirst.weekday() + 2) % 7


def get_month_names(language: str = "fa") -> List[str]:
    """Returns a list of Jalali month names."""
    return list(PERSIAN_MONTHS if language == "fa" else ENGLISH_MONTHS)


def get_weekday_names(language: str = "fa") -> List[str]:
    return list(PERSIAN_WEEKDAYS if language == "fa" else ENGLISH_WEEKDAYS)


# --- Date Formatting Utilities ---
def _digits(text: str, persian_digits: bool) -> str:
    return to_persian_digits(text) if persian_digits else text


def format_input_date(jalali_date: jdatetime.date, persian_digits: bool = False) -> str:
    """Text-field representation, e.g. 1400/03/10."""
    text = f"{jalali_date.year:04d}/{jalali_date.month:02d}/{jalali_date.day:02d}"
    return _digits(text, persian_digits)


def format_jalali_date(jalali_date: jdatetime.date, language: str = "fa", persian_digits: bool = True) -> str:
    """
    Format a Jalali date for display.
    Example: ۷ خرداد ۱۴۰۳
    """
    month_name = get_month_names(language)[jalali_date.month - 1]
    return _digits(f"{jalali_date.day} {month_name} {jalali_date.year}", persian_digits)


def format_month_day(jalali_date: jdatetime.date, language: str = "fa", persian_digits: bool = True) -> str:
    """Example: ۷ خرداد"""
    month_name = get_month_names(language)[jalali_date.month - 1]
    return _digits(f"{jalali_date.day} {month_name}", persian_digits)


def format_month_year(year: int, month: int, language: str = "fa", persian_digits: bool = True) -> str:
    return _digits(f"{get_month_names(language)[month - 1]} {year}", persian_digits)
