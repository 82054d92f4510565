# src/jalali_range_picker/locale.py
"""
Minimal string tables for the picker.
`_("key")` looks up a string; `translator.set_language("en")` switches language.
"""
import logging

STRINGS = {
    "fa": {
        "help_text_start": "انتخاب تاریخ",
        "help_text_end": "انتخاب تاریخ",
        "confirm_text": "تایید",
        "cancel_text": "لغو",
        "save_text": "تایید",
        "error_format_text": "قالب تاریخ نامعتبر است.",
        "error_invalid_text": "تاریخ خارج از محدوده است.",
        "error_invalid_range_text": "بازه تاریخ نامعتبر است.",
        "field_start_hint_text": "سال/ماه/روز",
        "field_end_hint_text": "سال/ماه/روز",
        "field_start_label_text": "تاریخ شروع",
        "field_end_label_text": "تاریخ پایان",
        "start_date_text_hint": "تاریخ شروع",
        "end_date_text_hint": "تاریخ پایان",
        "today_text": "امروز",
        "unspecified_range": "بازه نامشخص",
        "entry_mode_input_tooltip": "ورود تاریخ",
        "entry_mode_calendar_tooltip": "انتخاب تاریخ",
        "window_title": "انتخاب بازه تاریخ",
        "previous_month": "ماه قبل",
        "next_month": "ماه بعد",
    },
    "en": {
        "help_text_start": "Select range",
        "help_text_end": "Select range",
        "confirm_text": "OK",
        "cancel_text": "Cancel",
        "save_text": "Save",
        "error_format_text": "Invalid format.",
        "error_invalid_text": "Out of range.",
        "error_invalid_range_text": "Invalid range.",
        "field_start_hint_text": "yyyy/mm/dd",
        "field_end_hint_text": "yyyy/mm/dd",
        "field_start_label_text": "Start Date",
        "field_end_label_text": "End Date",
        "start_date_text_hint": "Start Date",
        "end_date_text_hint": "End Date",
        "today_text": "Today",
        "unspecified_range": "Date Range",
        "entry_mode_input_tooltip": "Switch to input",
        "entry_mode_calendar_tooltip": "Switch to calendar",
        "window_title": "Select date range",
        "previous_month": "Previous month",
        "next_month": "Next month",
    },
}

RTL_LANGUAGES = {"fa"}


class Translator:
    def __init__(self, language: str = "fa"):
        self.language = language

    def set_language(self, language: str):
        if language not in STRINGS:
            logging.getLogger(__name__).warning(f"Unknown language '{language}', keeping '{self.language}'.")
            return
        self.language = language

    @property
    def is_rtl(self) -> bool:
        return self.language in RTL_LANGUAGES

    def translate(self, key: str, language: str = None) -> str:
        table = STRINGS.get(language or self.language, {})
        if key in table:
            return table[key]
        return STRINGS["en"].get(key, key)


translator = Translator()


def _(key: str, language: str = None) -> str:
    """Look up a string in the given language, or the active one."""
    return translator.translate(key, language)
