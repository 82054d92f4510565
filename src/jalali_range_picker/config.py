# src/jalali_range_picker/config.py
import os
import appdirs
import json
import logging
from pathlib import Path

# --- Application Metadata ---
APP_NAME = "JalaliRangePicker"
APP_AUTHOR = "JalaliRangePicker"

# --- Default Settings ---
DEFAULT_SETTINGS = {
    "language": "fa", # 'fa' or 'en'
    "initial_entry_mode": "calendar", # 'calendar' or 'input'
    "show_entry_mode_icon": True,
    "persian_digits": True, # Render dates with Persian digits
    "accept_gregorian_input": True, # Typed years outside 1200..1600 are read as Gregorian
    "log_level": "INFO",
}


class AppConfig:
    def __init__(self, user_data_dir=None):
        self.app_dirs = appdirs.AppDirs(APP_NAME, APP_AUTHOR)
        self.user_data_dir = Path(user_data_dir or self.app_dirs.user_data_dir)
        self.ensure_directories_exist()
        self.settings_file = self.user_data_dir / "settings.json"
        self.load_settings()

    def ensure_directories_exist(self):
        """Create necessary directories if they don't exist."""
        directories = [
            self.user_data_dir,
            self.user_data_dir / "logs"
        ]
        for directory in directories:
            try:
                directory.mkdir(parents=True, exist_ok=True)
                os.chmod(directory, 0o700)
            except OSError as e:
                logging.warning(f"Could not prepare directory {directory}: {e}")

    @property
    def log_dir(self) -> Path:
        return self.user_data_dir / "logs"

    def load_settings(self):
        """Load settings from file, or use defaults."""
        if self.settings_file.exists():
            try:
                with open(self.settings_file, 'r', encoding='utf-8') as f:
                    loaded_settings = json.load(f)
                    self.settings = {**DEFAULT_SETTINGS, **loaded_settings}
            except (json.JSONDecodeError, IOError) as e:
                logging.error(f"Error loading settings: {e}. Using defaults.")
                self.settings = DEFAULT_SETTINGS.copy()
        else:
            self.settings = DEFAULT_SETTINGS.copy()
            self.save_settings()

    def save_settings(self):
        """Save current settings to file."""
        try:
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=4, ensure_ascii=False)
        except IOError as e:
            logging.error(f"Error saving settings: {e}")

    def get(self, key, default=None):
        return self.settings.get(key, DEFAULT_SETTINGS.get(key, default))


# Global config instance
config = AppConfig()
