# src/jalali_range_picker/main.py
"""
Demo entry point for the Jalali date range picker.
Sets up logging, creates the QApplication and shows the picker for the
current Jalali year.
"""
import sys
import logging
import jdatetime
from PyQt6.QtCore import Qt

from jalali_range_picker.config import config
from jalali_range_picker.locale import translator


# --- Logging Setup ---
def setup_logging():
    """Configure application logging to file and console."""
    try:
        log_dir = config.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file_path = log_dir / "app.log"

        level = getattr(logging, str(config.get("log_level", "INFO")).upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(log_file_path, encoding='utf-8'),
                logging.StreamHandler(sys.stdout)
            ]
        )
        logging.info("Logging system initialized. Log file: %s", log_file_path)
    except Exception as e:
        print(f"Critical Error: Failed to setup logging: {e}")
        sys.exit(1)


# --- Main Application Entry Point ---
def main():
    """Open the picker once and print the selected range."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Starting Jalali date range picker demo.")

    from PyQt6.QtWidgets import QApplication
    from jalali_range_picker.ui.dialogs.date_range_picker_dialog import show_persian_date_range_picker

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
        logger.debug("Created new QApplication instance.")

    translator.set_language(config.get("language", "fa"))
    if translator.is_rtl:
        app.setLayoutDirection(Qt.LayoutDirection.RightToLeft)
    else:
        app.setLayoutDirection(Qt.LayoutDirection.LeftToRight)

    today = jdatetime.date.today()
    first_date = jdatetime.date(today.year, 1, 1)
    last_date = jdatetime.date(today.year, 12, 29)

    try:
        selected = show_persian_date_range_picker(first_date, last_date, current_date=today)
    except Exception as e:
        logger.critical(f"Date range picker failed: {e}", exc_info=True)
        print("Critical Error: Failed to run the date range picker. See logs for details.")
        sys.exit(1)

    if selected is None:
        print("No range selected.")
    else:
        print(f"Selected range: {selected.start.isoformat()} - {selected.end.isoformat()} ({selected.days} days)")
    sys.exit(0)


if __name__ == "__main__":
    main()
