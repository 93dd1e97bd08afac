import argparse
import logging
import os
import sys
import threading
import traceback
from datetime import datetime
from pathlib import Path

from PySide6.QtCore import qInstallMessageHandler
from PySide6.QtWidgets import QApplication

from plotview.models.record_list_model import (RECORD_KINDS, load_records,
                                               sample_records)
from plotview.utils.settings import DEFAULT_SETTINGS, get_int_setting, settings
from plotview.widgets.main_window import MainWindow

CRASH_LOG_PATH = os.path.abspath('plotview_crash.log')
_crash_handlers_installed = False


# Install a message handler to suppress QPainter warnings at Qt level
def qt_message_handler(msg_type, msg_context, msg_string):
    """Suppress Qt's QPainter debug messages."""
    if "QPainter" in msg_string or "Paint device returned engine" in msg_string:
        return
    print(f"[Qt] {msg_string}")


def _append_crash_log(title: str, exc_info=None):
    """Append a timestamped crash entry to the crash log."""
    ts = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    try:
        with open(CRASH_LOG_PATH, 'a', encoding='utf-8') as f:
            f.write("\n" + "=" * 80 + "\n")
            f.write(f"{ts} | {title}\n")
            f.write("=" * 80 + "\n")
            if exc_info is None:
                f.write(traceback.format_exc())
            else:
                f.writelines(traceback.format_exception(*exc_info))
            f.write("\n")
    except OSError as log_error:
        print(f"[CRASH] Failed to write crash log: {log_error}")
    print(f"[CRASH] Details written to: {CRASH_LOG_PATH}")


def install_crash_handlers():
    """Log unhandled exceptions from the main and worker threads."""
    global _crash_handlers_installed
    if _crash_handlers_installed:
        return

    def _unhandled_exception(exc_type, exc_value, exc_traceback):
        _append_crash_log("UNHANDLED EXCEPTION", (exc_type, exc_value, exc_traceback))
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    def _thread_exception(args):
        thread_name = getattr(args.thread, 'name', 'unknown')
        _append_crash_log(
            f"THREAD EXCEPTION ({thread_name})",
            (args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = _unhandled_exception
    threading.excepthook = _thread_exception
    _crash_handlers_installed = True


def configure_logging():
    """Quiet logging unless running in a development environment."""
    environment = os.getenv('PLOTVIEW_ENVIRONMENT')
    if environment == 'development':
        print('Running in development environment.')
        logging.basicConfig(level=logging.DEBUG)
        return
    logging.basicConfig(level=logging.ERROR)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Browse cemetery records in virtualized views")
    p.add_argument(
        "records",
        nargs="?",
        default="",
        help="JSON file with plots/employees/tasks (default: last used file, else sample data)",
    )
    p.add_argument(
        "--sample-count",
        type=int,
        default=None,
        help="Number of generated records per kind when no file is given",
    )
    return p.parse_args(argv)


def resolve_records(args: argparse.Namespace) -> dict[str, list]:
    records_path = args.records or settings.value(
        'records_file_path', defaultValue=DEFAULT_SETTINGS['records_file_path'], type=str)
    if records_path and Path(records_path).is_file():
        records = load_records(records_path)
        settings.setValue('records_file_path', str(records_path))
        return records
    count = args.sample_count
    if count is None:
        count = get_int_setting('sample_record_count')
    return {kind: sample_records(kind, count, seed=i) for i, kind in enumerate(RECORD_KINDS)}


def run_gui(argv=None):
    args = parse_args(argv)
    configure_logging()
    install_crash_handlers()
    qInstallMessageHandler(qt_message_handler)

    app = QApplication([])
    # The application name is shown in the taskbar.
    app.setApplicationName('Plot records')
    app.setApplicationDisplayName('Plot records')
    app.setStyle('Fusion')

    main_window = MainWindow(app, resolve_records(args))
    main_window.show()
    return int(app.exec())
