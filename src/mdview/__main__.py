"""Demo application: a markdown editor beside a live markdown view."""

import argparse
from datetime import datetime, timezone
import glob
import json
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from types import TracebackType
from typing import List

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QMainWindow, QPlainTextEdit, QScrollArea, QSplitter

from mdview.markdown_view import MarkdownView
from mdview.markdown_view_settings import MarkdownViewSettings


MDVIEW_DIR = os.path.expanduser("~/.mdview")


def setup_logging() -> None:
    """Configure application logging with timestamped files and rotation."""
    log_dir = os.path.join(MDVIEW_DIR, "logs")
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d-%H-%M-%S-%f")[:23]
    log_file = os.path.join(log_dir, f"{timestamp}.log")

    # Keep up to 50 log files, max 1MB each
    handler = RotatingFileHandler(
        log_file,
        maxBytes=1024*1024,
        backupCount=49,
        encoding='utf-8'
    )

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler]
    )

    cleanup_old_logs(log_dir, max_logs=50)


def cleanup_old_logs(log_dir: str, max_logs: int) -> None:
    """Remove oldest log files if we exceed maximum count."""
    log_files = glob.glob(os.path.join(log_dir, "*.log*"))
    log_files.sort(key=os.path.getctime)

    while len(log_files) > max_logs:
        try:
            os.remove(log_files.pop(0))

        except OSError:
            pass  # Another instance may have removed it already


def install_global_exception_handler() -> None:
    """Install a global exception handler for uncaught exceptions."""
    logger = logging.getLogger('GlobalExceptionHandler')

    def handle_exception(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        """Handle uncaught exceptions and log them."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            stack_info=True
        )

    sys.excepthook = handle_exception


def load_settings(path: str | None) -> MarkdownViewSettings:
    """
    Load view settings, falling back to defaults if there are none or they are invalid.

    Args:
        path: Explicit settings file, or None to use ~/.mdview/settings.json if it exists
    """
    logger = logging.getLogger("mdview")
    if path is None:
        path = os.path.join(MDVIEW_DIR, "settings.json")
        if not os.path.exists(path):
            return MarkdownViewSettings.create_default()

    try:
        return MarkdownViewSettings.load(path)

    except (OSError, json.JSONDecodeError, ValueError):
        logger.exception("Failed to load settings from %s, using defaults", path)
        return MarkdownViewSettings.create_default()


class MarkdownDemoWindow(QMainWindow):
    """Main window with an editor on the left and the rendered view on the right."""

    def __init__(self, settings: MarkdownViewSettings, text: str) -> None:
        super().__init__()
        self.setWindowTitle("mdview")
        self.resize(1200, 800)

        self._editor = QPlainTextEdit()
        self._view = MarkdownView(settings=settings)

        scroll_area = QScrollArea()
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self._view)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._editor)
        splitter.addWidget(scroll_area)
        self.setCentralWidget(splitter)

        self._editor.textChanged.connect(self._on_text_changed)
        self._editor.setPlainText(text)

    def _on_text_changed(self) -> None:
        self._view.set_markdown(self._editor.toPlainText())


def main(argv: List[str] | None = None) -> int:
    """Main function to run the application."""
    parser = argparse.ArgumentParser(prog="mdview", description="Live markdown block view")
    parser.add_argument("file", nargs="?", help="markdown file to open")
    parser.add_argument("--settings", help="JSON settings file")
    args = parser.parse_args(argv)

    setup_logging()
    install_global_exception_handler()

    text = ""
    if args.file:
        with open(args.file, 'r', encoding='utf-8') as f:
            text = f.read()

    app = QApplication(sys.argv[:1])
    window = MarkdownDemoWindow(load_settings(args.settings), text)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
