"""Application bootstrap: logging, QApplication and the main window."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging():
    """Configure root logging from MYSQLQUERY_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get("MYSQLQUERY_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    known = isinstance(level, int)
    logging.basicConfig(level=level if known else logging.WARNING, format=LOG_FORMAT)
    if not known:
        logging.getLogger(__name__).warning(
            "Unknown log level %r, using WARNING", level_name)


def main():
    configure_logging()

    from . import __version__
    from .qt import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName("MySQL Query Tool")
    app.setApplicationVersion(__version__)

    window = MainWindow()
    window.show()
    sys.exit(app.exec())
