"""
Theme handling for the MySQL Query Tool.

Fusion style with a dark or light palette, plus matching highlighter colors.
"""

import logging
import sqlite3

from PyQt6.QtGui import QPalette, QColor
from PyQt6.QtWidgets import QApplication, QStyleFactory

from ..database import get_setting, set_setting

logger = logging.getLogger(__name__)


class Theme:
    """Application-wide palette switch."""

    _is_dark: bool = True

    @classmethod
    def is_dark(cls) -> bool:
        return cls._is_dark

    @classmethod
    def load(cls) -> None:
        """Read the stored dark mode preference, keeping the default if unreadable."""
        try:
            cls._is_dark = get_setting("dark_mode", "1") == "1"
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not read theme preference: %s", e)

    @classmethod
    def save(cls) -> None:
        set_setting("dark_mode", "1" if cls._is_dark else "0")

    @classmethod
    def apply(cls, app: QApplication) -> None:
        app.setStyle(QStyleFactory.create("Fusion"))

        if not cls._is_dark:
            app.setPalette(app.style().standardPalette())
            return

        p = QPalette()
        p.setColor(QPalette.ColorRole.Window, QColor(45, 45, 48))
        p.setColor(QPalette.ColorRole.WindowText, QColor(230, 230, 230))
        p.setColor(QPalette.ColorRole.Base, QColor(30, 30, 30))
        p.setColor(QPalette.ColorRole.AlternateBase, QColor(45, 45, 48))
        p.setColor(QPalette.ColorRole.Text, QColor(230, 230, 230))
        p.setColor(QPalette.ColorRole.Button, QColor(45, 45, 48))
        p.setColor(QPalette.ColorRole.ButtonText, QColor(230, 230, 230))
        p.setColor(QPalette.ColorRole.PlaceholderText, QColor(140, 140, 140))
        p.setColor(QPalette.ColorRole.Highlight, QColor(0, 117, 143))
        p.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
        p.setColor(QPalette.ColorGroup.Disabled, QPalette.ColorRole.ButtonText,
                   QColor(120, 120, 120))
        app.setPalette(p)

    @classmethod
    def toggle(cls, app: QApplication) -> None:
        cls._is_dark = not cls._is_dark
        cls.apply(app)

    @classmethod
    def syntax(cls):
        """Highlighter colors for the current palette."""
        return DarkSyntax if cls._is_dark else LightSyntax


class DarkSyntax:
    keyword = "#569cd6"
    function = "#dcdcaa"
    string = "#ce9178"
    identifier = "#9cdcfe"
    comment = "#6a9955"
    number = "#b5cea8"


class LightSyntax:
    keyword = "#0000ff"
    function = "#795e26"
    string = "#a31515"
    identifier = "#001080"
    comment = "#008000"
    number = "#098658"
