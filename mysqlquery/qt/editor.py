"""
SQL editor widget with MySQL highlighting.
"""

import logging
import sqlite3
from typing import Optional
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QMenu, QPlainTextEdit, QWidget

from .syntax import SQLHighlighter
from ..database import get_setting

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 12


class QueryEditor(QPlainTextEdit):
    """Plain-text editor for the statement to run."""

    execute_requested = pyqtSignal()
    format_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        try:
            size = int(get_setting("font_size", str(DEFAULT_FONT_SIZE)))
        except ValueError:
            size = DEFAULT_FONT_SIZE
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not read font size preference: %s", e)
            size = DEFAULT_FONT_SIZE
        font = QFont("Monospace", size)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)

        self.highlighter = SQLHighlighter(self.document())

        self.setPlaceholderText("Enter your SQL query here...")
        self.setTabStopDistance(40)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def _show_context_menu(self, pos) -> None:
        menu = QMenu(self)

        undo_action = menu.addAction("Undo", self.undo)
        undo_action.setEnabled(self.document().isUndoAvailable())
        redo_action = menu.addAction("Redo", self.redo)
        redo_action.setEnabled(self.document().isRedoAvailable())
        menu.addSeparator()
        menu.addAction("Cut", self.cut)
        menu.addAction("Copy", self.copy)
        menu.addAction("Paste", self.paste)
        menu.addSeparator()
        menu.addAction("Select All", self.selectAll)
        menu.addSeparator()
        menu.addAction("Format SQL", self.format_requested.emit)

        menu.exec(self.mapToGlobal(pos))

    def keyPressEvent(self, event) -> None:
        # Ctrl+Return runs the query instead of inserting a newline
        if (event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter)
                and event.modifiers() & Qt.KeyboardModifier.ControlModifier):
            self.execute_requested.emit()
            return
        super().keyPressEvent(event)

    def update_theme(self) -> None:
        self.highlighter.update_theme()

    def set_font_size(self, size: int) -> None:
        font = self.font()
        font.setPointSize(size)
        self.setFont(font)
