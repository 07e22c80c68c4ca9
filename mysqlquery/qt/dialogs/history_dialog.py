"""
Query History Dialog.

Lists previously executed statements and loads one back into the editor.
"""

import logging
import sqlite3
from typing import Optional
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QWidget,
    QMessageBox,
)

from ...database import _get_db

logger = logging.getLogger(__name__)


class HistoryDialog(QDialog):
    """Dialog listing the query log, newest first."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.selected_sql: Optional[str] = None

        self.setWindowTitle("Query History")
        self.setMinimumSize(500, 400)
        self.resize(650, 450)

        self._setup_ui()
        self._refresh_list()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        self.filter_input = QLineEdit()
        self.filter_input.setPlaceholderText("Filter history...")
        self.filter_input.textChanged.connect(self._refresh_list)
        layout.addWidget(self.filter_input)

        self.query_list = QListWidget()
        self.query_list.doubleClicked.connect(self._on_load)
        layout.addWidget(self.query_list)

        btn_layout = QHBoxLayout()

        btn_load = QPushButton("Load")
        btn_load.clicked.connect(self._on_load)
        btn_layout.addWidget(btn_load)

        btn_clear = QPushButton("Clear History")
        btn_clear.clicked.connect(self._on_clear)
        btn_layout.addWidget(btn_clear)

        btn_layout.addStretch()

        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.reject)
        btn_layout.addWidget(btn_close)

        layout.addLayout(btn_layout)

    @staticmethod
    def _entry_label(entry: dict) -> str:
        sql = " ".join(entry["sql"].split())
        if len(sql) > 80:
            sql = sql[:77] + "..."
        if entry["status"] == "success":
            noun = "rows" if entry.get("query_type") == "read" else "affected"
            outcome = f"{entry.get('row_count') or 0} {noun}"
        else:
            outcome = "error"
        return f"[{entry['executed_at']}] {sql}  ({outcome})"

    def _refresh_list(self, filter_text: str = "") -> None:
        self.query_list.clear()
        try:
            entries = _get_db().get_query_log(search=filter_text or None)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not read query history: %s", e)
            return

        for entry in entries:
            item = QListWidgetItem(self._entry_label(entry))
            item.setData(Qt.ItemDataRole.UserRole, entry)
            if entry.get("error_message"):
                item.setToolTip(entry["error_message"])
            self.query_list.addItem(item)

    def _on_load(self) -> None:
        item = self.query_list.currentItem()
        if item:
            self.selected_sql = item.data(Qt.ItemDataRole.UserRole)["sql"]
            self.accept()

    def _on_clear(self) -> None:
        result = QMessageBox.question(
            self, "Clear History",
            "Delete all entries from the query history?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No
        )
        if result == QMessageBox.StandardButton.Yes:
            try:
                _get_db().clear_query_log()
            except (sqlite3.Error, OSError) as e:
                logger.warning("Could not clear query history: %s", e)
                QMessageBox.warning(self, "Clear History", f"Could not clear the history:\n{e}")
                return
            self._refresh_list(self.filter_input.text())
