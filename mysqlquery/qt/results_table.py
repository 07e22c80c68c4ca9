"""
Results grid for query output.
"""

from typing import List, Optional
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QHeaderView,
    QMenu,
    QTableWidget,
    QTableWidgetItem,
    QWidget,
)


class ResultsTable(QTableWidget):
    """Read-only table holding the rows of the last read query."""

    MAX_COLUMN_WIDTH = 300

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.setAlternatingRowColors(True)
        self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectItems)
        self.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)

        self.horizontalHeader().setStretchLastSection(True)
        self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Interactive)
        self.verticalHeader().setDefaultSectionSize(24)

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

        copy_shortcut = QShortcut(QKeySequence(QKeySequence.StandardKey.Copy), self)
        copy_shortcut.setContext(Qt.ShortcutContext.WidgetShortcut)
        copy_shortcut.activated.connect(self.copy_selection)

    def _show_context_menu(self, pos) -> None:
        menu = QMenu(self)
        menu.addAction("Copy", self.copy_selection)
        menu.addAction("Copy with Headers", lambda: self.copy_selection(with_headers=True))
        menu.addSeparator()
        menu.addAction("Select All", self.selectAll)
        menu.exec(self.mapToGlobal(pos))

    def clear_results(self) -> None:
        """Drop headers and rows."""
        self.clear()
        self.setRowCount(0)
        self.setColumnCount(0)

    def load_results(self, columns: List[str], rows: List[List[str]]) -> None:
        """Show a projected result: one header per column, text cells in order."""
        self.clear_results()
        self.setColumnCount(len(columns))
        self.setHorizontalHeaderLabels(columns)
        self.setRowCount(len(rows))

        for row_idx, row in enumerate(rows):
            for col_idx, value in enumerate(row):
                self.setItem(row_idx, col_idx, QTableWidgetItem(value))

        self.resizeColumnsToContents()
        for i in range(self.columnCount()):
            if self.columnWidth(i) > self.MAX_COLUMN_WIDTH:
                self.setColumnWidth(i, self.MAX_COLUMN_WIDTH)

    def headers(self) -> List[str]:
        result = []
        for col in range(self.columnCount()):
            item = self.horizontalHeaderItem(col)
            result.append(item.text() if item else "")
        return result

    def cell_text(self, row: int, col: int) -> str:
        item = self.item(row, col)
        return item.text() if item else ""

    def selection_text(self, with_headers: bool = False) -> str:
        """Selected cells as tab-separated lines."""
        rows = set()
        cols = set()
        for sel_range in self.selectedRanges():
            rows.update(range(sel_range.topRow(), sel_range.bottomRow() + 1))
            cols.update(range(sel_range.leftColumn(), sel_range.rightColumn() + 1))
        if not rows:
            return ""

        cols = sorted(cols)
        lines = []
        if with_headers:
            header_row = self.headers()
            lines.append("\t".join(header_row[col] for col in cols))
        for row in sorted(rows):
            lines.append("\t".join(self.cell_text(row, col) for col in cols))
        return "\n".join(lines)

    def copy_selection(self, with_headers: bool = False) -> None:
        text = self.selection_text(with_headers)
        if text:
            QApplication.clipboard().setText(text)
