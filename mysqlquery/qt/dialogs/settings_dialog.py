"""
Settings Dialog.

Editor font size and the number of statements kept in the query history.
"""

import logging
import sqlite3
from typing import Optional
from PyQt6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QWidget,
    QSpinBox,
    QGroupBox,
    QDialogButtonBox,
    QMessageBox,
)

from ...database import get_setting, set_setting
from ..editor import DEFAULT_FONT_SIZE

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 500


def _int_setting(key, default):
    try:
        return int(get_setting(key, str(default)))
    except ValueError:
        return default
    except (sqlite3.Error, OSError) as e:
        logger.warning("Could not read setting %s: %s", key, e)
        return default


class SettingsDialog(QDialog):
    """Dialog for application settings."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self.setWindowTitle("Settings")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._setup_ui()
        self._load_settings()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(16)

        editor_group = QGroupBox("Editor")
        editor_layout = QFormLayout(editor_group)
        self.spin_font_size = QSpinBox()
        self.spin_font_size.setRange(8, 24)
        self.spin_font_size.setSuffix(" pt")
        editor_layout.addRow("Font Size:", self.spin_font_size)
        layout.addWidget(editor_group)

        history_group = QGroupBox("History")
        history_layout = QFormLayout(history_group)
        self.spin_history_limit = QSpinBox()
        self.spin_history_limit.setRange(10, 10000)
        self.spin_history_limit.setSingleStep(50)
        self.spin_history_limit.setSuffix(" statements")
        history_layout.addRow("Keep:", self.spin_history_limit)
        layout.addWidget(history_group)

        layout.addStretch()

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok |
            QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self._save_and_close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _load_settings(self) -> None:
        self.spin_font_size.setValue(_int_setting("font_size", DEFAULT_FONT_SIZE))
        self.spin_history_limit.setValue(_int_setting("history_limit", DEFAULT_HISTORY_LIMIT))

    @property
    def font_size(self) -> int:
        return self.spin_font_size.value()

    @property
    def history_limit(self) -> int:
        return self.spin_history_limit.value()

    def _save_and_close(self) -> None:
        try:
            set_setting("font_size", str(self.font_size))
            set_setting("history_limit", str(self.history_limit))
        except (sqlite3.Error, OSError) as e:
            logger.warning("Could not save settings: %s", e)
            QMessageBox.warning(self, "Settings Error", f"Could not save settings:\n{e}")
            return
        self.accept()
