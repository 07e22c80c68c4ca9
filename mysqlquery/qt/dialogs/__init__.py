"""
Dialog windows for the MySQL Query Tool.
"""

from .history_dialog import HistoryDialog
from .settings_dialog import SettingsDialog

__all__ = ["HistoryDialog", "SettingsDialog"]
