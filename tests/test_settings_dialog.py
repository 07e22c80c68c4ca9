"""Tests for the settings dialog and how the main window applies it."""

from unittest.mock import MagicMock

import pytest
from PyQt6.QtWidgets import QDialog

import mysqlquery.qt.dialogs.settings_dialog as settings_module
import mysqlquery.qt.main_window as main_window_module
from mysqlquery.qt import MainWindow
from mysqlquery.qt.dialogs import SettingsDialog
from mysqlquery.qt.editor import DEFAULT_FONT_SIZE


@pytest.fixture
def dialog(qapp, local_db):
    d = SettingsDialog()
    yield d
    d.deleteLater()


def test_defaults(dialog):
    assert dialog.font_size == DEFAULT_FONT_SIZE
    assert dialog.history_limit == settings_module.DEFAULT_HISTORY_LIMIT


def test_loads_stored_values(qapp, local_db):
    local_db.set_setting("font_size", "15")
    local_db.set_setting("history_limit", "50")
    d = SettingsDialog()
    assert d.font_size == 15
    assert d.history_limit == 50


def test_garbage_value_falls_back(qapp, local_db):
    local_db.set_setting("font_size", "huge")
    assert SettingsDialog().font_size == DEFAULT_FONT_SIZE


def test_save(dialog, local_db):
    dialog.spin_font_size.setValue(18)
    dialog.spin_history_limit.setValue(100)

    dialog._save_and_close()

    assert dialog.result() == QDialog.DialogCode.Accepted
    assert local_db.get_setting("font_size") == "18"
    assert local_db.get_setting("history_limit") == "100"


def test_history_limit_applies_to_log(dialog, local_db):
    dialog.spin_history_limit.setValue(10)
    dialog._save_and_close()
    for i in range(12):
        local_db.log_query(f"SELECT {i}", "read", 1)
    assert len(local_db.get_query_log()) == 10


def test_save_failure_keeps_dialog_open(qapp, broken_store, monkeypatch):
    box = MagicMock()
    monkeypatch.setattr(settings_module, "QMessageBox", box)
    d = SettingsDialog()
    assert d.font_size == DEFAULT_FONT_SIZE

    d._save_and_close()

    assert d.result() != QDialog.DialogCode.Accepted
    assert box.warning.call_args[0][1] == "Settings Error"


def test_main_window_applies_font_size(qapp, local_db, fake_mysql, monkeypatch):
    monkeypatch.setattr(main_window_module, "QMessageBox", MagicMock())

    def accept_with_large_font(self):
        self.spin_font_size.setValue(20)
        self._save_and_close()
        return self.result()

    monkeypatch.setattr(SettingsDialog, "exec", accept_with_large_font)
    window = MainWindow()

    window._show_settings()

    assert window.editor.font().pointSize() == 20
    assert local_db.get_setting("font_size") == "20"
    window.deleteLater()
