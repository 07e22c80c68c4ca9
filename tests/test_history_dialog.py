"""Tests for the query history dialog."""

from unittest.mock import MagicMock

import pytest

import mysqlquery.qt.dialogs.history_dialog as history_module
from mysqlquery.qt.dialogs import HistoryDialog


@pytest.fixture
def dialog(qapp, local_db):
    local_db.log_query("SELECT * FROM users", "read", 2, 0.01)
    local_db.log_query("UPDATE users SET a = 1", "write", 5, 0.02)
    local_db.log_query("SELEC 1", "write", status="error", error_message="[1064] syntax")
    d = HistoryDialog()
    yield d
    d.deleteLater()


def test_lists_newest_first(dialog):
    assert dialog.query_list.count() == 3
    labels = [dialog.query_list.item(i).text() for i in range(3)]
    assert "SELEC 1" in labels[0] and labels[0].endswith("(error)")
    assert labels[1].endswith("(5 affected)")
    assert labels[2].endswith("(2 rows)")
    assert dialog.query_list.item(0).toolTip() == "[1064] syntax"


def test_filter(dialog):
    dialog.filter_input.setText("users")
    assert dialog.query_list.count() == 2


def test_load_selected(dialog):
    dialog.query_list.setCurrentRow(2)
    dialog._on_load()
    assert dialog.selected_sql == "SELECT * FROM users"


def test_load_without_selection(dialog):
    dialog.query_list.setCurrentRow(-1)
    dialog._on_load()
    assert dialog.selected_sql is None


def test_long_sql_is_shortened():
    entry = {"sql": "SELECT " + ", ".join(f"c{i}" for i in range(50)) + "\nFROM t",
             "status": "success", "query_type": "read", "row_count": 1,
             "executed_at": "2024-01-01 00:00:00"}
    label = HistoryDialog._entry_label(entry)
    assert "\n" not in label
    assert "..." in label


@pytest.mark.parametrize("answer, expected", [("Yes", 0), ("No", 3)])
def test_clear(dialog, local_db, monkeypatch, answer, expected):
    box = MagicMock()
    box.question.return_value = getattr(box.StandardButton, answer)
    monkeypatch.setattr(history_module, "QMessageBox", box)

    dialog._on_clear()

    assert len(local_db.get_query_log()) == expected
    assert dialog.query_list.count() == expected


class TestBrokenStore:

    @pytest.fixture
    def dialog(self, qapp, broken_store):
        d = HistoryDialog()
        yield d
        d.deleteLater()

    def test_opens_empty(self, dialog):
        assert dialog.query_list.count() == 0

    def test_clear_reports_failure(self, dialog, monkeypatch):
        box = MagicMock()
        box.question.return_value = box.StandardButton.Yes
        monkeypatch.setattr(history_module, "QMessageBox", box)

        dialog._on_clear()

        assert box.warning.call_args[0][1] == "Clear History"
