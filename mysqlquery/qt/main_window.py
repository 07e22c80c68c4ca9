"""
Main application window for the MySQL Query Tool.

Connection form on top, SQL editor in the middle, results grid below.
All work runs synchronously on the GUI thread.
"""

import logging
import sqlite3
from typing import Optional

import sqlparse
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from .. import __version__
from ..adapters import ConnectionConfig, MySQLAdapter
from ..database import _get_db
from ..errors import DatabaseConnectionError, QueryError, UsageError
from ..session import QuerySession, is_read_query
from .editor import QueryEditor
from .results_table import ResultsTable
from .theme import Theme

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, session: Optional[QuerySession] = None):
        super().__init__()

        self.setWindowTitle("MySQL Query Tool")
        self.setMinimumSize(800, 600)
        self.resize(1000, 750)

        Theme.load()
        Theme.apply(QApplication.instance())

        # Owns the one and only connection
        self.session = session or QuerySession()

        self._create_actions()
        self._create_menu_bar()
        self._create_central_widget()
        self._create_status_bar()

        self._set_connected(False)

    def _create_actions(self) -> None:
        """Create menu actions."""
        self.action_dark_mode = QAction("Dark Mode", self)
        self.action_dark_mode.setCheckable(True)
        self.action_dark_mode.setChecked(Theme.is_dark())
        self.action_dark_mode.triggered.connect(self._toggle_dark_mode)

        self.action_settings = QAction("Settings...", self)
        self.action_settings.setShortcut(QKeySequence("Ctrl+,"))
        self.action_settings.triggered.connect(self._show_settings)

        self.action_exit = QAction("Exit", self)
        self.action_exit.setShortcut(QKeySequence("Ctrl+Q"))
        self.action_exit.triggered.connect(self.close)

        self.action_execute = QAction("Execute Query", self)
        self.action_execute.setShortcut(QKeySequence("F5"))
        self.action_execute.triggered.connect(self.execute_query)

        self.action_format = QAction("Format SQL", self)
        self.action_format.setShortcut(QKeySequence("Ctrl+Shift+F"))
        self.action_format.triggered.connect(self.format_sql)

        self.action_history = QAction("History...", self)
        self.action_history.setShortcut(QKeySequence("Ctrl+H"))
        self.action_history.triggered.connect(self._show_history)

        self.action_about = QAction("About", self)
        self.action_about.triggered.connect(self._show_about)

    def _create_menu_bar(self) -> None:
        """Create the menu bar."""
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.action_dark_mode)
        file_menu.addAction(self.action_settings)
        file_menu.addSeparator()
        file_menu.addAction(self.action_exit)

        query_menu = menu_bar.addMenu("&Query")
        query_menu.addAction(self.action_execute)
        query_menu.addAction(self.action_format)
        query_menu.addSeparator()
        query_menu.addAction(self.action_history)

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self.action_about)

    def _create_central_widget(self) -> None:
        """Create connection, query and results sections."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self._create_connection_group())

        self.splitter = QSplitter(Qt.Orientation.Vertical)
        self.splitter.setHandleWidth(3)
        self.splitter.setChildrenCollapsible(False)
        self.splitter.addWidget(self._create_query_group())
        self.splitter.addWidget(self._create_results_group())
        self.splitter.setSizes([250, 450])
        layout.addWidget(self.splitter)

        self.setCentralWidget(central)

    def _create_connection_group(self) -> QGroupBox:
        group = QGroupBox("Database Connection")
        grid = QGridLayout(group)

        self.txt_host = QLineEdit(MySQLAdapter.default_host)
        self.txt_port = QLineEdit(str(MySQLAdapter.default_port))
        self.txt_user = QLineEdit(MySQLAdapter.default_user)
        self.txt_password = QLineEdit()
        self.txt_password.setEchoMode(QLineEdit.EchoMode.Password)
        self.txt_database = QLineEdit()
        self.txt_database.setPlaceholderText("optional")

        grid.addWidget(QLabel("Host:"), 0, 0)
        grid.addWidget(self.txt_host, 0, 1)
        grid.addWidget(QLabel("Port:"), 0, 2)
        grid.addWidget(self.txt_port, 0, 3)
        grid.addWidget(QLabel("Username:"), 1, 0)
        grid.addWidget(self.txt_user, 1, 1)
        grid.addWidget(QLabel("Password:"), 1, 2)
        grid.addWidget(self.txt_password, 1, 3)
        grid.addWidget(QLabel("Database:"), 2, 0)
        grid.addWidget(self.txt_database, 2, 1)

        btn_layout = QHBoxLayout()
        self.btn_connect = QPushButton("Connect")
        self.btn_connect.clicked.connect(self.connect_to_database)
        btn_layout.addWidget(self.btn_connect)

        self.btn_disconnect = QPushButton("Disconnect")
        self.btn_disconnect.clicked.connect(self.disconnect_from_database)
        btn_layout.addWidget(self.btn_disconnect)
        grid.addLayout(btn_layout, 2, 2, 1, 2)

        return group

    def _create_query_group(self) -> QGroupBox:
        group = QGroupBox("Query")
        layout = QVBoxLayout(group)

        self.editor = QueryEditor()
        self.editor.execute_requested.connect(self.execute_query)
        self.editor.format_requested.connect(self.format_sql)
        layout.addWidget(self.editor)

        self.btn_execute = QPushButton("Execute Query")
        self.btn_execute.clicked.connect(self.execute_query)
        layout.addWidget(self.btn_execute)

        return group

    def _create_results_group(self) -> QGroupBox:
        group = QGroupBox("Results")
        layout = QVBoxLayout(group)

        self.results_table = ResultsTable()
        layout.addWidget(self.results_table)

        return group

    def _create_status_bar(self) -> None:
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Not connected")

    def set_status(self, message: str, timeout: int = 0) -> None:
        self.status_bar.showMessage(message, timeout)

    def _set_connected(self, connected: bool) -> None:
        """Enable the controls that are valid for the connection state."""
        self.btn_connect.setEnabled(not connected)
        self.btn_disconnect.setEnabled(connected)
        self.btn_execute.setEnabled(connected)
        self.action_execute.setEnabled(connected)

    def _read_config(self) -> ConnectionConfig:
        return ConnectionConfig.from_fields(
            host=self.txt_host.text(),
            port=self.txt_port.text(),
            user=self.txt_user.text(),
            password=self.txt_password.text(),
            database=self.txt_database.text(),
        )

    def connect_to_database(self) -> None:
        """Open a connection from the form fields."""
        try:
            config = self._read_config()
            self.set_status(f"Connecting to {config.host}:{config.port}...")
            QApplication.processEvents()
            self.session.connect(config)
        except UsageError as e:
            QMessageBox.warning(self, e.title, e.message)
            return
        except DatabaseConnectionError as e:
            self.set_status("Connection failed")
            QMessageBox.critical(
                self,
                "Connection Error",
                f"Error connecting to MySQL database: {e.message}\nError code: {e.code}"
            )
            return

        self._set_connected(True)
        version = self.session.server_version
        target = f"{config.host}:{config.port}"
        if config.database:
            target += f"/{config.database}"
        self.set_status(f"Connected to {target}" + (f" (MySQL {version})" if version else ""))
        QMessageBox.information(self, "Connection Success",
                                "Successfully connected to the database.")

    def disconnect_from_database(self) -> None:
        """Close the connection and return to the disconnected state."""
        self.session.disconnect()
        self._set_connected(False)
        self.set_status("Not connected")
        QMessageBox.information(self, "Disconnected", "Database connection closed.")

    def execute_query(self) -> None:
        """Run the editor text and show its result."""
        if not self.session.is_connected:
            QMessageBox.warning(self, "Not Connected", "Please connect to a database first.")
            return

        self.results_table.clear_results()
        sql = self.editor.toPlainText()

        try:
            self.set_status("Executing...")
            QApplication.processEvents()
            result = self.session.execute(sql)
        except UsageError as e:
            self.set_status("Ready")
            QMessageBox.warning(self, e.title, e.message)
            return
        except QueryError as e:
            stripped = sql.strip()
            self._log_query(stripped, "read" if is_read_query(stripped) else "write",
                            status="error", error_message=f"[{e.code}] {e.message}")
            self.set_status(f"Error: {e.message}")
            QMessageBox.critical(
                self,
                "Query Error",
                f"Error executing query: {e.message}\nError code: {e.code}"
            )
            return

        self._log_query(result.sql, result.query_type, result.row_count, result.duration)

        if result.is_read:
            self.results_table.load_results(result.columns, result.rows)
            summary = f"{result.row_count} rows returned."
        else:
            summary = f"{result.row_count} rows affected."

        self.set_status(f"{summary[:-1]} ({result.duration:.3f}s)")
        QMessageBox.information(self, "Query Success",
                                f"Query executed successfully. {summary}")

    def _log_query(self, sql: str, query_type: str, row_count: Optional[int] = None,
                   duration: Optional[float] = None, status: str = "success",
                   error_message: Optional[str] = None) -> None:
        """Record an execution in the local history."""
        try:
            _get_db().log_query(sql, query_type, row_count, duration, status, error_message)
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to log query: %s", e)

    def format_sql(self) -> None:
        """Reformat the editor text."""
        sql = self.editor.toPlainText()
        if not sql.strip():
            return
        formatted = sqlparse.format(sql, reindent=True, keyword_case="upper")
        self.editor.setPlainText(formatted.strip())

    def _show_history(self) -> None:
        from .dialogs.history_dialog import HistoryDialog
        dialog = HistoryDialog(self)
        if dialog.exec() and dialog.selected_sql:
            self.editor.setPlainText(dialog.selected_sql)
            self.set_status("Query loaded from history", 3000)

    def _show_settings(self) -> None:
        from .dialogs.settings_dialog import SettingsDialog
        dialog = SettingsDialog(self)
        if dialog.exec():
            self.editor.set_font_size(dialog.font_size)
            self.set_status(f"Font size set to {dialog.font_size}", 3000)

    def _toggle_dark_mode(self) -> None:
        Theme.toggle(QApplication.instance())
        self.action_dark_mode.setChecked(Theme.is_dark())
        self.editor.update_theme()

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About MySQL Query Tool",
            f"<h3>MySQL Query Tool</h3>"
            f"<p>Version {__version__}</p>"
            f"<p>Run ad-hoc SQL against a MySQL server.</p>"
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        """Release the connection and store preferences."""
        self.session.disconnect()
        try:
            Theme.save()
        except (sqlite3.Error, OSError) as e:
            logger.warning("Failed to save preferences: %s", e)
        event.accept()
