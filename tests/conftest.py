"""Shared fixtures: offscreen Qt, a throwaway local store and a fake MySQL server."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import mysql.connector
import pytest

from mysqlquery import database


class FakeCursor:
    """Buffered cursor returning canned results from FakeServer."""

    def __init__(self, server):
        self.server = server
        self.description = None
        self.rowcount = -1
        self.closed = False
        self._rows = []

    @property
    def with_rows(self):
        return self.description is not None

    def execute(self, sql):
        self.server.executed.append(sql)
        outcome = self.server.results.get(sql, (None, [], 0))
        if isinstance(outcome, Exception):
            raise outcome
        columns, rows, rowcount = outcome
        if columns is None:
            self.description = None
            self.rowcount = rowcount
        else:
            self.description = [(name, 253, None, None, None, None, 1) for name in columns]
            self.rowcount = len(rows)
        self._rows = list(rows)

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, server, **kwargs):
        self.server = server
        self.kwargs = kwargs
        self.closed = False
        self.cursors = []
        self._database = None
        self._autocommit = False

    @property
    def autocommit(self):
        return self._autocommit

    @autocommit.setter
    def autocommit(self, value):
        if self.server.autocommit_error is not None:
            raise self.server.autocommit_error
        self._autocommit = value

    @property
    def database(self):
        return self._database

    @database.setter
    def database(self, name):
        if name in self.server.unknown_schemas:
            raise mysql.connector.Error(msg=f"Unknown database '{name}'", errno=1049)
        self._database = name

    def cursor(self, **kwargs):
        cursor = FakeCursor(self.server)
        cursor.kwargs = kwargs
        self.cursors.append(cursor)
        return cursor

    def get_server_info(self):
        return self.server.version

    def close(self):
        self.closed = True
        if self.server.close_error is not None:
            raise self.server.close_error


class FakeServer:
    """Stands in for mysql.connector.connect and the server behind it."""

    version = "8.0.36"

    def __init__(self):
        self.results = {}
        self.executed = []
        self.connections = []
        self.unknown_schemas = set()
        self.connect_error = None
        self.autocommit_error = None
        self.close_error = None

    def connect(self, **kwargs):
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(self, **kwargs)
        self.connections.append(conn)
        return conn

    def add_rows(self, sql, columns, rows):
        self.results[sql] = (columns, rows, len(rows))

    def add_update(self, sql, affected):
        self.results[sql] = (None, [], affected)

    def add_error(self, sql, errno, msg):
        self.results[sql] = mysql.connector.Error(msg=msg, errno=errno)


@pytest.fixture
def fake_mysql(monkeypatch):
    server = FakeServer()
    monkeypatch.setattr(mysql.connector, "connect", server.connect)
    return server


@pytest.fixture
def local_db(tmp_path, monkeypatch):
    """Point the local store at a temporary file."""
    monkeypatch.setenv("MYSQLQUERY_HOME", str(tmp_path))
    db = database.Database(tmp_path / "test.db")
    monkeypatch.setattr(database, "_db", db)
    return db


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(params=["corrupt", "unwritable"])
def broken_store(request, tmp_path, monkeypatch):
    """A local store that cannot be used: garbage file or a data dir that can't be created."""
    if request.param == "corrupt":
        home = tmp_path / "home"
        home.mkdir()
        (home / database.DB_FILENAME).write_bytes(b"this is not a sqlite database" * 64)
    else:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        home = blocker / "home"
    monkeypatch.setenv("MYSQLQUERY_HOME", str(home))
    monkeypatch.setattr(database, "_db", None)
    return request.param
