"""SQLite database for storing preferences and the query history."""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DB_FILENAME = "mysqlquery.db"


def get_data_dir():
    """Directory holding the local store, overridable with MYSQLQUERY_HOME."""
    home = os.environ.get("MYSQLQUERY_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".mysqlquery"


class Database:
    def __init__(self, db_path=None):
        if db_path is None:
            data_dir = get_data_dir()
            data_dir.mkdir(parents=True, exist_ok=True)
            db_path = data_dir / DB_FILENAME
        self.db_path = db_path
        self._init_db()

    def _get_conn(self):
        return sqlite3.connect(self.db_path)

    def _init_db(self):
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS query_log (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    sql TEXT NOT NULL,
                    query_type TEXT,
                    row_count INTEGER,
                    duration REAL,
                    status TEXT NOT NULL,
                    error_message TEXT,
                    executed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    # Settings methods
    def get_setting(self, key, default=None):
        with self._get_conn() as conn:
            cursor = conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else default

    def set_setting(self, key, value):
        with self._get_conn() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value)
            )
            conn.commit()

    # Query log methods
    def log_query(self, sql, query_type=None, row_count=None, duration=None,
                  status="success", error_message=None):
        with self._get_conn() as conn:
            conn.execute(
                """INSERT INTO query_log (sql, query_type, row_count, duration, status, error_message)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (sql, query_type, row_count, duration, status, error_message)
            )
            conn.commit()
        self._trim_query_log()

    def get_query_log(self, limit=200, search=None):
        """Get logged queries, newest first, optionally filtered by SQL text."""
        with self._get_conn() as conn:
            conn.row_factory = sqlite3.Row
            if search:
                cursor = conn.execute(
                    """SELECT id, sql, query_type, row_count, duration, status, error_message, executed_at
                       FROM query_log WHERE sql LIKE ? ORDER BY id DESC LIMIT ?""",
                    (f"%{search}%", limit)
                )
            else:
                cursor = conn.execute(
                    """SELECT id, sql, query_type, row_count, duration, status, error_message, executed_at
                       FROM query_log ORDER BY id DESC LIMIT ?""",
                    (limit,)
                )
            return [dict(row) for row in cursor.fetchall()]

    def clear_query_log(self):
        with self._get_conn() as conn:
            conn.execute("DELETE FROM query_log")
            conn.commit()

    def _trim_query_log(self):
        """Keep only the newest history_limit entries."""
        try:
            limit = int(self.get_setting("history_limit", "500"))
        except ValueError:
            limit = 500
        with self._get_conn() as conn:
            conn.execute(
                """DELETE FROM query_log WHERE id NOT IN
                   (SELECT id FROM query_log ORDER BY id DESC LIMIT ?)""",
                (limit,)
            )
            conn.commit()


_db = None


def _get_db():
    global _db
    if _db is None:
        _db = Database()
        logger.debug("Using local store %s", _db.db_path)
    return _db


def get_setting(key, default=None):
    return _get_db().get_setting(key, default)


def set_setting(key, value):
    _get_db().set_setting(key, value)
