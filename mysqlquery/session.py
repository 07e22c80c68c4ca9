"""
Connection ownership and query execution.

QuerySession holds at most one open connection and runs statements on it,
turning client-library errors into QueryToolError subclasses. It has no Qt
dependency; the main window drives it from its slots.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from mysql.connector import Error as MySQLError

from .adapters import MySQLAdapter
from .errors import DatabaseConnectionError, QueryError, UsageError

logger = logging.getLogger(__name__)


def is_read_query(sql: str) -> bool:
    """Return True for SELECT/SHOW statements.

    Only the leading characters are inspected; a statement starting with a
    comment or whitespace counts as a write.
    """
    return sql[:6].lower() == "select" or sql[:4].lower() == "show"


def cell_text(value) -> str:
    """Coerce a result cell to display text."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


@dataclass
class QueryResult:
    """Outcome of one execution: a table for reads, a count for writes."""

    sql: str
    is_read: bool
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    affected_rows: int = 0
    duration: float = 0.0

    @property
    def row_count(self) -> int:
        return len(self.rows) if self.is_read else self.affected_rows

    @property
    def query_type(self) -> str:
        return "read" if self.is_read else "write"


def _error_parts(err: MySQLError):
    """Message and server error code; client-side errors report code 0."""
    code = err.errno if err.errno and err.errno > 0 else 0
    return (err.msg or str(err)), code


class QuerySession:
    """Single-connection session used by the main window."""

    def __init__(self, adapter: Optional[MySQLAdapter] = None):
        self.adapter = adapter or MySQLAdapter()
        self.server_version: Optional[str] = None
        self._conn = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self, config) -> None:
        """Open the connection described by config."""
        if self._conn is not None:
            raise UsageError("Already Connected",
                             "Disconnect before opening a new connection.")

        logger.info("Connecting to %s:%s as %s", config.host, config.port, config.user)
        try:
            conn = self.adapter.connect(config)
        except MySQLError as e:
            message, code = _error_parts(e)
            logger.error("Connection to %s:%s failed: [%s] %s",
                         config.host, config.port, code, message)
            raise DatabaseConnectionError(message, code) from e

        self._conn = conn
        self.server_version = self.adapter.get_version(conn)
        logger.info("Connected to %s:%s (server %s)",
                    config.host, config.port, self.server_version or "unknown")

    def disconnect(self) -> None:
        """Close the connection if one is open. Safe to call repeatedly."""
        conn, self._conn = self._conn, None
        self.server_version = None
        if conn is None:
            return

        try:
            conn.close()
        except MySQLError as e:
            logger.warning("Error while closing connection: %s", e)
        logger.info("Disconnected")

    def execute(self, sql: str) -> QueryResult:
        """Run one statement and return its projected result."""
        if self._conn is None:
            raise UsageError("Not Connected", "Please connect to a database first.")

        sql = sql.strip()
        if not sql:
            raise UsageError("Empty Query", "Please enter a SQL query.")

        result = QueryResult(sql=sql, is_read=is_read_query(sql))
        logger.debug("Executing %s query: %s", result.query_type, sql[:200])

        start = time.time()
        cursor = None
        try:
            cursor = self._conn.cursor(buffered=True)
            cursor.execute(sql)

            if result.is_read:
                if cursor.description:
                    result.columns = [col[0] for col in cursor.description]
                    result.rows = [
                        [cell_text(value) for value in row]
                        for row in cursor.fetchall()
                    ]
            else:
                # Drain statements like DESCRIBE so the connection stays usable
                if cursor.with_rows:
                    cursor.fetchall()
                result.affected_rows = cursor.rowcount
        except MySQLError as e:
            message, code = _error_parts(e)
            logger.error("Query failed: [%s] %s", code, message)
            raise QueryError(message, code) from e
        finally:
            if cursor is not None:
                try:
                    cursor.close()
                except MySQLError as e:
                    logger.warning("Error while closing cursor: %s", e)

        result.duration = time.time() - start
        logger.info("%s query finished: %d row(s) in %.3fs",
                    result.query_type.capitalize(), result.row_count, result.duration)
        return result
