"""MySQL adapter: turns form input into a live client-library connection."""

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import UsageError

logger = logging.getLogger(__name__)


@dataclass
class ConnectionConfig:
    """Parameters for a single connect attempt. Never persisted."""

    host: str
    port: int
    user: str
    password: str
    database: Optional[str] = None

    @classmethod
    def from_fields(cls, host, port, user, password, database=""):
        """Build a config from raw form text, validating the port."""
        port_text = (port or "").strip()
        if not port_text:
            port_value = MySQLAdapter.default_port
        else:
            try:
                port_value = int(port_text)
            except ValueError:
                raise UsageError("Invalid Port", f"Port must be a number, got '{port_text}'.") from None
            if not 0 < port_value < 65536:
                raise UsageError("Invalid Port", f"Port {port_value} is out of range (1-65535).")

        return cls(
            host=host.strip() or MySQLAdapter.default_host,
            port=port_value,
            user=user.strip(),
            password=password,
            database=database.strip() or None,
        )

    def __repr__(self):
        # Keep the password out of logs and tracebacks
        return (f"ConnectionConfig(host={self.host!r}, port={self.port!r}, "
                f"user={self.user!r}, database={self.database!r})")


class MySQLAdapter:
    """Adapter for MySQL via mysql-connector-python."""

    default_host = "localhost"
    default_port = 3306
    default_user = "root"

    def connect(self, config):
        """Open a session and select the schema if one was given.

        Raises mysql.connector.Error on failure. A session that fails during
        setup is closed again.
        """
        import mysql.connector

        conn = mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
        )

        try:
            # Statements take effect immediately, like the classic connector
            conn.autocommit = True
            if config.database:
                conn.database = config.database
        except mysql.connector.Error:
            conn.close()
            raise

        return conn

    def get_version(self, conn):
        """Get the server version string, or None if unavailable."""
        import mysql.connector

        try:
            return conn.get_server_info()
        except mysql.connector.Error as e:
            logger.warning("Could not read server version: %s", e)
            return None
