# db/connection.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Database connection management.

A ConnectionManager owns at most one pymysql connection. The connection is
opened lazily on first use and re-opened on demand when a later operation
finds it missing or closed by the server.
"""

import logging
from typing import TYPE_CHECKING, Callable

import pymysql

from config import DatabaseSettings
from db.exceptions import DatabaseUnavailable

if TYPE_CHECKING:
    from pymysql.connections import Connection

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Owns the connection handle and its liveness flag."""

    def __init__(self, settings: DatabaseSettings, on_disconnect: Callable[[], None] | None = None):
        self.settings = settings
        self._connection: "Connection | None" = None
        # Called before the handle is released so an open cursor is closed first
        self._on_disconnect = on_disconnect

    @property
    def connection(self) -> "Connection":
        """The live connection. Call ensure_connected() first."""
        if self._connection is None:
            raise DatabaseUnavailable("Not connected to the database")
        return self._connection

    def is_connected(self) -> bool:
        return self._connection is not None

    def ensure_connected(self) -> bool:
        """
        Open the connection if there is none.

        Returns:
            True once a connection is available

        Raises:
            DatabaseUnavailable: if the server cannot be reached
        """
        if self._connection is not None:
            if getattr(self._connection, "open", True):
                return True
            # The server dropped the session; discard the handle and reconnect
            logger.debug(
                "MySQL connection to %s/%s was closed, reconnecting",
                self.settings.host,
                self.settings.database,
            )
            self.disconnect()

        try:
            self._connection = pymysql.connect(
                host=self.settings.host,
                port=self.settings.port,
                user=self.settings.user,
                password=self.settings.password,
                database=self.settings.database,
                charset="utf8mb4",
                connect_timeout=self.settings.connect_timeout,
                autocommit=True,
            )
        except pymysql.MySQLError as e:
            self._connection = None
            logger.error(f"Failed to connect to MySQL database {self.settings.database!r}: {e}")
            raise DatabaseUnavailable(f"Connection error: {e}", original_exception=e) from e

        logger.info(
            "Connected to MySQL database %s on %s:%s",
            self.settings.database,
            self.settings.host,
            self.settings.port,
        )
        return True

    def disconnect(self) -> None:
        """Close any open cursor, then release the connection. No-op when not connected."""
        if self._on_disconnect is not None:
            self._on_disconnect()
        if self._connection is None:
            return

        conn = self._connection
        self._connection = None
        try:
            conn.close()
        except pymysql.MySQLError as e:
            # Already closed by the server; the handle is gone either way
            logger.debug(f"Ignoring error while closing MySQL connection: {e}")
        logger.info("Disconnected from MySQL database %s", self.settings.database)

    def ping(self) -> bool:
        """Actively check the connection with a server round-trip."""
        if self._connection is None:
            return False
        try:
            self._connection.ping(reconnect=False)
            return True
        except pymysql.MySQLError as e:
            logger.debug(f"MySQL ping failed: {e}")
            return False
