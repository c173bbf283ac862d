# db/database.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Database facade: create/read/update/delete with typed named parameters.

Example:
    db = Database("localhost", "site", "web", "secret")
    user = db.read_one(
        "SELECT * FROM Users WHERE ID_User = :id",
        {":id": (1, ParamType.INTEGER)},
    )

Query-level failures (bad SQL, constraint violations, malformed parameters)
are returned as False. Only DatabaseUnavailable is raised.
"""

import logging
import threading
from typing import Any

from config import DatabaseSettings
from db.connection import ConnectionManager
from db.exceptions import MalformedParameter
from db.params import Bindings
from db.results import FetchMode, ReadType, ResultReader, Row
from db.statement import StatementExecutor

logger = logging.getLogger(__name__)


class Database:
    """
    One connection, at most one open cursor.

    Every public operation holds the instance lock for its whole
    connect/prepare/execute/read/close sequence and leaves no cursor open
    when it returns.
    """

    def __init__(
        self,
        host: str,
        database: str,
        user: str,
        password: str,
        *,
        port: int = 3306,
        connect_timeout: int = 10,
    ):
        self.settings = DatabaseSettings(
            host=host,
            database=database,
            user=user,
            password=password,
            port=port,
            connect_timeout=connect_timeout,
        )
        self._lock = threading.RLock()
        self._connections = ConnectionManager(self.settings, on_disconnect=self._close_cursor)
        self._executor = StatementExecutor(self._connections)
        self._reader = ResultReader(self._executor)

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        return cls(
            settings.host,
            settings.database,
            settings.user,
            settings.password,
            port=settings.port,
            connect_timeout=settings.connect_timeout,
        )

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    # -- connection lifecycle --------------------------------------------------

    def ensure_connected(self) -> bool:
        """Open the connection if needed. Raises DatabaseUnavailable on failure."""
        with self._lock:
            return self._connections.ensure_connected()

    def disconnect(self) -> None:
        with self._lock:
            self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    def ping(self) -> bool:
        """Check the live connection with a server round-trip."""
        with self._lock:
            return self._connections.ping()

    @property
    def affected_row_count(self) -> int:
        """Rows affected or returned by the most recent operation."""
        return self._executor.row_count

    def get_affected_row_count(self) -> int:
        return self.affected_row_count

    # -- internals -------------------------------------------------------------

    def _close_cursor(self) -> None:
        self._executor.close_cursor()

    def _query(self, sql: str, bindings: Bindings, close_after: bool = True) -> bool:
        self._connections.ensure_connected()
        try:
            if not self._executor.prepare_and_bind(sql, bindings):
                return False
        except MalformedParameter as e:
            logger.warning(str(e))
            return False
        return self._executor.execute(close_after=close_after)

    def read(
        self,
        sql: str,
        bindings: Bindings,
        read_type: ReadType | str,
        fetch_mode: FetchMode = FetchMode.ASSOC,
        column: int = 0,
    ) -> Any:
        """
        Run a SELECT and materialize it according to read_type.

        Returns:
            The materialized result, or False on failure or an unknown read_type
        """
        with self._lock:
            try:
                if not self._query(sql, bindings, close_after=False):
                    return False
                return self._reader.materialize(read_type, fetch_mode, column)
            finally:
                self._close_cursor()

    # -- public operations -----------------------------------------------------

    def create(self, sql: str, bindings: Bindings = None, want_insert_id: bool = False) -> int | bool:
        """
        Run an INSERT.

        Returns:
            The generated id of the inserted row when want_insert_id is set,
            otherwise True; False on failure
        """
        with self._lock:
            if not self._query(sql, bindings):
                return False
            if want_insert_id:
                return int(self._connections.connection.insert_id())
            return True

    def read_one(self, sql: str, bindings: Bindings = None, fetch_mode: FetchMode = FetchMode.ASSOC) -> Row | None | bool:
        """First matching row, None when no row matches, False on failure."""
        return self.read(sql, bindings, ReadType.ONE, fetch_mode)

    def read_all(self, sql: str, bindings: Bindings = None, fetch_mode: FetchMode = FetchMode.ASSOC) -> list[Row] | bool:
        """All matching rows (possibly empty), False on failure."""
        return self.read(sql, bindings, ReadType.ALL, fetch_mode)

    def read_column(self, sql: str, bindings: Bindings = None, column: int = 0) -> Any:
        """One column of the first matching row, None when no row matches, False on failure."""
        return self.read(sql, bindings, ReadType.COLUMN, column=column)

    def update(self, sql: str, bindings: Bindings = None) -> bool:
        with self._lock:
            return self._query(sql, bindings)

    def delete(self, sql: str, bindings: Bindings = None) -> bool:
        with self._lock:
            return self._query(sql, bindings)

    def execute(self, sql: str, bindings: Bindings = None) -> bool:
        """Run a statement that returns no rows (DDL and the like)."""
        with self._lock:
            return self._query(sql, bindings)
