# db/statement.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Statement preparation, binding and execution.

A StatementExecutor owns at most one cursor. Each operation walks it through

    IDLE -> PREPARED -> BOUND -> EXECUTED -> CLOSED | OPEN_FOR_READ

and preparing a new statement always closes the previous cursor first.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

import pymysql

from db.connection import ConnectionManager
from db.exceptions import MalformedParameter, StatementStateError
from db.params import Bindings, coerce_bindings, translate_named_markers

if TYPE_CHECKING:
    from pymysql.cursors import Cursor

logger = logging.getLogger(__name__)


class StatementState(Enum):
    """Lifecycle of the executor's single cursor."""

    IDLE = "idle"
    PREPARED = "prepared"
    BOUND = "bound"
    EXECUTED = "executed"
    OPEN_FOR_READ = "open_for_read"
    CLOSED = "closed"

    def __str__(self):
        return self.value


_TRANSITIONS: dict[StatementState, set[StatementState]] = {
    StatementState.IDLE: {StatementState.PREPARED},
    StatementState.PREPARED: {StatementState.BOUND, StatementState.IDLE},
    StatementState.BOUND: {StatementState.EXECUTED, StatementState.IDLE},
    StatementState.EXECUTED: {StatementState.CLOSED, StatementState.OPEN_FOR_READ},
    StatementState.OPEN_FOR_READ: {StatementState.CLOSED},
    StatementState.CLOSED: {StatementState.PREPARED},
}


class StatementExecutor:
    """Prepares, binds and executes one statement at a time."""

    def __init__(self, connections: ConnectionManager):
        self._connections = connections
        self._cursor: "Cursor | None" = None
        self._query: str | None = None
        self._args: dict[str, Any] = {}
        self.state = StatementState.IDLE
        # Rows affected or returned by the most recent execute
        self.row_count = 0

    @property
    def cursor(self) -> "Cursor":
        """The cursor left open for reading by execute(close_after=False)."""
        if self._cursor is None or self.state is not StatementState.OPEN_FOR_READ:
            raise StatementStateError(f"No cursor open for reading (state: {self.state})")
        return self._cursor

    def _transition(self, new_state: StatementState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise StatementStateError(f"Illegal statement transition {self.state} -> {new_state}")
        self.state = new_state

    def _reset(self) -> None:
        """Drop partial statement state and return to IDLE."""
        self._release_cursor()
        self._query = None
        self._args = {}
        self.state = StatementState.IDLE

    def _release_cursor(self) -> None:
        if self._cursor is None:
            return
        cursor = self._cursor
        self._cursor = None
        try:
            cursor.close()
        except pymysql.MySQLError as e:
            logger.debug(f"Ignoring error while closing cursor: {e}")

    def close_cursor(self) -> None:
        """Close the current cursor. Safe to call any number of times."""
        if self._cursor is None:
            if self.state in (StatementState.PREPARED, StatementState.BOUND):
                self._reset()
            return
        if self.state in (StatementState.EXECUTED, StatementState.OPEN_FOR_READ):
            self._release_cursor()
            self._transition(StatementState.CLOSED)
        else:
            self._reset()
        logger.debug("Cursor closed")

    def prepare_and_bind(self, sql: str, bindings: Bindings) -> bool:
        """
        Prepare sql on the live connection and bind every parameter.

        Any previously open cursor is closed first.

        Returns:
            True when the statement is bound and ready to execute, False when
            a marker has no binding or a binding names no marker

        Raises:
            MalformedParameter: if a binding is not a (value, ParamType) pair;
                the executor is back in IDLE and nothing was executed
        """
        self.close_cursor()

        query, names = translate_named_markers(sql)
        self._cursor = self._connections.connection.cursor()
        self._query = query
        self._transition(StatementState.PREPARED)

        try:
            params = coerce_bindings(bindings)
        except MalformedParameter:
            self._reset()
            raise

        args = {binding.name: binding.value for binding in params}
        unbound = [name for name in names if name not in args]
        unknown = [binding.marker for binding in params if binding.name not in names]
        if unbound or unknown:
            logger.warning(
                "Parameter mismatch for query: unbound markers %s, unknown bindings %s",
                [f":{name}" for name in unbound],
                unknown,
            )
            self._reset()
            return False

        self._args = args
        self._transition(StatementState.BOUND)
        return True

    def execute(self, close_after: bool = True) -> bool:
        """
        Run the bound statement and record the affected/returned row count.

        Returns:
            True on success, False when the driver reports a failure or cannot
            encode the query. A failure is a normal outcome and is never raised.
        """
        if self.state is not StatementState.BOUND or self._cursor is None:
            raise StatementStateError(f"Cannot execute a statement in state {self.state}")

        try:
            self._cursor.execute(self._query, self._args)
            succeeded = True
        except pymysql.MySQLError as e:
            logger.warning(f"Query failed: {e}")
            succeeded = False
        except (UnicodeError, ValueError, TypeError) as e:
            # Raised by the driver while escaping or encoding the query
            logger.warning(f"Query could not be sent: {e}")
            succeeded = False

        rowcount = self._cursor.rowcount
        self.row_count = rowcount if isinstance(rowcount, int) and rowcount > 0 else 0
        self._transition(StatementState.EXECUTED)

        if close_after or not succeeded:
            self.close_cursor()
        else:
            self._transition(StatementState.OPEN_FOR_READ)
        return succeeded
