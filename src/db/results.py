# db/results.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Result materialization for cursors left open by the StatementExecutor.
"""

import logging
from enum import Enum
from typing import Any

from db.statement import StatementExecutor

logger = logging.getLogger(__name__)

Row = dict[Any, Any] | tuple[Any, ...]


class FetchMode(Enum):
    """Shape of a materialized row."""

    ASSOC = "assoc"  # dict keyed by column name
    NUM = "num"  # tuple in column order
    BOTH = "both"  # dict keyed by column name and by position

    def __str__(self):
        return self.value


class ReadType(Enum):
    """Which part of the result set a read returns."""

    ONE = "one"
    ALL = "all"
    COLUMN = "column"

    def __str__(self):
        return self.value


class ResultReader:
    """Turns the rows of an open cursor into the requested shape."""

    def __init__(self, executor: StatementExecutor):
        self._executor = executor

    def _column_names(self) -> list[str]:
        description = self._executor.cursor.description or ()
        return [column[0] for column in description]

    def _shape(self, row: tuple, names: list[str], fetch_mode: FetchMode) -> Row:
        if fetch_mode is FetchMode.NUM:
            return tuple(row)
        shaped: dict[Any, Any] = dict(zip(names, row))
        if fetch_mode is FetchMode.BOTH:
            shaped.update(enumerate(row))
        return shaped

    def read_one(self, fetch_mode: FetchMode = FetchMode.ASSOC) -> Row | None:
        """Return the next row, or None when there is none."""
        row = self._executor.cursor.fetchone()
        if row is None:
            return None
        return self._shape(row, self._column_names(), fetch_mode)

    def read_all(self, fetch_mode: FetchMode = FetchMode.ASSOC) -> list[Row]:
        """Return every remaining row."""
        names = self._column_names()
        return [self._shape(row, names, fetch_mode) for row in self._executor.cursor.fetchall()]

    def read_column(self, column: int = 0) -> Any:
        """Return one column of the next row, or None when there is none."""
        row = self._executor.cursor.fetchone()
        if row is None:
            return None
        try:
            return row[column]
        except IndexError:
            logger.warning(f"Column {column} out of range for a row of {len(row)} columns")
            return False

    def materialize(
        self,
        read_type: ReadType | str,
        fetch_mode: FetchMode = FetchMode.ASSOC,
        column: int = 0,
    ) -> Any:
        """
        Dispatch on a read-type selector.

        An unrecognized selector is logged as a warning and yields False.
        """
        try:
            selector = read_type if isinstance(read_type, ReadType) else ReadType(read_type)
        except ValueError:
            logger.warning(f"Invalid read type {read_type!r}")
            return False

        if selector is ReadType.ONE:
            return self.read_one(fetch_mode)
        if selector is ReadType.ALL:
            return self.read_all(fetch_mode)
        return self.read_column(column)
