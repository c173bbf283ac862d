# tests/test_utils.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
In-memory stand-ins for pymysql connections, registered as a pytest plugin.
"""

from collections import deque

import pymysql
import pytest
from pymysql.converters import escape_item


class FakeResult:
    def __init__(self, columns=(), rows=(), rowcount=None, lastrowid=0, error=None):
        self.columns = list(columns)
        self.rows = [tuple(row) for row in rows]
        self.rowcount = len(self.rows) if rowcount is None else rowcount
        self.lastrowid = lastrowid
        self.error = error


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self.rowcount = -1
        self.closed = False
        self.close_calls = 0
        self._rows = deque()

    def execute(self, query, args=None):
        if self.closed:
            raise pymysql.err.ProgrammingError("Cursor closed")
        rendered = query
        if args is not None:
            rendered = query % {k: escape_item(v, "utf8mb4") for k, v in args.items()}
        self.connection.executed.append((query, dict(args or {}), rendered))

        result = self.connection.results.popleft() if self.connection.results else FakeResult()
        if result.error is not None:
            raise result.error
        self.description = tuple((name, None, None, None, None, None, None) for name in result.columns) or None
        self._rows = deque(result.rows)
        self.rowcount = result.rowcount
        self.connection.last_insert_id = result.lastrowid
        return self.rowcount

    def fetchone(self):
        return self._rows.popleft() if self._rows else None

    def fetchall(self):
        rows = list(self._rows)
        self._rows.clear()
        return rows

    def close(self):
        self.close_calls += 1
        self.closed = True


class FakeConnection:
    def __init__(self, controller, **kwargs):
        self.kwargs = kwargs
        self.open = True
        self.cursors = []
        self.last_insert_id = 0
        self._controller = controller

    @property
    def results(self):
        return self._controller.results

    @property
    def executed(self):
        return self._controller.executed

    def cursor(self):
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def insert_id(self):
        return self.last_insert_id

    def ping(self, reconnect=False):
        if not self.open:
            raise pymysql.err.Error("Already closed")
        return True

    def close(self):
        if not self.open:
            raise pymysql.err.Error("Already closed")
        self.open = False


class FakeMySQL:
    """Controls what the patched pymysql.connect returns and records."""

    def __init__(self):
        self.connections = []
        self.results = deque()
        self.executed = []
        self.connect_error = None

    def connect(self, **kwargs):
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(self, **kwargs)
        self.connections.append(conn)
        return conn

    def queue(self, columns=(), rows=(), rowcount=None, lastrowid=0):
        self.results.append(FakeResult(columns, rows, rowcount, lastrowid))

    def queue_error(self, error, rowcount=-1):
        self.results.append(FakeResult(rowcount=rowcount, error=error))

    @property
    def open_cursors(self):
        return [c for conn in self.connections for c in conn.cursors if not c.closed]


@pytest.fixture
def fake_mysql(monkeypatch):
    """Replace pymysql.connect with an in-memory fake."""
    fake = FakeMySQL()
    monkeypatch.setattr(pymysql, "connect", fake.connect)
    return fake


@pytest.fixture
def database(fake_mysql):
    from db import Database

    db = Database("localhost", "test_site", "web", "secret")
    yield db
    db.disconnect()
