# db/exceptions.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Exception types for the database layer.

Only DatabaseUnavailable ever leaves the Database facade. The others are
raised internally and turned into a False result plus a warning.
"""


class DatabaseError(Exception):
    """Base class for database layer errors."""


class DatabaseUnavailable(DatabaseError):
    """
    The connection to the database server could not be established.

    Without a database the application cannot do anything useful, so callers
    at the process boundary are expected to stop when they see this.

    Args:
        message: Error message
        original_exception: The driver exception that caused the failure (optional)
    """

    def __init__(self, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.original_exception = original_exception


class MalformedParameter(DatabaseError, ValueError):
    """A parameter binding is not a (value, ParamType) pair or its value does not fit the tag."""

    def __init__(self, marker: str, reason: str):
        super().__init__(f"Parameter '{marker}' {reason}")
        self.marker = marker
        self.reason = reason


class StatementStateError(DatabaseError, RuntimeError):
    """A statement was driven through an illegal state transition."""
