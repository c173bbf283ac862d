# src/db/__init__.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Database module for the MySQL storage backend.
"""

from db.database import Database
from db.exceptions import DatabaseError, DatabaseUnavailable, MalformedParameter
from db.params import ParameterBinding, ParamType
from db.results import FetchMode, ReadType

__all__ = [
    "Database",
    "DatabaseError",
    "DatabaseUnavailable",
    "FetchMode",
    "MalformedParameter",
    "ParamType",
    "ParameterBinding",
    "ReadType",
]
