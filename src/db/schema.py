# db/schema.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

"""
Database schema creation utilities.
"""

import logging

from db.database import Database

logger = logging.getLogger(__name__)

_TABLES = {
    "Users": """
        CREATE TABLE IF NOT EXISTS `Users` (
            ID_User INT UNSIGNED NOT NULL AUTO_INCREMENT,
            Username VARCHAR(64) NOT NULL,
            Email VARCHAR(255) NOT NULL,
            Password VARCHAR(255) NOT NULL,
            Date_Registration DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (ID_User),
            UNIQUE KEY uq_username (Username),
            UNIQUE KEY uq_email (Email)
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
    """,
    "Access": """
        CREATE TABLE IF NOT EXISTS `Access` (
            ID_User INT UNSIGNED NOT NULL,
            Rank_Level INT NOT NULL DEFAULT 1,
            PRIMARY KEY (ID_User),
            CONSTRAINT fk_access_user FOREIGN KEY (ID_User)
                REFERENCES `Users` (ID_User) ON DELETE CASCADE
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci
    """,
}


def create_schema(db: Database) -> bool:
    """Create all database tables if they don't exist."""
    for name, ddl in _TABLES.items():
        if not db.execute(ddl):
            logger.error(f"Failed to create table {name}")
            return False
        logger.info(f"Table {name} ready")
    return True


def drop_schema(db: Database) -> bool:
    """Drop all tables, dependents first. Used by integration tests."""
    for name in reversed(list(_TABLES)):
        if not db.execute(f"DROP TABLE IF EXISTS `{name}`"):
            logger.error(f"Failed to drop table {name}")
            return False
    return True
