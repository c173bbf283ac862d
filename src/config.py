# config.py

# Copyright (c) 2025 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.

import os
import sys
from dataclasses import dataclass

# Configuration constants loaded from environment variables


def _get_optional_str(env_name: str) -> str | None:
    """Return stripped environment variable value or None if unset/empty."""
    value = os.environ.get(env_name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_int(env_name: str, default: int) -> int:
    """Parse an integer environment variable, falling back to default on bad input."""
    try:
        return int(os.environ.get(env_name, str(default)))
    except ValueError:
        return default


# Logging
LOG_LEVEL: str = os.environ.get("SITEFRAME_LOG_LEVEL", "INFO").upper()


# Site layout
ROOT_MARKER: str = os.environ.get("SITEFRAME_ROOT_MARKER", "pyproject.toml")
PAGES_DIRECTORY: str = os.environ.get("SITEFRAME_PAGES_DIR", "pages")
DEFAULT_PAGE: str = os.environ.get("SITEFRAME_DEFAULT_PAGE", "home")
PAGE_PARAMETER: str = os.environ.get("SITEFRAME_PAGE_PARAM", "page")
SECRET_KEY: str | None = _get_optional_str("SITEFRAME_SECRET_KEY")


# MySQL configuration
# When running under pytest or in CI, use test database variables (SITEFRAME_MYSQL_TEST_*)
# Otherwise, use production database variables (SITEFRAME_MYSQL_*)
def _get_mysql_config():
    """Get MySQL configuration, using test variables when running under pytest or in CI."""
    use_test_config = (
        "pytest" in sys.modules
        or os.environ.get("CI") == "true"
        or os.environ.get("GITHUB_ACTIONS") == "true"
    )

    if use_test_config:
        return {
            "host": os.environ.get("SITEFRAME_MYSQL_TEST_HOST", os.environ.get("SITEFRAME_MYSQL_HOST", "localhost")),
            "port": _parse_int("SITEFRAME_MYSQL_TEST_PORT", _parse_int("SITEFRAME_MYSQL_PORT", 3306)),
            "database": os.environ.get("SITEFRAME_MYSQL_TEST_DATABASE"),
            "user": os.environ.get("SITEFRAME_MYSQL_TEST_USER"),
            "password": os.environ.get("SITEFRAME_MYSQL_TEST_PASSWORD"),
            "connect_timeout": _parse_int("SITEFRAME_MYSQL_TEST_CONNECT_TIMEOUT", 10),
        }
    else:
        return {
            "host": os.environ.get("SITEFRAME_MYSQL_HOST", "localhost"),
            "port": _parse_int("SITEFRAME_MYSQL_PORT", 3306),
            "database": os.environ.get("SITEFRAME_MYSQL_DATABASE"),
            "user": os.environ.get("SITEFRAME_MYSQL_USER"),
            "password": os.environ.get("SITEFRAME_MYSQL_PASSWORD"),
            "connect_timeout": _parse_int("SITEFRAME_MYSQL_CONNECT_TIMEOUT", 10),
        }


_mysql_config = _get_mysql_config()
MYSQL_HOST: str = _mysql_config["host"]
MYSQL_PORT: int = _mysql_config["port"]
MYSQL_DATABASE: str | None = _mysql_config["database"]
MYSQL_USER: str | None = _mysql_config["user"]
MYSQL_PASSWORD: str | None = _mysql_config["password"]
MYSQL_CONNECT_TIMEOUT: int = _mysql_config["connect_timeout"]


@dataclass(frozen=True)
class DatabaseSettings:
    """Credentials needed to open a session with the database server."""

    host: str
    database: str
    user: str
    password: str
    port: int = 3306
    connect_timeout: int = 10

    @classmethod
    def from_config(cls) -> "DatabaseSettings":
        """
        Build settings from the MYSQL_* values of this module.

        Raises:
            RuntimeError: if the database name, user or password is missing
        """
        missing = []
        if not MYSQL_DATABASE:
            missing.append("DATABASE")
        if not MYSQL_USER:
            missing.append("USER")
        if not MYSQL_PASSWORD:
            missing.append("PASSWORD")
        if missing:
            raise RuntimeError(
                f"MySQL configuration incomplete. Missing: {', '.join(missing)}. "
                "Please set SITEFRAME_MYSQL_DATABASE, SITEFRAME_MYSQL_USER, and "
                "SITEFRAME_MYSQL_PASSWORD."
            )
        return cls(
            host=MYSQL_HOST,
            database=MYSQL_DATABASE,
            user=MYSQL_USER,
            password=MYSQL_PASSWORD,
            port=MYSQL_PORT,
            connect_timeout=MYSQL_CONNECT_TIMEOUT,
        )
