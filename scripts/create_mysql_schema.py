#!/usr/bin/env python3
"""
Create MySQL database schema.

This script creates the Users and Access tables used by the user model.
It uses the database connection settings from environment variables.
"""

import logging
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

_env_file = project_root / ".env"
if _env_file.exists():
    from dotenv import load_dotenv

    logging.getLogger("dotenv.main").setLevel(logging.ERROR)
    load_dotenv(_env_file)

import config  # noqa: E402
from db import Database, DatabaseUnavailable  # noqa: E402
from db.schema import create_schema  # noqa: E402

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


def main():
    """Create the database schema."""
    try:
        settings = config.DatabaseSettings.from_config()
    except RuntimeError as e:
        logger.error(str(e))
        logger.error("You can also set these in your .env file.")
        return 1

    with Database.from_settings(settings) as db:
        try:
            logger.info("Creating MySQL database schema...")
            if not create_schema(db):
                return 1
        except DatabaseUnavailable as e:
            logger.error(f"Failed to create schema: {e}")
            return 1
    logger.info("Schema creation completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
