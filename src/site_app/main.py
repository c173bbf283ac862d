# site_app/main.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Main entry point for the site server.
"""

import argparse
import logging
import sys

import config
from db import Database, DatabaseUnavailable
from site_app.app import create_app

# Configure logging (only if not already configured)
if not logging.getLogger().handlers:
    log_level = getattr(logging, config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(level=log_level)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="siteframe web server")
    parser.add_argument(
        "--port", type=int, default=5000, help="Port to run the web server on"
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    args = parser.parse_args(argv)

    try:
        settings = config.DatabaseSettings.from_config()
    except RuntimeError as e:
        logger.critical(str(e))
        sys.exit(1)

    db = Database.from_settings(settings)
    try:
        # Fail fast: nothing works without the database
        db.ensure_connected()
    except DatabaseUnavailable as e:
        logger.critical(f"Database unavailable, stopping: {e}")
        sys.exit(1)

    logger.info(f"Starting site on http://{args.host}:{args.port}")
    try:
        create_app(db).run(host=args.host, port=args.port, debug=args.debug)
    finally:
        db.disconnect()


if __name__ == "__main__":
    main()
