# site_app/app.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Site application factory.
"""

import logging
from pathlib import Path

from flask import Flask  # pyright: ignore[reportMissingImports]

import config
from db import Database
from site_app.routes import DB_EXTENSION_KEY, routes_bp

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None, site_root: Path | None = None) -> Flask:
    """
    Return a configured Flask app.

    Args:
        database: Database used by the user routes
        site_root: Directory holding the pages directory; defaults to the
            discovered project root
    """
    app = Flask(__name__)
    if config.SECRET_KEY:
        app.secret_key = config.SECRET_KEY
    app.config["SITE_ROOT"] = site_root
    if database is not None:
        app.extensions[DB_EXTENSION_KEY] = database
    app.register_blueprint(routes_bp)
    return app
