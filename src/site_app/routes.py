# site_app/routes.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Page and user routes.
"""

import logging

from flask import Blueprint, abort, current_app, jsonify, send_file  # pyright: ignore[reportMissingImports]

import config
from db import Database
from models import User
from navigation import Navigation, PageNotFound

logger = logging.getLogger(__name__)

DB_EXTENSION_KEY = "siteframe.db"

routes_bp = Blueprint("routes", __name__)


def get_database() -> Database:
    """The Database injected into the current application."""
    db = current_app.extensions.get(DB_EXTENSION_KEY)
    if db is None:
        raise RuntimeError("No database configured for this application")
    return db


@routes_bp.route("/")
def index():
    """Serve the page named by the page request parameter."""
    try:
        navigation = Navigation(
            config.PAGE_PARAMETER,
            config.PAGES_DIRECTORY,
            config.DEFAULT_PAGE,
            root=current_app.config.get("SITE_ROOT"),
        )
    except PageNotFound as e:
        logger.warning(str(e))
        abort(404)
    return send_file(navigation.main_filepath)


@routes_bp.route("/api/users/<int:user_id>")
def api_user(user_id: int):
    """Public fields of one user."""
    user = User(get_database(), user_id)
    if not user.initialized:
        return jsonify({"error": "User not found"}), 404
    return jsonify(user.to_dict())
