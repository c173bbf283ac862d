# models/__init__.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Domain models backed by the Database facade.
"""

from models.user import User, create_user

__all__ = ["User", "create_user"]
