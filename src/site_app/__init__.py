"""Site package exposing the Flask application factory."""

from .app import create_app  # noqa: F401
from .main import main  # noqa: F401

__all__ = ["create_app", "main"]
