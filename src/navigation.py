# navigation.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Project root discovery and page file resolution.
"""

import logging
import threading
from pathlib import Path

import config
from toolbox import get_http_request_by_tag
from validation import clean_string

logger = logging.getLogger(__name__)

# Page names are single path components
PAGE_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

_root_path: Path | None = None
_root_lock = threading.Lock()


class RootPathNotFound(FileNotFoundError):
    """No parent directory contains the root marker file."""


class PageNotFound(FileNotFoundError):
    """The resolved page file does not exist."""


def _find_root(start: Path, marker: str) -> Path:
    current = start
    while not (current / marker).exists():
        parent = current.parent
        if parent == current:
            logger.warning(f"Unable to find {marker} above {start}")
            raise RootPathNotFound(f"Unable to find {marker} above {start}")
        current = parent
    return current


def get_root_path() -> Path:
    """
    Return the project root: the nearest directory at or above this module
    that contains config.ROOT_MARKER. Computed once per process.
    """
    global _root_path

    if _root_path is not None:
        return _root_path

    with _root_lock:
        if _root_path is None:
            _root_path = _find_root(Path(__file__).resolve().parent, config.ROOT_MARKER)
            logger.debug(f"Project root resolved to {_root_path}")
    return _root_path


def reset_root_path() -> None:
    """Forget the cached root path."""
    global _root_path
    with _root_lock:
        _root_path = None


class Navigation:
    """Resolves which page file a request asks for."""

    def __init__(
        self,
        main_filename_key: str,
        files_dir: str,
        default_main_filename: str,
        extension: str = ".html",
        root: Path | None = None,
    ):
        self.extension = extension
        self._root = Path(root) if root is not None else None
        self.default_main_filename = clean_string(default_main_filename, regex=PAGE_NAME_PATTERN)
        self.files_dir = clean_string(files_dir)
        self.main_filename = self._resolve_main_filename(main_filename_key)
        self.main_filepath = self._build_main_filepath()

    def _resolve_main_filename(self, main_filename_key: str) -> str | None:
        key = clean_string(main_filename_key)
        if key is None:
            return None
        requested = get_http_request_by_tag(key, self.default_main_filename)
        name = clean_string(requested, regex=PAGE_NAME_PATTERN)
        if name is None and requested != self.default_main_filename:
            logger.warning(f"Rejected page name {requested!r}, using default")
            return self.default_main_filename
        return name

    def _build_main_filepath(self) -> Path:
        filepath = self._root if self._root is not None else get_root_path()

        if self.files_dir is not None:
            filepath = filepath / self.files_dir

        name = self.main_filename or self.default_main_filename
        if name is None:
            raise PageNotFound("No page requested and no default page configured")
        filepath = filepath / f"{name}{self.extension}"

        if not filepath.is_file():
            raise PageNotFound(f"This path does not exist: {filepath}")
        return filepath
