# toolbox.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
String helpers and HTTP parameter access for the current Flask request.
"""

import re
from collections.abc import Iterable
from typing import Any

from flask import request  # pyright: ignore[reportMissingImports]
from markupsafe import escape

from validation import is_valid_array

_WORD_START_RE = re.compile(r"(^|\s)(\S)")


def up_first_letter(value: str, all_words: bool = False) -> str:
    """
    Lower-case value, then capitalize its first letter.

    Args:
        value: The string to transform
        all_words: Capitalize the first letter of every whitespace-separated
            word instead of only the first one
    """
    value = value.lower()
    if all_words:
        return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), value)
    return value[:1].upper() + value[1:]


def get_http_requests(excludes: Iterable[str] = ()) -> dict[str, str]:
    """
    Return the current request's parameters minus the excluded keys.

    Query-string arguments win when present; otherwise form fields are used.
    """
    if is_valid_array(request.args):
        results = request.args.to_dict()
    elif is_valid_array(request.form):
        results = request.form.to_dict()
    else:
        results = {}

    for exclude in excludes:
        results.pop(exclude, None)
    return results


def get_http_request_by_tag(key: str, default: Any = None) -> Any:
    """
    Return one request parameter, stripped and HTML-escaped.

    The query string is checked before the form body. A missing or empty
    value yields default.
    """
    raw = request.args.get(key)
    if raw is None:
        raw = request.form.get(key)
    if raw is None:
        return default

    result = str(escape(raw.strip()))
    return result or default
