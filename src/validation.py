# validation.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Input validation helpers for strings, sequences, numbers and IP addresses.

Used to gate request and configuration values before they reach the
database layer.
"""

import ipaddress
import re
from collections.abc import Sequence, Sized


def range_of(
    value: int | float | str,
    min_range: int | float | None = None,
    max_range: int | float | None = None,
) -> bool:
    """
    Check that value lies within the inclusive range [min_range, max_range].

    A string is measured by the length of its stripped form. Either bound may
    be omitted; with no bounds every value is in range.

    Examples:
        >>> range_of(10, 5, 15)
        True
        >>> range_of(4, 5)
        False
        >>> range_of("Hello", 3, 5)
        True
    """
    if isinstance(value, str):
        value = len(value.strip())

    if min_range is not None and value < min_range:
        return False
    if max_range is not None and value > max_range:
        return False
    return True


def clean_string(
    value: str | None,
    min_chars: int = 0,
    max_chars: int = 0,
    regex: str | re.Pattern | None = None,
) -> str | None:
    """
    Strip value and check it against length and pattern constraints.

    Args:
        value: String to check
        min_chars: Minimum length when > 0
        max_chars: Maximum length when > 0
        regex: Pattern the stripped string must match (re.search)

    Returns:
        The stripped string if it is non-empty and satisfies the
        constraints, otherwise None
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value == "":
        return None

    if min_chars > 0 or max_chars > 0:
        if not range_of(value, min_chars if min_chars > 0 else None, max_chars if max_chars > 0 else None):
            return None

    if regex is not None:
        try:
            if not re.search(regex, value):
                return None
        except re.error:
            # An invalid pattern never matches
            return None

    return value


def is_valid_string(
    value: str | None,
    min_chars: int = 0,
    max_chars: int = 0,
    regex: str | re.Pattern | None = None,
) -> bool:
    """Return True when clean_string() accepts value."""
    return clean_string(value, min_chars, max_chars, regex) is not None


def is_valid_array(value: Sized, strict_value: int = 0) -> bool:
    """Non-empty, or exactly strict_value items when strict_value > 0."""
    size = len(value)
    return size == strict_value if strict_value > 0 else size > 0


def is_valid_several_arrays(values: Sequence[Sized], strict_values: Sequence[int] = ()) -> bool:
    """Every sequence passes is_valid_array, with positional strict sizes when given."""
    for index, value in enumerate(values):
        strict = strict_values[index] if index < len(strict_values) else 0
        if not is_valid_array(value, strict):
            return False
    return True


def is_float(value, min_range: int | float | None = None, max_range: int | float | None = None) -> bool:
    return isinstance(value, float) and range_of(value, min_range, max_range)


def is_int(value, min_range: int | None = None, max_range: int | None = None) -> bool:
    # bool is a subclass of int but never counts as one here
    return isinstance(value, int) and not isinstance(value, bool) and range_of(value, min_range, max_range)


def is_ipv4(ip: str) -> bool:
    try:
        ipaddress.IPv4Address(ip)
    except ValueError:
        return False
    return True


def is_ipv6(ip: str) -> bool:
    """IPv6 address check; scoped addresses such as fe80::1%eth0 are accepted."""
    try:
        ipaddress.IPv6Address(ip)
    except ValueError:
        return False
    return True


def is_valid_ip(ip: str) -> bool:
    return is_ipv4(ip) or is_ipv6(ip)
