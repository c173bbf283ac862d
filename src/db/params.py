# db/params.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
Typed parameter bindings and named-marker translation.

SQL handed to the Database facade uses named markers (``:id``). pymysql only
understands pyformat markers (``%(id)s``), so the SQL is rewritten before it
reaches the driver.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from db.exceptions import MalformedParameter

MARKER_PREFIX = ":"

# Quoted strings and backtick identifiers are matched first so markers inside
# them are left untouched.
_SQL_TOKEN_RE = re.compile(
    r"""
    (?P<quoted>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`[^`]*`)
    | (?P<cast>::)
    | :(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<percent>%)
    """,
    re.VERBOSE | re.DOTALL,
)


class ParamType(Enum):
    """Wire type a caller declares for a bound value."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"

    def __str__(self):
        return self.value

    def accepts(self, value: Any) -> bool:
        """Check that value's runtime type fits this tag. Nothing is coerced."""
        if self is ParamType.NULL:
            return value is None
        if self is ParamType.BOOLEAN:
            return isinstance(value, bool)
        if self is ParamType.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, str)

    @classmethod
    def coerce(cls, tag: Any) -> "ParamType | None":
        """Accept a ParamType member or its name/value; None when unrecognized."""
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls[tag.upper()]
            except KeyError:
                try:
                    return cls(tag.lower())
                except ValueError:
                    return None
        return None


def normalize_marker(marker: str) -> str:
    """Return marker with exactly one leading ':'."""
    return marker if marker.startswith(MARKER_PREFIX) else MARKER_PREFIX + marker


@dataclass(frozen=True)
class ParameterBinding:
    """A named marker paired with a value and its declared type."""

    marker: str
    value: Any
    type: ParamType

    def __post_init__(self):
        if not isinstance(self.marker, str) or not self.marker.lstrip(MARKER_PREFIX):
            raise MalformedParameter(str(self.marker), "must have a non-empty marker name")
        object.__setattr__(self, "marker", normalize_marker(self.marker))
        if not isinstance(self.type, ParamType):
            raise MalformedParameter(self.marker, f"has an unknown type tag {self.type!r}")
        if not self.type.accepts(self.value):
            raise MalformedParameter(
                self.marker,
                f"value {type(self.value).__name__} does not match type {self.type.name}",
            )

    @property
    def name(self) -> str:
        """Marker name without the leading ':'."""
        return self.marker[len(MARKER_PREFIX):]

    @classmethod
    def from_pair(cls, marker: str, pair: Any) -> "ParameterBinding":
        """
        Build a binding from an untyped ``(value, type)`` pair.

        Raises:
            MalformedParameter: if pair is not a two-element tuple/list or the
                tag is not a ParamType
        """
        if not isinstance(pair, (tuple, list)) or len(pair) != 2:
            raise MalformedParameter(marker, "must be a (value, type) pair")
        value, tag = pair
        param_type = ParamType.coerce(tag)
        if param_type is None:
            raise MalformedParameter(marker, f"has an unknown type tag {tag!r}")
        return cls(marker, value, param_type)


Bindings = Mapping[str, Any] | Iterable[ParameterBinding] | None


def coerce_bindings(bindings: Bindings) -> list[ParameterBinding]:
    """
    Turn caller-supplied bindings into a list of ParameterBinding.

    Accepts a mapping of ``marker -> (value, ParamType)`` (values may also be
    ParameterBinding instances) or an iterable of ParameterBinding.

    Raises:
        MalformedParameter: naming the first offending marker
    """
    if bindings is None:
        return []

    result: list[ParameterBinding] = []
    if isinstance(bindings, Mapping):
        for marker, pair in bindings.items():
            if isinstance(pair, ParameterBinding):
                if normalize_marker(str(marker)) != pair.marker:
                    raise MalformedParameter(str(marker), f"is bound under a different marker {pair.marker!r}")
                result.append(pair)
            else:
                result.append(ParameterBinding.from_pair(str(marker), pair))
    else:
        for index, binding in enumerate(bindings):
            if not isinstance(binding, ParameterBinding):
                raise MalformedParameter(f"#{index}", "is not a ParameterBinding")
            result.append(binding)

    seen: set[str] = set()
    for binding in result:
        if binding.marker in seen:
            raise MalformedParameter(binding.marker, "is bound more than once")
        seen.add(binding.marker)
    return result


def translate_named_markers(sql: str) -> tuple[str, list[str]]:
    """
    Rewrite ``:name`` markers to pymysql ``%(name)s`` markers.

    Literal ``%`` characters are doubled so that the driver's interpolation
    leaves them intact.

    Returns:
        Tuple of (rewritten SQL, marker names in order of first appearance)
    """
    names: list[str] = []

    def _replace(match: re.Match) -> str:
        if match.group("name") is not None:
            name = match.group("name")
            if name not in names:
                names.append(name)
            return f"%({name})s"
        if match.group("percent") is not None:
            return "%%"
        return match.group(0).replace("%", "%%")

    return _SQL_TOKEN_RE.sub(_replace, sql), names
