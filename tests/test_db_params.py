# tests/test_db_params.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""Tests for db.params module."""

import pytest

from db.exceptions import MalformedParameter
from db.params import (
    ParameterBinding,
    ParamType,
    coerce_bindings,
    normalize_marker,
    translate_named_markers,
)


class TestTranslateNamedMarkers:
    def test_rewrites_markers_to_pyformat(self):
        sql, names = translate_named_markers("SELECT * FROM t WHERE id = :id AND name = :name")
        assert sql == "SELECT * FROM t WHERE id = %(id)s AND name = %(name)s"
        assert names == ["id", "name"]

    def test_repeated_marker_listed_once(self):
        sql, names = translate_named_markers("SELECT :v, :v")
        assert sql == "SELECT %(v)s, %(v)s"
        assert names == ["v"]

    def test_markers_inside_literals_are_untouched(self):
        sql, names = translate_named_markers("SELECT ':skip', \"a:b\", `c:d` FROM t WHERE x = :x")
        assert sql == "SELECT ':skip', \"a:b\", `c:d` FROM t WHERE x = %(x)s"
        assert names == ["x"]

    def test_percent_is_doubled(self):
        sql, names = translate_named_markers("SELECT * FROM t WHERE name LIKE 'a%' AND n % 2 = :r")
        assert sql == "SELECT * FROM t WHERE name LIKE 'a%%' AND n %% 2 = %(r)s"
        assert names == ["r"]

    def test_double_colon_is_not_a_marker(self):
        sql, names = translate_named_markers("SELECT a::text")
        assert sql == "SELECT a::text"
        assert names == []

    def test_escaped_quote_inside_literal(self):
        sql, names = translate_named_markers(r"SELECT 'it\'s :no' WHERE a = :yes")
        assert names == ["yes"]


class TestParamType:
    @pytest.mark.parametrize(
        "param_type, value",
        [
            (ParamType.STRING, "x"),
            (ParamType.INTEGER, 3),
            (ParamType.BOOLEAN, False),
            (ParamType.NULL, None),
        ],
    )
    def test_accepts_matching_values(self, param_type, value):
        assert param_type.accepts(value)

    @pytest.mark.parametrize(
        "param_type, value",
        [
            (ParamType.STRING, 1),
            (ParamType.INTEGER, "1"),
            (ParamType.INTEGER, True),
            (ParamType.BOOLEAN, 1),
            (ParamType.NULL, ""),
        ],
    )
    def test_rejects_without_coercion(self, param_type, value):
        assert not param_type.accepts(value)

    def test_coerce_by_name_or_value(self):
        assert ParamType.coerce("INTEGER") is ParamType.INTEGER
        assert ParamType.coerce("string") is ParamType.STRING
        assert ParamType.coerce(ParamType.NULL) is ParamType.NULL
        assert ParamType.coerce("float") is None
        assert ParamType.coerce(1) is None


class TestParameterBinding:
    def test_marker_is_normalized(self):
        binding = ParameterBinding("id", 1, ParamType.INTEGER)
        assert binding.marker == ":id"
        assert binding.name == "id"
        assert normalize_marker(":id") == ":id"

    def test_empty_marker_rejected(self):
        with pytest.raises(MalformedParameter):
            ParameterBinding(":", 1, ParamType.INTEGER)

    def test_type_mismatch_rejected(self):
        with pytest.raises(MalformedParameter) as exc_info:
            ParameterBinding(":id", "1", ParamType.INTEGER)
        assert exc_info.value.marker == ":id"

    @pytest.mark.parametrize("pair", [1, "x", (1,), (1, ParamType.INTEGER, "extra"), None])
    def test_from_pair_rejects_bad_shapes(self, pair):
        with pytest.raises(MalformedParameter) as exc_info:
            ParameterBinding.from_pair(":id", pair)
        assert exc_info.value.marker == ":id"
        assert "(value, type) pair" in str(exc_info.value)

    def test_from_pair_rejects_unknown_tag(self):
        with pytest.raises(MalformedParameter):
            ParameterBinding.from_pair(":id", (1, "decimal"))

    def test_from_pair_accepts_list(self):
        binding = ParameterBinding.from_pair(":flag", [True, ParamType.BOOLEAN])
        assert binding.value is True
        assert binding.type is ParamType.BOOLEAN


class TestCoerceBindings:
    def test_none_is_empty(self):
        assert coerce_bindings(None) == []

    def test_mapping_of_pairs(self):
        bindings = coerce_bindings({":a": ("x", ParamType.STRING), "b": (2, ParamType.INTEGER)})
        assert [b.marker for b in bindings] == [":a", ":b"]

    def test_iterable_of_bindings(self):
        items = [ParameterBinding(":a", None, ParamType.NULL)]
        assert coerce_bindings(items) == items

    def test_iterable_with_foreign_item(self):
        with pytest.raises(MalformedParameter):
            coerce_bindings([("a", 1)])

    def test_duplicate_marker_rejected(self):
        with pytest.raises(MalformedParameter):
            coerce_bindings(
                [
                    ParameterBinding(":a", 1, ParamType.INTEGER),
                    ParameterBinding("a", 2, ParamType.INTEGER),
                ]
            )

    def test_mapping_key_must_match_binding_marker(self):
        with pytest.raises(MalformedParameter):
            coerce_bindings({":a": ParameterBinding(":b", 1, ParamType.INTEGER)})
