"""Tests for FilterTranslator operator inference."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from postgrest_provider.exceptions import FilterKeyError
from postgrest_provider.filters import (
    FilterTranslator,
    FilterValue,
    FilterValueKind,
    parse_filter_key,
    translate,
)


class TestFilterValueKind:
    @pytest.mark.parametrize(
        "value, kind",
        [
            ("john", FilterValueKind.TEXT),
            (True, FilterValueKind.BOOLEAN),
            (None, FilterValueKind.NULL),
            (3, FilterValueKind.NUMBER),
            (2.5, FilterValueKind.NUMBER),
            (Decimal("1.10"), FilterValueKind.NUMBER),
            ([1, 2], FilterValueKind.LIST),
            (("a",), FilterValueKind.LIST),
            ({"k": "v"}, FilterValueKind.MAPPING),
            (datetime.date(2024, 1, 2), FilterValueKind.OTHER),
        ],
    )
    def test_kind_is_decided_at_construction(
        self, value: object, kind: FilterValueKind
    ) -> None:
        assert FilterValue.of(value).kind is kind

    def test_bool_is_not_a_number(self) -> None:
        assert FilterValue.of(False).kind is FilterValueKind.BOOLEAN

    def test_wrapping_is_idempotent(self) -> None:
        fv = FilterValue.of("x")
        assert FilterValue.of(fv) is fv


class TestFilterKey:
    def test_plain_key(self) -> None:
        assert parse_filter_key("name") == ("name", "name", None)

    def test_key_with_operator(self) -> None:
        fk = parse_filter_key("name@neq")
        assert fk.field == "name"
        assert fk.operator == "neq"
        assert fk.key == "name@neq"

    @pytest.mark.parametrize("key", ["a@b@c", "@neq", "name@"])
    def test_ambiguous_keys_rejected(self, key: str) -> None:
        with pytest.raises(FilterKeyError) as exc_info:
            parse_filter_key(key)
        assert exc_info.value.key == key

    def test_custom_separator(self) -> None:
        assert parse_filter_key("age~gte", separator="~").operator == "gte"


class TestImplicitOperators:
    def test_string_is_substring_match(self) -> None:
        assert translate({"name": "john"}, "eq") == {"name": "ilike.*john*"}

    def test_string_colons_are_stripped(self) -> None:
        assert translate({"time": "10:30:00"}) == {"time": "ilike.*103000*"}

    def test_boolean(self) -> None:
        assert translate({"active": True}, "eq") == {"active": "is.true"}
        assert translate({"active": False}) == {"active": "is.false"}

    def test_null(self) -> None:
        assert translate({"deleted_at": None}) == {"deleted_at": "is.null"}

    def test_number_is_exact_match_regardless_of_default(self) -> None:
        assert translate({"age": 30}, "eq") == {"age": "eq.30"}
        assert translate({"age": 30}, "gte") == {"age": "eq.30"}

    def test_list_is_contains(self) -> None:
        assert translate({"tags": [1, 2, 3]}, "eq") == {"tags": "cs.{1,2,3}"}

    def test_list_colons_are_stripped(self) -> None:
        assert translate({"tags": ["a:b", "c"]}) == {"tags": "cs.{ab,c}"}

    def test_list_booleans_use_json_spelling(self) -> None:
        assert translate({"flags": [True, None]}) == {"flags": "cs.{true,null}"}

    def test_nested_mapping_expands_to_json_paths(self) -> None:
        result = translate({"meta": {"color": "red", "size": "L"}})
        assert result == {
            "meta->>color": "ilike.*red*",
            "meta->>size": "ilike.*L*",
        }

    def test_other_values_are_stringified(self) -> None:
        result = translate({"day": datetime.date(2024, 1, 2)})
        assert result == {"day": "ilike.*2024-01-02*"}


class TestExplicitOperators:
    def test_string_keeps_full_key(self) -> None:
        assert translate({"name@neq": "john"}, "eq") == {"name@neq": "neq.*john*"}

    def test_boolean(self) -> None:
        assert translate({"active@not.is": False}) == {"active@not.is": "not.is.false"}

    def test_null_ignores_operator(self) -> None:
        assert translate({"deleted_at@neq": None}) == {"deleted_at@neq": "is.null"}

    def test_number(self) -> None:
        assert translate({"age@gte": 18}) == {"age@gte": "gte.18"}

    def test_list(self) -> None:
        assert translate({"id@in": [1, 2]}) == {"id@in": "in.{1,2}"}

    def test_mapping_passes_through_for_procedures(self) -> None:
        arg = {"lat": 1.5, "lng": 2.5}
        assert translate({"point@arg": arg}) == {"point@arg": arg}


class TestFilterTranslator:
    def test_empty_filter(self) -> None:
        assert FilterTranslator().translate({}) == {}
        assert FilterTranslator().translate(None) == {}

    def test_operator_enum_accepted_as_default(self) -> None:
        from postgrest_provider.operators import PostgrestOperator

        translator = FilterTranslator(PostgrestOperator.NEQ)
        assert translator.default_operator == "neq"
        assert translator.translate({"n": 1}) == {"n": "eq.1"}

    def test_mixed_filter(self) -> None:
        result = FilterTranslator().translate(
            {"name": "jo", "age@gte": 18, "active": True, "tags": ["x"]}
        )
        assert result == {
            "name": "ilike.*jo*",
            "age@gte": "gte.18",
            "active": "is.true",
            "tags": "cs.{x}",
        }

    def test_invalid_key_aborts_translation(self) -> None:
        with pytest.raises(FilterKeyError):
            FilterTranslator().translate({"ok": 1, "bad@x@y": 2})
