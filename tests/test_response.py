"""Tests for response shaping and pagination totals."""

from __future__ import annotations

import pytest

from postgrest_provider.exceptions import MalformedHeaderError, MissingHeaderError
from postgrest_provider.response import extract_total, with_generic_id


class TestWithGenericId:
    def test_compound_key_gets_encoded_id(self) -> None:
        record = {"user_id": 1, "group_id": 2, "role": "admin"}
        shaped = with_generic_id(record, ("user_id", "group_id"))
        assert shaped["id"] == "[1,2]"
        assert shaped["role"] == "admin"

    def test_scalar_non_id_key(self) -> None:
        shaped = with_generic_id({"account_no": "A-1"}, ("account_no",))
        assert shaped == {"account_no": "A-1", "id": "A-1"}

    def test_generic_key_is_untouched(self) -> None:
        record = {"id": 5, "title": "t"}
        assert with_generic_id(record, ("id",)) == record

    def test_does_not_mutate_input(self) -> None:
        record = {"a": "x", "b": "y"}
        shaped = with_generic_id(record, ("a", "b"))
        assert "id" not in record
        assert shaped is not record

    def test_idempotent(self) -> None:
        pk = ("a", "b")
        once = with_generic_id({"a": "x", "b": "y"}, pk)
        twice = with_generic_id(once, pk)
        assert twice["id"] == once["id"] == '["x","y"]'

    def test_custom_id_field(self) -> None:
        shaped = with_generic_id({"a": 1, "b": 2}, ("a", "b"), id_field="key")
        assert shaped["key"] == "[1,2]"
        assert "id" not in shaped


class TestExtractTotal:
    def test_total_after_final_slash(self) -> None:
        assert extract_total("0-24/319") == 319

    def test_empty_range(self) -> None:
        assert extract_total("*/0") == 0

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header_raises(self, header: str | None) -> None:
        with pytest.raises(MissingHeaderError) as exc_info:
            extract_total(header)
        message = str(exc_info.value)
        assert "Content-Range" in message
        assert "Access-Control-Expose-Headers" in message

    def test_unknown_total_raises(self) -> None:
        with pytest.raises(MalformedHeaderError) as exc_info:
            extract_total("0-24/*")
        assert exc_info.value.value == "0-24/*"
