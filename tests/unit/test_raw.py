"""Tests for raw transport values."""

from __future__ import annotations

from decimal import Decimal

import pytest

from attrbind import raw
from attrbind.errors import RawValueError
from attrbind.path import Path


class TestRawKind:
    def test_null_and_unknown_kinds(self) -> None:
        assert raw.null(raw.String).kind == raw.RawKind.NULL
        assert raw.unknown(raw.String).kind == raw.RawKind.UNKNOWN

    def test_concrete_kinds(self) -> None:
        assert raw.new_value(raw.String, "a").kind == raw.RawKind.STRING
        assert raw.new_value(raw.Number, 1).kind == raw.RawKind.NUMBER
        assert raw.new_value(raw.Bool, True).kind == raw.RawKind.BOOL
        assert raw.new_value(raw.List(raw.String), []).kind == raw.RawKind.LIST
        assert raw.new_value(raw.Map(raw.String), {}).kind == raw.RawKind.MAP
        assert raw.new_value(raw.Object({}), {}).kind == raw.RawKind.OBJECT

    def test_unknown_is_a_singleton(self) -> None:
        assert raw._Unknown() is raw.UNKNOWN


class TestNewValue:
    @pytest.mark.parametrize("payload", [1, 1.5, Decimal("2.25")])
    def test_numbers(self, payload: object) -> None:
        assert raw.new_value(raw.Number, payload).value == payload

    def test_bool_is_not_a_number(self) -> None:
        with pytest.raises(RawValueError):
            raw.new_value(raw.Number, True)

    def test_string_mismatch(self) -> None:
        with pytest.raises(RawValueError, match="can't use int as a string"):
            raw.new_value(raw.String, 3)

    def test_list_element_type_mismatch_reports_path(self) -> None:
        with pytest.raises(RawValueError) as info:
            raw.new_value(
                raw.List(raw.String),
                [raw.new_value(raw.String, "a"), raw.new_value(raw.Number, 1)],
            )
        assert info.value.path == Path().index(1)

    def test_map_requires_string_keys(self) -> None:
        with pytest.raises(RawValueError, match="map keys must be strings"):
            raw.new_value(raw.Map(raw.String), {1: raw.new_value(raw.String, "a")})

    def test_object_missing_attribute(self) -> None:
        typ = raw.Object({"a": raw.String, "b": raw.String})
        with pytest.raises(RawValueError, match="missing attributes: b"):
            raw.new_value(typ, {"a": raw.new_value(raw.String, "x")})

    def test_object_extra_attribute(self) -> None:
        typ = raw.Object({"a": raw.String})
        with pytest.raises(RawValueError, match="without that attribute"):
            raw.new_value(
                typ,
                {"a": raw.new_value(raw.String, "x"), "b": raw.new_value(raw.String, "y")},
            )

    def test_nested_null_and_unknown_elements(self) -> None:
        value = raw.new_value(
            raw.List(raw.String), [raw.null(raw.String), raw.unknown(raw.String)]
        )
        assert not value.is_fully_known()
        assert value.is_known()

    def test_elements_must_be_raw_values(self) -> None:
        with pytest.raises(RawValueError, match="must be RawValue"):
            raw.new_value(raw.List(raw.String), ["plain"])


class TestRawTypes:
    def test_structural_equality(self) -> None:
        assert raw.List(raw.String) == raw.List(raw.String)
        assert raw.List(raw.String) != raw.Map(raw.String)
        assert raw.Object({"a": raw.Number}) == raw.Object({"a": raw.Number})

    def test_object_types_are_hashable(self) -> None:
        assert hash(raw.Object({"a": raw.Number})) == hash(raw.Object({"a": raw.Number}))

    def test_str(self) -> None:
        assert str(raw.Map(raw.List(raw.Number))) == "map[list[number]]"
        assert str(raw.Object({"b": raw.Bool, "a": raw.String})) == "object{a: string, b: bool}"
