"""Scalar attribute types: strings, numbers and booleans."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from attrbind import raw
from attrbind.attr import AttrType, AttrValue
from attrbind.errors import ConversionError


def _check_raw_type(typ: AttrType, value: raw.RawValue) -> None:
    if value.type != typ.raw_type():
        raise ConversionError(
            f"can't build a {type(typ).__name__} value from a {value.type} raw value"
        )


def _scalar_payload(val: Any, null: bool, unknown: bool) -> Any:
    if unknown:
        return raw.UNKNOWN
    if null:
        return None
    return val


@dataclass(frozen=True)
class StringType(AttrType):
    def raw_type(self) -> raw.RawType:
        return raw.String

    def value_from_raw(self, value: raw.RawValue) -> String:
        _check_raw_type(self, value)
        if not value.is_known():
            return String(unknown=True)
        if value.is_null():
            return String(null=True)
        return String(value=value.value)


@dataclass(frozen=True)
class String(AttrValue):
    value: str = ""
    null: bool = False
    unknown: bool = False

    def type(self) -> AttrType:
        return StringType()

    def to_raw(self) -> Any:
        return _scalar_payload(self.value, self.null, self.unknown)

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, String):
            return False
        return (self.null, self.unknown, self.value) == (other.null, other.unknown, other.value)


@dataclass(frozen=True)
class NumberType(AttrType):
    def raw_type(self) -> raw.RawType:
        return raw.Number

    def value_from_raw(self, value: raw.RawValue) -> Number:
        _check_raw_type(self, value)
        if not value.is_known():
            return Number(unknown=True)
        if value.is_null():
            return Number(null=True)
        return Number(value=value.value)


@dataclass(frozen=True)
class Number(AttrValue):
    value: int | float | Decimal = 0
    null: bool = False
    unknown: bool = False

    def type(self) -> AttrType:
        return NumberType()

    def to_raw(self) -> Any:
        return _scalar_payload(self.value, self.null, self.unknown)

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, Number):
            return False
        if (self.null, self.unknown) != (other.null, other.unknown):
            return False
        if self.null or self.unknown:
            return True
        return Decimal(str(self.value)) == Decimal(str(other.value))


@dataclass(frozen=True)
class BoolType(AttrType):
    def raw_type(self) -> raw.RawType:
        return raw.Bool

    def value_from_raw(self, value: raw.RawValue) -> Bool:
        _check_raw_type(self, value)
        if not value.is_known():
            return Bool(unknown=True)
        if value.is_null():
            return Bool(null=True)
        return Bool(value=value.value)


@dataclass(frozen=True)
class Bool(AttrValue):
    value: bool = False
    null: bool = False
    unknown: bool = False

    def type(self) -> AttrType:
        return BoolType()

    def to_raw(self) -> Any:
        return _scalar_payload(self.value, self.null, self.unknown)

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, Bool):
            return False
        return (self.null, self.unknown, self.value) == (other.null, other.unknown, other.value)
