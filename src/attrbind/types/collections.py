"""Element-typed collection attribute types: lists, maps and objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from attrbind import raw
from attrbind.attr import (
    AttrType,
    AttrValue,
    TypeWithAttributeTypes,
    TypeWithElementType,
    value_to_raw,
)
from attrbind.errors import ConversionError


def _check_raw_type(typ: AttrType, value: raw.RawValue) -> None:
    if value.type != typ.raw_type():
        raise ConversionError(f"can't build a {typ.raw_type()} value from a {value.type} raw value")


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ListType(AttrType, TypeWithElementType):
    elem_type: AttrType

    def raw_type(self) -> raw.RawType:
        return raw.List(self.elem_type.raw_type())

    def element_type(self) -> AttrType:
        return self.elem_type

    def value_from_raw(self, value: raw.RawValue) -> List:
        _check_raw_type(self, value)
        if not value.is_known():
            return List(self.elem_type, unknown=True)
        if value.is_null():
            return List(self.elem_type, null=True)
        elems = [self.elem_type.value_from_raw(v) for v in value.value]
        return List(self.elem_type, tuple(elems))


@dataclass(frozen=True)
class List(AttrValue):
    elem_type: AttrType
    elems: tuple[AttrValue, ...] = ()
    null: bool = False
    unknown: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "elems", tuple(self.elems))

    def type(self) -> AttrType:
        return ListType(self.elem_type)

    def to_raw(self) -> Any:
        if self.unknown:
            return raw.UNKNOWN
        if self.null:
            return None
        return [value_to_raw(e) for e in self.elems]

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, List) or self.type() != other.type():
            return False
        if (self.null, self.unknown) != (other.null, other.unknown):
            return False
        if len(self.elems) != len(other.elems):
            return False
        return all(a.equal(b) for a, b in zip(self.elems, other.elems))


# ---------------------------------------------------------------------------
# Map
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MapType(AttrType, TypeWithElementType):
    elem_type: AttrType

    def raw_type(self) -> raw.RawType:
        return raw.Map(self.elem_type.raw_type())

    def element_type(self) -> AttrType:
        return self.elem_type

    def value_from_raw(self, value: raw.RawValue) -> Map:
        _check_raw_type(self, value)
        if not value.is_known():
            return Map(self.elem_type, unknown=True)
        if value.is_null():
            return Map(self.elem_type, null=True)
        elems = {k: self.elem_type.value_from_raw(v) for k, v in value.value.items()}
        return Map(self.elem_type, elems)


@dataclass(frozen=True)
class Map(AttrValue):
    elem_type: AttrType
    elems: Mapping[str, AttrValue] = field(default_factory=dict)
    null: bool = False
    unknown: bool = False

    def type(self) -> AttrType:
        return MapType(self.elem_type)

    def to_raw(self) -> Any:
        if self.unknown:
            return raw.UNKNOWN
        if self.null:
            return None
        return {k: value_to_raw(v) for k, v in self.elems.items()}

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, Map) or self.type() != other.type():
            return False
        if (self.null, self.unknown) != (other.null, other.unknown):
            return False
        if self.elems.keys() != other.elems.keys():
            return False
        return all(v.equal(other.elems[k]) for k, v in self.elems.items())


# ---------------------------------------------------------------------------
# Object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectType(AttrType, TypeWithAttributeTypes):
    attr_types: Mapping[str, AttrType] = field(default_factory=dict)

    def raw_type(self) -> raw.RawType:
        return raw.Object({k: v.raw_type() for k, v in self.attr_types.items()})

    def attribute_types(self) -> Mapping[str, AttrType]:
        return self.attr_types

    def value_from_raw(self, value: raw.RawValue) -> Object:
        _check_raw_type(self, value)
        if not value.is_known():
            return Object(self.attr_types, unknown=True)
        if value.is_null():
            return Object(self.attr_types, null=True)
        extra = sorted(set(value.value) - set(self.attr_types))
        if extra:
            raise ConversionError(f"object has unexpected attributes: {', '.join(extra)}")
        attrs = {k: self.attr_types[k].value_from_raw(v) for k, v in value.value.items()}
        return Object(self.attr_types, attrs)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.attr_types)))


@dataclass(frozen=True)
class Object(AttrValue):
    attr_types: Mapping[str, AttrType] = field(default_factory=dict)
    attrs: Mapping[str, AttrValue] = field(default_factory=dict)
    null: bool = False
    unknown: bool = False

    def type(self) -> AttrType:
        return ObjectType(self.attr_types)

    def to_raw(self) -> Any:
        if self.unknown:
            return raw.UNKNOWN
        if self.null:
            return None
        out: dict[str, raw.RawValue] = {}
        for name, typ in self.attr_types.items():
            val = self.attrs.get(name)
            out[name] = value_to_raw(val) if val is not None else raw.null(typ.raw_type())
        return out

    def equal(self, other: AttrValue) -> bool:
        if not isinstance(other, Object) or self.type() != other.type():
            return False
        if (self.null, self.unknown) != (other.null, other.unknown):
            return False
        return all(self._attr(name).equal(other._attr(name)) for name in self.attr_types)

    def _attr(self, name: str) -> AttrValue:
        """The value of ``name``, a null Value when the attribute is unset."""
        val = self.attrs.get(name)
        if val is None:
            typ = self.attr_types[name]
            return typ.value_from_raw(raw.null(typ.raw_type()))
        return val
