"""Raw transport values: the null/unknown/concrete tree exchanged at the boundary.

Raw types are frozen descriptors compared structurally. A :class:`RawValue`
pairs a raw type with a payload and exposes an explicit :class:`RawKind`, so
consumers dispatch on the tag instead of inspecting Python types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from typing import Any

from attrbind.errors import RawValueError
from attrbind.path import Path


class RawKind(StrEnum):
    NULL = "null"
    UNKNOWN = "unknown"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    LIST = "list"
    MAP = "map"
    OBJECT = "object"


class _Unknown:
    """Sentinel payload for a value that is not yet known."""

    _instance: _Unknown | None = None

    def __new__(cls) -> _Unknown:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNKNOWN"

    def __reduce__(self) -> str:
        return "UNKNOWN"


UNKNOWN = _Unknown()


@dataclass(frozen=True)
class Primitive:
    """A scalar raw type."""

    name: str

    @property
    def kind(self) -> RawKind:
        return RawKind(self.name)

    def __str__(self) -> str:
        return self.name


String = Primitive("string")
Number = Primitive("number")
Bool = Primitive("bool")


@dataclass(frozen=True)
class List:
    """An ordered collection of elements sharing one raw type."""

    element_type: RawType

    kind = RawKind.LIST

    def __str__(self) -> str:
        return f"list[{self.element_type}]"


@dataclass(frozen=True)
class Map:
    """A collection keyed by strings, all values sharing one raw type."""

    element_type: RawType

    kind = RawKind.MAP

    def __str__(self) -> str:
        return f"map[{self.element_type}]"


@dataclass(frozen=True)
class Object:
    """A fixed set of named attributes, each with its own raw type."""

    attribute_types: Mapping[str, RawType] = field(default_factory=dict)

    kind = RawKind.OBJECT

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.attribute_types.items(), key=lambda kv: kv[0])))

    def __str__(self) -> str:
        attrs = ", ".join(f"{k}: {v}" for k, v in sorted(self.attribute_types.items()))
        return f"object{{{attrs}}}"


RawType = Primitive | List | Map | Object


@dataclass(frozen=True)
class RawValue:
    """A payload tagged with its raw type.

    Build instances with :func:`new_value` to get the payload checked.
    """

    type: RawType
    value: Any = None

    @property
    def kind(self) -> RawKind:
        if self.value is None:
            return RawKind.NULL
        if self.value is UNKNOWN:
            return RawKind.UNKNOWN
        return self.type.kind

    def is_null(self) -> bool:
        return self.value is None

    def is_known(self) -> bool:
        return self.value is not UNKNOWN

    def is_fully_known(self) -> bool:
        """Whether neither this value nor any nested element is unknown."""
        if self.value is UNKNOWN:
            return False
        if isinstance(self.value, list):
            return all(v.is_fully_known() for v in self.value)
        if isinstance(self.value, dict):
            return all(v.is_fully_known() for v in self.value.values())
        return True

    def __str__(self) -> str:
        return f"{self.type}({self.value!r})"


def new_value(typ: RawType, value: Any) -> RawValue:
    """Create a :class:`RawValue`, raising :class:`RawValueError` on a bad payload."""
    validate_value(typ, value)
    return RawValue(typ, value)


def null(typ: RawType) -> RawValue:
    return RawValue(typ, None)


def unknown(typ: RawType) -> RawValue:
    return RawValue(typ, UNKNOWN)


def validate_value(typ: RawType, value: Any, path: Path | None = None) -> None:
    """Check that ``value`` is an acceptable payload for ``typ``."""
    path = path or Path()
    if value is None or value is UNKNOWN:
        return

    if isinstance(typ, Primitive):
        _validate_primitive(typ, value, path)
    elif isinstance(typ, List):
        if not isinstance(value, list):
            raise RawValueError(f"can't use {type(value).__name__} as a {typ}", path)
        for i, elem in enumerate(value):
            _validate_element(typ.element_type, elem, path.index(i))
    elif isinstance(typ, Map):
        if not isinstance(value, dict):
            raise RawValueError(f"can't use {type(value).__name__} as a {typ}", path)
        for k, elem in value.items():
            if not isinstance(k, str):
                raise RawValueError(f"map keys must be strings, got {type(k).__name__}", path)
            _validate_element(typ.element_type, elem, path.key(k))
    elif isinstance(typ, Object):
        if not isinstance(value, dict):
            raise RawValueError(f"can't use {type(value).__name__} as an {typ}", path)
        missing = sorted(set(typ.attribute_types) - set(value))
        if missing:
            raise RawValueError(f"missing attributes: {', '.join(missing)}", path)
        for name, elem in value.items():
            attr_type = typ.attribute_types.get(name)
            if attr_type is None:
                raise RawValueError(
                    f"can't set a value on {name!r} in an object without that attribute",
                    path,
                )
            _validate_element(attr_type, elem, path.attribute(name))
    else:
        raise RawValueError(f"unsupported raw type {typ!r}", path)


def _validate_primitive(typ: Primitive, value: Any, path: Path) -> None:
    if typ == String:
        ok = isinstance(value, str)
    elif typ == Bool:
        ok = isinstance(value, bool)
    elif typ == Number:
        ok = isinstance(value, int | float | Decimal) and not isinstance(value, bool)
    else:
        raise RawValueError(f"unsupported primitive {typ}", path)
    if not ok:
        raise RawValueError(f"can't use {type(value).__name__} as a {typ}", path)


def _validate_element(typ: RawType, elem: Any, path: Path) -> None:
    if not isinstance(elem, RawValue):
        raise RawValueError(
            f"elements must be RawValue instances, got {type(elem).__name__}", path
        )
    if elem.type != typ:
        raise RawValueError(f"can't use a {elem.type} value where {typ} is expected", path)
    validate_value(typ, elem.value, path)
