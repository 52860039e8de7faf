"""Attribute value abstraction: Types describe shapes, Values are their instances.

A Type may additionally implement any of the capability interfaces below;
the binding engine queries them with ``isinstance`` instead of probing for
methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from attrbind import raw
from attrbind.diag import Diagnostics
from attrbind.errors import ConversionError, RawValueError
from attrbind.path import Path


class AttrType(ABC):
    """Describes the shape of a value and builds Values of that shape."""

    @abstractmethod
    def raw_type(self) -> raw.RawType:
        """The transport-neutral type every raw value of this Type must have."""

    @abstractmethod
    def value_from_raw(self, value: raw.RawValue) -> AttrValue:
        """Build a Value from a raw value, raising ConversionError on a shape mismatch."""

    def equal(self, other: AttrType) -> bool:
        return self == other


class TypeWithValidate(ABC):
    """A Type with semantic validation run before a Value is materialized."""

    @abstractmethod
    def validate(self, value: raw.RawValue, path: Path) -> Diagnostics: ...


class TypeWithElementType(ABC):
    """A homogeneous collection Type."""

    @abstractmethod
    def element_type(self) -> AttrType: ...


class TypeWithAttributeTypes(ABC):
    """An object Type exposing the Type of each attribute."""

    @abstractmethod
    def attribute_types(self) -> Mapping[str, AttrType]: ...


class AttrValue(ABC):
    """An immutable instance of exactly one AttrType."""

    @abstractmethod
    def type(self) -> AttrType: ...

    @abstractmethod
    def to_raw(self) -> Any:
        """Return a payload that :func:`raw.new_value` accepts for ``type().raw_type()``."""

    @abstractmethod
    def equal(self, other: AttrValue) -> bool:
        """Semantic equality; Values of different Types are never equal."""


def value_to_raw(val: AttrValue) -> raw.RawValue:
    """Render a Value as a raw value, re-validating it against its own Type."""
    payload = val.to_raw()
    try:
        return raw.new_value(val.type().raw_type(), payload)
    except RawValueError as exc:
        raise ConversionError(
            f"{type(val).__name__} produced an invalid raw value: {exc}"
        ) from exc
