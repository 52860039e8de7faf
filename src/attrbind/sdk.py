"""Schema-described configuration and state, read into and written from dataclasses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from attrbind import raw
from attrbind.attr import AttrType, TypeWithAttributeTypes, TypeWithElementType, value_to_raw
from attrbind.binding import Options, build_value, from_native, into
from attrbind.binding.diags import conversion_error
from attrbind.diag import Diagnostics
from attrbind.errors import ConversionError
from attrbind.path import AttributeName, ElementKeyInt, ElementKeyString, Path
from attrbind.types import ObjectType


@dataclass(frozen=True)
class Attribute:
    """A schema attribute. Only ``type`` is used by conversion."""

    type: AttrType
    required: bool = False
    optional: bool = False
    computed: bool = False
    description: str = ""


@dataclass(frozen=True)
class Schema:
    """The attributes of a resource, data source or provider configuration."""

    attributes: Mapping[str, Attribute] = field(default_factory=dict)

    def type(self) -> ObjectType:
        return ObjectType({name: a.type for name, a in self.attributes.items()})

    def attribute_type_at_path(self, path: Path) -> AttrType:
        """Return the Type found by following ``path`` from the schema root."""
        typ: AttrType = self.type()
        for i, step in enumerate(path.steps):
            walked = Path(path.steps[:i])
            if isinstance(step, AttributeName):
                if not isinstance(typ, TypeWithAttributeTypes):
                    raise ConversionError(f"can't use an attribute name on {type(typ).__qualname__}", walked)
                attr_type = typ.attribute_types().get(step.name)
                if attr_type is None:
                    raise ConversionError(f"no attribute {step.name!r} in schema", walked)
                typ = attr_type
            else:
                if not isinstance(typ, TypeWithElementType):
                    raise ConversionError(f"can't use an element key on {type(typ).__qualname__}", walked)
                typ = typ.element_type()
        return typ


def value_at_path(value: raw.RawValue, path: Path) -> raw.RawValue:
    """Follow ``path`` through a raw value, raising ConversionError when it can't."""
    current = value
    for i, step in enumerate(path.steps):
        walked = Path(path.steps[:i])
        if not current.is_known() or current.is_null():
            raise ConversionError(f"can't walk into a {current.kind} value", walked)
        payload = current.value
        if isinstance(step, AttributeName) and isinstance(current.type, raw.Object):
            if step.name not in payload:
                raise ConversionError(f"no attribute {step.name!r}", walked)
            current = payload[step.name]
        elif isinstance(step, ElementKeyInt) and isinstance(current.type, raw.List):
            if not 0 <= step.index < len(payload):
                raise ConversionError(f"index {step.index} out of range", walked)
            current = payload[step.index]
        elif isinstance(step, ElementKeyString) and isinstance(current.type, raw.Map):
            if step.key not in payload:
                raise ConversionError(f"no element {step.key!r}", walked)
            current = payload[step.key]
        else:
            raise ConversionError(f"can't use {type(step).__name__} on a {current.type} value", walked)
    return current


@dataclass
class Config:
    """A configuration value and the schema describing it."""

    raw: raw.RawValue
    schema: Schema
    options: Options | None = None

    def get(self, target: Any) -> tuple[Any, Diagnostics]:
        """Convert the whole value into ``target``, usually a dataclass."""
        return into(self.schema.type(), self.raw, target, self.options)

    def get_attribute(self, path: Path, target: Any) -> tuple[Any, Diagnostics]:
        """Convert the attribute found at ``path`` into ``target``."""
        diags = Diagnostics()
        try:
            typ = self.schema.attribute_type_at_path(path)
            value = value_at_path(self.raw, path)
        except ConversionError as exc:
            diags.append(conversion_error("read an attribute", exc, path))
            return None, diags

        result, value_diags = build_value(typ, value, target, self.options or Options(), path)
        diags.extend(value_diags)
        return result, diags


@dataclass
class State(Config):
    """Stored state: readable like a Config, and replaceable from a dataclass."""

    def set(self, native: Any) -> Diagnostics:
        """Replace the raw value with the conversion of ``native``.

        The current value is left untouched when the conversion fails.
        """
        value, diags = from_native(self.schema.type(), native, self.options)
        if diags.has_error() or value is None:
            return diags
        try:
            self.raw = value_to_raw(value)
        except ConversionError as exc:
            diags.append(conversion_error("convert the state into a raw value", exc, Path()))
        return diags
