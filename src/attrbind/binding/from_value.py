"""Native Python structures → attribute values.

The mirror of :mod:`attrbind.binding.into`: every child is converted and
validated before its parent's raw value is assembled, and any child error
leaves the enclosing composite unmaterialized.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from attrbind import raw
from attrbind.attr import (
    AttrType,
    AttrValue,
    TypeWithAttributeTypes,
    TypeWithElementType,
    TypeWithValidate,
    value_to_raw,
)
from attrbind.binding.diags import (
    cancelled,
    conversion_error,
    hook_failure,
    incompatible_native,
    map_key_error,
    struct_mismatch,
    struct_tag_error,
    value_type_mismatch,
)
from attrbind.binding.helpers import is_dataclass_instance
from attrbind.binding.hooks import Nullable, Unknownable, ValueConverter
from attrbind.binding.options import Options
from attrbind.binding.tags import struct_metadata
from attrbind.diag import Diagnostics
from attrbind.errors import ConversionError, RawValueError, StructTagError
from attrbind.path import Path

logger = logging.getLogger("attrbind.binding")


def from_native(
    typ: AttrType, native: Any, options: Options | None = None
) -> tuple[AttrValue | None, Diagnostics]:
    """Convert a native Python value into an attribute value of ``typ``."""
    opts = options or Options()
    logger.debug("Converting %s into %s", type(native).__qualname__, typ.raw_type())
    result, diags = from_value(typ, native, opts, Path())
    if opts.cancelled and not any(d.code == "CANCELLED" for d in diags):
        diags.append(cancelled())
    return result, diags


def from_value(typ: AttrType, val: Any, opts: Options, path: Path) -> tuple[AttrValue | None, Diagnostics]:
    """Dispatch on the runtime type of ``val``."""
    diags = Diagnostics()
    if opts.cancelled:
        diags.append(cancelled())
        return None, diags

    if isinstance(val, AttrValue):
        return from_attribute_value(typ, val, path)
    if isinstance(val, ValueConverter):
        return from_value_converter(typ, val, path)
    if isinstance(val, (Unknownable, Nullable)):
        return from_hook(typ, val, path)
    if val is None:
        return _materialize(typ, None, path)
    if is_dataclass_instance(val):
        return from_struct(typ, val, opts, path)
    if isinstance(val, Mapping):
        return from_map(typ, val, opts, path)
    if isinstance(val, (list, tuple)):
        return from_list(typ, val, opts, path)
    if isinstance(val, bool):
        return from_primitive(typ, val, raw.Bool, path)
    if isinstance(val, (int, float, Decimal)):
        return from_primitive(typ, val, raw.Number, path)
    if isinstance(val, str):
        return from_primitive(typ, val, raw.String, path)

    diags.append(
        incompatible_native(val, typ, path, f"don't know how to convert {type(val).__qualname__}")
    )
    return None, diags


def _materialize(typ: AttrType, payload: Any, path: Path) -> tuple[AttrValue | None, Diagnostics]:
    """Check ``payload`` against ``typ``, run its validation and build the Value."""
    diags = Diagnostics()
    try:
        value = raw.new_value(typ.raw_type(), payload)
    except RawValueError as exc:
        diags.append(conversion_error("validate the raw value type", exc, path))
        return None, diags

    if isinstance(typ, TypeWithValidate):
        diags.extend(typ.validate(value, path))
        if diags.has_error():
            return None, diags

    try:
        return typ.value_from_raw(value), diags
    except ConversionError as exc:
        diags.append(conversion_error("convert the raw value into an attribute value", exc, path))
        return None, diags


def _render(val: AttrValue, path: Path, diags: Diagnostics) -> raw.RawValue | None:
    try:
        return value_to_raw(val)
    except ConversionError as exc:
        diags.append(conversion_error("convert the attribute value into a raw value", exc, path))
        return None


# ---------------------------------------------------------------------------
# Attribute values and capability hooks
# ---------------------------------------------------------------------------


def from_attribute_value(typ: AttrType, val: AttrValue, path: Path) -> tuple[AttrValue | None, Diagnostics]:
    """Pass an attribute value through after checking it against ``typ``."""
    diags = Diagnostics()
    if val.type().raw_type() != typ.raw_type():
        diags.append(value_type_mismatch(val, typ, path))
        return None, diags

    if isinstance(typ, TypeWithValidate):
        rendered = _render(val, path, diags)
        if rendered is None:
            return None, diags
        diags.extend(typ.validate(rendered, path))
        if diags.has_error():
            return None, diags
    return val, diags


def from_value_converter(
    typ: AttrType, val: ValueConverter, path: Path
) -> tuple[AttrValue | None, Diagnostics]:
    diags = Diagnostics()
    try:
        value = val.to_raw_value()
    except Exception as exc:
        diags.append(hook_failure(type(val), "to_raw_value", exc, path))
        return None, diags

    if value.type != typ.raw_type():
        diags.append(
            conversion_error(
                "validate the raw value type",
                f"{type(val).__qualname__} produced a {value.type} value, expected {typ.raw_type()}",
                path,
            )
        )
        return None, diags
    result, value_diags = _materialize(typ, value.value, path)
    diags.extend(value_diags)
    return result, diags


def from_hook(typ: AttrType, val: Nullable | Unknownable, path: Path) -> tuple[AttrValue | None, Diagnostics]:
    """Read the unknown flag, then the null flag, then the value of a hook type."""
    diags = Diagnostics()
    try:
        if isinstance(val, Unknownable) and val.get_unknown():
            payload: Any = raw.UNKNOWN
        elif isinstance(val, Nullable) and val.get_null():
            payload = None
        else:
            payload = val.get_value()
    except Exception as exc:
        diags.append(hook_failure(type(val), "get_value", exc, path))
        return None, diags

    result, value_diags = _materialize(typ, payload, path)
    diags.extend(value_diags)
    return result, diags


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


def from_struct(typ: AttrType, val: Any, opts: Options, path: Path) -> tuple[AttrValue | None, Diagnostics]:
    """Build an object value from a dataclass instance."""
    diags = Diagnostics()
    try:
        meta = struct_metadata(type(val))
    except StructTagError as exc:
        tag_path = path.attribute(exc.attribute) if exc.attribute else path
        diags.append(struct_tag_error(exc, tag_path))
        return None, diags

    if not isinstance(typ, TypeWithAttributeTypes):
        diags.append(
            incompatible_native(
                val,
                typ,
                path,
                f"can't build an object using type information provided by "
                f"{type(typ).__qualname__}, it must expose attribute types",
            )
        )
        return None, diags

    attr_types = typ.attribute_types()
    struct_missing = [tag for tag in meta.fields if tag not in attr_types]
    object_missing = []
    if not opts.ignore_unmatched_attributes:
        object_missing = [name for name in attr_types if name not in meta.fields]
    if struct_missing or object_missing:
        diags.append(struct_mismatch(type(val), struct_missing, object_missing, path))
        return None, diags

    fields: dict[str, raw.RawValue] = {}
    failed = False
    for tag, slot in meta.fields.items():
        field_path = path.attribute(tag)
        child, child_diags = from_value(attr_types[tag], getattr(val, slot.name), opts, field_path)
        diags.extend(child_diags)
        rendered = None
        if child is not None and not child_diags.has_error():
            rendered = _render(child, field_path, diags)
        if rendered is not None and not _validate_child(typ, rendered, field_path, diags):
            rendered = None
        if rendered is None:
            failed = True
        else:
            fields[tag] = rendered
        if opts.cancelled:
            break
    if failed or opts.cancelled:
        return None, diags

    for name, attr_type in attr_types.items():
        if name not in fields:
            fields[name] = raw.null(attr_type.raw_type())

    result, value_diags = _materialize(typ, fields, path)
    diags.extend(value_diags)
    return result, diags


def _validate_child(typ: AttrType, rendered: raw.RawValue, path: Path, diags: Diagnostics) -> bool:
    """Run the enclosing Type's validation on one child at the child's path."""
    if not isinstance(typ, TypeWithValidate):
        return True
    child_diags = typ.validate(rendered, path)
    diags.extend(child_diags)
    return not child_diags.has_error()


def _element_type(typ: AttrType, val: Any, path: Path, what: str, diags: Diagnostics) -> AttrType | None:
    if isinstance(typ, TypeWithElementType):
        return typ.element_type()
    diags.append(
        incompatible_native(
            val,
            typ,
            path,
            f"can't build a {what} using type information provided by "
            f"{type(typ).__qualname__}, it must expose an element type",
        )
    )
    return None


def from_list(
    typ: AttrType, val: list[Any] | tuple[Any, ...], opts: Options, path: Path
) -> tuple[AttrValue | None, Diagnostics]:
    """Build a list value, converting each element in order."""
    diags = Diagnostics()
    elem_type = _element_type(typ, val, path, "list", diags)
    if elem_type is None:
        return None, diags

    elems: list[raw.RawValue] = []
    failed = False
    for i, elem in enumerate(val):
        elem_path = path.index(i)
        child, child_diags = from_value(elem_type, elem, opts, elem_path)
        diags.extend(child_diags)
        rendered = None
        if child is not None and not child_diags.has_error():
            rendered = _render(child, elem_path, diags)
        if rendered is not None and not _validate_child(typ, rendered, elem_path, diags):
            rendered = None
        if rendered is None:
            failed = True
        else:
            elems.append(rendered)
        if opts.cancelled:
            break
    if failed or opts.cancelled:
        return None, diags

    result, value_diags = _materialize(typ, elems, path)
    diags.extend(value_diags)
    return result, diags


def from_map(
    typ: AttrType, val: Mapping[Any, Any], opts: Options, path: Path
) -> tuple[AttrValue | None, Diagnostics]:
    """Build a map value; a single non-string key fails the whole map."""
    diags = Diagnostics()
    for key in val:
        if not isinstance(key, str):
            diags.append(map_key_error(key, path))
            return None, diags

    elem_type = _element_type(typ, val, path, "map", diags)
    if elem_type is None:
        return None, diags

    elems: dict[str, raw.RawValue] = {}
    failed = False
    for key, elem in val.items():
        elem_path = path.key(key)
        child, child_diags = from_value(elem_type, elem, opts, elem_path)
        diags.extend(child_diags)
        rendered = None
        if child is not None and not child_diags.has_error():
            rendered = _render(child, elem_path, diags)
        if rendered is not None and not _validate_child(typ, rendered, elem_path, diags):
            rendered = None
        if rendered is None:
            failed = True
        else:
            elems[key] = rendered
        if opts.cancelled:
            break
    if failed or opts.cancelled:
        return None, diags

    result, value_diags = _materialize(typ, elems, path)
    diags.extend(value_diags)
    return result, diags


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def from_primitive(
    typ: AttrType, val: Any, native_type: raw.RawType, path: Path
) -> tuple[AttrValue | None, Diagnostics]:
    diags = Diagnostics()
    if typ.raw_type() != native_type:
        diags.append(
            incompatible_native(val, typ, path, f"can't use a {type(val).__qualname__} as a {typ.raw_type()}")
        )
        return None, diags
    return _materialize(typ, val, path)
