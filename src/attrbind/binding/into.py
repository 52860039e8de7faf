"""Raw value → native Python structures.

:func:`build_value` walks a raw value tree in lock-step with a target
annotation. Composites recurse with an extended path; an error stops the
walk of its own subtree only, so siblings are still converted and reported.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import typing
from collections.abc import Callable
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
    incompatible_type,
    struct_mismatch,
    struct_tag_error,
    type_name,
    unhandled,
    wrong_value_type,
)
from attrbind.binding.helpers import (
    PRIMITIVES,
    collection_origin,
    is_dataclass_type,
    is_subclass,
    optional_inner,
    zero_value,
)
from attrbind.binding.hooks import Nullable, Unknownable, ValueConverter
from attrbind.binding.options import Options
from attrbind.binding.tags import struct_metadata
from attrbind.diag import Diagnostics
from attrbind.errors import ConversionError, StructTagError
from attrbind.path import Path

logger = logging.getLogger("attrbind.binding")


def into(
    typ: AttrType,
    value: raw.RawValue | AttrValue,
    target: Any,
    options: Options | None = None,
) -> tuple[Any, Diagnostics]:
    """Convert ``value`` (described by ``typ``) into an instance of ``target``.

    Returns the converted value and the diagnostics of the pass. When the
    diagnostics contain an error the result may be partial or ``None``.
    """
    opts = options or Options()
    diags = Diagnostics()
    if isinstance(value, AttrValue):
        try:
            value = value_to_raw(value)
        except ConversionError as exc:
            diags.append(conversion_error("convert the attribute value into a raw value", exc, Path()))
            return None, diags

    logger.debug("Converting %s into %s", value.type, type_name(target))
    result, walk_diags = build_value(typ, value, target, opts, Path())
    diags.extend(walk_diags)
    if opts.cancelled and not any(d.code == "CANCELLED" for d in diags):
        diags.append(cancelled())
    return result, diags


def build_value(
    typ: AttrType, val: raw.RawValue, target: Any, opts: Options, path: Path
) -> tuple[Any, Diagnostics]:
    """Dispatch on the shape of ``target`` and convert ``val`` into it."""
    diags = Diagnostics()
    if opts.cancelled:
        diags.append(cancelled())
        return None, diags

    if is_subclass(target, AttrValue):
        return new_attribute_value(typ, val, target, path)

    if is_subclass(target, ValueConverter):
        return new_value_converter(val, target, path)

    inner = optional_inner(target)
    if inner is not None:
        if val.is_null():
            return None, diags
        return build_value(typ, val, inner, opts, path)

    if not val.is_known():
        if is_subclass(target, Unknownable):
            return new_unknownable(target, path)
        if opts.unhandled_unknown_as_empty:
            return zero_value(target), diags
        diags.append(unhandled("unknown", target, path))
        return None, diags

    if val.is_null():
        if is_subclass(target, Nullable):
            return new_nullable(target, path)
        # collections have no null of their own, an empty one stands in
        if collection_origin(target) is not None or opts.unhandled_null_as_empty:
            return zero_value(target), diags
        diags.append(unhandled("null", target, path))
        return None, diags

    if is_subclass(target, (Nullable, Unknownable)):
        return new_hook_value(val, target, path)

    if is_dataclass_type(target):
        return build_struct(typ, val, target, opts, path)

    origin = collection_origin(target)
    if origin is list or origin is tuple:
        return build_list(typ, val, target, opts, path)
    if origin is dict:
        return build_map(typ, val, target, opts, path)

    if target in PRIMITIVES:
        return build_primitive(val, target, path)

    diags.append(
        incompatible_type(val, target, path, f"don't know how to convert into {type_name(target)}")
    )
    return None, diags


# ---------------------------------------------------------------------------
# Attribute values and capability hooks
# ---------------------------------------------------------------------------


def new_attribute_value(
    typ: AttrType, val: raw.RawValue, target: type, path: Path
) -> tuple[AttrValue | None, Diagnostics]:
    """Materialize ``val`` with ``typ`` and check it is a ``target``."""
    diags = Diagnostics()
    if isinstance(typ, TypeWithValidate):
        diags.extend(typ.validate(val, path))
        if diags.has_error():
            return None, diags

    try:
        res = typ.value_from_raw(val)
    except ConversionError as exc:
        diags.append(conversion_error("convert the raw value into an attribute value", exc, path))
        return None, diags

    # an abstract target accepts any of its implementations
    matches = isinstance(res, target) if _is_abstract(target) else type(res) is target
    if not matches:
        diags.append(wrong_value_type(type(res), target, typ, path))
        return None, diags
    return res, diags


def _is_abstract(cls: type) -> bool:
    return bool(getattr(cls, "__abstractmethods__", None))


def _call_hook(target: Any, method: str, call: Callable[[], Any], path: Path, diags: Diagnostics) -> bool:
    try:
        call()
    except Exception as exc:
        diags.append(hook_failure(target, method, exc, path))
        return False
    return True


def _instantiate(target: type, path: Path, diags: Diagnostics) -> Any:
    try:
        return target()
    except Exception as exc:
        diags.append(hook_failure(target, "__init__", exc, path))
        return None


def new_value_converter(val: raw.RawValue, target: type, path: Path) -> tuple[Any, Diagnostics]:
    diags = Diagnostics()
    receiver = _instantiate(target, path, diags)
    if receiver is None:
        return None, diags
    if not _call_hook(target, "from_raw_value", lambda: receiver.from_raw_value(val), path, diags):
        return None, diags
    return receiver, diags


def new_unknownable(target: type, path: Path) -> tuple[Any, Diagnostics]:
    diags = Diagnostics()
    receiver = _instantiate(target, path, diags)
    if receiver is None:
        return None, diags
    if not _call_hook(target, "set_unknown", lambda: receiver.set_unknown(True), path, diags):
        return None, diags
    return receiver, diags


def new_nullable(target: type, path: Path) -> tuple[Any, Diagnostics]:
    diags = Diagnostics()
    receiver = _instantiate(target, path, diags)
    if receiver is None:
        return None, diags
    if not _call_hook(target, "set_null", lambda: receiver.set_null(True), path, diags):
        return None, diags
    return receiver, diags


def new_hook_value(val: raw.RawValue, target: type, path: Path) -> tuple[Any, Diagnostics]:
    """Hand a known, non-null payload to a Nullable/Unknownable target."""
    diags = Diagnostics()
    receiver = _instantiate(target, path, diags)
    if receiver is None:
        return None, diags
    if isinstance(receiver, Unknownable) and not _call_hook(
        target, "set_unknown", lambda: receiver.set_unknown(False), path, diags
    ):
        return None, diags
    if isinstance(receiver, Nullable) and not _call_hook(
        target, "set_null", lambda: receiver.set_null(False), path, diags
    ):
        return None, diags
    if not _call_hook(target, "set_value", lambda: receiver.set_value(val.value), path, diags):
        return None, diags
    return receiver, diags


# ---------------------------------------------------------------------------
# Composites
# ---------------------------------------------------------------------------


def build_struct(
    typ: AttrType, val: raw.RawValue, target: type, opts: Options, path: Path
) -> tuple[Any, Diagnostics]:
    """Populate the dataclass ``target`` from an object value, field by field."""
    diags = Diagnostics()
    try:
        meta = struct_metadata(target)
    except StructTagError as exc:
        tag_path = path.attribute(exc.attribute) if exc.attribute else path
        diags.append(struct_tag_error(exc, tag_path))
        return None, diags

    if not isinstance(val.type, raw.Object):
        diags.append(
            incompatible_type(val, target, path, f"can't convert {val.type} into a dataclass, must be an object")
        )
        return None, diags
    if not isinstance(typ, TypeWithAttributeTypes):
        diags.append(
            incompatible_type(
                val,
                target,
                path,
                f"can't convert an object using type information provided by "
                f"{type(typ).__qualname__}, it must expose attribute types",
            )
        )
        return None, diags

    attr_types = typ.attribute_types()
    object_fields: dict[str, raw.RawValue] = val.value
    struct_missing = [tag for tag in meta.fields if tag not in object_fields]
    object_missing = []
    if not opts.ignore_unmatched_attributes:
        object_missing = [name for name in object_fields if name not in meta.fields]
    if struct_missing or object_missing:
        diags.append(struct_mismatch(target, struct_missing, object_missing, path))
        return None, diags

    kwargs: dict[str, Any] = {}
    for tag, slot in meta.fields.items():
        field_path = path.attribute(tag)
        attr_type = attr_types.get(tag)
        if attr_type is None:
            diags.append(
                incompatible_type(val, target, field_path, f"no type information for attribute {tag!r}")
            )
            kwargs[slot.name] = slot.default()
            continue

        result, field_diags = build_value(attr_type, object_fields[tag], slot.annotation, opts, field_path)
        diags.extend(field_diags)
        kwargs[slot.name] = slot.default() if field_diags.has_error() else result
        if opts.cancelled:
            break

    return _construct(target, kwargs, path, diags), diags


def _construct(target: type, kwargs: dict[str, Any], path: Path, diags: Diagnostics) -> Any:
    for f in dataclasses.fields(target):
        if not f.init or f.name in kwargs:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = None
    try:
        return target(**kwargs)
    except Exception as exc:
        diags.append(hook_failure(target, "__init__", exc, path))
        return None


def build_list(
    typ: AttrType, val: raw.RawValue, target: Any, opts: Options, path: Path
) -> tuple[Any, Diagnostics]:
    """Convert a list value into ``list[X]`` or ``tuple[X, ...]``, keeping order."""
    diags = Diagnostics()
    origin = collection_origin(target)
    args = typing.get_args(target)
    if origin is tuple:
        if len(args) != 2 or args[1] is not Ellipsis:
            diags.append(incompatible_type(val, target, path, "only tuple[X, ...] targets are supported"))
            return None, diags
    elif len(args) != 1:
        diags.append(incompatible_type(val, target, path, "list targets must declare an element type"))
        return None, diags
    elem_target = args[0]

    if not isinstance(val.type, raw.List):
        diags.append(incompatible_type(val, target, path, f"can't convert {val.type} into a list, must be a list"))
        return None, diags
    if not isinstance(typ, TypeWithElementType):
        diags.append(
            incompatible_type(
                val,
                target,
                path,
                f"can't convert a list using type information provided by "
                f"{type(typ).__qualname__}, it must expose an element type",
            )
        )
        return None, diags

    elem_type = typ.element_type()
    out: list[Any] = []
    for i, elem in enumerate(val.value):
        result, elem_diags = build_value(elem_type, elem, elem_target, opts, path.index(i))
        diags.extend(elem_diags)
        if not elem_diags.has_error():
            out.append(result)
        if opts.cancelled:
            break

    if origin is tuple:
        return tuple(out), diags
    return out, diags


def build_map(
    typ: AttrType, val: raw.RawValue, target: Any, opts: Options, path: Path
) -> tuple[Any, Diagnostics]:
    """Convert a map value into ``dict[str, X]``."""
    diags = Diagnostics()
    args = typing.get_args(target)
    if len(args) != 2:
        diags.append(incompatible_type(val, target, path, "dict targets must declare key and value types"))
        return None, diags
    key_target, elem_target = args
    if key_target is not str:
        diags.append(
            incompatible_type(val, target, path, f"dict targets must have str keys, got {type_name(key_target)}")
        )
        return None, diags

    if not isinstance(val.type, raw.Map):
        diags.append(incompatible_type(val, target, path, f"can't convert {val.type} into a dict, must be a map"))
        return None, diags
    if not isinstance(typ, TypeWithElementType):
        diags.append(
            incompatible_type(
                val,
                target,
                path,
                f"can't convert a map using type information provided by "
                f"{type(typ).__qualname__}, it must expose an element type",
            )
        )
        return None, diags

    elem_type = typ.element_type()
    out: dict[str, Any] = {}
    for key, elem in val.value.items():
        result, elem_diags = build_value(elem_type, elem, elem_target, opts, path.key(key))
        diags.extend(elem_diags)
        if not elem_diags.has_error():
            out[key] = result
        if opts.cancelled:
            break
    return out, diags


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def build_primitive(val: raw.RawValue, target: type, path: Path) -> tuple[Any, Diagnostics]:
    diags = Diagnostics()
    kind = val.kind
    if target is bool:
        expected = raw.RawKind.BOOL
    elif target is str:
        expected = raw.RawKind.STRING
    else:
        expected = raw.RawKind.NUMBER
    if kind != expected:
        diags.append(
            incompatible_type(val, target, path, f"can't convert a {kind} value into {target.__qualname__}")
        )
        return None, diags

    payload = val.value
    if target is int:
        if isinstance(payload, int):
            return payload, diags
        if not _is_finite(payload):
            diags.append(incompatible_type(val, target, path, f"can't store non-finite number {payload} in int"))
            return None, diags
        if payload == int(payload):
            return int(payload), diags
        diags.append(incompatible_type(val, target, path, f"can't store fractional number {payload} in int"))
        return None, diags
    if target is float:
        try:
            return float(payload), diags
        except OverflowError:
            diags.append(incompatible_type(val, target, path, "number is too large to store in float"))
            return None, diags
    if target is Decimal:
        return Decimal(str(payload)) if isinstance(payload, float) else Decimal(payload), diags
    return payload, diags


def _is_finite(payload: float | Decimal) -> bool:
    if isinstance(payload, Decimal):
        return payload.is_finite()
    return math.isfinite(payload)
