"""Diagnostic constructors for the binding engine."""

from __future__ import annotations

from typing import Any

from attrbind.attr import AttrType, AttrValue
from attrbind.diag import Diagnostic, error
from attrbind.path import Path
from attrbind.raw import RawValue

SUMMARY = "Value Conversion Error"

_DEFECT = (
    "This is always a programming error in the code calling attrbind, not a problem "
    "with the data. Please report the following to the developer:\n\n"
)


def type_name(target: Any) -> str:
    if isinstance(target, type):
        return target.__qualname__
    return repr(target)


def conversion_error(action: str, err: BaseException | str, path: Path | None) -> Diagnostic:
    return error(
        SUMMARY,
        f"An unexpected error was encountered trying to {action}. {_DEFECT}{err}",
        path,
        code="VALUE_CONVERSION",
    )


def incompatible_type(val: RawValue, target: Any, path: Path, err: str) -> Diagnostic:
    return error(
        SUMMARY,
        f"An unexpected error was encountered trying to convert {val.type} into "
        f"{type_name(target)}. {_DEFECT}{err}",
        path,
        code="INCOMPATIBLE_TYPE",
    )


def incompatible_native(val: Any, typ: AttrType, path: Path, err: str) -> Diagnostic:
    return error(
        SUMMARY,
        f"An unexpected error was encountered trying to convert {type(val).__qualname__} into "
        f"{typ.raw_type()}. {_DEFECT}{err}",
        path,
        code="INCOMPATIBLE_TYPE",
    )


def wrong_value_type(val_type: type, target: Any, schema_type: AttrType, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        "An unexpected error was encountered trying to convert into an attribute value. "
        f"{_DEFECT}Cannot use {type_name(target)}, only {val_type.__qualname__} is supported "
        f"because {type(schema_type).__qualname__} is the type in the schema",
        path,
        code="WRONG_VALUE_TYPE",
    )


def value_type_mismatch(val: AttrValue, schema_type: AttrType, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        "An unexpected error was encountered trying to convert from an attribute value. "
        f"{_DEFECT}Cannot use {type(val).__qualname__} of type {val.type().raw_type()} where "
        f"{type(schema_type).__qualname__} expects {schema_type.raw_type()}",
        path,
        code="WRONG_VALUE_TYPE",
    )


def struct_tag_error(err: BaseException, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        f"An unexpected error was encountered trying to read the attribute tags of a "
        f"dataclass. {_DEFECT}{err}",
        path,
        code="STRUCT_TAG",
    )


def struct_mismatch(
    target: type, struct_missing: list[str], object_missing: list[str], path: Path
) -> Diagnostic:
    parts = []
    if struct_missing:
        parts.append(
            f"Dataclass defines fields not found in object: {comma_separated(struct_missing)}."
        )
    if object_missing:
        parts.append(
            f"Object defines fields not found in dataclass: {comma_separated(object_missing)}."
        )
    return error(
        SUMMARY,
        f"An unexpected error was encountered trying to convert into {type_name(target)}. "
        f"{_DEFECT}mismatch between dataclass and object: {' '.join(parts)}",
        path,
        code="STRUCT_MISMATCH",
    )


def map_key_error(key: Any, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        "An unexpected error was encountered trying to convert a map. "
        f"{_DEFECT}map keys must be strings, got {type(key).__qualname__}",
        path,
        code="MAP_KEY",
    )


def hook_failure(target: Any, method: str, err: BaseException, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        f"An unexpected error was encountered calling {type_name(target)}.{method}. "
        f"{_DEFECT}{type(err).__name__}: {err}",
        path,
        code="HOOK_FAILURE",
    )


def unhandled(kind: str, target: Any, path: Path) -> Diagnostic:
    return error(
        SUMMARY,
        f"Received {kind} value, however the target type cannot handle {kind} values. "
        f"Use a type implementing {'Nullable' if kind == 'null' else 'Unknownable'}, "
        f"an attribute value type or an optional type. {_DEFECT}"
        f"unhandled {kind} value for {type_name(target)}",
        path,
        code=f"UNHANDLED_{kind.upper()}",
    )


def cancelled() -> Diagnostic:
    return error(
        "Conversion Cancelled",
        "The conversion was cancelled before it completed; the result is incomplete.",
        code="CANCELLED",
    )


def comma_separated(items: list[str]) -> str:
    """English joining of ``items`` using commas and "and"."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return " and ".join(items)
    return ", ".join(items[:-1]) + ", and " + items[-1]
