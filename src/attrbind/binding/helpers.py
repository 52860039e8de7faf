"""Introspection helpers for target type annotations."""

from __future__ import annotations

import dataclasses
import types
import typing
from decimal import Decimal
from typing import Any

PRIMITIVES: tuple[type, ...] = (str, int, float, bool, Decimal)


def is_subclass(target: Any, cls: type | tuple[type, ...]) -> bool:
    """``issubclass`` that tolerates generic aliases and other annotations."""
    return isinstance(target, type) and typing.get_origin(target) is None and issubclass(target, cls)


def is_dataclass_type(target: Any) -> bool:
    return isinstance(target, type) and dataclasses.is_dataclass(target)


def is_dataclass_instance(val: Any) -> bool:
    return dataclasses.is_dataclass(val) and not isinstance(val, type)


def optional_inner(target: Any) -> Any | None:
    """Return ``X`` for an ``X | None`` annotation, ``None`` for anything else."""
    origin = typing.get_origin(target)
    if origin is not typing.Union and origin is not types.UnionType:
        return None
    args = typing.get_args(target)
    if type(None) not in args:
        return None
    rest = tuple(a for a in args if a is not type(None))
    if len(rest) == 1:
        return rest[0]
    return typing.Union[rest]


def collection_origin(target: Any) -> type | None:
    origin = typing.get_origin(target) or target
    if origin in (list, tuple, dict):
        return origin
    return None


def zero_value(target: Any) -> Any:
    """The empty value of a target annotation, ``None`` where there is none."""
    origin = collection_origin(target)
    if origin is not None:
        return origin()
    if target is Decimal:
        return Decimal(0)
    if target in PRIMITIVES:
        return target()
    return None
