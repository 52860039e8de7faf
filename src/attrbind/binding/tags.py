"""Dataclass field-tag discovery, computed once per dataclass and cached."""

from __future__ import annotations

import dataclasses
import logging
import re
import threading
import typing
from dataclasses import dataclass
from typing import Any

from attrbind.errors import StructTagError

logger = logging.getLogger("attrbind.binding")

TAG_KEY = "attr"
EXCLUDE = "-"

_FIELD_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")

_cache: dict[type, StructMetadata | StructTagError] = {}
_cache_lock = threading.Lock()


def attr_field(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field bound to the attribute named ``tag``.

    Use ``attr_field("-")`` to exclude a field from binding.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def is_valid_field_name(name: str) -> bool:
    return _FIELD_NAME_RE.match(name) is not None


@dataclass(frozen=True)
class FieldSlot:
    """A bindable dataclass field."""

    name: str
    tag: str
    annotation: Any
    field: dataclasses.Field[Any]

    def default(self) -> Any:
        if self.field.default is not dataclasses.MISSING:
            return self.field.default
        if self.field.default_factory is not dataclasses.MISSING:
            return self.field.default_factory()
        return None


@dataclass(frozen=True)
class StructMetadata:
    """Attribute tag to field mapping of one dataclass."""

    struct: type
    fields: dict[str, FieldSlot]

    @property
    def tags(self) -> list[str]:
        return list(self.fields)


def struct_metadata(cls: type) -> StructMetadata:
    """Return the cached tag metadata for ``cls``.

    Raises :class:`StructTagError` if the dataclass declares a missing,
    malformed or duplicate tag. Errors are cached as well, so a broken class
    is only inspected once.
    """
    entry = _cache.get(cls)
    if entry is None:
        with _cache_lock:
            entry = _cache.get(cls)
            if entry is None:
                try:
                    entry = _build_metadata(cls)
                    logger.debug("Built attribute metadata for %s: %s", cls.__qualname__, entry.tags)
                except StructTagError as exc:
                    logger.warning("Invalid attribute tags on %s: %s", cls.__qualname__, exc)
                    entry = exc
                _cache[cls] = entry
    if isinstance(entry, StructTagError):
        raise entry
    return entry


def clear_cache() -> None:
    """Drop all cached metadata (for testing)."""
    with _cache_lock:
        _cache.clear()


def _build_metadata(cls: type) -> StructMetadata:
    if not dataclasses.is_dataclass(cls):
        raise StructTagError(f"can't get attribute tags of {cls.__qualname__}, is not a dataclass", cls)
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise StructTagError(f"can't resolve field types of {cls.__qualname__}: {exc}", cls) from exc
    fields: dict[str, FieldSlot] = {}
    for f in dataclasses.fields(cls):
        if f.name.startswith("_") or not f.init:
            continue
        tag = f.metadata.get(TAG_KEY)
        if tag == EXCLUDE:
            continue
        if not tag:
            raise StructTagError(
                f'need an "{TAG_KEY}" tag on field {f.name} of {cls.__qualname__}', cls
            )
        if not is_valid_field_name(tag):
            raise StructTagError(
                f"invalid field name {tag!r}, must only use lowercase letters, underscores, "
                "and numbers, and must start with a letter",
                cls,
                attribute=tag,
            )
        other = fields.get(tag)
        if other is not None:
            raise StructTagError(
                f"can't use field name {tag!r} for both {other.name} and {f.name}",
                cls,
                attribute=tag,
            )
        fields[tag] = FieldSlot(name=f.name, tag=tag, annotation=hints.get(f.name, Any), field=f)
    return StructMetadata(struct=cls, fields=fields)
