"""Exceptions raised by conversion primitives.

The binding engine catches these and reports them as diagnostics; they only
escape when primitives such as :func:`attrbind.raw.new_value` are called
directly.
"""

from __future__ import annotations

from attrbind.path import Path


class ConversionError(Exception):
    """A value could not be converted, optionally located by a path."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        if path:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


class RawValueError(ConversionError):
    """A raw payload does not match its declared raw type."""


class StructTagError(ConversionError):
    """A dataclass declares missing, malformed or duplicate attribute tags."""

    def __init__(self, message: str, struct: type, attribute: str | None = None) -> None:
        self.struct = struct
        self.attribute = attribute
        super().__init__(message)
