"""Attribute types and capability hooks used across the unit tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from attrbind import raw
from attrbind.attr import TypeWithValidate
from attrbind.binding import Nullable, Unknownable, ValueConverter
from attrbind.diag import Diagnostic, Diagnostics, error, warning
from attrbind.path import Path
from attrbind.types import StringType


def error_diagnostic(path: Path) -> Diagnostic:
    return error("Error Diagnostic", "This is an error.", path)


def warning_diagnostic(path: Path) -> Diagnostic:
    return warning("Warning Diagnostic", "This is a warning.", path)


@dataclass(frozen=True)
class StringTypeWithValidateError(StringType, TypeWithValidate):
    def validate(self, value: raw.RawValue, path: Path) -> Diagnostics:
        return Diagnostics([error_diagnostic(path)])


@dataclass(frozen=True)
class StringTypeWithValidateWarning(StringType, TypeWithValidate):
    def validate(self, value: raw.RawValue, path: Path) -> Diagnostics:
        return Diagnostics([warning_diagnostic(path)])


@dataclass(frozen=True)
class LowercaseStringType(StringType, TypeWithValidate):
    """Rejects strings containing uppercase letters."""

    def validate(self, value: raw.RawValue, path: Path) -> Diagnostics:
        diags = Diagnostics()
        if isinstance(value.value, str) and value.value != value.value.lower():
            diags.add_attribute_error(
                path, "Invalid Value", f"{value.value!r} must be lowercase", code="LOWERCASE"
            )
        return diags


class OptionalString(Nullable, Unknownable):
    """A string that tracks null and unknown explicitly."""

    def __init__(self, value: str = "", null: bool = False, unknown: bool = False) -> None:
        self.value = value
        self.null = null
        self.unknown = unknown

    def get_null(self) -> bool:
        return self.null

    def set_null(self, null: bool) -> None:
        self.null = null

    def get_unknown(self) -> bool:
        return self.unknown

    def set_unknown(self, unknown: bool) -> None:
        self.unknown = unknown

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionalString):
            return NotImplemented
        return (self.value, self.null, self.unknown) == (other.value, other.null, other.unknown)

    def __repr__(self) -> str:
        return f"OptionalString({self.value!r}, null={self.null}, unknown={self.unknown})"


class NullableOnly(Nullable):
    def __init__(self) -> None:
        self.null = False
        self.value: Any = None

    def get_null(self) -> bool:
        return self.null

    def set_null(self, null: bool) -> None:
        self.null = null

    def get_value(self) -> Any:
        return self.value

    def set_value(self, value: Any) -> None:
        self.value = value


class RejectingString(OptionalString):
    """A hook whose setters always fail."""

    def set_value(self, value: Any) -> None:
        raise ValueError(f"refusing {value!r}")

    def set_null(self, null: bool) -> None:
        raise ValueError("refusing null")


class CommaList(ValueConverter):
    """Stores a raw string as its comma-separated parts."""

    def __init__(self, parts: list[str] | None = None) -> None:
        self.parts = parts or []
        self.null = False

    def to_raw_value(self) -> raw.RawValue:
        if self.null:
            return raw.null(raw.String)
        return raw.new_value(raw.String, ",".join(self.parts))

    def from_raw_value(self, value: raw.RawValue) -> None:
        if value.type != raw.String:
            raise TypeError(f"expected a string, got {value.type}")
        if value.is_null():
            self.null = True
            return
        if not value.is_known():
            raise ValueError("unknown values are not supported")
        self.parts = value.value.split(",") if value.value else []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommaList):
            return NotImplemented
        return (self.parts, self.null) == (other.parts, other.null)
