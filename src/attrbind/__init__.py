"""attrbind: conversion between schema-typed attribute values and Python structures."""

from attrbind.attr import (
    AttrType,
    AttrValue,
    TypeWithAttributeTypes,
    TypeWithElementType,
    TypeWithValidate,
    value_to_raw,
)
from attrbind.binding import (
    Nullable,
    Options,
    Unknownable,
    ValueConverter,
    attr_field,
    from_native,
    into,
)
from attrbind.diag import Diagnostic, Diagnostics, Severity
from attrbind.errors import ConversionError, RawValueError, StructTagError
from attrbind.path import AttributeName, ElementKeyInt, ElementKeyString, Path

__version__ = "0.1.0"

__all__ = [
    "AttrType",
    "AttrValue",
    "AttributeName",
    "ConversionError",
    "Diagnostic",
    "Diagnostics",
    "ElementKeyInt",
    "ElementKeyString",
    "Nullable",
    "Options",
    "Path",
    "RawValueError",
    "Severity",
    "StructTagError",
    "TypeWithAttributeTypes",
    "TypeWithElementType",
    "TypeWithValidate",
    "Unknownable",
    "ValueConverter",
    "__version__",
    "attr_field",
    "from_native",
    "into",
    "value_to_raw",
]
