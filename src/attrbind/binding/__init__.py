"""Binding engine: converts between attribute values and native Python structures."""

from attrbind.binding.from_value import from_native, from_value
from attrbind.binding.hooks import Nullable, Unknownable, ValueConverter
from attrbind.binding.into import build_value, into
from attrbind.binding.options import Options
from attrbind.binding.tags import EXCLUDE, StructMetadata, attr_field, struct_metadata

__all__ = [
    "EXCLUDE",
    "Nullable",
    "Options",
    "StructMetadata",
    "Unknownable",
    "ValueConverter",
    "attr_field",
    "build_value",
    "from_native",
    "from_value",
    "into",
    "struct_metadata",
]
