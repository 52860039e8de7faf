"""Concrete attribute types and values."""

from attrbind.types.collections import List, ListType, Map, MapType, Object, ObjectType
from attrbind.types.primitives import Bool, BoolType, Number, NumberType, String, StringType

__all__ = [
    "Bool",
    "BoolType",
    "List",
    "ListType",
    "Map",
    "MapType",
    "Number",
    "NumberType",
    "Object",
    "ObjectType",
    "String",
    "StringType",
]
