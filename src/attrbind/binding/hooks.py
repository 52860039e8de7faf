"""Capability hooks a native leaf type may implement to customise conversion.

Hooks report failure by raising; the engine turns the exception into a
``HOOK_FAILURE`` diagnostic at the leaf's path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from attrbind.raw import RawValue


class Nullable(ABC):
    """A native type that can be explicitly set to null."""

    @abstractmethod
    def get_null(self) -> bool: ...

    @abstractmethod
    def set_null(self, null: bool) -> None: ...

    @abstractmethod
    def get_value(self) -> Any: ...

    @abstractmethod
    def set_value(self, value: Any) -> None: ...


class Unknownable(ABC):
    """A native type that can be explicitly set to unknown."""

    @abstractmethod
    def get_unknown(self) -> bool: ...

    @abstractmethod
    def set_unknown(self, unknown: bool) -> None: ...

    @abstractmethod
    def get_value(self) -> Any: ...

    @abstractmethod
    def set_value(self, value: Any) -> None: ...


class ValueConverter(ABC):
    """A native type that marshals itself to and from raw values."""

    @abstractmethod
    def to_raw_value(self) -> RawValue: ...

    @abstractmethod
    def from_raw_value(self, value: RawValue) -> None: ...
