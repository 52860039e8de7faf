"""Severity-tagged, path-qualified diagnostics collected during conversion."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from attrbind.path import Path

if TYPE_CHECKING:
    from attrbind.models.report import ConversionReport


class Severity(StrEnum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """A single notice produced while converting or validating a value."""

    severity: Severity
    summary: str
    detail: str
    path: Path | None = None
    code: str = "VALIDATION"

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


def error(summary: str, detail: str, path: Path | None = None, code: str = "VALIDATION") -> Diagnostic:
    return Diagnostic(Severity.ERROR, summary, detail, path, code)


def warning(summary: str, detail: str, path: Path | None = None, code: str = "VALIDATION") -> Diagnostic:
    return Diagnostic(Severity.WARNING, summary, detail, path, code)


class Diagnostics:
    """Ordered collection of diagnostics.

    Insertion order is kept and duplicates are allowed, so two passes over the
    same input always compare equal.
    """

    def __init__(self, items: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(items)

    def append(self, *diags: Diagnostic) -> None:
        self._items.extend(diags)

    def extend(self, other: Iterable[Diagnostic]) -> None:
        self._items.extend(other)

    def add_error(self, summary: str, detail: str, code: str = "VALIDATION") -> None:
        self.append(error(summary, detail, code=code))

    def add_warning(self, summary: str, detail: str, code: str = "VALIDATION") -> None:
        self.append(warning(summary, detail, code=code))

    def add_attribute_error(
        self, path: Path, summary: str, detail: str, code: str = "VALIDATION"
    ) -> None:
        self.append(error(summary, detail, path, code))

    def add_attribute_warning(
        self, path: Path, summary: str, detail: str, code: str = "VALIDATION"
    ) -> None:
        self.append(warning(summary, detail, path, code))

    def has_error(self) -> bool:
        return any(d.is_error for d in self._items)

    def errors(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.ERROR]

    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity == Severity.WARNING]

    def to_report(self) -> ConversionReport:
        """Render the collection as a serializable report."""
        from attrbind.models.report import ConversionReport

        return ConversionReport.from_diagnostics(self)

    def __add__(self, other: Iterable[Diagnostic]) -> Diagnostics:
        return Diagnostics([*self._items, *other])

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Diagnostics):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
