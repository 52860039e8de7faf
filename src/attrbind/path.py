"""Immutable location descriptors within a nested attribute value tree."""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(frozen=True)
class AttributeName:
    """A named attribute of an object value."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ElementKeyInt:
    """Position of an element in a list value."""

    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class ElementKeyString:
    """Key of an element in a map value."""

    key: str

    def __str__(self) -> str:
        return f"[{json.dumps(self.key)}]"


Step = AttributeName | ElementKeyInt | ElementKeyString


@dataclass(frozen=True)
class Path:
    """An append-only sequence of steps.

    Extending a path never modifies it; ``Path().attribute("a").index(0)``
    builds ``a[0]`` while the root stays empty.
    """

    steps: tuple[Step, ...] = ()

    def extend(self, step: Step) -> Path:
        return Path(steps=self.steps + (step,))

    def attribute(self, name: str) -> Path:
        return self.extend(AttributeName(name))

    def index(self, index: int) -> Path:
        return self.extend(ElementKeyInt(index))

    def key(self, key: str) -> Path:
        return self.extend(ElementKeyString(key))

    @property
    def parent(self) -> Path:
        return Path(steps=self.steps[:-1])

    @property
    def last(self) -> Step | None:
        return self.steps[-1] if self.steps else None

    def is_root(self) -> bool:
        return not self.steps

    def __len__(self) -> int:
        return len(self.steps)

    def __str__(self) -> str:
        out = ""
        for step in self.steps:
            if isinstance(step, AttributeName) and out:
                out += "."
            out += str(step)
        return out
