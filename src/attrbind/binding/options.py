"""Per-pass conversion options."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from attrbind.settings import Settings


@dataclass(frozen=True)
class Options:
    """Switches that change how the binding engine treats edge cases.

    ``cancel`` is checked on entry to every recursive step; setting it stops
    the walk and adds a single ``CANCELLED`` diagnostic.
    """

    ignore_unmatched_attributes: bool = False
    unhandled_null_as_empty: bool = False
    unhandled_unknown_as_empty: bool = False
    cancel: threading.Event | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: object) -> Options:
        if settings is None:
            settings = Settings()
        values: dict[str, object] = {
            "ignore_unmatched_attributes": settings.ignore_unmatched_attributes,
            "unhandled_null_as_empty": settings.unhandled_null_as_empty,
            "unhandled_unknown_as_empty": settings.unhandled_unknown_as_empty,
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]

    @property
    def cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.is_set()
