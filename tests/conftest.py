"""Shared test fixtures for attrbind."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from attrbind import raw
from attrbind.binding import Options
from attrbind.binding.tags import clear_cache
from attrbind.types import ListType, MapType, NumberType, ObjectType, StringType


@pytest.fixture(autouse=True)
def _fresh_tag_cache() -> Iterator[None]:
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def options() -> Options:
    return Options()


@pytest.fixture
def cancel_event() -> threading.Event:
    return threading.Event()


SERVER_TYPE = ObjectType(
    {
        "name": StringType(),
        "port": NumberType(),
        "tags": MapType(StringType()),
        "aliases": ListType(StringType()),
    }
)


def server_raw(
    name: str = "web",
    port: int = 8080,
    tags: dict[str, str] | None = None,
    aliases: list[str] | None = None,
) -> raw.RawValue:
    """Build a raw server object matching ``SERVER_TYPE``."""
    tags = {"env": "prod"} if tags is None else tags
    aliases = ["www"] if aliases is None else aliases
    return raw.new_value(
        SERVER_TYPE.raw_type(),
        {
            "name": raw.new_value(raw.String, name),
            "port": raw.new_value(raw.Number, port),
            "tags": raw.new_value(
                raw.Map(raw.String), {k: raw.new_value(raw.String, v) for k, v in tags.items()}
            ),
            "aliases": raw.new_value(
                raw.List(raw.String), [raw.new_value(raw.String, a) for a in aliases]
            ),
        },
    )
