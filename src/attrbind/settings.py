"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Default conversion behaviour for applications embedding attrbind.

    Values are read from ``ATTRBIND_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="ATTRBIND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Binding
    ignore_unmatched_attributes: bool = False  # object attributes with no dataclass field
    unhandled_null_as_empty: bool = False
    unhandled_unknown_as_empty: bool = False


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging at ``settings.log_level``.

    The library itself never installs handlers; applications call this once
    at startup if they have no logging setup of their own.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())
    logging.getLogger("attrbind").debug("Logging configured at %s", settings.log_level)
