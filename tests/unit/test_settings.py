"""Tests for environment-driven settings and the options built from them."""

from __future__ import annotations

from pathlib import Path

import pytest

from attrbind.binding import Options
from attrbind.settings import Settings, configure_logging


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in (
        "ATTRBIND_LOG_LEVEL",
        "ATTRBIND_IGNORE_UNMATCHED_ATTRIBUTES",
        "ATTRBIND_UNHANDLED_NULL_AS_EMPTY",
        "ATTRBIND_UNHANDLED_UNKNOWN_AS_EMPTY",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.ignore_unmatched_attributes is False
        assert settings.unhandled_null_as_empty is False

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTRBIND_IGNORE_UNMATCHED_ATTRIBUTES", "true")
        monkeypatch.setenv("ATTRBIND_LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.ignore_unmatched_attributes is True
        assert settings.log_level == "DEBUG"

    def test_env_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("ATTRBIND_UNHANDLED_UNKNOWN_AS_EMPTY=1\nOTHER_SETTING=x\n")
        assert Settings().unhandled_unknown_as_empty is True


class TestOptionsFromSettings:
    def test_defaults_match_options(self) -> None:
        assert Options.from_settings() == Options()

    def test_settings_are_applied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ATTRBIND_UNHANDLED_NULL_AS_EMPTY", "true")
        opts = Options.from_settings()
        assert opts.unhandled_null_as_empty is True
        assert opts.ignore_unmatched_attributes is False

    def test_overrides_win(self) -> None:
        settings = Settings(ignore_unmatched_attributes=True)
        opts = Options.from_settings(settings, ignore_unmatched_attributes=False)
        assert opts.ignore_unmatched_attributes is False


class TestConfigureLogging:
    def test_uses_settings_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, object]] = []
        monkeypatch.setattr("logging.basicConfig", lambda **kw: calls.append(kw))
        configure_logging(Settings(log_level="debug"))
        assert calls == [{"level": "DEBUG"}]
