"""Tests de la configuration (pydantic-settings)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from reelsort.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REELSORT_DATABASE_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///reelsort.db"
        assert settings.scan_request_delay == 0.2
        assert settings.progress_flush_interval == 5
        assert settings.tmdb_language == "en-US"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REELSORT_SCAN_REQUEST_DELAY", "0.5")
        monkeypatch.setenv("REELSORT_PROGRESS_FLUSH_INTERVAL", "10")
        settings = Settings(_env_file=None)
        assert settings.scan_request_delay == 0.5
        assert settings.progress_flush_interval == 10

    def test_paths_expand_home(self) -> None:
        settings = Settings(_env_file=None, cache_dir="~/reelsort-cache")
        assert settings.cache_dir == Path.home() / "reelsort-cache"

    def test_invalid_flush_interval(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, progress_flush_interval=0)
