"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from expense_tracker.orchestrator import create_app_components
from expense_tracker.models import FilterMode


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    for key in (
        "EXPENSE_DB_PATH",
        "EXPENSE_DB_TIMEOUT_SECONDS",
        "EXPENSE_DB_CONNECT_ATTEMPTS",
        "LOG_LEVEL",
        "DEFAULT_FILTER",
        "CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:

    def test_defaults(self):
        settings = StorageSettings()
        assert settings.path == "expenses_v2.db"
        assert settings.timeout_seconds == 5.0
        assert settings.connect_attempts == 3

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_DB_PATH", " /tmp/other.db ")
        monkeypatch.setenv("EXPENSE_DB_CONNECT_ATTEMPTS", "5")
        settings = StorageSettings()
        assert settings.path == "/tmp/other.db"
        assert settings.connect_attempts == 5

    def test_empty_path_rejected(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_DB_PATH", "   ")
        with pytest.raises(ValidationError):
            StorageSettings()


class TestAppSettings:

    def test_defaults(self):
        settings = AppSettings()
        assert settings.log_level == "INFO"
        assert settings.currency_symbol == "$"
        assert settings.default_filter == "all"

    def test_log_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_bad_default_filter_rejected(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_FILTER", "year")
        with pytest.raises(ValidationError):
            AppSettings()


class TestSettingsContainer:

    def test_validate_all_settings(self):
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_validate_reports_errors(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_FILTER", "year")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results

    def test_factory_uses_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DEFAULT_FILTER", "week")
        view_model, storage = create_app_components(str(tmp_path / "app.db"))
        assert view_model.filter_mode == FilterMode.WEEK
        assert storage.path == str(tmp_path / "app.db")
