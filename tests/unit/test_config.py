"""Unit tests for settings."""

import pytest

from logsparser.config import Settings, get_settings

pytestmark = pytest.mark.unit


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.app_name == "logsparser"
        assert settings.debug is False
        assert settings.log_level == "WARNING"
        assert settings.report_parse_errors is True

    def test_from_environment(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "info")

        settings = Settings(_env_file=None)

        assert settings.debug is True
        assert settings.log_level == "INFO"

    def test_log_level_is_normalized(self):
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
