"""
Tests for Configuration Management (beancache/config.py)

Tests cover:
- Default values
- Environment variable loading
- Settings validation
"""

import pytest
from pydantic import ValidationError

from beancache.config import Settings


@pytest.mark.unit
class TestSettings:
    """Test Settings configuration class."""

    def test_default_settings_load(self, monkeypatch):
        """Test that Settings loads with default values."""
        for var in ("CACHE_ATTRIBUTE_INFO", "CACHE_SHARDS", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings(_env_file=None)

        assert settings.ROOT_DIR.exists()
        assert settings.LOGS_DIR.name == "logs"
        assert settings.CACHE_ATTRIBUTE_INFO is False
        assert settings.CACHE_SHARDS == 16
        assert settings.LOG_LEVEL == "INFO"

    def test_settings_from_environment(self, monkeypatch):
        """Test that settings can be loaded from environment variables."""
        monkeypatch.setenv("CACHE_ATTRIBUTE_INFO", "true")
        monkeypatch.setenv("CACHE_SHARDS", "4")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.CACHE_ATTRIBUTE_INFO is True
        assert settings.CACHE_SHARDS == 4
        assert settings.LOG_LEVEL == "DEBUG"

    def test_rejects_non_positive_shards(self):
        with pytest.raises(ValidationError):
            Settings(CACHE_SHARDS=0)

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")
