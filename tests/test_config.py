"""Tests for startup configuration."""
import pytest
from pydantic import ValidationError

from featurepulse_mcp.config import DEFAULT_BASE_URL, ConfigError, Settings


class TestSettingsFromEnv:
    """Test loading settings from environment variables."""

    def test_missing_api_key(self):
        with pytest.raises(ConfigError) as exc_info:
            Settings.from_env({})

        assert "FEATUREPULSE_API_KEY" in str(exc_info.value)

    def test_empty_api_key(self):
        with pytest.raises(ConfigError):
            Settings.from_env({"FEATUREPULSE_API_KEY": ""})

    def test_defaults(self):
        settings = Settings.from_env({"FEATUREPULSE_API_KEY": "fp_key"})

        assert settings.api_key.get_secret_value() == "fp_key"
        assert settings.base_url == DEFAULT_BASE_URL == "https://featurepul.se"
        assert settings.timeout == 30.0

    def test_overrides(self):
        settings = Settings.from_env({
            "FEATUREPULSE_API_KEY": "fp_key",
            "FEATUREPULSE_URL": "http://localhost:3000/",
            "FEATUREPULSE_TIMEOUT": "5",
        })

        assert settings.base_url == "http://localhost:3000"
        assert settings.timeout == 5.0

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError):
            Settings.from_env({"FEATUREPULSE_API_KEY": "fp_key", "FEATUREPULSE_TIMEOUT": "soon"})

        with pytest.raises(ConfigError):
            Settings.from_env({"FEATUREPULSE_API_KEY": "fp_key", "FEATUREPULSE_TIMEOUT": "-1"})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("FEATUREPULSE_API_KEY", "fp_from_env")
        monkeypatch.delenv("FEATUREPULSE_URL", raising=False)

        assert Settings.from_env().api_key.get_secret_value() == "fp_from_env"


class TestSettingsModel:
    """Test immutability and secret handling."""

    def test_frozen(self):
        settings = Settings(api_key="fp_key")

        with pytest.raises(ValidationError):
            settings.base_url = "https://example.com"

    def test_api_key_not_in_repr(self):
        assert "fp_secret" not in repr(Settings(api_key="fp_secret"))
