"""Process configuration for the FeaturePulse MCP server.

Settings are read once at startup and then passed explicitly to the
remote client. Nothing else reads the environment.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_BASE_URL = "https://featurepul.se"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when required startup configuration is missing or invalid."""


class Settings(BaseModel):
    """Immutable server configuration."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from FEATUREPULSE_* environment variables.

        Raises:
            ConfigError: If FEATUREPULSE_API_KEY is missing or a value is malformed
        """
        env = os.environ if environ is None else environ

        api_key = env.get("FEATUREPULSE_API_KEY")
        if not api_key:
            raise ConfigError(
                "FEATUREPULSE_API_KEY environment variable is required.\n"
                "Get your API key from the FeaturePulse dashboard under Project Settings."
            )

        timeout_raw = env.get("FEATUREPULSE_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigError(f"FEATUREPULSE_TIMEOUT must be a number of seconds, got {timeout_raw!r}")

        try:
            return cls(
                api_key=api_key,
                base_url=env.get("FEATUREPULSE_URL") or DEFAULT_BASE_URL,
                timeout=timeout,
            )
        except ValueError as e:
            raise ConfigError(f"Invalid FeaturePulse configuration: {e}") from e
