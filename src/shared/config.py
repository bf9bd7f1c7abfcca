"""Configuration management for the HomeSlice MCP server.

Settings come from environment variables (and an optional .env file).
They are loaded once at startup, frozen, and passed to the components
that need them.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigurationError

DEFAULT_API_BASE = "https://homeslice-api.onrender.com"

API_KEY_REQUIRED = "HOMESLICE_API_KEY environment variable is required"
API_KEY_FIELDS = {"api_key", "HOMESLICE_API_KEY", "X_API_KEY"}


class HomeSliceSettings(BaseSettings):
    """Server settings."""
    # HOMESLICE_API_KEY wins when both are set and non-empty
    api_key: SecretStr = Field(
        ...,
        validation_alias=AliasChoices("HOMESLICE_API_KEY", "X_API_KEY"),
        description="Pre-shared key sent as the x-api-key header"
    )
    api_base: str = Field(default=DEFAULT_API_BASE, description="HomeSlice API origin")
    log_level: str = Field(default="INFO")
    json_logs: bool = Field(default=False)

    server_name: str = Field(default="home-slice-mcp")
    server_version: str = Field(default="1.0.0")

    model_config = SettingsConfigDict(
        env_prefix="HOMESLICE_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True
    )

    @field_validator("api_key")
    @classmethod
    def _require_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError(API_KEY_REQUIRED)
        return value

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_settings(**overrides) -> HomeSliceSettings:
    """
    Build settings from the environment.

    Args:
        **overrides: Explicit values taking precedence over the environment

    Returns:
        Frozen settings instance

    Raises:
        ConfigurationError: If no API key is configured or a value is invalid
    """
    try:
        return HomeSliceSettings(**overrides)
    except PydanticValidationError as e:
        for err in e.errors():
            if err["type"] == "missing" or set(map(str, err["loc"])) & API_KEY_FIELDS:
                raise ConfigurationError(API_KEY_REQUIRED) from e
        raise ConfigurationError(str(e)) from e


@lru_cache
def get_settings() -> HomeSliceSettings:
    """Get cached application settings."""
    return load_settings()
