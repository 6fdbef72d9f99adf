"""
Habitica MCP Settings.

Settings are read once from the environment (or a local .env file) at
startup and never re-read. The resulting object is frozen.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from habitica_mcp.constants import DEFAULT_API_BASE_URL, DEFAULT_CLIENT
from habitica_mcp.exceptions import HabiticaConfigurationError

MISSING_CREDENTIALS_MESSAGE = (
    "Missing Habitica credentials. Please set HABITICA_USER_ID and "
    "HABITICA_API_TOKEN environment variables."
)

REQUIRED_FIELDS = frozenset({"user_id", "api_token"})


class HabiticaSettings(BaseSettings):
    """Credentials and connection settings for the Habitica API."""

    model_config = SettingsConfigDict(
        env_prefix="HABITICA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    user_id: str = Field(..., min_length=1, description="Habitica user ID (x-api-user)")
    api_token: str = Field(..., min_length=1, description="Habitica API token (x-api-key)")
    client: str = Field(default=DEFAULT_CLIENT, description="Client identifier (x-client)")
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Habitica API base URL")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def load_settings() -> HabiticaSettings:
    """
    Load settings from the environment.

    Raises:
        HabiticaConfigurationError: If credentials are missing or any
            setting fails validation.
    """
    try:
        return HabiticaSettings()
    except ValidationError as e:
        failed = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        if failed & REQUIRED_FIELDS:
            raise HabiticaConfigurationError(MISSING_CREDENTIALS_MESSAGE) from e
        raise HabiticaConfigurationError(f"Invalid Habitica settings: {e}") from e
