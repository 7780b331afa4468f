# src/config.py
"""Application configuration using pydantic-settings.

Provides a Settings class for all environment variables. Settings are
read once by the entry points and passed explicitly to every component.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file and environment variables.
    Environment variables take precedence over .env file values.
    Empty strings mean "not configured".
    """

    app_name: str = "stream-companion"
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Command prefixes
    command_prefix: str = Field("!", min_length=1)
    telegram_command_prefix: str = Field("/", min_length=1)

    # Slack (public chat channel)
    slack_bot_token: str = ""
    slack_app_token: str = ""
    slack_bot_user_id: str = ""  # Resolved with auth.test when empty
    slack_channel: str = ""  # Restricts command handling to one channel ID

    # Telegram (private operator surface)
    telegram_bot_token: str = ""
    authorized_user_ids: str = ""  # Comma-separated Telegram user IDs

    # AI providers
    ollama_base_url: str = ""
    ollama_model: str = ""
    openrouter_api_key: str = ""
    openai_api_key: str = ""
    ai_default_provider: Literal["ollama", "openrouter", "openai"] = "ollama"

    # Observability
    logfire_token: str = ""

    # API Security
    api_auth_key: str = ""  # Required for API access (X-API-Key header)
    api_rate_limit: int = 60  # Requests per minute

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        case_sensitive=False,  # Allow case-insensitive env var names
    )

    @property
    def slack_enabled(self) -> bool:
        """Whether both Slack tokens are present."""
        return bool(self.slack_bot_token and self.slack_app_token)


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Only entry points call this; components receive the instance
    as a constructor argument.
    """
    return Settings()
