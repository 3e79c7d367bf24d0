"""12-factor configuration adapter using environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Names accepted by both logging.basicConfig and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    log_level: str = Field(default="INFO", description="Root log level")

    # Telegram configuration
    # Missing credentials are reported per notification request, not at startup
    telegram_bot_token: str | None = Field(
        default=None, description="Bot token used to call the Telegram Bot API"
    )
    telegram_chat_id: str | None = Field(
        default=None, description="Chat that receives the alert messages"
    )
    telegram_api_base_url: str = Field(
        default="https://api.telegram.org", description="Base URL of the Telegram Bot API"
    )

    # Geolocation configuration
    geo_lookup_base_url: str = Field(
        default="https://ipwho.is", description="Base URL of the IP geolocation service"
    )
    geo_lookup_timeout_seconds: float = Field(
        default=2.5, description="Deadline for a geolocation lookup in seconds"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level and normalize aliases like WARN to their canonical name."""
        level = v.upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @field_validator("geo_lookup_timeout_seconds")
    @classmethod
    def validate_geo_lookup_timeout(cls, v: float) -> float:
        """Validate the geolocation deadline is positive."""
        if v <= 0:
            raise ValueError("geo_lookup_timeout_seconds must be positive")
        return v

    @field_validator("telegram_api_base_url", "geo_lookup_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with a single slash."""
        return v.rstrip("/")

    @property
    def telegram_configured(self) -> bool:
        """Whether both Telegram secrets are present."""
        return bool(self.telegram_bot_token) and bool(self.telegram_chat_id)
