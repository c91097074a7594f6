"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (subscriptions and notification history)
    database_url: str = Field(default="sqlite:///./ntfy_client.db")

    # Redis (Celery broker and notification display channel)
    redis_url: str | None = Field(default="redis://localhost:6379/0")
    notification_channel: str = Field(default="ntfy:notifications")

    # ntfy
    app_base_url: str = Field(default="https://ntfy.sh")
    poll_topic: str = Field(default="~poll")  # See ntfy server if ever changed
    poll_interval_minutes: int = Field(default=20)

    # Timeouts
    poll_deadline_seconds: float = Field(default=25.0)  # host budget is ~30s
    fetch_timeout_seconds: float = Field(default=15.0)
    http_action_timeout_seconds: float = Field(default=15.0)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has sane settings."""
        if self.is_production:
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
            if not self.app_base_url.startswith("https://"):
                raise ValueError("APP_BASE_URL must use https in production")
        if self.poll_deadline_seconds <= 0:
            raise ValueError("POLL_DEADLINE_SECONDS must be positive")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
