"""Configuration settings for the ranked tracker application."""

from __future__ import annotations

from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    postgres_db: str = Field(default="ranked_tracker")
    postgres_user: str = Field(default="ranked_tracker")
    postgres_password: str = Field(default="dev_password")
    postgres_host: str = Field(default="localhost")
    postgres_port: int = Field(default=5432)

    @property
    def database_url(self) -> str:
        """Construct async database URL from components."""
        return f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=True, description="JSON log lines instead of console output")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    # Riot API Configuration
    riot_api_key: str = Field(default="", description="Riot developer/production key")
    riot_region: str = Field(default="europe", description="Regional routing value")
    riot_platform: str = Field(default="euw1", description="Platform routing value")
    riot_request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Update service configuration
    update_scheduler_enabled: bool = Field(default=True)
    update_interval_seconds: float = Field(
        default=330.0, gt=0, description="Delay between two update runs (5.5 minutes)"
    )
    update_skip_if_running: bool = Field(
        default=True,
        description="Skip a scheduled run while the previous one is still active",
    )
    riot_rate_limit_requests: int = Field(
        default=100, gt=0, description="Requests allowed per rate limit window"
    )
    riot_rate_limit_window_factor: int = Field(
        default=2, gt=0, description="Window length factor (2 == 2 minute window)"
    )
    riot_requests_per_player: int = Field(
        default=4, gt=0, description="Upstream calls made to reconcile one player"
    )
    update_request_delay_seconds: float = Field(default=1.0, ge=0)
    update_batch_cooldown_seconds: float = Field(default=120.0, ge=0)
    retry_max_attempts: int = Field(default=4, gt=0)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0)
    retry_pre_delay_seconds: float = Field(default=0.1, ge=0)
    history_interval_hours: float = Field(default=12.0, gt=0)
    lp_event_dedup_minutes: float = Field(default=60.0, gt=0)

    @field_validator("riot_region", "riot_platform")
    @classmethod
    def normalize_routing(cls, v: str) -> str:
        """Routing values are lower case in Riot hostnames."""
        return v.strip().lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="forbid",  # Forbid extra fields for better type safety
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
