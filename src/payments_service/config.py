"""Application settings using Pydantic for environment-based configuration."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from PAYMENTS_* environment variables."""

    # Application Configuration
    app_name: str = Field(default="payments-service", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON instead of console lines")

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./payments.db",
        description="Async SQLAlchemy connection URL",
    )
    database_pool_size: int = Field(default=5, ge=1, description="Connection pool size (not used by SQLite)")
    database_echo: bool = Field(default=False, description="Echo SQL statements (debug)")

    # Payment Processing
    processing_success_rate: float = Field(
        default=0.9,
        ge=0.0,
        le=1.0,
        description="Probability that the stand-in processor reports success",
    )

    # Listing
    max_page_size: int = Field(default=100, ge=1, description="Largest accepted page limit")

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def uses_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance, loaded once per process."""
    return Settings()
