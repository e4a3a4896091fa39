"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Largest value an Integer column holds on every supported database
MAX_STORED_INT = 2_147_483_647


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "classbank"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./classbank.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_create_tables: bool = True

    # Seeding
    seed_demo_accounts: bool = True

    # Auto-pay sweep
    autopay_enabled: bool = True
    autopay_interval_seconds: float = 3600.0

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
