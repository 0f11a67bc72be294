"""Application configuration using pydantic-settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "AAC Suggestion Engine"
    environment: str = "development"
    log_level: str = "info"
    debug: bool = False

    # Pattern store
    store_backend: Literal["memory", "mongodb"] = "memory"
    identity_scope: str = "default"
    store_timeout_seconds: float = 0.75
    pending_write_limit: int = 5_000

    # MongoDB
    mongodb_uri: str = "mongodb://mongodb:27017"
    mongodb_database: str = "aac_engine"
    mongodb_collection: str = "patterns"

    # Suggestions
    default_max_suggestions: int = 10

    # Learning
    accuracy_history_limit: int = 100
    intent_confidence_increment: float = 0.05
    recency_window_hours: int = 24
    recency_weight: float = 1.5

    # Maintenance
    retention_days: int = 90
    flush_interval_seconds: int = 30
    retention_sweep_hours: int = 24

    # CORS
    frontend_url: str = "http://localhost:8081"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency for injecting settings."""
    return settings
