"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "FitCycle fasting and workout engine"
    VERSION: str = "0.1.0"

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./fitcycle.db"

    # Fasting defaults
    DEFAULT_PROTOCOL: str = "16:8"
    DEFAULT_EATING_START: str = "12:00"
    STATUS_POLL_INTERVAL_SECONDS: int = 60
    STREAK_LOOKBACK_DAYS: int = 365

    # Workouts
    DEFAULT_EXERCISE_COUNT: int = 6

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
