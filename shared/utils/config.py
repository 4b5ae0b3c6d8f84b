"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "Form Validation Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Validation Engine Configuration
    VALIDATION_REQUIRED_MESSAGE: str = "This field is required"
    VALIDATION_COMPOSITE_DELIMITER: str = "; "
    VALIDATION_PLANS_PATH: str | None = None  # None -> config/validation/plans.yaml

    # Date/year bounds used by the datetime and program capabilities
    VALIDATION_MIN_YEAR: int = 2000
    VALIDATION_FUTURE_YEARS: int = 5


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
