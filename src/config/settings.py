"""
Application settings - Log level and operation discovery.

Values come from environment variables or a .env file; list values
such as OPERATION_MODULES are JSON encoded.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "operations"

    # Logging configuration
    log_level: str = "INFO"  # Level applied to the "src" logger at startup

    # Operation discovery
    # Dotted module/package names scanned at startup (JSON list in env vars).
    # Empty: discover every Operation subclass already loaded.
    operation_modules: list[str] = []


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
