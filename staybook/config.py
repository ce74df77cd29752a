"""
Configuration management using Pydantic settings.
Handles the database URL, connection pool sizing and data-access behaviour flags.
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import logging


class Settings(BaseSettings):
    """Data-access settings with environment variable support."""

    # Application configuration
    app_name: str = "staybook"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration; built from the components below when left empty
    database_url: str = ""

    postgres_db: str = "lightbnb"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    # Connection pool
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600

    # Query behaviour
    default_result_limit: int = 10
    swallow_storage_errors: bool = True

    # Password hashing
    bcrypt_rounds: int = 12

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the logging level name."""
        level = v.upper().strip()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("default_result_limit")
    @classmethod
    def validate_default_result_limit(cls, v):
        if v < 1:
            raise ValueError("default_result_limit must be at least 1")
        return v

    @model_validator(mode="after")
    def build_database_url(self):
        """Build database URL from components if not provided directly."""
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
                f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            )
        elif self.database_url.startswith("postgresql://"):
            # Ensure async driver is used
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the process.
    """
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding the data-access layer.

    Args:
        level: Logging level name; defaults to the configured log_level
    """
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global settings instance
settings = get_settings()
