"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Every setting is read from an environment variable of the same name
(case-insensitive), falling back to a .env file and then to the default
declared here. The database connection is described by the DB_* variables:

    DB_HOST      localhost
    DB_PORT      5432
    DB_USER      bookuser
    DB_PASSWORD  bookpass
    DB_NAME      bookstore

DATABASE_URL, when set, wins over the DB_* composition.

PATTERN: Settings Singleton
===========================
A single Settings instance is cached using @lru_cache, so the environment
and .env file are read once at startup and every module sees the same
values.

Usage:
    from bookstore.config import get_settings

    settings = get_settings()
    print(settings.sqlalchemy_url)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Invalid values (unknown log level, unknown storage backend, a port
    that is not an integer) raise a ValidationError when the settings are
    first loaded, so a misconfigured process never starts serving.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookstore API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (echo SQL statements)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8080,
        description="Port to bind the server to"
    )

    # -------------------------------------------------------------------------
    # Storage Settings
    # -------------------------------------------------------------------------
    storage_backend: str = Field(
        default="database",
        description="Where books live: 'database' (PostgreSQL) or 'memory'"
    )
    allow_negative_quantity: bool = Field(
        default=True,
        description="Accept negative quantity values on create/update"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=5432, description="Database port")
    db_user: str = Field(default="bookuser", description="Database user")
    db_password: str = Field(default="bookpass", description="Database password")
    db_name: str = Field(default="bookstore", description="Database name")

    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* settings when set"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load"
    )
    db_pool_timeout: float = Field(
        default=30.0,
        description="Seconds a request waits for a free connection before failing"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def sqlalchemy_url(self) -> str:
        """
        Connection URL handed to SQLAlchemy.

        URL.create() quotes the password, so credentials containing
        '@' or '/' survive the round trip.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def uses_database(self) -> bool:
        """Check if books are persisted in the relational store."""
        return self.storage_backend == "database"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Returns:
            The validated value (uppercase)

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend is a known value."""
        valid_backends = {"database", "memory"}
        if v.lower() not in valid_backends:
            raise ValueError(f"storage_backend must be one of {valid_backends}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment and .env file; later calls return
    the same instance. Tests that change the environment call
    get_settings.cache_clear() first.

    Returns:
        Cached Settings instance
    """
    return Settings()
