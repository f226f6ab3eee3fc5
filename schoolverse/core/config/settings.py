# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for SchoolVerse.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from schoolverse.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_API_KEY = "change-this-in-production"


class DatabaseSettings(BaseSettings):
    """Content database configuration.

    The content database holds every website section, gallery,
    learning material and footer table.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        url_override: Full connection URL, takes precedence over components.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
        populate_by_name=True,
    )

    user: str = "schoolverse"
    password: SecretStr = SecretStr("schoolverse_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "schoolverse"
    url_override: str | None = Field(default=None, validation_alias="DATABASE_URL")
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        if self.url_override:
            return self.url_override
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL targets SQLite (no pool sizing)."""
        return self.url.startswith("sqlite")


class StorageSettings(BaseSettings):
    """Object storage configuration.

    Two backends are supported:
    - http: the managed backend's storage REST API
    - local: files written under media_dir, served from public_base_url

    Attributes:
        backend: Which storage backend to use.
        url: Base URL of the managed backend (storage API lives under /storage/v1).
        service_key: Service key sent as bearer token and apikey header.
        image_bucket: Bucket for site and gallery images.
        material_bucket: Bucket for learning material files.
        media_dir: Root directory for the local backend.
        public_base_url: Public URL prefix for files served by the local backend.
        cache_control: Cache-Control max-age (seconds) set on uploaded objects.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        extra="ignore",
    )

    backend: Literal["http", "local"] = "local"
    url: str = "http://localhost:54321"
    service_key: SecretStr = SecretStr("")
    image_bucket: str = "site-images"
    material_bucket: str = "learning-materials"
    media_dir: str = "media"
    public_base_url: str = "http://localhost:34000/media"
    cache_control: int = 3600
    timeout: float = 30.0


class UploadSettings(BaseSettings):
    """Upload validation limits.

    Attributes:
        max_image_mb: Default size ceiling for images, in megabytes.
        max_material_mb: Default size ceiling for learning materials, in megabytes.
    """

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        extra="ignore",
    )

    max_image_mb: float = 10.0
    max_material_mb: float = 50.0


class AdminSettings(BaseSettings):
    """Admin surface configuration.

    Attributes:
        api_key: Shared secret expected in the X-Admin-Key header.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_",
        extra="ignore",
    )

    api_key: SecretStr = SecretStr(DEFAULT_ADMIN_API_KEY)


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000,http://localhost:5173,http://localhost:8080"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        workers: Number of worker processes.
        reload: Whether to enable auto-reload.
        create_schema: Run pending migrations and seed defaults at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 34000
    workers: int = 2
    reload: bool = False
    create_schema: bool = True


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: Content database settings.
        storage: Object storage settings.
        upload: Upload limit settings.
        admin: Admin surface settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    admin: AdminSettings = Field(default_factory=AdminSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.admin.api_key.get_secret_value() == DEFAULT_ADMIN_API_KEY:
                raise ValueError(
                    "Admin API key must be changed from default in production. "
                    "Set ADMIN_API_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
