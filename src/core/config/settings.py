# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the EduFolio API.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """PostgreSQL configuration for the listing database.

    The database stores universities, programs, enquiries and admins.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        name: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "edufolio"
    password: SecretStr = SecretStr("edufolio_password")
    host: str = "localhost"
    port: int = 5432
    name: str = "edufolio"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


class JWTSettings(BaseSettings):
    """JWT authentication configuration.

    Attributes:
        secret_key: Secret key for signing tokens.
        algorithm: JWT signing algorithm.
        expire_minutes: Access token lifetime in minutes.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr("change-this-in-production")
    algorithm: str = "HS256"
    expire_minutes: int = 30 * 24 * 60


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration.

    Attributes:
        requests_per_minute: Default limit per client.
        login: Limit applied to the admin login endpoint.
        enquiry: Limit applied to public enquiry submission.
        enabled: Apply rate limits at all.
        storage_uri: slowapi storage backend.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        extra="ignore",
    )

    requests_per_minute: int = 120
    login: str = "10/minute"
    enquiry: str = "5/minute"
    enabled: bool = True
    storage_uri: str = "memory://"


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

    origins: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173"
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
        run_migrations: Apply pending schema migrations at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 5000
    workers: int = 2
    reload: bool = False
    run_migrations: bool = True


class UploadSettings(BaseSettings):
    """File upload configuration.

    Attributes:
        directory: Directory uploaded files are written to.
        url_path: Public URL prefix the directory is mounted at.
        max_size_bytes: Maximum size of a single file.
        max_files: Maximum number of files in a multi-file upload.
        allowed_extensions: Lowercase extensions accepted (without dot).
    """

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        extra="ignore",
    )

    directory: str = "uploads"
    url_path: str = "/uploads"
    max_size_bytes: int = 5 * 1024 * 1024
    max_files: int = 5
    allowed_extensions: list[str] = ["jpeg", "jpg", "png", "gif", "webp", "svg", "pdf"]


class SeedSettings(BaseSettings):
    """Default administrator created by the seed command.

    Attributes:
        admin_email: Email of the initial superadmin.
        admin_password: Password of the initial superadmin.
        admin_name: Display name of the initial superadmin.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEED_",
        extra="ignore",
    )

    admin_email: str = "admin@edufolio.com"
    admin_password: SecretStr = SecretStr("admin123")
    admin_name: str = "Admin"


class Settings(BaseSettings):
    """Main application settings.

    This is the primary configuration class for the EduFolio API.
    It aggregates all subsettings and provides environment-level configuration.

    Attributes:
        environment: Deployment environment.
        debug: Enable debug mode.
        log_level: Logging level.
        database: Database settings.
        jwt: JWT authentication settings.
        rate_limit: Rate limiting settings.
        cors: CORS settings.
        api: API server settings.
        upload: File upload settings.
        seed: Seed data settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    seed: SeedSettings = Field(default_factory=SeedSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            default_jwt_secret = "change-this-in-production"
            if self.jwt.secret_key.get_secret_value() == default_jwt_secret:
                raise ValueError(
                    "JWT secret key must be changed from default in production. "
                    "Set JWT_SECRET_KEY environment variable."
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
