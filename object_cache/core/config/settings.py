#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
object cache. Connection details for the remote store, key derivation inputs
and logging options all live here.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from object_cache.core.config.constants import (
    DEFAULT_GLOBAL_GROUPS,
    DEFAULT_NAMESPACE,
    DEFAULT_NON_PERSISTENT_GROUPS,
    DEFAULT_TENANT_ID,
    REDIS_DEFAULT_HOST,
    REDIS_DEFAULT_PORT,
)


class RedisSettings(BaseSettings):
    """
    Redis configuration for the shared remote tier.

    STAGE-0.1: Redis connection configuration
    """

    REDIS_HOST: str = Field(default=REDIS_DEFAULT_HOST, description="Redis server host")
    REDIS_PORT: int = Field(default=REDIS_DEFAULT_PORT, description="Redis server port")
    REDIS_DB: int | None = Field(default=None, description="Redis database number (optional)")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Key derivation and routing configuration.

    STAGE-1: Key derivation inputs
    """

    CACHE_BACKEND: Literal["redis", "none"] = Field(default="redis", description="Remote store implementation")
    CACHE_KEY_SALT: str = Field(default="", description="Static salt prepended to every key")
    CACHE_NAMESPACE: str = Field(default=DEFAULT_NAMESPACE, description="Install-wide key namespace")
    CACHE_MULTI_TENANT: bool = Field(default=False, description="Multi-tenant deployment")
    CACHE_TENANT_ID: str = Field(default=DEFAULT_TENANT_ID, description="Initial tenant id")
    CACHE_GLOBAL_GROUPS: list[str] = Field(default=list(DEFAULT_GLOBAL_GROUPS))
    CACHE_NON_PERSISTENT_GROUPS: list[str] = Field(default=list(DEFAULT_NON_PERSISTENT_GROUPS))

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from object_cache.core.config.settings import get_settings

        settings = get_settings()
        redis_host = settings.redis.REDIS_HOST
        salt = settings.cache.CACHE_KEY_SALT
    """

    # Redis settings
    REDIS_HOST: str = Field(default=REDIS_DEFAULT_HOST, description="Redis server host")
    REDIS_PORT: int = Field(default=REDIS_DEFAULT_PORT, ge=1, le=65535, description="Redis server port")
    REDIS_DB: int | None = Field(default=None, ge=0, description="Redis database number (optional)")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")

    # Cache settings
    CACHE_BACKEND: Literal["redis", "none"] = Field(default="redis", description="Remote store implementation")
    CACHE_KEY_SALT: str = Field(default="", description="Static salt prepended to every key")
    CACHE_NAMESPACE: str = Field(default=DEFAULT_NAMESPACE, description="Install-wide key namespace")
    CACHE_MULTI_TENANT: bool = Field(default=False, description="Multi-tenant deployment")
    CACHE_TENANT_ID: str = Field(default=DEFAULT_TENANT_ID, description="Initial tenant id")
    CACHE_GLOBAL_GROUPS: list[str] = Field(
        default=list(DEFAULT_GLOBAL_GROUPS),
        description="Groups keyed without the tenant prefix",
    )
    CACHE_NON_PERSISTENT_GROUPS: list[str] = Field(
        default=list(DEFAULT_NON_PERSISTENT_GROUPS),
        description="Groups that never reach the remote store",
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
        )

    @property
    def cache(self) -> "CacheSettings":
        """Get cache settings."""
        return CacheSettings(
            CACHE_BACKEND=self.CACHE_BACKEND,
            CACHE_KEY_SALT=self.CACHE_KEY_SALT,
            CACHE_NAMESPACE=self.CACHE_NAMESPACE,
            CACHE_MULTI_TENANT=self.CACHE_MULTI_TENANT,
            CACHE_TENANT_ID=self.CACHE_TENANT_ID,
            CACHE_GLOBAL_GROUPS=self.CACHE_GLOBAL_GROUPS,
            CACHE_NON_PERSISTENT_GROUPS=self.CACHE_NON_PERSISTENT_GROUPS,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    STAGE-0.3: Settings initialization

    Settings are process configuration, not cache state; the cache facade
    itself is never a singleton and receives its settings explicitly.

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
