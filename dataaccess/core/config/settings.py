#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
data-access layer. All configuration is centralized here to ensure
consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- IDE autocomplete for all settings
- Easy testing with override mechanisms

Author: System Architect
Date: 2026-10-19
"""

from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dataaccess.core.config.constants import (
    DEFAULT_CACHE_TTL,
    L1_CACHE_DEFAULT_TTL,
    L1_CACHE_MAX_SIZE,
    MAX_RETRIES,
    REDIS_KEY_PREFIX,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    CacheBackend,
)


class CacheSettings(BaseSettings):
    """
    Cache-aside configuration.

    STAGE-1: Cache backend and TTL configuration
    """

    CACHE_BACKEND: CacheBackend = Field(
        default=CacheBackend.IN_MEMORY, description="Cache store backend"
    )
    CACHE_TTL: float = Field(
        default=DEFAULT_CACHE_TTL, gt=0, description="Cache-aside TTL in seconds (30 minutes)"
    )
    CACHE_L1_MAX_SIZE: int = Field(
        default=L1_CACHE_MAX_SIZE, gt=0, description="In-memory store max entries"
    )
    CACHE_L1_TTL: float = Field(
        default=L1_CACHE_DEFAULT_TTL, gt=0, description="L1 TTL ceiling for the distributed backend"
    )
    CACHE_KEY_PREFIX: str = Field(default=REDIS_KEY_PREFIX, description="Redis key namespace")
    CACHE_SINGLE_FLIGHT: bool = Field(
        default=False, description="Collapse concurrent misses for the same key"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class RedisSettings(BaseSettings):
    """
    Redis configuration for the remote and distributed cache backends.

    STAGE-REDIS: Redis connection configuration

    Architectural Decision: Connection pooling for performance
    - Max connections: 50 (one pool per process)
    - Health checks: Every 30s
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class RetrySettings(BaseSettings):
    """
    Retry decorator configuration.

    STAGE-DEC.4: Retry thresholds

    Architectural Decision: tenacity with exponential backoff and jitter
    - Only transient source failures are retried
    """

    RETRY_ENABLED: bool = Field(default=False, description="Wrap the service with the retry decorator")
    RETRY_MAX_ATTEMPTS: int = Field(default=MAX_RETRIES, ge=1, description="Attempts including the first")
    RETRY_BASE_DELAY: float = Field(default=RETRY_BASE_DELAY, ge=0, description="Initial backoff (seconds)")
    RETRY_MAX_DELAY: float = Field(default=RETRY_MAX_DELAY, ge=0, description="Maximum backoff (seconds)")

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

    Usage:
        from dataaccess.core.config.settings import get_settings

        settings = get_settings()
        ttl = settings.cache.CACHE_TTL
        redis_host = settings.redis.REDIS_HOST

    Architectural Benefits:
    - Single source of truth for all configuration
    - Type-safe access with IDE autocomplete
    - Validation at startup (fail fast)
    - Easy testing with override mechanisms
    """

    # Cache settings
    CACHE_BACKEND: CacheBackend = Field(
        default=CacheBackend.IN_MEMORY, description="Cache store backend"
    )
    CACHE_TTL: float = Field(
        default=DEFAULT_CACHE_TTL, gt=0, description="Cache-aside TTL in seconds (30 minutes)"
    )
    CACHE_L1_MAX_SIZE: int = Field(
        default=L1_CACHE_MAX_SIZE, gt=0, description="In-memory store max entries"
    )
    CACHE_L1_TTL: float = Field(
        default=L1_CACHE_DEFAULT_TTL, gt=0, description="L1 TTL ceiling for the distributed backend"
    )
    CACHE_KEY_PREFIX: str = Field(default=REDIS_KEY_PREFIX, description="Redis key namespace")
    CACHE_SINGLE_FLIGHT: bool = Field(
        default=False, description="Collapse concurrent misses for the same key"
    )

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum total connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Retry settings
    RETRY_ENABLED: bool = Field(default=False, description="Wrap the service with the retry decorator")
    RETRY_MAX_ATTEMPTS: int = Field(default=MAX_RETRIES, ge=1, description="Attempts including the first")
    RETRY_BASE_DELAY: float = Field(default=RETRY_BASE_DELAY, ge=0, description="Initial backoff (seconds)")
    RETRY_MAX_DELAY: float = Field(default=RETRY_MAX_DELAY, ge=0, description="Maximum backoff (seconds)")

    # Decorator chain settings
    METRICS_ENABLED: bool = Field(default=True, description="Wrap the service with the metrics decorator")
    SERVICE_LOGGING_ENABLED: bool = Field(default=True, description="Wrap the service with the logging decorator")

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

    @model_validator(mode="after")
    def validate_retry_delays(self):
        """Keep the backoff ceiling at or above the base delay."""
        if self.RETRY_MAX_DELAY < self.RETRY_BASE_DELAY:
            raise ValueError("RETRY_MAX_DELAY must be >= RETRY_BASE_DELAY")
        return self

    # Nested configuration objects
    @property
    def cache(self) -> "CacheSettings":
        """Get cache settings."""
        return CacheSettings(
            CACHE_BACKEND=self.CACHE_BACKEND,
            CACHE_TTL=self.CACHE_TTL,
            CACHE_L1_MAX_SIZE=self.CACHE_L1_MAX_SIZE,
            CACHE_L1_TTL=self.CACHE_L1_TTL,
            CACHE_KEY_PREFIX=self.CACHE_KEY_PREFIX,
            CACHE_SINGLE_FLIGHT=self.CACHE_SINGLE_FLIGHT,
        )

    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def retry(self) -> "RetrySettings":
        """Get retry settings."""
        return RetrySettings(
            RETRY_ENABLED=self.RETRY_ENABLED,
            RETRY_MAX_ATTEMPTS=self.RETRY_MAX_ATTEMPTS,
            RETRY_BASE_DELAY=self.RETRY_BASE_DELAY,
            RETRY_MAX_DELAY=self.RETRY_MAX_DELAY,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

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

    Returns:
        Settings: Global settings instance

    Architectural Decision: Singleton pattern for settings
    - Single instance shared across application
    - Lazy initialization
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
