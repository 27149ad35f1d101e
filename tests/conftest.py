"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_fixtures import CacheTestFactory, FakeClock, SourceTestFactory  # noqa: E402


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """
    Real Settings instance with deterministic values.

    Built from explicit keyword arguments so neither the process environment
    nor a local .env changes test behaviour.
    """
    from dataaccess.core.config.settings import Settings

    return Settings(
        _env_file=None,
        CACHE_BACKEND="in-memory",
        CACHE_TTL=1800,
        CACHE_L1_MAX_SIZE=100,
        CACHE_L1_TTL=60,
        CACHE_KEY_PREFIX="test",
        CACHE_SINGLE_FLIGHT=False,
        RETRY_ENABLED=False,
        METRICS_ENABLED=True,
        SERVICE_LOGGING_ENABLED=True,
        LOG_LEVEL="INFO",
        LOG_FORMAT="json",
    )


@pytest.fixture
def mock_settings():
    """
    Mock settings for testing code that only reads a few attributes.

    Returns a MagicMock with common settings attributes.
    """
    from dataaccess.core.config.settings import Settings

    settings = MagicMock(spec=Settings)

    settings.cache.CACHE_BACKEND = "in-memory"
    settings.cache.CACHE_TTL = 1800
    settings.cache.CACHE_L1_MAX_SIZE = 100
    settings.cache.CACHE_L1_TTL = 60
    settings.cache.CACHE_KEY_PREFIX = "test"
    settings.cache.CACHE_SINGLE_FLIGHT = False

    settings.redis.REDIS_HOST = "localhost"
    settings.redis.REDIS_PORT = 6379
    settings.redis.REDIS_DB = 0
    settings.redis.REDIS_PASSWORD = None
    settings.redis.REDIS_MAX_CONNECTIONS = 10
    settings.redis.REDIS_SOCKET_TIMEOUT = 1
    settings.redis.REDIS_SOCKET_CONNECT_TIMEOUT = 1
    settings.redis.REDIS_HEALTH_CHECK_INTERVAL = 30

    return settings


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def mock_logger():
    """
    Logger stand-in that records every call.

    Decorators accept an injected logger, so tests assert on the calls made
    instead of parsing rendered output.
    """
    return MagicMock()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def fake_clock():
    """Manually advanced clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def memory_store(fake_clock):
    """In-memory store driven by the fake clock."""
    from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore

    return InMemoryCacheStore(max_size=100, clock=fake_clock)


@pytest.fixture
def failing_store():
    """Store that raises StoreUnavailableError on every operation."""
    return CacheTestFactory.failing_store()


@pytest.fixture
def mock_redis():
    """
    Mock redis.asyncio client.

    Operation methods are AsyncMocks; ``pipeline()`` returns a MagicMock
    whose ``execute`` is an AsyncMock.
    """
    return CacheTestFactory.mock_redis()


@pytest.fixture
def mock_redis_client():
    """Mock RedisClient (the wrapper, not redis-py)."""
    from dataaccess.infrastructure.cache.redis_client import RedisClient

    client = AsyncMock(spec=RedisClient)
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.get_with_pttl = AsyncMock(return_value=(None, -2))
    client.scan_delete = AsyncMock(return_value=0)
    client.health_check = AsyncMock(return_value={"status": "healthy"})
    return client


# ============================================================================
# Source Fixtures
# ============================================================================


@pytest.fixture
def fruit_source():
    """In-memory source seeded with a few records."""
    return SourceTestFactory.memory_source({"k1": "apple", "k2": "pear", "k3": "plum"})
