"""
dataaccess

Pluggable cache-aside data access with a composable decorator chain.

Usage:
------
```python
from dataaccess import InMemoryDataSource, build_data_service

service = build_data_service(InMemoryDataSource({"k1": "apple"}))
await service.get_data("k1")
```
"""

from dataaccess.application.composition import build_data_service, compose, describe_chain
from dataaccess.application.decorators import (
    CachingDecorator,
    FallbackDecorator,
    LoggingDecorator,
    MetricsDecorator,
    RetryDecorator,
    ServiceDecorator,
)
from dataaccess.application.services import CacheAsideDataService
from dataaccess.core.exceptions import (
    CacheError,
    ConfigurationError,
    DataAccessError,
    InvalidKeyError,
    NotFoundError,
    SourceError,
    SourceUnavailableError,
    StoreUnavailableError,
)
from dataaccess.infrastructure.cache import (
    InMemoryCacheStore,
    RedisCacheStore,
    RedisClient,
    TieredCacheStore,
    create_cache_store,
)
from dataaccess.infrastructure.sources import InMemoryDataSource, LoaderDataSource

__version__ = "1.0.0"

__all__ = [
    # Composition
    "build_data_service",
    "compose",
    "describe_chain",
    # Services and decorators
    "CacheAsideDataService",
    "ServiceDecorator",
    "LoggingDecorator",
    "CachingDecorator",
    "MetricsDecorator",
    "RetryDecorator",
    "FallbackDecorator",
    # Stores
    "InMemoryCacheStore",
    "RedisCacheStore",
    "RedisClient",
    "TieredCacheStore",
    "create_cache_store",
    # Sources
    "InMemoryDataSource",
    "LoaderDataSource",
    # Errors
    "DataAccessError",
    "ConfigurationError",
    "InvalidKeyError",
    "CacheError",
    "StoreUnavailableError",
    "SourceError",
    "NotFoundError",
    "SourceUnavailableError",
]
