"""Cache infrastructure (in-memory, Redis and tiered cache stores)."""

from .factory import CacheStoreFactory, create_cache_store
from .memory_store import InMemoryCacheStore
from .redis_client import RedisClient
from .redis_store import RedisCacheStore
from .tiered_store import TieredCacheStore

__all__ = [
    "CacheStoreFactory",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "RedisClient",
    "TieredCacheStore",
    "create_cache_store",
]
