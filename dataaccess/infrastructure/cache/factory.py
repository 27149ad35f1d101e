"""
Cache Store Factory

Factory pattern for creating cache stores based on the configured backend.
Supports the in-memory, remote (Redis) and distributed (L1 + Redis)
backends.
"""

from collections.abc import Callable

from dataaccess.core.config.constants import CacheBackend
from dataaccess.core.config.settings import Settings, get_settings
from dataaccess.core.exceptions import ConfigurationError
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore
from dataaccess.infrastructure.cache.redis_client import RedisClient
from dataaccess.infrastructure.cache.redis_store import RedisCacheStore
from dataaccess.infrastructure.cache.tiered_store import TieredCacheStore

StoreBuilder = Callable[[Settings, RedisClient | None], CacheStore]


def _build_in_memory(settings: Settings, redis_client: RedisClient | None) -> CacheStore:
    return InMemoryCacheStore(max_size=settings.cache.CACHE_L1_MAX_SIZE)


def _build_remote(settings: Settings, redis_client: RedisClient | None) -> CacheStore:
    return RedisCacheStore(
        redis_client or RedisClient(settings),
        key_prefix=settings.cache.CACHE_KEY_PREFIX,
    )


def _build_distributed(settings: Settings, redis_client: RedisClient | None) -> CacheStore:
    cache_settings = settings.cache
    return TieredCacheStore(
        l1=InMemoryCacheStore(max_size=cache_settings.CACHE_L1_MAX_SIZE),
        l2=_build_remote(settings, redis_client),
        l1_ttl=cache_settings.CACHE_L1_TTL,
    )


class CacheStoreFactory:
    """
    Factory for creating cache store instances.

    Supports:
    - in-memory (InMemoryCacheStore)
    - remote (RedisCacheStore)
    - distributed (TieredCacheStore)

    Additional backends can be registered at runtime.
    """

    def __init__(self):
        """Initialize the cache store factory."""
        self._builders: dict[str, StoreBuilder] = {
            CacheBackend.IN_MEMORY.value: _build_in_memory,
            CacheBackend.REMOTE.value: _build_remote,
            CacheBackend.DISTRIBUTED.value: _build_distributed,
        }

    def register(self, backend: str, builder: StoreBuilder) -> None:
        """
        Register a backend builder.

        Args:
            backend: Backend name
            builder: ``builder(settings, redis_client) -> CacheStore``
        """
        self._builders[str(getattr(backend, "value", backend)).lower()] = builder

    def get(
        self,
        backend: CacheBackend | str,
        settings: Settings,
        redis_client: RedisClient | None = None,
    ) -> CacheStore:
        """
        Create a cache store for a backend.

        Args:
            backend: Backend name or CacheBackend member
            settings: Application settings
            redis_client: Shared Redis client (remote/distributed only)

        Returns:
            CacheStore: Instance of the requested backend

        Raises:
            ConfigurationError: If backend is not supported
        """
        name = str(getattr(backend, "value", backend)).lower()

        if name not in self._builders:
            raise ConfigurationError(
                f"Unknown cache backend: {backend}",
                details={"available": self.get_available()},
            ).with_suggestion(f"Set CACHE_BACKEND to one of: {', '.join(self.get_available())}")

        return self._builders[name](settings, redis_client)

    def get_available(self) -> list[str]:
        """
        Get list of available backends.

        Returns:
            list[str]: Supported backend names
        """
        return list(self._builders.keys())


# ============================================================================
# Helper Function for Configuration-Based Selection
# ============================================================================

def create_cache_store(
    settings: Settings | None = None,
    redis_client: RedisClient | None = None,
) -> CacheStore:
    """
    Create the cache store selected by CACHE_BACKEND.

    Args:
        settings: Application settings (defaults to get_settings())
        redis_client: Shared Redis client for the remote/distributed backends

    Returns:
        CacheStore: Instance of the configured backend

    Example:
        store = create_cache_store()
        await store.set("k1", "apple", ttl=1800)
    """
    settings = settings or get_settings()
    return CacheStoreFactory().get(settings.cache.CACHE_BACKEND, settings, redis_client)
