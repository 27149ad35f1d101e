"""
Cache-Aside Data Service
========================

The base DataService implementation. Every decorator chain terminates here.

THE REQUEST LIFECYCLE:
----------------------

┌─────────────────────────────────────────────────────────────────┐
│ STAGE 1.0: CACHE LOOKUP                                         │
│ - Read the store                                                │
│ - Hit: return the cached record (no source call)                │
│ - Store failure: treated as a miss                              │
└─────────────────────────────────────────────────────────────────┘
                            ↓
┌─────────────────────────────────────────────────────────────────┐
│ STAGE 2.0: SOURCE FETCH                                         │
│ - Ask the DataSource for the authoritative record               │
│ - NotFoundError / SourceUnavailableError propagate              │
└─────────────────────────────────────────────────────────────────┘
                            ↓
┌─────────────────────────────────────────────────────────────────┐
│ STAGE 3.0: CACHE POPULATE                                       │
│ - Write the record with the configured TTL                      │
│ - Store failure: record is still returned                       │
└─────────────────────────────────────────────────────────────────┘

Absence is never cached: a NotFoundError leaves the store untouched, so the
next call asks the source again. A cancelled fetch never reaches stage 3.

The service does not log. Store failures on the degrade path are reported
through the ``on_store_error(operation, key, error)`` hook so the
composition root decides how they surface.
"""

import asyncio
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

from dataaccess.core.config.constants import DEFAULT_CACHE_TTL
from dataaccess.core.exceptions import CacheError, InvalidKeyError
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.core.interfaces.source import DataSource

StoreErrorHook = Callable[[str, str, CacheError], None]


def validate_key(key: Any) -> str:
    """
    Reject keys that are not non-empty strings.

    Raises:
        InvalidKeyError: Key is empty or not a string
    """
    if not isinstance(key, str) or not key:
        raise InvalidKeyError(
            "Key must be a non-empty string",
            details={"key_type": type(key).__name__},
        )
    return key


class CacheAsideDataService:
    """
    DataService with cache-aside semantics.

    Dependencies are injected through the constructor; nothing is resolved
    from globals.

    Absence is never cached: NotFoundError and a None record both leave the
    store untouched, so every call for such a key reaches the source.

    Usage:
        service = CacheAsideDataService(
            store=InMemoryCacheStore(),
            source=InMemoryDataSource({"k1": "apple"}),
            ttl=1800,
        )
        await service.get_data("k1")  # "apple" (source call)
        await service.get_data("k1")  # "apple" (cache hit)
    """

    def __init__(
        self,
        store: CacheStore,
        source: DataSource,
        ttl: float = DEFAULT_CACHE_TTL,
        *,
        single_flight: bool = False,
        on_store_error: StoreErrorHook | None = None,
    ):
        """
        Args:
            store: Cache store consulted before the source
            source: Authoritative data source
            ttl: TTL in seconds for populated entries
            single_flight: Collapse concurrent misses for one key into one fetch
            on_store_error: Called with (operation, key, error) when a store
                failure is absorbed on the read or populate path
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0, got {ttl}")

        self._store = store
        self._source = source
        self._ttl = ttl
        self._single_flight = single_flight
        self._on_store_error = on_store_error

        # Per-key locks for single-flight, reference counted so idle keys
        # do not accumulate
        self._key_locks: dict[str, asyncio.Lock] = {}
        self._key_waiters: dict[str, int] = {}

        # Metrics
        self._hits = 0
        self._misses = 0
        self._fetches = 0
        self._store_errors = 0

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def source(self) -> DataSource:
        return self._source

    @property
    def ttl(self) -> float:
        return self._ttl

    async def get_data(self, key: str) -> Any:
        """
        Return the record for a key, populating the cache on a miss.

        Raises:
            InvalidKeyError: Key is not a non-empty string
            NotFoundError: No record exists (nothing is cached)
            SourceUnavailableError: Source unreachable (nothing is cached)
            asyncio.CancelledError: Caller cancelled (nothing is cached)
        """
        validate_key(key)

        cached = await self._read(key)
        if cached is not None:
            return cached

        if not self._single_flight:
            return await self._fetch_and_populate(key)

        async with self._key_lock(key):
            # Another task may have populated the key while we waited.
            # Not counted: this request was already recorded as a miss.
            cached = await self._read(key, count=False)
            if cached is not None:
                return cached
            return await self._fetch_and_populate(key)

    async def invalidate(self, key: str) -> None:
        """
        Remove the cached record for a key.

        STAGE-SVC.4: Cache invalidation

        Store errors propagate: a failed invalidation must not look like a
        successful one.
        """
        validate_key(key)
        await self._store.delete(key)

    async def _read(self, key: str, count: bool = True) -> Any | None:
        try:
            value = await self._store.get(key)
        except CacheError as e:
            self._report("get", key, e)
            value = None

        if not count:
            return value
        if value is None:
            self._misses += 1
        else:
            self._hits += 1
        return value

    async def _fetch_and_populate(self, key: str) -> Any:
        self._fetches += 1
        record = await self._source.fetch(key)

        # None is the absent marker on the cache path
        if record is not None:
            try:
                await self._store.set(key, record, self._ttl)
            except CacheError as e:
                self._report("set", key, e)

        return record

    def _report(self, operation: str, key: str, error: CacheError) -> None:
        self._store_errors += 1
        if self._on_store_error is not None:
            self._on_store_error(operation, key, error)

    @asynccontextmanager
    async def _key_lock(self, key: str):
        lock = self._key_locks.get(key)
        if lock is None:
            lock = self._key_locks[key] = asyncio.Lock()
            self._key_waiters[key] = 0
        self._key_waiters[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._key_waiters[key] -= 1
            if self._key_waiters[key] == 0:
                del self._key_waiters[key]
                del self._key_locks[key]

    def stats(self) -> dict[str, Any]:
        """
        Get service statistics.

        Returns:
            Dict with cache hits/misses, source fetches and absorbed store errors
        """
        total = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "source_fetches": self._fetches,
            "store_errors": self._store_errors,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
            "single_flight": self._single_flight,
            "ttl": self._ttl,
        }
