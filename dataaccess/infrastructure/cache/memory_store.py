#!/usr/bin/env python3
"""
In-Memory Cache Store

Process-local TTL + LRU store. Backs the ``in-memory`` cache backend and the
L1 tier of the ``distributed`` backend.

Architecture:
    InMemoryCacheStore
        ├── OrderedDict[str, CacheEntry] (LRU ordering)
        ├── asyncio.Lock (atomic per-call mutation)
        └── clock (injectable, time.monotonic by default)

Performance Targets:
    - get/set: < 1ms, O(1)

Author: System Architect
Date: 2026-10-19
"""

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

from dataaccess.core.config.constants import L1_CACHE_MAX_SIZE
from dataaccess.core.interfaces.cache import CacheEntry


class InMemoryCacheStore:
    """
    In-memory LRU cache store with per-entry TTL.

    Responsibility: Fast, task-safe in-memory storage with expiry and LRU
    eviction.

    This is a per-process cache, not shared across workers.
    For shared caching, use RedisCacheStore.

    Implementation Details:
    - Uses OrderedDict for O(1) access and LRU ordering
    - Task-safe via asyncio.Lock
    - Entries expire when ``now >= expires_at`` and are removed lazily on read
    - Evicts least recently used entries when at capacity
    - Tracks hits/misses/expirations/evictions for monitoring
    """

    def __init__(
        self,
        max_size: int = L1_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the store.

        Args:
            max_size: Maximum number of entries to hold
            clock: Monotonic time source in seconds
        """
        if max_size <= 0:
            raise ValueError("max_size must be > 0")

        self._max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = asyncio.Lock()

        # Metrics
        self._hits = 0
        self._misses = 0
        self._expirations = 0
        self._evictions = 0

    async def get(self, key: str) -> Any | None:
        """
        Get value from the store. Returns None if missing or expired.

        LRU Update: Moves accessed entry to end (most recently used)
        """
        entry = await self.get_entry(key)
        return entry.value if entry is not None else None

    async def get_entry(self, key: str) -> CacheEntry | None:
        """
        Get the live entry for a key, including its expiry.

        Args:
            key: Cache key

        Returns:
            CacheEntry or None if missing or expired
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                return None

            self._entries.move_to_end(key)
            self._hits += 1
            return entry

    async def get_with_ttl(self, key: str) -> tuple[Any | None, float | None]:
        """
        Get value and remaining TTL in seconds.

        Returns:
            (value, remaining_seconds) or (None, None) on a miss
        """
        entry = await self.get_entry(key)
        if entry is None:
            return None, None
        return entry.value, entry.remaining(self._clock())

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Store value with ``expires_at = now + ttl``. Evicts LRU entries if at
        capacity.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds

        Raises:
            ValueError: If ttl <= 0
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0, got {ttl}")

        async with self._lock:
            entry = CacheEntry(key=key, value=value, expires_at=self._clock() + ttl)
            if key in self._entries:
                self._entries.move_to_end(key)
            self._entries[key] = entry

            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
                self._evictions += 1

    async def delete(self, key: str) -> bool:
        """
        Delete an entry. Returns True if deleted, False if not found.
        """
        async with self._lock:
            if key in self._entries:
                del self._entries[key]
                return True
            return False

    async def purge_expired(self) -> int:
        """
        Remove every expired entry.

        Expired entries are otherwise only dropped when read, so a caller with
        a large key space can run this periodically to reclaim memory.

        Returns:
            Number of entries removed
        """
        async with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._expirations += len(expired)
            return len(expired)

    async def clear(self) -> None:
        """Clear all entries."""
        async with self._lock:
            self._entries.clear()

    def get_size(self) -> int:
        """Get current number of entries (expired ones included until purged)."""
        return len(self._entries)

    def get_max_size(self) -> int:
        """Get maximum capacity."""
        return self._max_size

    def get_keys(self) -> list[str]:
        """
        Get all keys in LRU order (oldest first, newest last).
        """
        return list(self._entries.keys())

    def stats(self) -> dict[str, Any]:
        """
        Get store statistics.

        Returns:
            Dict with size, capacity, hit/miss counts and hit rate
        """
        total = self._hits + self._misses
        return {
            "size": len(self._entries),
            "max_size": self._max_size,
            "hits": self._hits,
            "misses": self._misses,
            "expirations": self._expirations,
            "evictions": self._evictions,
            "hit_rate": round(self._hits / total, 3) if total > 0 else 0.0,
        }

    async def health_check(self) -> dict[str, Any]:
        """
        Check store health. An in-process store is always reachable.
        """
        return {
            "status": "healthy",
            "backend": "in-memory",
            "size": len(self._entries),
            "max_size": self._max_size,
        }
