"""
Cache Store Protocol

This module defines the abstract protocol for cache store implementations,
enabling dependency injection and testability.

Architectural Decision: Protocol-based abstraction
- Enables multiple cache store implementations (in-memory, Redis, tiered)
- Facilitates testing with mock implementations
- Follows dependency inversion principle
- Type-safe interface with runtime checking

Author: System Architect
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached value with its absolute expiry.

    Attributes:
        key: Cache key
        value: Stored record
        expires_at: Absolute timestamp on the store's clock

    An entry is valid only while ``now < expires_at``.
    """

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def remaining(self, now: float) -> float:
        """Seconds until expiry (0.0 once expired)."""
        return max(0.0, self.expires_at - now)


@runtime_checkable
class CacheStore(Protocol):
    """
    Protocol defining the interface for cache store implementations.

    Implementations:
    - InMemoryCacheStore: Process-local TTL + LRU store
    - RedisCacheStore: Shared Redis-backed store
    - TieredCacheStore: Local L1 in front of a shared L2

    Usage:
        async def lookup(store: CacheStore, key: str):
            # Works with any CacheStore implementation
            return await store.get(key)
    """

    async def get(self, key: str) -> Any | None:
        """
        Get value from the store.

        Args:
            key: Cache key

        Returns:
            The stored value, or None if missing or expired

        Raises:
            StoreUnavailableError: If the backend cannot be reached
        """
        ...

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Store value, overwriting any existing entry.

        Args:
            key: Cache key
            value: Record to store
            ttl: Time-to-live in seconds (must be > 0)

        Raises:
            ValueError: If ttl <= 0
            StoreUnavailableError: If the backend cannot be reached
        """
        ...

    async def delete(self, key: str) -> bool:
        """
        Remove an entry.

        Returns:
            bool: True if an entry was removed
        """
        ...
