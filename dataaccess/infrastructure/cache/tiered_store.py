#!/usr/bin/env python3
"""
Tiered Cache Store (distributed backend)

Architecture:
    TieredCacheStore
        ├── L1: InMemoryCacheStore (process-local, < 1ms)
        └── L2: RedisCacheStore (shared, 1-5ms)

Algorithm:
    GET: L1 → L2 → miss (warm L1 on L2 hit)
    SET: L1 then L2
    DELETE: both tiers

L1 entries never outlive the L2 entry they were copied from: on an L2 hit
L1 is warmed with ``min(l1_ttl, remaining L2 TTL)``.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any, Literal

from dataaccess.core.config.constants import L1_CACHE_DEFAULT_TTL, CacheTier
from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore
from dataaccess.infrastructure.cache.redis_store import RedisCacheStore

CacheSource = Literal["l1", "l2", "miss"]


class TieredCacheStore:
    """
    Two-tier CacheStore: local L1 in front of a shared L2.

    Why This Design?
    - L1 is fastest but limited in size and not shared
    - L2 is slower but shared by every instance
    - Warming L1 from L2 hits keeps hot keys local

    Consistency:
    - L1 TTL is capped by ``l1_ttl`` so other instances' writes become
      visible within that bound
    - L2 errors propagate (after any L1 work) as StoreUnavailableError
    """

    def __init__(
        self,
        l1: InMemoryCacheStore,
        l2: RedisCacheStore,
        l1_ttl: float = L1_CACHE_DEFAULT_TTL,
    ):
        """
        Initialize tiered store.

        Args:
            l1: Local tier
            l2: Shared tier (anything offering ``get_with_ttl``)
            l1_ttl: Ceiling for the TTL of L1 entries, in seconds
        """
        if l1_ttl <= 0:
            raise ValueError("l1_ttl must be > 0")

        self._l1 = l1
        self._l2 = l2
        self._l1_ttl = l1_ttl

        # Metrics
        self._hits_l1 = 0
        self._hits_l2 = 0
        self._misses = 0

    @property
    def l1(self) -> InMemoryCacheStore:
        return self._l1

    @property
    def l2(self) -> RedisCacheStore:
        return self._l2

    async def get(self, key: str) -> Any | None:
        value, _ = await self.get_with_source(key)
        return value

    async def get_with_source(self, key: str) -> tuple[Any | None, CacheSource]:
        """
        Get from cache with L1→L2 fallback.

        STAGE-1.0: Cache lookup

        Returns:
            (value, source) where source indicates which tier hit
        """
        value = await self._l1.get(key)
        if value is not None:
            self._hits_l1 += 1
            return value, CacheTier.L1.value

        value, remaining = await self._l2.get_with_ttl(key)
        if value is None:
            self._misses += 1
            return None, "miss"

        warm_ttl = self._l1_ttl if remaining is None else min(self._l1_ttl, remaining)
        if warm_ttl > 0:
            await self._l1.set(key, value, warm_ttl)

        self._hits_l2 += 1
        return value, CacheTier.L2.value

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Set value in both tiers.

        Raises:
            ValueError: If ttl <= 0
            StoreUnavailableError: L2 unreachable (L1 is already written)
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0, got {ttl}")

        await self._l1.set(key, value, min(ttl, self._l1_ttl))
        await self._l2.set(key, value, ttl)

    async def delete(self, key: str) -> bool:
        """
        Delete from both tiers.

        Returns:
            True if either tier held the key
        """
        removed_l1 = await self._l1.delete(key)
        removed_l2 = await self._l2.delete(key)
        return removed_l1 or removed_l2

    async def clear(self) -> None:
        """Clear both tiers."""
        await self._l1.clear()
        await self._l2.clear()

    def stats(self) -> dict[str, Any]:
        """
        Get tiered cache statistics.

        Returns:
            Dict with per-tier hits, misses and hit rates
        """
        total = self._hits_l1 + self._hits_l2 + self._misses
        hit_rate = (self._hits_l1 + self._hits_l2) / total if total > 0 else 0.0

        return {
            "l1_hits": self._hits_l1,
            "l2_hits": self._hits_l2,
            "misses": self._misses,
            "total_requests": total,
            "hit_rate": round(hit_rate, 3),
            "l1_hit_rate": round(self._hits_l1 / total, 3) if total > 0 else 0.0,
            "l1": self._l1.stats(),
        }

    async def health_check(self) -> dict[str, Any]:
        """
        Perform health check on both tiers.

        Returns:
            Dict with overall status (degraded when L2 is unhealthy)
        """
        health = {
            "status": "healthy",
            "backend": "distributed",
            "l1": await self._l1.health_check(),
            "l2": await self._l2.health_check(),
        }
        if health["l2"].get("status") != "healthy":
            health["status"] = "degraded"
        return health
