"""
Unit Tests for TieredCacheStore

Tests the L1 → L2 lookup order, L1 warming bounded by the L2 remaining TTL,
and write/delete fan-out. Both tiers are in-memory stores on one fake clock
unless the test needs a failing L2.
"""

import pytest

from dataaccess.core.exceptions import StoreUnavailableError
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore
from dataaccess.infrastructure.cache.tiered_store import TieredCacheStore
from tests.test_fixtures import CacheTestFactory


@pytest.fixture
def l1(fake_clock):
    return InMemoryCacheStore(max_size=10, clock=fake_clock)


@pytest.fixture
def l2(fake_clock):
    return InMemoryCacheStore(max_size=100, clock=fake_clock)


@pytest.fixture
def tiered(l1, l2):
    return TieredCacheStore(l1, l2, l1_ttl=60)


@pytest.mark.unit
class TestTieredCacheStore:
    """Test suite for TieredCacheStore."""

    def test_implements_cache_store(self, tiered):
        assert isinstance(tiered, CacheStore)

    @pytest.mark.asyncio
    async def test_l1_hit_skips_l2(self, tiered, l1, l2):
        await l1.set("k1", "local", ttl=60)
        await l2.set("k1", "shared", ttl=600)

        value, source = await tiered.get_with_source("k1")

        assert (value, source) == ("local", "l1")
        assert l2.stats()["hits"] == 0

    @pytest.mark.asyncio
    async def test_l2_hit_warms_l1(self, tiered, l1, l2):
        await l2.set("k1", "shared", ttl=600)

        value, source = await tiered.get_with_source("k1")

        assert (value, source) == ("shared", "l2")
        assert await l1.get("k1") == "shared"

    @pytest.mark.asyncio
    async def test_warmed_l1_never_outlives_l2(self, tiered, l1, l2, fake_clock):
        """L2 has 20s left, L1 ceiling is 60s: L1 copy must expire with L2."""
        await l2.set("k1", "shared", ttl=30)
        fake_clock.advance(10)

        await tiered.get("k1")
        _, l1_remaining = await l1.get_with_ttl("k1")
        assert l1_remaining == pytest.approx(20)

        fake_clock.advance(20)
        assert await tiered.get("k1") is None

    @pytest.mark.asyncio
    async def test_warming_capped_by_l1_ttl(self, tiered, l1, l2):
        await l2.set("k1", "shared", ttl=3600)

        await tiered.get("k1")

        _, l1_remaining = await l1.get_with_ttl("k1")
        assert l1_remaining == pytest.approx(60)

    @pytest.mark.asyncio
    async def test_miss_in_both_tiers(self, tiered):
        assert await tiered.get_with_source("missing") == (None, "miss")

    @pytest.mark.asyncio
    async def test_set_writes_both_tiers(self, tiered, l1, l2):
        await tiered.set("k1", "apple", ttl=1800)

        _, l1_remaining = await l1.get_with_ttl("k1")
        _, l2_remaining = await l2.get_with_ttl("k1")
        assert l1_remaining == pytest.approx(60)
        assert l2_remaining == pytest.approx(1800)

    @pytest.mark.asyncio
    async def test_set_rejects_non_positive_ttl(self, tiered, l1):
        with pytest.raises(ValueError):
            await tiered.set("k1", "apple", ttl=0)

        assert await l1.get("k1") is None

    @pytest.mark.asyncio
    async def test_delete_removes_from_both(self, tiered, l1, l2):
        await tiered.set("k1", "apple", ttl=1800)

        assert await tiered.delete("k1") is True
        assert await l1.get("k1") is None
        assert await l2.get("k1") is None
        assert await tiered.delete("k1") is False

    @pytest.mark.asyncio
    async def test_l2_failure_propagates_after_l1_write(self, l1):
        failing_l2 = CacheTestFactory.failing_store()
        tiered = TieredCacheStore(l1, failing_l2, l1_ttl=60)

        with pytest.raises(StoreUnavailableError):
            await tiered.set("k1", "apple", ttl=1800)

        assert await l1.get("k1") == "apple"

    @pytest.mark.asyncio
    async def test_stats(self, tiered, l1, l2):
        await l1.set("a", 1, ttl=60)
        await l2.set("b", 2, ttl=60)

        await tiered.get("a")
        await tiered.get("b")
        await tiered.get("c")

        stats = tiered.stats()
        assert stats["l1_hits"] == 1
        assert stats["l2_hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == pytest.approx(0.667)

    @pytest.mark.asyncio
    async def test_health_degraded_when_l2_unhealthy(self, l1, mock_redis_client):
        from dataaccess.infrastructure.cache.redis_store import RedisCacheStore

        mock_redis_client.health_check.return_value = {"status": "unhealthy"}
        tiered = TieredCacheStore(l1, RedisCacheStore(mock_redis_client))

        health = await tiered.health_check()

        assert health["status"] == "degraded"
        assert health["l1"]["status"] == "healthy"

    def test_invalid_l1_ttl(self, l1, l2):
        with pytest.raises(ValueError):
            TieredCacheStore(l1, l2, l1_ttl=0)
