"""
Unit Tests for RedisCacheStore

Tests key namespacing, orjson serialization and TTL conversion over a
mocked RedisClient.
"""

from datetime import date

import pytest

from dataaccess.application.services.data_service import CacheAsideDataService
from dataaccess.core.exceptions import (
    CacheSerializationError,
    ConfigurationError,
    StoreUnavailableError,
)
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.infrastructure.cache.redis_client import RedisClient
from dataaccess.infrastructure.cache.redis_store import RedisCacheStore
from tests.test_fixtures import CacheTestFactory, SourceTestFactory


@pytest.fixture
def redis_store(mock_redis_client):
    return RedisCacheStore(mock_redis_client, key_prefix="test")


@pytest.mark.unit
class TestRedisCacheStore:
    """Test suite for RedisCacheStore."""

    def test_implements_cache_store(self, redis_store):
        assert isinstance(redis_store, CacheStore)

    def test_make_key(self, redis_store):
        assert redis_store.make_key("order:42") == "test:order:42"

    def test_make_key_without_prefix(self, mock_redis_client):
        store = RedisCacheStore(mock_redis_client, key_prefix="")
        assert store.make_key("k1") == "k1"

    @pytest.mark.asyncio
    async def test_set_serializes_and_converts_ttl(self, redis_store, mock_redis_client):
        await redis_store.set("k1", {"name": "apple", "qty": 3}, ttl=1800)

        mock_redis_client.set.assert_awaited_once_with(
            "test:k1", b'{"name":"apple","qty":3}', ttl_ms=1_800_000
        )

    @pytest.mark.asyncio
    async def test_sub_millisecond_ttl_rounds_up(self, redis_store, mock_redis_client):
        await redis_store.set("k1", "apple", ttl=0.0001)

        assert mock_redis_client.set.call_args.kwargs["ttl_ms"] == 1

    @pytest.mark.asyncio
    async def test_non_positive_ttl_rejected(self, redis_store, mock_redis_client):
        with pytest.raises(ValueError):
            await redis_store.set("k1", "apple", ttl=0)

        mock_redis_client.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_deserializes(self, redis_store, mock_redis_client):
        mock_redis_client.get.return_value = '{"name":"apple"}'

        assert await redis_store.get("k1") == {"name": "apple"}
        mock_redis_client.get.assert_awaited_once_with("test:k1")

    @pytest.mark.asyncio
    async def test_get_miss(self, redis_store):
        assert await redis_store.get("missing") is None

    @pytest.mark.asyncio
    async def test_get_with_ttl(self, redis_store, mock_redis_client):
        mock_redis_client.get_with_pttl.return_value = ('"apple"', 2500)

        assert await redis_store.get_with_ttl("k1") == ("apple", 2.5)

    @pytest.mark.asyncio
    async def test_get_with_ttl_no_expiry(self, redis_store, mock_redis_client):
        mock_redis_client.get_with_pttl.return_value = ('"apple"', -1)

        assert await redis_store.get_with_ttl("k1") == ("apple", None)

    @pytest.mark.asyncio
    async def test_get_with_ttl_miss(self, redis_store):
        assert await redis_store.get_with_ttl("missing") == (None, None)

    @pytest.mark.asyncio
    async def test_delete(self, redis_store, mock_redis_client):
        mock_redis_client.delete.return_value = 1
        assert await redis_store.delete("k1") is True

        mock_redis_client.delete.return_value = 0
        assert await redis_store.delete("k1") is False

    @pytest.mark.asyncio
    async def test_clear_scans_prefix(self, redis_store, mock_redis_client):
        mock_redis_client.scan_delete.return_value = 7

        assert await redis_store.clear() == 7
        mock_redis_client.scan_delete.assert_awaited_once_with("test:*")

    @pytest.mark.asyncio
    async def test_unserializable_record(self, redis_store, mock_redis_client):
        with pytest.raises(CacheSerializationError) as exc_info:
            await redis_store.set("k1", object(), ttl=60)

        assert exc_info.value.key == "k1"
        mock_redis_client.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_corrupt_payload(self, redis_store, mock_redis_client):
        mock_redis_client.get.return_value = "not json"

        with pytest.raises(CacheSerializationError):
            await redis_store.get("k1")

    @pytest.mark.asyncio
    async def test_unavailable_propagates(self, redis_store, mock_redis_client):
        mock_redis_client.get.side_effect = StoreUnavailableError("down")

        with pytest.raises(StoreUnavailableError):
            await redis_store.get("k1")

    @pytest.mark.asyncio
    async def test_health_check_includes_prefix(self, redis_store):
        health = await redis_store.health_check()

        assert health["status"] == "healthy"
        assert health["key_prefix"] == "test"


@pytest.mark.unit
class TestRedisCacheStoreRecordFidelity:
    """Records that would come back altered are never cached."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "record",
        [
            ("a", "b"),
            {"id": 7, "at": date(2024, 1, 2)},
            {"id": 7, "tags": ("a", "b")},
        ],
    )
    async def test_lossy_record_rejected(self, redis_store, mock_redis_client, record):
        with pytest.raises(CacheSerializationError) as exc_info:
            await redis_store.set("k1", record, ttl=60)

        assert exc_info.value.key == "k1"
        assert "suggestion" in exc_info.value.details
        mock_redis_client.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_json_native_record_accepted(self, redis_store, mock_redis_client):
        record = {"id": 7, "tags": ["a", "b"], "price": 9.5, "active": True, "note": None}

        await redis_store.set("k1", record, ttl=60)

        mock_redis_client.set.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_hit_returns_same_record_as_miss(self, test_settings):
        redis_mock = CacheTestFactory.mock_redis()
        store = RedisCacheStore(RedisClient(test_settings, client=redis_mock), key_prefix="test")
        record = {"id": 7, "tags": ("a", "b"), "at": date(2024, 1, 2)}
        source = SourceTestFactory.memory_source({"k1": record})
        service = CacheAsideDataService(store, source)

        first = await service.get_data("k1")
        second = await service.get_data("k1")

        assert first == second == record
        assert redis_mock.data == {}


@pytest.mark.unit
class TestRedisCacheStoreClear:
    """clear() stays inside the store's namespace."""

    @pytest.mark.asyncio
    async def test_clear_without_prefix_refused(self, test_settings):
        redis_mock = CacheTestFactory.mock_redis({"other-app:session": "1", "k1": "2"})
        store = RedisCacheStore(RedisClient(test_settings, client=redis_mock), key_prefix="")

        with pytest.raises(ConfigurationError):
            await store.clear()

        assert redis_mock.data == {"other-app:session": "1", "k1": "2"}

    @pytest.mark.asyncio
    async def test_clear_escapes_glob_characters(self, mock_redis_client):
        store = RedisCacheStore(mock_redis_client, key_prefix="app[1]*?")

        await store.clear()

        mock_redis_client.scan_delete.assert_awaited_once_with(r"app\[1\]\*\?:*")
