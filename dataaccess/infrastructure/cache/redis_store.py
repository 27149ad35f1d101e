#!/usr/bin/env python3
"""
Redis Cache Store

Shared cache store backing the ``remote`` backend and the L2 tier of the
``distributed`` backend.

Keys are namespaced as ``{prefix}:{key}``; records are serialized with
orjson and written with ``SET ... PX`` so expiry is enforced by Redis.

Author: System Architect
Date: 2026-10-19
"""

import math
import re
from collections.abc import Callable
from typing import Any

import orjson

from dataaccess.core.config.constants import REDIS_KEY_PREFIX, REDIS_KEY_SEPARATOR
from dataaccess.core.exceptions import CacheSerializationError, ConfigurationError
from dataaccess.infrastructure.cache.redis_client import RedisClient

Serializer = Callable[[Any], bytes | str]
Deserializer = Callable[[bytes | str], Any]


class RedisCacheStore:
    """
    CacheStore over a RedisClient.

    Responsibility: Key namespacing, record (de)serialization, TTL
    conversion. Connectivity errors come from RedisClient as
    StoreUnavailableError; encoding errors surface as CacheSerializationError.

    Records must survive a serializer round-trip unchanged. With the default
    orjson pair that means JSON-native values: tuples would come back as
    lists and dates as ISO strings, so such records are rejected on ``set``
    with CacheSerializationError and never cached in altered form.

    Usage:
        store = RedisCacheStore(RedisClient())
        await store.set("order:42", {"id": 42}, ttl=1800)
        record = await store.get("order:42")
    """

    def __init__(
        self,
        client: RedisClient,
        key_prefix: str = REDIS_KEY_PREFIX,
        serializer: Serializer = orjson.dumps,
        deserializer: Deserializer = orjson.loads,
    ):
        """
        Initialize Redis store.

        Args:
            client: Redis client instance
            key_prefix: Namespace prepended to every key
            serializer: Record -> bytes/str (default orjson.dumps)
            deserializer: bytes/str -> record (default orjson.loads)
        """
        self._client = client
        self._prefix = key_prefix
        self._serialize = serializer
        self._deserialize = deserializer

    def make_key(self, key: str) -> str:
        """Namespace a record key (``order:42`` -> ``dataaccess:order:42``)."""
        if not self._prefix:
            return key
        return f"{self._prefix}{REDIS_KEY_SEPARATOR}{key}"

    def _encode(self, key: str, value: Any) -> bytes | str:
        try:
            payload = self._serialize(value)
            decoded = self._deserialize(payload)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError.from_exception(
                e,
                message=f"Cannot serialize record for cache: {e}",
                key=key,
                value_type=type(value).__name__,
            )

        # A hit must return the same record the miss returned
        if decoded != value:
            raise CacheSerializationError(
                "Record does not survive serialization unchanged",
                key=key,
                details={"value_type": type(value).__name__},
            ).with_suggestion(
                "Store JSON-native records (dict, list, str, int, float, bool) "
                "or pass a serializer/deserializer pair that round-trips them"
            )
        return payload

    def _decode(self, key: str, payload: bytes | str) -> Any:
        try:
            return self._deserialize(payload)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError.from_exception(
                e, message=f"Cannot deserialize cached record: {e}", key=key
            )

    async def get(self, key: str) -> Any | None:
        """
        Get value from Redis. Returns None if not found.

        Raises:
            StoreUnavailableError: Redis unreachable
            CacheSerializationError: Payload cannot be decoded
        """
        payload = await self._client.get(self.make_key(key))
        if payload is None:
            return None
        return self._decode(key, payload)

    async def get_with_ttl(self, key: str) -> tuple[Any | None, float | None]:
        """
        Get value and remaining TTL in one round-trip.

        Returns:
            (value, remaining_seconds). remaining_seconds is None when the
            key has no expiry; (None, None) on a miss.
        """
        payload, pttl = await self._client.get_with_pttl(self.make_key(key))
        if payload is None:
            return None, None
        remaining = pttl / 1000 if pttl >= 0 else None
        return self._decode(key, payload), remaining

    async def set(self, key: str, value: Any, ttl: float) -> None:
        """
        Set value in Redis with TTL.

        Sub-millisecond TTLs round up to 1ms so the entry is still written
        with an expiry.

        Raises:
            ValueError: If ttl <= 0
            StoreUnavailableError: Redis unreachable
            CacheSerializationError: Record cannot be encoded
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0, got {ttl}")

        payload = self._encode(key, value)
        await self._client.set(self.make_key(key), payload, ttl_ms=max(1, math.ceil(ttl * 1000)))

    async def delete(self, key: str) -> bool:
        """Delete value from Redis. Returns True if a key was removed."""
        return await self._client.delete(self.make_key(key)) > 0

    async def clear(self) -> int:
        """
        Delete every key under this store's prefix.

        Glob metacharacters in the prefix are escaped so the scan only
        matches this namespace.

        Returns:
            Number of keys deleted

        Raises:
            ConfigurationError: The store has no key prefix
        """
        if not self._prefix:
            raise ConfigurationError(
                "Refusing to clear a Redis store without a key prefix"
            ).with_suggestion("Set CACHE_KEY_PREFIX to scope the keys this store owns")

        escaped = re.sub(r"([\\*?\[\]])", r"\\\1", self._prefix)
        return await self._client.scan_delete(f"{escaped}{REDIS_KEY_SEPARATOR}*")

    async def health_check(self) -> dict[str, Any]:
        """Check Redis health."""
        health = await self._client.health_check()
        return {**health, "key_prefix": self._prefix}
