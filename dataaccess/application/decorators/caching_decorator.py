"""
Caching Decorator

A memo layer in front of any DataService, obeying the same cache-aside
rules as the base service: hit returns without delegating, miss delegates
and stores the result, absence is never memoised.

A memo store failure degrades to a miss (on read) or an unwritten memo
(on write) and is logged as a warning; it never fails the call.
"""

from typing import Any

import structlog

from dataaccess.application.decorators.base import ServiceDecorator
from dataaccess.application.services.data_service import validate_key
from dataaccess.core.config.constants import DEFAULT_MEMO_TTL, Stage
from dataaccess.core.exceptions import CacheError
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.logging.logger import get_logger, log_stage
from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore


class CachingDecorator(ServiceDecorator):
    """
    Memoising decorator.

    Trace:
    - hit: one "Memo hit" debug line
    - miss: "Memo miss", then "Memo stored" once the result is written

    Usage:
        service = CachingDecorator(base, ttl=60)
    """

    def __init__(
        self,
        inner: DataService,
        store: CacheStore | None = None,
        ttl: float = DEFAULT_MEMO_TTL,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        super().__init__(inner)
        if ttl <= 0:
            raise ValueError(f"ttl must be > 0, got {ttl}")

        self._store = store if store is not None else InMemoryCacheStore()
        self._ttl = ttl
        self._logger = logger or get_logger(__name__)

    @property
    def store(self) -> CacheStore:
        return self._store

    async def get_data(self, key: str) -> Any:
        validate_key(key)

        try:
            memo = await self._store.get(key)
        except CacheError as e:
            self._degraded("get", key, e)
            memo = None

        if memo is not None:
            log_stage(self._logger, Stage.MEMO, "Memo hit", level="debug", key=key)
            return memo

        log_stage(self._logger, Stage.MEMO, "Memo miss", level="debug", key=key)
        record = await self.inner.get_data(key)

        if record is not None:
            try:
                await self._store.set(key, record, self._ttl)
            except CacheError as e:
                self._degraded("set", key, e)
            else:
                log_stage(
                    self._logger, Stage.MEMO, "Memo stored", level="debug", key=key, ttl=self._ttl
                )

        return record

    async def invalidate(self, key: str) -> None:
        validate_key(key)

        try:
            await self._store.delete(key)
        except CacheError as e:
            self._degraded("delete", key, e)
        await self.inner.invalidate(key)

    def _degraded(self, operation: str, key: str, error: CacheError) -> None:
        log_stage(
            self._logger,
            Stage.STORE_DEGRADED,
            "Memo store unavailable, continuing without memo",
            level="warning",
            operation=operation,
            key=key,
            error_type=type(error).__name__,
            error=error.message,
        )
