"""
Logging Decorator

Logs one line before delegating and one outcome line after, with the call
duration. Errors are logged and re-raised unchanged.

Trace per call:
    DEC.1 "Data requested"
    DEC.2 "Data served" | "Data not found" | "Data retrieval failed"
          | "Data request cancelled"
"""

import asyncio
import time
from typing import Any

import structlog

from dataaccess.application.decorators.base import ServiceDecorator
from dataaccess.core.config.constants import Stage
from dataaccess.core.exceptions import NotFoundError
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.logging.logger import get_logger, log_stage


class LoggingDecorator(ServiceDecorator):
    """
    Structured request/response logging around a DataService.

    Usage:
        service = LoggingDecorator(CacheAsideDataService(store, source))
        await service.get_data("k1")
    """

    def __init__(self, inner: DataService, logger: structlog.stdlib.BoundLogger | None = None):
        super().__init__(inner)
        self._logger = logger or get_logger(__name__)

    async def get_data(self, key: str) -> Any:
        log_stage(self._logger, Stage.REQUEST, "Data requested", key=key)
        start = time.perf_counter()

        try:
            record = await self.inner.get_data(key)
        except NotFoundError:
            log_stage(
                self._logger,
                Stage.RESPONSE,
                "Data not found",
                key=key,
                duration_ms=self._elapsed_ms(start),
            )
            raise
        except asyncio.CancelledError:
            log_stage(
                self._logger,
                Stage.RESPONSE,
                "Data request cancelled",
                level="warning",
                key=key,
                duration_ms=self._elapsed_ms(start),
            )
            raise
        except Exception as e:
            log_stage(
                self._logger,
                Stage.RESPONSE,
                "Data retrieval failed",
                level="error",
                key=key,
                duration_ms=self._elapsed_ms(start),
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        log_stage(
            self._logger,
            Stage.RESPONSE,
            "Data served",
            key=key,
            duration_ms=self._elapsed_ms(start),
        )
        return record

    async def invalidate(self, key: str) -> None:
        await self.inner.invalidate(key)
        log_stage(self._logger, Stage.CACHE_INVALIDATE, "Data invalidated", key=key)

    @staticmethod
    def _elapsed_ms(start: float) -> float:
        return round((time.perf_counter() - start) * 1000, 2)
