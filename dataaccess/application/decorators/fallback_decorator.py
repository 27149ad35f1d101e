"""
Fallback Decorator

Turns selected errors into a default value. Swallowing errors is this
decorator's only purpose, so it only does it for the exception types it is
explicitly given.
"""

from typing import Any

import structlog

from dataaccess.application.decorators.base import ServiceDecorator
from dataaccess.core.config.constants import Stage
from dataaccess.core.exceptions import NotFoundError
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.logging.logger import get_logger, log_stage


class FallbackDecorator(ServiceDecorator):
    """
    Returns ``default`` when the inner service raises one of ``handles``.

    Usage:
        # Treat a missing profile as an empty one
        service = FallbackDecorator(base, default={}, handles=(NotFoundError,))
    """

    def __init__(
        self,
        inner: DataService,
        default: Any,
        handles: tuple[type[Exception], ...] = (NotFoundError,),
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        super().__init__(inner)
        if not handles or not all(
            isinstance(exc, type) and issubclass(exc, Exception) for exc in handles
        ):
            raise TypeError("handles must be a non-empty tuple of Exception subclasses")

        self._default = default
        self._handles = tuple(handles)
        self._logger = logger or get_logger(__name__)

    async def get_data(self, key: str) -> Any:
        try:
            return await self.inner.get_data(key)
        except self._handles as e:
            log_stage(
                self._logger,
                Stage.FALLBACK,
                "Returning fallback value",
                key=key,
                error_type=type(e).__name__,
            )
            return self._default
