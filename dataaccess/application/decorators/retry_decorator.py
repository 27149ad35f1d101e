"""
Retry Decorator

Retries transient source failures with exponential backoff and jitter.

Architectural Decision: tenacity for retry logic
- Only SourceUnavailableError is retried by default; NotFoundError is an
  answer, not a failure, and is never retried
- The last error is re-raised unchanged once attempts are exhausted
- Opt-in (RETRY_ENABLED); the base service never retries on its own
"""

from functools import partial
from typing import Any

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from dataaccess.application.decorators.base import ServiceDecorator
from dataaccess.core.config.constants import MAX_RETRIES, RETRY_BASE_DELAY, RETRY_MAX_DELAY, Stage
from dataaccess.core.exceptions import SourceUnavailableError
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.logging.logger import get_logger, log_stage


class RetryDecorator(ServiceDecorator):
    """
    Retry wrapper for transient failures.

    Usage:
        service = RetryDecorator(base, max_attempts=3, base_delay=0.1, max_delay=2.0)

    Tests pass ``wait=wait_none()`` to retry without sleeping.
    """

    def __init__(
        self,
        inner: DataService,
        max_attempts: int = MAX_RETRIES,
        base_delay: float = RETRY_BASE_DELAY,
        max_delay: float = RETRY_MAX_DELAY,
        *,
        retry_on: tuple[type[Exception], ...] = (SourceUnavailableError,),
        wait: wait_base | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        super().__init__(inner)
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        self._max_attempts = max_attempts
        self._retry_on = retry_on
        if wait is None:
            wait = wait_exponential_jitter(
                initial=base_delay,
                max=max_delay,
                jitter=base_delay,  # Add jitter up to base_delay
            )
        self._wait = wait
        self._logger = logger or get_logger(__name__)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def get_data(self, key: str) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=self._wait,
            retry=retry_if_exception_type(self._retry_on),
            before_sleep=partial(self._log_retry, key),
            reraise=True,
        )

        async for attempt in retrying:
            with attempt:
                record = await self.inner.get_data(key)
        return record

    def _log_retry(self, key: str, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        log_stage(
            self._logger,
            Stage.RETRY,
            "Retrying after transient failure",
            level="warning",
            key=key,
            attempt=retry_state.attempt_number,
            max_attempts=self._max_attempts,
            sleep_s=round(retry_state.next_action.sleep, 3) if retry_state.next_action else None,
            error_type=type(error).__name__,
            error=str(error),
        )
