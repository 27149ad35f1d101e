"""
Metrics Decorator

In-process counters for a DataService: requests, outcomes and latency.
"""

import asyncio
import time
from collections import Counter
from typing import Any

from dataaccess.application.decorators.base import ServiceDecorator
from dataaccess.core.exceptions import NotFoundError
from dataaccess.core.interfaces.service import DataService


class MetricsDecorator(ServiceDecorator):
    """
    Counts calls and their outcomes.

    Metrics Tracked:
    - requests, successes, not_found, failures, cancellations
    - errors by exception type
    - cumulative and average latency (ms)
    """

    def __init__(self, inner: DataService):
        super().__init__(inner)
        self.reset()

    def reset(self) -> None:
        self._requests = 0
        self._successes = 0
        self._not_found = 0
        self._failures = 0
        self._cancellations = 0
        self._invalidations = 0
        self._errors_by_type: Counter[str] = Counter()
        self._total_latency_ms = 0.0

    async def get_data(self, key: str) -> Any:
        self._requests += 1
        start = time.perf_counter()
        try:
            record = await self.inner.get_data(key)
        except NotFoundError:
            self._not_found += 1
            raise
        except asyncio.CancelledError:
            self._cancellations += 1
            raise
        except Exception as e:
            self._failures += 1
            self._errors_by_type[type(e).__name__] += 1
            raise
        finally:
            self._total_latency_ms += (time.perf_counter() - start) * 1000

        self._successes += 1
        return record

    async def invalidate(self, key: str) -> None:
        self._invalidations += 1
        await self.inner.invalidate(key)

    def stats(self) -> dict[str, Any]:
        """
        Get call statistics.

        Returns:
            Dict with outcome counts, error breakdown and latency
        """
        completed = self._successes + self._not_found + self._failures + self._cancellations
        return {
            "requests": self._requests,
            "successes": self._successes,
            "not_found": self._not_found,
            "failures": self._failures,
            "cancellations": self._cancellations,
            "invalidations": self._invalidations,
            "errors_by_type": dict(self._errors_by_type),
            "total_latency_ms": round(self._total_latency_ms, 2),
            "avg_latency_ms": round(self._total_latency_ms / completed, 2) if completed else 0.0,
        }
