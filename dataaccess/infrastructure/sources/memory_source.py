"""
In-Memory Data Source

Dict-backed authoritative source. Used for seeding, fixtures and local
development; ``set_available(False)`` simulates an outage.

Author: System Architect
Date: 2026-10-19
"""

from collections import Counter
from typing import Any

from dataaccess.core.exceptions import NotFoundError, SourceUnavailableError


class InMemoryDataSource:
    """
    DataSource backed by a dict.

    Usage:
        source = InMemoryDataSource({"k1": "apple"})
        await source.fetch("k1")  # "apple"
        source.fetch_count["k1"]  # 1
    """

    name = "memory"

    def __init__(self, records: dict[str, Any] | None = None):
        self._records: dict[str, Any] = dict(records or {})
        self._available = True
        self.fetch_count: Counter[str] = Counter()

    async def fetch(self, key: str) -> Any:
        """
        Fetch the record for a key.

        Raises:
            SourceUnavailableError: Source marked unavailable
            NotFoundError: Key not present
        """
        self.fetch_count[key] += 1

        if not self._available:
            raise SourceUnavailableError(
                "In-memory source is unavailable", key=key, details={"source": self.name}
            )

        try:
            return self._records[key]
        except KeyError:
            raise NotFoundError(
                f"No record for key '{key}'", key=key, details={"source": self.name}
            ) from None

    def put(self, key: str, record: Any) -> None:
        self._records[key] = record

    def remove(self, key: str) -> bool:
        if key in self._records:
            del self._records[key]
            return True
        return False

    def set_available(self, available: bool) -> None:
        self._available = available

    @property
    def total_fetches(self) -> int:
        return sum(self.fetch_count.values())
