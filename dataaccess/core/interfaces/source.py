"""
Data Source Protocol

The authoritative origin of records, consulted on a cache miss.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataSource(Protocol):
    """
    Protocol for authoritative record sources.

    Implementations:
    - InMemoryDataSource: Dict-backed source (tests, fixtures, seeding)
    - LoaderDataSource: Adapts any sync or async ``loader(key)`` callable
    """

    async def fetch(self, key: str) -> Any:
        """
        Fetch the authoritative record for a key.

        Raises:
            NotFoundError: No record exists for the key
            SourceUnavailableError: The backing store cannot be reached
        """
        ...
