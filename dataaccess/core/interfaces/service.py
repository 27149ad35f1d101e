"""
Data Service Protocol

The capability exposed to callers. The cache-aside service and every
decorator implement it with identical signatures and error shapes, so a
decorator chain is indistinguishable from a bare service.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataService(Protocol):
    """Protocol for record retrieval with cache-aside semantics."""

    async def get_data(self, key: str) -> Any:
        """
        Return the record for a key.

        Raises:
            InvalidKeyError: Key is not a non-empty string
            NotFoundError: No record exists for the key
            SourceUnavailableError: The source cannot be reached
        """
        ...

    async def invalidate(self, key: str) -> None:
        """Drop any cached copy of the record for a key."""
        ...
