"""
Source Test Factory

Creates data sources with controllable behaviour for testing.
"""

import asyncio
from typing import Any
from unittest.mock import AsyncMock


class SourceTestFactory:
    """Factory for creating data source test objects."""

    @staticmethod
    def memory_source(records: dict[str, Any] | None = None):
        """Create a dict-backed source."""
        from dataaccess.infrastructure.sources.memory_source import InMemoryDataSource

        return InMemoryDataSource(records)

    @staticmethod
    def flaky_source(record: Any, failures: int) -> AsyncMock:
        """
        Create a source that raises SourceUnavailableError ``failures`` times,
        then returns ``record``.
        """
        from dataaccess.core.exceptions import SourceUnavailableError

        side_effect = [SourceUnavailableError("Backing store unreachable")] * failures + [record]
        source = AsyncMock()
        source.fetch = AsyncMock(side_effect=side_effect)
        return source

    @staticmethod
    def blocking_source(record: Any) -> tuple[AsyncMock, asyncio.Event, asyncio.Event]:
        """
        Create a source whose fetch waits until released.

        Returns:
            (source, started, release): ``started`` is set once a fetch is in
            flight; set ``release`` to let it return ``record``.
        """
        started = asyncio.Event()
        release = asyncio.Event()

        async def fetch(key):
            started.set()
            await release.wait()
            return record

        source = AsyncMock()
        source.fetch = AsyncMock(side_effect=fetch)
        return source, started, release
