"""
Loader Data Source

Adapts any ``loader(key)`` callable, sync or async, into a DataSource.
This is how an application plugs its repository, ORM query or HTTP call
into the cache-aside service without writing a class.

Author: System Architect
Date: 2026-10-19
"""

import inspect
from collections.abc import Callable
from typing import Any

from dataaccess.core.exceptions import NotFoundError, SourceError, SourceUnavailableError

TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError, OSError)


class LoaderDataSource:
    """
    DataSource over a loader callable.

    Result mapping:
    - ``None`` result -> NotFoundError
    - ConnectionError / TimeoutError / OSError -> SourceUnavailableError
    - SourceError subclasses raised by the loader pass through unchanged
    - Anything else propagates unchanged

    Usage:
        async def load_order(key):
            return await db.fetch_one("SELECT ... WHERE id = $1", key)

        source = LoaderDataSource(load_order, name="orders")
    """

    def __init__(
        self,
        loader: Callable[[str], Any],
        name: str | None = None,
        transient_errors: tuple[type[BaseException], ...] = TRANSIENT_ERRORS,
    ):
        """
        Args:
            loader: ``loader(key)`` returning the record (or an awaitable of it)
            name: Source name for error details (defaults to the loader's name)
            transient_errors: Exception types mapped to SourceUnavailableError
        """
        self._loader = loader
        self.name = name or getattr(loader, "__name__", type(loader).__name__)
        self._transient_errors = transient_errors

    async def fetch(self, key: str) -> Any:
        try:
            if inspect.iscoroutinefunction(self._loader):
                record = await self._loader(key)
            else:
                record = self._loader(key)
                if inspect.isawaitable(record):
                    record = await record
        except SourceError:
            raise
        except self._transient_errors as e:
            raise SourceUnavailableError.from_exception(
                e, message=f"Source '{self.name}' unavailable: {e}", key=key, source=self.name
            ) from e

        if record is None:
            raise NotFoundError(
                f"No record for key '{key}'", key=key, details={"source": self.name}
            )
        return record
