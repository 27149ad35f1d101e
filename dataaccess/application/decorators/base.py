"""
Service Decorator Base

Every decorator wraps exactly one inner DataService, exposes it read-only
as ``inner`` and implements the same capability, so callers cannot tell a
decorated chain from a bare service.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any

from dataaccess.core.interfaces.service import DataService


class ServiceDecorator:
    """
    Base class for DataService decorators.

    Forwards both operations unchanged. Subclasses override the operations
    they add behaviour to and call ``self.inner`` to delegate.
    """

    def __init__(self, inner: DataService):
        if not isinstance(inner, DataService):
            raise TypeError(
                f"{type(self).__name__} must wrap a DataService, got {type(inner).__name__}"
            )
        self._inner = inner

    @property
    def inner(self) -> DataService:
        return self._inner

    async def get_data(self, key: str) -> Any:
        return await self._inner.get_data(key)

    async def invalidate(self, key: str) -> None:
        await self._inner.invalidate(key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"
