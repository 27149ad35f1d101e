"""Authoritative data sources."""

from .loader_source import LoaderDataSource
from .memory_source import InMemoryDataSource

__all__ = ["InMemoryDataSource", "LoaderDataSource"]
