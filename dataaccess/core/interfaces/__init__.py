"""
Core Interfaces Module

This module provides the capability protocols of the data-access layer,
enabling dependency injection, testability, and loose coupling.

Components:
-----------
- **cache.py**: CacheStore protocol and CacheEntry
- **source.py**: DataSource protocol
- **service.py**: DataService protocol

Architecture:
------------
Interfaces follow the Protocol pattern (PEP 544) for structural subtyping:
- Runtime type checking with @runtime_checkable
- Duck typing with type safety
- No inheritance required
- Easy mocking for tests

Usage:
------
```python
from dataaccess.core.interfaces import CacheStore, DataSource

async def lookup(store: CacheStore, source: DataSource, key: str):
    cached = await store.get(key)
    return cached if cached is not None else await source.fetch(key)
```

Author: System Architect
Date: 2026-10-19
"""

from dataaccess.core.interfaces.cache import CacheEntry, CacheStore
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.interfaces.source import DataSource

__all__ = [
    # Cache interfaces
    "CacheEntry",
    "CacheStore",
    # Source interfaces
    "DataSource",
    # Service interfaces
    "DataService",
]
