"""
Exception Module

Structured exception hierarchy for the data-access layer.

Module Structure:
-----------------
- **base.py**: DataAccessError base class + ConfigurationError, InvalidKeyError
- **cache.py**: Cache store exceptions (StoreUnavailableError, ...)
- **source.py**: Data source exceptions (NotFoundError, SourceUnavailableError)

Hierarchy:
----------
```
DataAccessError
├── ConfigurationError
├── InvalidKeyError
├── CacheError
│   ├── StoreUnavailableError
│   └── CacheSerializationError
└── SourceError
    ├── NotFoundError
    └── SourceUnavailableError
```

Cancellation is not part of this hierarchy: a cancelled call surfaces
``asyncio.CancelledError`` unchanged.

Usage:
------
```python
from dataaccess.core.exceptions import NotFoundError, StoreUnavailableError
```
"""

from dataaccess.core.exceptions.base import (
    ConfigurationError,
    DataAccessError,
    InvalidKeyError,
)
from dataaccess.core.exceptions.cache import (
    CacheError,
    CacheSerializationError,
    StoreUnavailableError,
)
from dataaccess.core.exceptions.source import (
    NotFoundError,
    SourceError,
    SourceUnavailableError,
)

__all__ = [
    # Base
    "DataAccessError",
    "ConfigurationError",
    "InvalidKeyError",
    # Cache
    "CacheError",
    "StoreUnavailableError",
    "CacheSerializationError",
    # Source
    "SourceError",
    "NotFoundError",
    "SourceUnavailableError",
]
