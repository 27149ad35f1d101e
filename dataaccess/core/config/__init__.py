"""
Configuration Module

Centralized, type-safe configuration for the data-access layer.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Backend identifiers, stage identifiers and tuning defaults

Usage:
------
```python
from dataaccess.core.config import get_settings
from dataaccess.core.config.constants import CacheBackend

settings = get_settings()
if settings.cache.CACHE_BACKEND is CacheBackend.REMOTE:
    ...
```

Environment Variables:
---------------------
```bash
CACHE_BACKEND=distributed
CACHE_TTL=1800
REDIS_HOST=localhost
RETRY_ENABLED=true
LOG_LEVEL=INFO
LOG_FORMAT=json
```

Testing:
-------
```python
import os
from dataaccess.core.config import reload_settings

os.environ["CACHE_TTL"] = "5"
settings = reload_settings()
assert settings.cache.CACHE_TTL == 5
```
"""

from dataaccess.core.config.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_MEMO_TTL,
    L1_CACHE_DEFAULT_TTL,
    L1_CACHE_MAX_SIZE,
    MAX_RETRIES,
    REDIS_KEY_PREFIX,
    REDIS_KEY_SEPARATOR,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    CacheBackend,
    CacheTier,
    Stage,
)
from dataaccess.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "CacheBackend",
    "CacheTier",
    # Cache
    "DEFAULT_CACHE_TTL",
    "DEFAULT_MEMO_TTL",
    "L1_CACHE_MAX_SIZE",
    "L1_CACHE_DEFAULT_TTL",
    # Retry
    "MAX_RETRIES",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    # Redis keys
    "REDIS_KEY_PREFIX",
    "REDIS_KEY_SEPARATOR",
]
