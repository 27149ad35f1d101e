"""
Cache-Related Exceptions

All exceptions related to cache store operations (in-memory, Redis, tiered).

Author: System Architect
Date: 2026-10-19
"""

from dataaccess.core.exceptions.base import DataAccessError


class CacheError(DataAccessError):
    """Base exception for cache-related errors."""
    pass


class StoreUnavailableError(CacheError):
    """
    Raised when the cache backend cannot be reached.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Operation timeout

    The cache-aside read path treats this as a miss.
    """
    pass


class CacheSerializationError(CacheError):
    """
    Raised when a record cannot be encoded for, or decoded from, the store.

    Common causes:
    - Record type not supported by the serializer
    - Payload written by an incompatible serializer
    """
    pass
