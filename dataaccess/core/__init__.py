"""
Core Module

Foundational components: configuration, logging, exceptions, and interfaces.
"""

from .exceptions import (
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    DataAccessError,
    InvalidKeyError,
    NotFoundError,
    SourceError,
    SourceUnavailableError,
    StoreUnavailableError,
)
from .interfaces import CacheEntry, CacheStore, DataService, DataSource
from .logging import get_logger, log_stage, setup_logging

__all__ = [
    # Exceptions
    "DataAccessError",
    "ConfigurationError",
    "InvalidKeyError",
    "CacheError",
    "StoreUnavailableError",
    "CacheSerializationError",
    "SourceError",
    "NotFoundError",
    "SourceUnavailableError",
    # Interfaces
    "CacheEntry",
    "CacheStore",
    "DataSource",
    "DataService",
    # Logging
    "get_logger",
    "log_stage",
    "setup_logging",
]
