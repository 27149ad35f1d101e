"""
Data Source Exceptions

All exceptions raised by authoritative data sources.

Author: System Architect
Date: 2026-10-19
"""

from dataaccess.core.exceptions.base import DataAccessError


class SourceError(DataAccessError):
    """Base exception for data source errors."""
    pass


class NotFoundError(SourceError):
    """
    Raised when no authoritative record exists for a key.

    Recoverable by the caller (e.g. treat as an empty result). Never retried
    and never cached.
    """
    pass


class SourceUnavailableError(SourceError):
    """
    Raised when the backing store cannot be reached.

    Transient and distinct from NotFoundError. The caller decides on a retry
    policy (see RetryDecorator).
    """
    pass
