"""
Base Exception Class

This module contains the base exception class that all other exceptions
inherit from, plus the configuration and key validation errors that do not
belong to a storage concern. Specialized exceptions live in their own themed
modules.

Author: System Architect
Date: 2026-10-19
"""

from typing import Any


class DataAccessError(Exception):
    """
    Base exception for all data-access errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling
    - Key correlation
    - Structured error logging
    - Rich context for debugging

    Attributes:
        message: Error message
        key: Record key the failing operation was about (if available)
        details: Additional error details (dict)

    Example:
        raise SourceUnavailableError(
            "Orders database unreachable",
            key="order:42",
            details={"backend": "postgres", "attempt": 3},
        )
    """

    def __init__(
        self, message: str, key: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.key = key
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, key, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "key": self.key,
            "details": self.details,
        }

    def with_suggestion(self, suggestion: str) -> "DataAccessError":
        """
        Add a suggestion to help users fix the error.

        Args:
            suggestion: Helpful suggestion for resolving the error

        Returns:
            Self (for method chaining)
        """
        self.details["suggestion"] = suggestion
        return self

    def with_context(self, **context) -> "DataAccessError":
        """
        Add additional context to the error details.

        Args:
            **context: Key-value pairs to add to details

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        """
        Return detailed string representation for debugging.

        Example:
            >>> error = NotFoundError("No record", key="k1", details={"source": "memory"})
            >>> repr(error)
            "NotFoundError(message='No record', key='k1', details={'source': 'memory'})"
        """
        details_str = f", details={self.details}" if self.details else ""
        key_str = f", key='{self.key}'" if self.key else ""
        return f"{self.__class__.__name__}(message='{self.message}'{key_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        key: str | None = None,
        **details
    ) -> "DataAccessError":
        """
        Create an error of this class from another exception.

        Useful for wrapping third-party exceptions with additional context.

        Args:
            exc: Original exception to wrap
            message: Custom message (defaults to original exception message)
            key: Record key for correlation
            **details: Additional context to include

        Returns:
            New instance with wrapped exception details

        Example:
            >>> try:
            ...     await redis.get("k1")
            ... except redis.ConnectionError as e:
            ...     raise StoreUnavailableError.from_exception(e, key="k1", host="localhost")
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, key=key, details=error_details)


class ConfigurationError(DataAccessError):
    """Raised when configuration or chain composition is invalid."""
    pass


class InvalidKeyError(DataAccessError):
    """Raised when a record key is not a non-empty string."""
    pass
