"""
System Constants and Enumerations

This module defines the constants and enumerations shared across the
data-access layer: cache backend identifiers, stage identifiers used in
structured logs, and default tuning values.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for configuration values
- Easy to update and track changes

Author: System Architect
Date: 2026-10-19
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Data retrieval stages for structured logging.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}
    - SEQUENCE: Alphabetic prefix plus order (SVC.0, DEC.1, S.1)
    - DESCRIPTIVE_NAME: Clear, uppercase description with underscores

    Examples:
        log_stage(logger, Stage.REQUEST, "Data requested", key="k1")
    """

    # Service lifecycle
    SERVICE_BUILD = "SVC.0_BUILD"
    CACHE_INVALIDATE = "SVC.4_CACHE_INVALIDATE"

    # Decorator chain (alphabetic prefixes)
    REQUEST = "DEC.1_REQUEST"
    RESPONSE = "DEC.2_RESPONSE"
    MEMO = "DEC.3_MEMO"
    RETRY = "DEC.4_RETRY"
    FALLBACK = "DEC.5_FALLBACK"

    # Infrastructure
    STORE_DEGRADED = "S.1_STORE_DEGRADED"
    REDIS = "REDIS_OPERATIONS"


# ============================================================================
# Cache Backends
# ============================================================================


class CacheBackend(str, Enum):
    """
    Supported cache store backends.

    IN_MEMORY: Process-local TTL + LRU store (fastest, not shared)
    REMOTE: Redis store shared by every instance
    DISTRIBUTED: Local L1 in front of a shared Redis L2
    """

    IN_MEMORY = "in-memory"
    REMOTE = "remote"
    DISTRIBUTED = "distributed"


class CacheTier(str, Enum):
    """
    Tiers of the distributed backend.

    L1: In-memory LRU cache (fastest, < 1ms)
    L2: Redis shared cache (fast, 1-5ms)
    """

    L1 = "l1"
    L2 = "l2"


# ============================================================================
# Cache Defaults
# ============================================================================

DEFAULT_CACHE_TTL = 30 * 60  # Cache-aside TTL (30 minutes)
L1_CACHE_MAX_SIZE = 1000  # Maximum entries in the in-memory store
L1_CACHE_DEFAULT_TTL = 60  # Ceiling for L1 entries in the distributed backend
DEFAULT_MEMO_TTL = 5 * 60  # Caching decorator memo TTL (5 minutes)

# ============================================================================
# Retry Defaults
# ============================================================================

MAX_RETRIES = 3  # Maximum attempts (including the first call)
RETRY_BASE_DELAY = 0.1  # Base delay for exponential backoff (seconds)
RETRY_MAX_DELAY = 2.0  # Maximum delay for exponential backoff (seconds)

# ============================================================================
# Redis Key Prefixes
# ============================================================================

REDIS_KEY_PREFIX = "dataaccess"
REDIS_KEY_SEPARATOR = ":"
