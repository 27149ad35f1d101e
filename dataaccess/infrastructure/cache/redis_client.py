"""
Redis Client with Connection Pooling

Architecture:
    RedisClient (Public API)
        ├── ConnectionManager (Connection lifecycle)
        ├── OperationExecutor (Command execution with error mapping)
        └── HealthMonitor (Health checks and pool metrics)

Every redis-py error raised by an operation surfaces as
StoreUnavailableError, so callers only ever handle the data-access
exception hierarchy.

Performance Targets:
    - Connection reuse: no per-request connect cost
    - GET + PTTL in a single round-trip for tier warming
    - Health checks: early failure detection

Author: System Architect
Date: 2026-10-19
"""

import asyncio
import time
from typing import Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

from dataaccess.core.config.constants import Stage
from dataaccess.core.config.settings import Settings, get_settings
from dataaccess.core.exceptions import StoreUnavailableError
from dataaccess.core.logging.logger import get_logger, log_stage

logger = get_logger(__name__)

SCAN_BATCH_SIZE = 500


# =============================================================================
# LAYER 1: CONNECTION MANAGEMENT
# Handles connection lifecycle and pooling
# =============================================================================


class ConnectionManager:
    """
    Manages Redis connection lifecycle and pooling.

    Responsibility: Connection establishment, pooling, and cleanup.

    Pool Configuration (from RedisSettings):
    - Max connections: REDIS_MAX_CONNECTIONS
    - Socket timeout: REDIS_SOCKET_TIMEOUT
    - Health check interval: REDIS_HEALTH_CHECK_INTERVAL
    - Retry on timeout: Enabled
    """

    def __init__(self, settings: Settings, client: redis.Redis | None = None):
        """
        Initialize connection manager.

        Args:
            settings: Application settings
            client: Pre-built Redis client (skips pool creation)
        """
        self._settings = settings
        self._pool: ConnectionPool | None = None
        self._client: redis.Redis | None = client
        self._is_connected = False
        self._lock = asyncio.Lock()

    async def connect(self) -> redis.Redis:
        """
        Establish connection to Redis with connection pooling.

        STAGE-REDIS.2: Connection establishment

        Idempotent: concurrent callers share a single connection attempt.

        Returns:
            redis.Redis: Connected Redis client

        Raises:
            StoreUnavailableError: If connection fails
        """
        async with self._lock:
            if self._is_connected and self._client:
                return self._client

            redis_settings = self._settings.redis
            try:
                if self._client is None:
                    self._pool = ConnectionPool(
                        host=redis_settings.REDIS_HOST,
                        port=redis_settings.REDIS_PORT,
                        db=redis_settings.REDIS_DB,
                        password=redis_settings.REDIS_PASSWORD,
                        max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                        socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                        socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                        retry_on_timeout=True,
                        health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
                        decode_responses=True,
                    )
                    self._client = redis.Redis(connection_pool=self._pool)

                await self._client.ping()

            except (RedisError, OSError) as e:
                log_stage(
                    logger,
                    Stage.REDIS,
                    "Failed to connect to Redis",
                    level="error",
                    host=redis_settings.REDIS_HOST,
                    port=redis_settings.REDIS_PORT,
                    error=str(e),
                )
                raise StoreUnavailableError.from_exception(
                    e,
                    message=f"Failed to connect to Redis: {e}",
                    host=redis_settings.REDIS_HOST,
                    port=redis_settings.REDIS_PORT,
                ).with_suggestion("Check REDIS_HOST / REDIS_PORT and that Redis is running")

            self._is_connected = True

            log_stage(
                logger,
                Stage.REDIS,
                "Redis connected successfully",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            )
            return self._client

    async def disconnect(self) -> None:
        """
        Close Redis connection and pool.

        STAGE-REDIS.3: Connection cleanup
        """
        if self._client:
            await self._client.aclose()

        if self._pool:
            await self._pool.disconnect()

        self._is_connected = False
        log_stage(logger, Stage.REDIS, "Redis disconnected")

    async def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            True if healthy, False otherwise
        """
        if not (self._client and self._is_connected):
            return False
        try:
            await self._client.ping()
            return True
        except (RedisError, OSError):
            return False

    def get_client(self) -> redis.Redis | None:
        """Get the Redis client instance."""
        return self._client

    def get_pool(self) -> ConnectionPool | None:
        """Get the connection pool instance."""
        return self._pool

    def is_connected(self) -> bool:
        """Check if connected to Redis."""
        return self._is_connected


# =============================================================================
# LAYER 2: OPERATION EXECUTOR
# Executes Redis commands with consistent error mapping
# =============================================================================


class OperationExecutor:
    """
    Executes Redis operations with consistent error handling.

    Responsibility: Command execution and RedisError -> StoreUnavailableError
    mapping. Operations do not log; the degrade decision belongs to the caller.
    """

    def __init__(self, redis_client: redis.Redis):
        """
        Initialize operation executor.

        Args:
            redis_client: Redis client instance
        """
        self._redis = redis_client

    async def get(self, key: str) -> str | None:
        """
        Get value from Redis.

        STAGE-REDIS.GET: Redis GET operation
        """
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis GET failed: {e}", key=key, operation="GET"
            )

    async def set(self, key: str, value: str | bytes, ttl_ms: int) -> bool:
        """
        Set value in Redis with a millisecond TTL.

        STAGE-REDIS.SET: Redis SET ... PX operation

        Args:
            key: Redis key
            value: Serialized value
            ttl_ms: Time-to-live in milliseconds

        Returns:
            True if set successfully
        """
        try:
            result = await self._redis.set(key, value, px=ttl_ms)
            return bool(result)
        except RedisError as e:
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis SET failed: {e}", key=key, operation="SET"
            )

    async def delete(self, *keys: str) -> int:
        """
        Delete keys from Redis.

        STAGE-REDIS.DEL: Redis DELETE operation

        Returns:
            Number of keys deleted
        """
        try:
            return await self._redis.delete(*keys)
        except RedisError as e:
            raise StoreUnavailableError.from_exception(
                e,
                message=f"Redis DELETE failed: {e}",
                key=keys[0] if len(keys) == 1 else None,
                operation="DEL",
                keys=list(keys),
            )

    async def get_with_pttl(self, key: str) -> tuple[str | None, int]:
        """
        Get a value and its remaining TTL in one round-trip.

        STAGE-REDIS.PIPE: GET + PTTL pipeline

        Returns:
            (value, pttl_ms) where pttl_ms is -2 if the key does not exist
            and -1 if it has no expiry
        """
        try:
            pipe = self._redis.pipeline(transaction=False)
            pipe.get(key)
            pipe.pttl(key)
            value, pttl = await pipe.execute()
            return value, pttl
        except RedisError as e:
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis GET+PTTL failed: {e}", key=key, operation="GET+PTTL"
            )

    async def scan_delete(self, pattern: str) -> int:
        """
        Delete every key matching a glob pattern.

        Uses SCAN (not KEYS) so large keyspaces are walked incrementally.

        Returns:
            Number of keys deleted
        """
        deleted = 0
        batch: list[str] = []
        try:
            async for key in self._redis.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= SCAN_BATCH_SIZE:
                    deleted += await self._redis.delete(*batch)
                    batch = []
            if batch:
                deleted += await self._redis.delete(*batch)
        except RedisError as e:
            raise StoreUnavailableError.from_exception(
                e, message=f"Redis SCAN delete failed: {e}", operation="SCAN", pattern=pattern
            )
        return deleted


# =============================================================================
# LAYER 3: HEALTH MONITORING
# Health checks and connection pool metrics
# =============================================================================


class HealthMonitor:
    """
    Monitors Redis health and connection pool metrics.

    Metrics Tracked:
    - Connection status
    - Ping latency
    - Pool size and utilization
    - Pool exhaustion warnings (>80% utilized)
    """

    def __init__(self, connection_manager: ConnectionManager, settings: Settings):
        """
        Initialize health monitor.

        Args:
            connection_manager: Connection manager instance
            settings: Application settings
        """
        self._conn_mgr = connection_manager
        self._settings = settings

    async def health_check(self) -> dict[str, Any]:
        """
        Perform health check on Redis connection.

        STAGE-REDIS.HEALTH: Redis health check

        Returns:
            Dict with health status and metrics
        """
        health = {
            "status": "healthy",
            "backend": "redis",
            "connected": self._conn_mgr.is_connected(),
            "host": self._settings.redis.REDIS_HOST,
            "port": self._settings.redis.REDIS_PORT,
            "pool_size": 0,
            "pool_available": 0,
            "pool_utilization_pct": 0,
            "pool_warning": False,
            "ping_latency_ms": None,
        }

        client = self._conn_mgr.get_client()
        if not client:
            health["status"] = "unhealthy"
            health["error"] = "Client not initialized"
            return health

        try:
            start = time.perf_counter()
            await client.ping()
            health["ping_latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        except (RedisError, OSError) as e:
            health["status"] = "unhealthy"
            health["error"] = str(e)
            return health

        pool = self._conn_mgr.get_pool()
        if pool:
            health["pool_size"] = pool.max_connections
            if hasattr(pool, "_available_connections"):
                available = len(pool._available_connections)
                health["pool_available"] = available
                utilization = 100.0 * (
                    (pool.max_connections - available) / pool.max_connections
                )
                health["pool_utilization_pct"] = round(utilization, 1)
                if utilization > 80:
                    health["pool_warning"] = True
                    logger.warning(
                        "Redis pool utilization high",
                        stage=Stage.REDIS.value,
                        pool_utilization=utilization,
                        max_connections=pool.max_connections,
                    )

        return health


# =============================================================================
# LAYER 4: PUBLIC API
# Clean interface that coordinates all layers
# =============================================================================


class RedisClient:
    """
    Async Redis client with lazy connection pooling and health checks.

    Public API for all Redis operations used by the cache stores.

    Usage:
        client = RedisClient()
        await client.set("dataaccess:k1", b'"apple"', ttl_ms=1_800_000)
        value = await client.get("dataaccess:k1")
        await client.disconnect()

    The first operation connects on demand, so the remote backend can be
    wired at startup without blocking on Redis.
    """

    def __init__(self, settings: Settings | None = None, client: redis.Redis | None = None):
        """
        Initialize Redis client.

        STAGE-REDIS.1: Client initialization

        Args:
            settings: Application settings (defaults to get_settings())
            client: Pre-built redis.asyncio client to use instead of a new pool
        """
        self._settings = settings or get_settings()

        self._conn_mgr = ConnectionManager(self._settings, client=client)
        self._executor: OperationExecutor | None = None
        self._health_monitor = HealthMonitor(self._conn_mgr, self._settings)

    async def connect(self) -> None:
        """
        Establish connection to Redis. Safe to call more than once.

        Raises:
            StoreUnavailableError: If connection fails
        """
        client = await self._conn_mgr.connect()
        if self._executor is None:
            self._executor = OperationExecutor(client)

    async def disconnect(self) -> None:
        """Close Redis connection and pool."""
        await self._conn_mgr.disconnect()
        self._executor = None

    async def ping(self) -> bool:
        """Check Redis connection health."""
        return await self._conn_mgr.ping()

    def is_connected(self) -> bool:
        return self._conn_mgr.is_connected()

    async def _get_executor(self) -> OperationExecutor:
        if self._executor is None:
            await self.connect()
        return self._executor

    # -------------------------------------------------------------------------
    # Delegate to OperationExecutor
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        """Get value from Redis."""
        return await (await self._get_executor()).get(key)

    async def set(self, key: str, value: str | bytes, ttl_ms: int) -> bool:
        """Set value in Redis with a millisecond TTL."""
        return await (await self._get_executor()).set(key, value, ttl_ms)

    async def delete(self, *keys: str) -> int:
        """Delete keys from Redis."""
        return await (await self._get_executor()).delete(*keys)

    async def get_with_pttl(self, key: str) -> tuple[str | None, int]:
        """Get a value and its remaining TTL in milliseconds."""
        return await (await self._get_executor()).get_with_pttl(key)

    async def scan_delete(self, pattern: str) -> int:
        """Delete every key matching a glob pattern."""
        return await (await self._get_executor()).scan_delete(pattern)

    async def health_check(self) -> dict[str, Any]:
        """Perform health check on Redis connection."""
        return await self._health_monitor.health_check()
