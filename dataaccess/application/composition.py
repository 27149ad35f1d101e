"""
Composition Root

Builds decorator chains once, at startup, from explicit collaborators.
Configuration is the only thing read from ``get_settings()``; stores,
sources and loggers are passed in.

Usage:
------
```python
from dataaccess.application.composition import build_data_service
from dataaccess.infrastructure.sources import LoaderDataSource

service = build_data_service(LoaderDataSource(load_order))
order = await service.get_data("order:42")
```
"""

from collections.abc import Callable

import structlog

from dataaccess.application.decorators import (
    LoggingDecorator,
    MetricsDecorator,
    RetryDecorator,
    ServiceDecorator,
)
from dataaccess.application.services.data_service import CacheAsideDataService
from dataaccess.core.config.constants import Stage
from dataaccess.core.config.settings import Settings, get_settings
from dataaccess.core.exceptions import CacheError, ConfigurationError
from dataaccess.core.interfaces.cache import CacheStore
from dataaccess.core.interfaces.service import DataService
from dataaccess.core.interfaces.source import DataSource
from dataaccess.core.logging.logger import get_logger, log_stage
from dataaccess.infrastructure.cache.factory import create_cache_store
from dataaccess.infrastructure.cache.redis_client import RedisClient

Layer = Callable[[DataService], DataService]


def compose(base: DataService, *layers: Layer) -> DataService:
    """
    Wrap ``base`` in ``layers``, first layer innermost.

    ``compose(base, A, B)`` returns ``B(A(base))``. A layer is any callable
    taking the inner service, typically a decorator class or a
    ``functools.partial`` of one.

    Raises:
        ConfigurationError: A layer did not return a DataService
    """
    if not isinstance(base, DataService):
        raise ConfigurationError(
            "Chain base must implement DataService",
            details={"base_type": type(base).__name__},
        )

    service = base
    for layer in layers:
        service = layer(service)
        if not isinstance(service, DataService):
            raise ConfigurationError(
                "Decorator layer did not return a DataService",
                details={"layer": getattr(layer, "__name__", repr(layer))},
            )
    return service


def describe_chain(service: DataService) -> list[str]:
    """
    Name each link of a chain, outermost first, ending with the base.

    Raises:
        ConfigurationError: The chain loops back on itself
    """
    names: list[str] = []
    seen: set[int] = set()
    node = service

    while True:
        if id(node) in seen:
            raise ConfigurationError(
                "Decorator chain contains a cycle", details={"chain": names}
            )
        seen.add(id(node))
        names.append(type(node).__name__)

        if not isinstance(node, ServiceDecorator):
            return names
        node = node.inner


def store_error_logger(
    logger: structlog.stdlib.BoundLogger,
) -> Callable[[str, str, CacheError], None]:
    """Build an ``on_store_error`` hook that logs absorbed store failures."""

    def on_store_error(operation: str, key: str, error: CacheError) -> None:
        log_stage(
            logger,
            Stage.STORE_DEGRADED,
            "Cache store unavailable, serving from source",
            level="warning",
            operation=operation,
            key=key,
            error_type=type(error).__name__,
            error=error.message,
        )

    return on_store_error


def build_data_service(
    source: DataSource,
    *,
    settings: Settings | None = None,
    store: CacheStore | None = None,
    redis_client: RedisClient | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> DataService:
    """
    Build the configured DataService chain.

    Layers, innermost first:
    1. CacheAsideDataService (CACHE_TTL, CACHE_SINGLE_FLIGHT)
    2. RetryDecorator if RETRY_ENABLED
    3. MetricsDecorator if METRICS_ENABLED
    4. LoggingDecorator if SERVICE_LOGGING_ENABLED

    Args:
        source: Authoritative data source
        settings: Application settings (defaults to get_settings())
        store: Cache store (defaults to the CACHE_BACKEND store)
        redis_client: Shared Redis client for the remote/distributed backends
        logger: Logger for the chain (defaults to this module's logger)
    """
    settings = settings or get_settings()
    logger = logger or get_logger(__name__)

    if store is None:
        store = create_cache_store(settings, redis_client=redis_client)

    cache_settings = settings.cache
    base = CacheAsideDataService(
        store,
        source,
        ttl=cache_settings.CACHE_TTL,
        single_flight=cache_settings.CACHE_SINGLE_FLIGHT,
        on_store_error=store_error_logger(logger),
    )

    layers: list[Layer] = []

    retry_settings = settings.retry
    if retry_settings.RETRY_ENABLED:
        layers.append(
            lambda inner: RetryDecorator(
                inner,
                max_attempts=retry_settings.RETRY_MAX_ATTEMPTS,
                base_delay=retry_settings.RETRY_BASE_DELAY,
                max_delay=retry_settings.RETRY_MAX_DELAY,
                logger=logger,
            )
        )

    if settings.METRICS_ENABLED:
        layers.append(MetricsDecorator)

    if settings.SERVICE_LOGGING_ENABLED:
        layers.append(lambda inner: LoggingDecorator(inner, logger=logger))

    service = compose(base, *layers)

    logger.info(
        "Data service built",
        stage=Stage.SERVICE_BUILD.value,
        backend=str(getattr(cache_settings.CACHE_BACKEND, "value", cache_settings.CACHE_BACKEND)),
        chain=describe_chain(service),
        ttl=cache_settings.CACHE_TTL,
    )
    return service
