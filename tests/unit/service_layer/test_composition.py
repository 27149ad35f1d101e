"""
Unit Tests for the Composition Root

Tests chain ordering, chain description and settings-driven assembly.
"""

from functools import partial

import pytest

from dataaccess.application.composition import (
    build_data_service,
    compose,
    describe_chain,
    store_error_logger,
)
from dataaccess.application.decorators import (
    CachingDecorator,
    LoggingDecorator,
    MetricsDecorator,
)
from dataaccess.application.services.data_service import CacheAsideDataService
from dataaccess.core.config.settings import Settings
from dataaccess.core.exceptions import ConfigurationError, StoreUnavailableError
from dataaccess.infrastructure.cache.memory_store import InMemoryCacheStore


@pytest.fixture
def base(memory_store, fruit_source):
    return CacheAsideDataService(memory_store, fruit_source)


@pytest.mark.unit
class TestCompose:
    """compose() and describe_chain()."""

    def test_first_layer_is_innermost(self, base, mock_logger):
        service = compose(base, MetricsDecorator, partial(LoggingDecorator, logger=mock_logger))

        assert isinstance(service, LoggingDecorator)
        assert isinstance(service.inner, MetricsDecorator)
        assert service.inner.inner is base

    def test_no_layers_returns_base(self, base):
        assert compose(base) is base

    def test_describe_chain(self, base, mock_logger):
        service = compose(
            base,
            partial(CachingDecorator, logger=mock_logger),
            partial(LoggingDecorator, logger=mock_logger),
        )

        assert describe_chain(service) == [
            "LoggingDecorator",
            "CachingDecorator",
            "CacheAsideDataService",
        ]

    def test_describe_bare_service(self, base):
        assert describe_chain(base) == ["CacheAsideDataService"]

    def test_cycle_detected(self, base):
        inner = MetricsDecorator(base)
        outer = MetricsDecorator(inner)
        inner._inner = outer

        with pytest.raises(ConfigurationError):
            describe_chain(outer)

    def test_layer_must_return_service(self, base):
        with pytest.raises(ConfigurationError):
            compose(base, lambda inner: "not a service")

    def test_base_must_be_service(self):
        with pytest.raises(ConfigurationError):
            compose(object())

    @pytest.mark.asyncio
    async def test_composed_chain_serves_data(self, base, mock_logger):
        service = compose(base, MetricsDecorator, partial(LoggingDecorator, logger=mock_logger))

        assert await service.get_data("k1") == "apple"
        assert service.inner.stats()["successes"] == 1


@pytest.mark.unit
class TestStoreErrorLogger:
    """The on_store_error hook used by build_data_service."""

    def test_logs_warning(self, mock_logger):
        hook = store_error_logger(mock_logger)

        hook("set", "k1", StoreUnavailableError("down"))

        call = mock_logger.warning.call_args
        assert call.kwargs["operation"] == "set"
        assert call.kwargs["key"] == "k1"
        assert call.kwargs["error_type"] == "StoreUnavailableError"


@pytest.mark.unit
class TestBuildDataService:
    """Settings-driven assembly."""

    def test_default_chain(self, test_settings, fruit_source, mock_logger):
        service = build_data_service(fruit_source, settings=test_settings, logger=mock_logger)

        assert describe_chain(service) == [
            "LoggingDecorator",
            "MetricsDecorator",
            "CacheAsideDataService",
        ]
        assert mock_logger.info.call_args.args[0] == "Data service built"
        assert mock_logger.info.call_args.kwargs["backend"] == "in-memory"
        assert mock_logger.info.call_args.kwargs["stage"] == "SVC.0_BUILD"

    def test_base_uses_configured_ttl_and_store(self, test_settings, fruit_source, mock_logger):
        service = build_data_service(fruit_source, settings=test_settings, logger=mock_logger)

        base = service.inner.inner
        assert base.ttl == 1800
        assert isinstance(base.store, InMemoryCacheStore)
        assert base.store.get_max_size() == 100

    def test_layers_follow_settings(self, fruit_source, mock_logger):
        settings = Settings(
            _env_file=None,
            RETRY_ENABLED=True,
            RETRY_MAX_ATTEMPTS=5,
            METRICS_ENABLED=False,
            SERVICE_LOGGING_ENABLED=False,
        )

        service = build_data_service(fruit_source, settings=settings, logger=mock_logger)

        assert describe_chain(service) == ["RetryDecorator", "CacheAsideDataService"]
        assert service.max_attempts == 5

    def test_bare_service_when_all_layers_disabled(self, fruit_source, mock_logger):
        settings = Settings(
            _env_file=None,
            RETRY_ENABLED=False,
            METRICS_ENABLED=False,
            SERVICE_LOGGING_ENABLED=False,
        )

        service = build_data_service(fruit_source, settings=settings, logger=mock_logger)

        assert isinstance(service, CacheAsideDataService)

    @pytest.mark.asyncio
    async def test_store_failures_are_logged(
        self, test_settings, fruit_source, failing_store, mock_logger
    ):
        service = build_data_service(
            fruit_source, settings=test_settings, store=failing_store, logger=mock_logger
        )

        assert await service.get_data("k1") == "apple"

        degraded = [
            c for c in mock_logger.warning.call_args_list
            if c.args[0] == "Cache store unavailable, serving from source"
        ]
        assert [c.kwargs["operation"] for c in degraded] == ["get", "set"]

    @pytest.mark.asyncio
    async def test_end_to_end_cache_aside(self, test_settings, fruit_source, mock_logger):
        service = build_data_service(fruit_source, settings=test_settings, logger=mock_logger)

        await service.get_data("k2")
        await service.get_data("k2")

        assert fruit_source.fetch_count["k2"] == 1
        assert service.inner.stats()["successes"] == 2
