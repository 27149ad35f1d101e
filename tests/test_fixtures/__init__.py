"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory, FakeClock, RecordingStore
from .source_factory import SourceTestFactory

__all__ = ["CacheTestFactory", "FakeClock", "RecordingStore", "SourceTestFactory"]
