"""
Decorator Chain

Composable wrappers that add cross-cutting behaviour to a DataService.

Components:
-----------
- **base.py**: ServiceDecorator (forwarding, read-only ``inner``)
- **logging_decorator.py**: LoggingDecorator (request/outcome log lines)
- **caching_decorator.py**: CachingDecorator (memo layer)
- **metrics_decorator.py**: MetricsDecorator (outcome counters, latency)
- **retry_decorator.py**: RetryDecorator (tenacity backoff for transient errors)
- **fallback_decorator.py**: FallbackDecorator (default value for listed errors)

Usage:
------
```python
from dataaccess.application.composition import compose

service = compose(base, CachingDecorator, LoggingDecorator)
# == LoggingDecorator(CachingDecorator(base))
```
"""

from .base import ServiceDecorator
from .caching_decorator import CachingDecorator
from .fallback_decorator import FallbackDecorator
from .logging_decorator import LoggingDecorator
from .metrics_decorator import MetricsDecorator
from .retry_decorator import RetryDecorator

__all__ = [
    "ServiceDecorator",
    "LoggingDecorator",
    "CachingDecorator",
    "MetricsDecorator",
    "RetryDecorator",
    "FallbackDecorator",
]
