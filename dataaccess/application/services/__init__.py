from .data_service import CacheAsideDataService, validate_key

__all__ = ["CacheAsideDataService", "validate_key"]
