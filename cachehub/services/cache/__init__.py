"""
Cache Services

CacheService facade and its settings-driven construction.
"""

from .cache_service import CacheService
from .factory import create_backend, create_cache_service

__all__ = ["CacheService", "create_backend", "create_cache_service"]
