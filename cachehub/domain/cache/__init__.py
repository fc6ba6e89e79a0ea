"""
Cache Domain Module

Value objects, key registry, exceptions and collaborator contracts
for the cache service.
"""

from .exceptions import (
    CacheException,
    CacheBackendException,
    CacheConnectionException,
    CacheOperationTimeoutException,
    CacheSerializationException,
    CacheBulkRemovalException,
    CacheConfigurationException,
)
from .key_registry import KeyRegistry
from .repository_interfaces import CacheBackend, CacheSerializer
from .value_objects import CacheKey, TTL, DecodeFailurePolicy, CacheBackendType

__all__ = [
    # Exceptions
    "CacheException",
    "CacheBackendException",
    "CacheConnectionException",
    "CacheOperationTimeoutException",
    "CacheSerializationException",
    "CacheBulkRemovalException",
    "CacheConfigurationException",
    # Registry
    "KeyRegistry",
    # Contracts
    "CacheBackend",
    "CacheSerializer",
    # Value objects
    "CacheKey",
    "TTL",
    "DecodeFailurePolicy",
    "CacheBackendType",
]
