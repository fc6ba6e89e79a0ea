"""
Cache service construction.

Selects the backend implementation from settings once, at construction
time; callers only ever see CacheService.
"""

import logging
from typing import Optional

from ...core.config import Settings, get_settings
from ...domain.cache.exceptions import CacheConfigurationException
from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import CacheBackendType
from ...infrastructure.memory.memory_backend import InMemoryCacheBackend
from ...infrastructure.redis.redis_backend import RedisCacheBackend
from ...infrastructure.serialization.json_serializer import JsonSerializer
from .cache_service import CacheService

logger = logging.getLogger(__name__)


def create_backend(settings: Settings) -> CacheBackend:
    """Build the configured backend."""
    backend_type = settings.CACHE_BACKEND

    if backend_type == CacheBackendType.MEMORY:
        return InMemoryCacheBackend()

    if backend_type == CacheBackendType.REDIS:
        return RedisCacheBackend(
            redis_url=settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )

    raise CacheConfigurationException(
        message=f"Unsupported cache backend: {backend_type}",
        config_key="CACHE_BACKEND",
        config_value=backend_type,
    )


def create_cache_service(settings: Optional[Settings] = None) -> CacheService:
    """Build a CacheService with its own key registry."""
    settings = settings or get_settings()
    backend = create_backend(settings)

    service = CacheService(
        backend=backend,
        serializer=JsonSerializer(),
        decode_failure_policy=settings.CACHE_DECODE_FAILURE_POLICY,
        default_ttl=settings.default_ttl,
        remove_concurrency=settings.CACHE_REMOVE_CONCURRENCY,
    )

    logger.info(
        f"Cache service created with {backend.name} backend",
        extra={
            "backend": backend.name,
            "decode_failure_policy": settings.CACHE_DECODE_FAILURE_POLICY.value,
            "remove_concurrency": settings.CACHE_REMOVE_CONCURRENCY,
        },
    )
    return service
