"""
Redis Infrastructure Module

redis.asyncio backend for the cache service with error translation
and OpenTelemetry spans.
"""

from .redis_backend import RedisCacheBackend

__all__ = ["RedisCacheBackend"]
