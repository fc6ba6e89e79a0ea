"""
Redis Cache Backend

redis.asyncio implementation of the cache backend contract with
connection pooling and error translation. No retries are performed here;
callers own retry policy.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from redis.asyncio import Redis
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    TimeoutError as RedisTimeoutError,
    RedisError,
)

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ...domain.cache.exceptions import (
    CacheBackendException,
    CacheConnectionException,
    CacheOperationTimeoutException,
    CacheSerializationException,
)
from ...domain.cache.repository_interfaces import CacheBackend
from ...domain.cache.value_objects import TTL

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

R = TypeVar("R")


class RedisCacheBackend(CacheBackend):
    """
    Redis-backed cache store.

    Values are stored as plain strings. Expiration uses native Redis TTLs.
    """

    name = "redis"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        max_connections: int = 10,
        socket_timeout: float = 5.0,
        client: Optional[Redis] = None,
    ):
        if client is None and not redis_url:
            raise ValueError("Either redis_url or client must be provided")

        self._client: Redis = client or Redis.from_url(
            redis_url,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            decode_responses=True,
        )

    async def _execute(
        self,
        operation: str,
        key: Optional[str],
        func: Callable[[], Awaitable[R]],
    ) -> R:
        """Run a Redis command, translating client errors."""
        with tracer.start_as_current_span(f"redis.{operation}") as span:
            span.set_attribute("db.system", "redis")
            span.set_attribute("redis.operation", operation)
            if key is not None:
                span.set_attribute("cache.key", key)

            try:
                result = await func()
                span.set_status(Status(StatusCode.OK))
                return result

            except RedisTimeoutError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.warning(f"Redis {operation} timed out for key {key}")
                raise CacheOperationTimeoutException(
                    operation=operation, key=key, original_error=e
                ) from e

            except RedisConnectionError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"Redis connection failed during {operation}: {e}")
                raise CacheConnectionException(
                    message=f"Redis connection failed during {operation}",
                    operation=operation,
                    key=key,
                    original_error=e,
                ) from e

            except UnicodeDecodeError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.warning(f"Redis {operation} returned non UTF-8 data for {key}")
                raise CacheSerializationException(
                    message="Stored payload is not valid UTF-8",
                    direction="decode",
                    key=key,
                    original_error=e,
                ) from e

            except (RedisError, OSError) as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"Redis {operation} failed for key {key}: {e}")
                raise CacheBackendException(
                    message=f"Redis {operation} failed: {e}",
                    operation=operation,
                    key=key,
                    original_error=e,
                ) from e

    async def get(self, key: str) -> Optional[str]:
        value = await self._execute("get", key, lambda: self._client.get(key))
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise CacheSerializationException(
                    message="Stored payload is not valid UTF-8",
                    direction="decode",
                    key=key,
                    original_error=e,
                ) from e
        return value

    async def set(self, key: str, value: str, ttl: Optional[TTL] = None) -> None:
        ex = ttl.seconds if ttl else None
        await self._execute("set", key, lambda: self._client.set(key, value, ex=ex))

    async def delete(self, key: str) -> None:
        await self._execute("delete", key, lambda: self._client.delete(key))

    async def ping(self) -> Dict[str, Any]:
        start_time = time.time()
        try:
            await self._execute("ping", None, self._client.ping)
        except CacheBackendException as e:
            return {
                "status": "unhealthy",
                "backend": self.name,
                "error": e.message,
                "error_code": e.error_code,
            }

        return {
            "status": "healthy",
            "backend": self.name,
            "response_time_ms": round((time.time() - start_time) * 1000, 2),
        }

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("Redis cache backend closed")
