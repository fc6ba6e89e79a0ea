"""
Cache Service

Typed, serialization-aware access to a cache backend with cache-aside
helpers and prefix invalidation.

Known races, accepted rather than prevented:

- Stampede: concurrent ``get_or_create`` calls for the same missing key
  may each call the factory and each write; the last write wins. There is
  no per-key locking or single-flight.
- Prefix sweep vs. insert: ``remove_by_prefix`` works on a registry
  snapshot, so matching keys set while the sweep runs may survive it.
- Registry drift: entries expired or evicted by the backend stay tracked
  until removed through this service. Reads consult the backend and see
  the miss; ``remove`` and ``remove_by_prefix`` report registry membership,
  not backend state.
"""

import asyncio
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
)

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from ...domain.cache.exceptions import (
    CacheBulkRemovalException,
    CacheSerializationException,
)
from ...domain.cache.key_registry import KeyRegistry
from ...domain.cache.repository_interfaces import CacheBackend, CacheSerializer
from ...domain.cache.value_objects import CacheKey, DecodeFailurePolicy, TTL
from ...infrastructure.serialization.json_serializer import JsonSerializer

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

T = TypeVar("T")

KeyLike = Union[str, CacheKey]


class CacheService:
    """
    Cache facade over a single backend.

    Each instance owns its own KeyRegistry, so independent instances never
    share tracked keys. All operations are coroutines; cancel them by
    cancelling the awaiting task. A cancelled backend call leaves the
    registry untouched.
    """

    def __init__(
        self,
        backend: CacheBackend,
        serializer: Optional[CacheSerializer] = None,
        registry: Optional[KeyRegistry] = None,
        *,
        decode_failure_policy: DecodeFailurePolicy = DecodeFailurePolicy.MISS,
        default_ttl: Optional[TTL] = None,
        remove_concurrency: int = 16,
    ):
        if remove_concurrency < 1:
            raise ValueError("remove_concurrency must be at least 1")

        self._backend = backend
        self._serializer = serializer or JsonSerializer()
        self._registry = registry if registry is not None else KeyRegistry()
        self.decode_failure_policy = DecodeFailurePolicy(decode_failure_policy)
        self.default_ttl = default_ttl
        self.remove_concurrency = remove_concurrency

    @property
    def backend_name(self) -> str:
        return self._backend.name

    async def get(self, key: KeyLike, value_type: Type[T] = Any) -> Optional[T]:
        """
        Read and decode a cached value.

        Args:
            key: Cache key (non-empty)
            value_type: Type the stored JSON is validated against

        Returns:
            Decoded value, or None on a miss. With the MISS decode policy an
            undecodable payload is also reported as None.

        Raises:
            CacheBackendException: If the backend read fails
            CacheSerializationException: On decode failure with STRICT policy
        """
        cache_key = CacheKey.of(key).value

        with tracer.start_as_current_span("cache.get") as span:
            span.set_attribute("cache.key", cache_key)
            span.set_attribute("cache.backend", self._backend.name)

            try:
                raw = await self._backend.get(cache_key)
                if raw is None:
                    span.set_attribute("cache.hit", False)
                    return None
                value = self._serializer.decode(raw, value_type)
            except CacheSerializationException as e:
                e.key = cache_key
                e.details["key"] = cache_key
                span.set_attribute("cache.hit", False)
                span.set_attribute("cache.decode_error", True)

                if self.decode_failure_policy is DecodeFailurePolicy.STRICT:
                    span.set_status(Status(StatusCode.ERROR, e.message))
                    raise

                logger.warning(
                    "Undecodable cache entry treated as miss",
                    key=cache_key,
                    error=str(e.__cause__ or e),
                )
                return None

            span.set_attribute("cache.hit", True)
            return value

    async def get_or_create(
        self,
        key: KeyLike,
        factory: Callable[[], Awaitable[T]],
        value_type: Type[T] = Any,
        ttl: Optional[TTL] = None,
    ) -> Optional[T]:
        """
        Return the cached value, or build it with ``factory`` and cache it.

        The factory is not called when a value is cached at the time of the
        check. Concurrent first access for the same key is not de-duplicated
        and may call the factory more than once.

        Factory exceptions propagate unchanged and nothing is written. A
        factory result of None is returned without being cached.
        """
        cache_key = CacheKey.of(key).value

        cached = await self.get(cache_key, value_type)
        if cached is not None:
            return cached

        with tracer.start_as_current_span("cache.get_or_create.factory") as span:
            span.set_attribute("cache.key", cache_key)
            try:
                value = await factory()
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.warning(
                    "Cache factory failed; nothing cached",
                    key=cache_key,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

        if value is None:
            logger.debug("Cache factory returned None; not caching", key=cache_key)
            return None

        await self.set(cache_key, value, ttl=ttl)
        return value

    async def set(self, key: KeyLike, value: Any, ttl: Optional[TTL] = None) -> None:
        """
        Encode and store a value, then track its key.

        Raises:
            ValueError: If value is None
            CacheSerializationException: If value cannot be encoded
            CacheBackendException: If the backend write fails
        """
        cache_key = CacheKey.of(key).value
        if value is None:
            raise ValueError("Cache value cannot be None")

        with tracer.start_as_current_span("cache.set") as span:
            span.set_attribute("cache.key", cache_key)
            span.set_attribute("cache.backend", self._backend.name)

            try:
                payload = self._serializer.encode(value)
            except CacheSerializationException as e:
                e.key = cache_key
                e.details["key"] = cache_key
                span.set_status(Status(StatusCode.ERROR, e.message))
                raise

            effective_ttl = ttl or self.default_ttl
            if effective_ttl:
                span.set_attribute("cache.ttl_seconds", effective_ttl.seconds)

            await self._backend.set(cache_key, payload, effective_ttl)
            self._registry.add(cache_key)

            span.set_attribute("cache.payload_bytes", len(payload))
            logger.debug("Cached value", key=cache_key, size_bytes=len(payload))

    async def remove(self, key: KeyLike) -> bool:
        """
        Delete a key from the backend and stop tracking it.

        The backend delete is always issued, tracked or not.

        Returns:
            True if the key was tracked immediately before removal
        """
        cache_key = CacheKey.of(key).value

        with tracer.start_as_current_span("cache.remove") as span:
            span.set_attribute("cache.key", cache_key)

            await self._backend.delete(cache_key)
            was_tracked = self._registry.discard(cache_key)

            span.set_attribute("cache.was_tracked", was_tracked)
            logger.debug("Removed cache key", key=cache_key, was_tracked=was_tracked)
            return was_tracked

    async def remove_by_prefix(self, prefix: str) -> int:
        """
        Remove every tracked key starting with ``prefix``.

        Matching is ordinal and case-sensitive; an empty prefix matches every
        tracked key. Removals run concurrently, at most
        ``remove_concurrency`` at a time, and all of them are attempted even
        when some fail.

        Returns:
            Number of tracked keys removed

        Raises:
            CacheBulkRemovalException: If any removal failed, with every error
        """
        if not isinstance(prefix, str):
            raise TypeError("Prefix must be a string")

        with tracer.start_as_current_span("cache.remove_by_prefix") as span:
            span.set_attribute("cache.prefix", prefix)

            keys = self._registry.matching(prefix)
            span.set_attribute("cache.matched_count", len(keys))
            if not keys:
                span.set_attribute("cache.removed_count", 0)
                return 0

            semaphore = asyncio.Semaphore(self.remove_concurrency)

            async def _remove_one(cache_key: str) -> bool:
                async with semaphore:
                    return await self.remove(cache_key)

            results = await asyncio.gather(
                *(_remove_one(cache_key) for cache_key in keys),
                return_exceptions=True,
            )

            removed_count = 0
            failed_keys: List[str] = []
            errors: List[BaseException] = []
            for cache_key, result in zip(keys, results):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                if isinstance(result, BaseException):
                    if not isinstance(result, Exception):
                        raise result
                    failed_keys.append(cache_key)
                    errors.append(result)
                elif result:
                    removed_count += 1

            span.set_attribute("cache.removed_count", removed_count)

            if errors:
                span.set_status(
                    Status(StatusCode.ERROR, f"{len(errors)} removals failed")
                )
                logger.error(
                    "Prefix removal partially failed",
                    prefix=prefix,
                    removed=removed_count,
                    failed=len(errors),
                    failed_keys=failed_keys,
                )
                raise CacheBulkRemovalException(
                    prefix=prefix,
                    failed_keys=failed_keys,
                    errors=errors,
                    removed_count=removed_count,
                )

            logger.info(
                "Removed cache keys by prefix", prefix=prefix, removed=removed_count
            )
            return removed_count

    def is_tracked(self, key: KeyLike) -> bool:
        """Whether this instance currently tracks key."""
        return self._registry.contains(CacheKey.of(key).value)

    def tracked_keys(self) -> List[str]:
        """Sorted snapshot of tracked keys."""
        return sorted(self._registry.snapshot())

    async def health_check(self) -> Dict[str, Any]:
        """Backend health plus registry size."""
        with tracer.start_as_current_span("cache.health_check") as span:
            backend_health = await self._backend.ping()
            status = backend_health.get("status", "unknown")
            if status != "healthy":
                span.set_status(Status(StatusCode.ERROR, str(status)))

            return {
                "status": status,
                "backend": backend_health,
                "tracked_keys": len(self._registry),
                "decode_failure_policy": self.decode_failure_policy.value,
            }

    async def close(self) -> None:
        """Close the underlying backend."""
        await self._backend.close()
        logger.info("Cache service closed", backend=self._backend.name)
