"""
Unit tests for the Redis cache backend.

The redis.asyncio client is replaced with AsyncMock; no server is needed.
"""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import (
    ConnectionError as RedisConnectionError,
    ResponseError,
    TimeoutError as RedisTimeoutError,
)

from cachehub.domain.cache.exceptions import (
    CacheBackendException,
    CacheConnectionException,
    CacheOperationTimeoutException,
    CacheSerializationException,
)
from cachehub.domain.cache.value_objects import TTL
from cachehub.infrastructure.redis.redis_backend import RedisCacheBackend


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.fixture
def backend(redis_client):
    return RedisCacheBackend(client=redis_client)


@pytest.mark.redis
class TestRedisCacheBackend:
    """Test RedisCacheBackend command mapping."""

    @pytest.mark.asyncio
    async def test_get(self, backend, redis_client):
        redis_client.get.return_value = '{"a": 1}'

        assert await backend.get("k") == '{"a": 1}'
        redis_client.get.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self, backend, redis_client):
        redis_client.get.return_value = b"value"

        assert await backend.get("k") == "value"

    @pytest.mark.asyncio
    async def test_get_invalid_utf8_bytes_is_serialization_error(
        self, backend, redis_client
    ):
        redis_client.get.return_value = b"\xff\xfe not utf8"

        with pytest.raises(CacheSerializationException) as exc_info:
            await backend.get("k")

        assert exc_info.value.direction == "decode"
        assert exc_info.value.key == "k"
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.asyncio
    async def test_reply_decode_error_is_serialization_error(
        self, backend, redis_client
    ):
        redis_client.get.side_effect = UnicodeDecodeError(
            "utf-8", b"\xff", 0, 1, "invalid start byte"
        )

        with pytest.raises(CacheSerializationException) as exc_info:
            await backend.get("k")

        assert exc_info.value.direction == "decode"
        assert exc_info.value.error_code == "CACHE_SERIALIZATION_ERROR"

    @pytest.mark.asyncio
    async def test_get_missing(self, backend, redis_client):
        redis_client.get.return_value = None

        assert await backend.get("k") is None

    @pytest.mark.asyncio
    async def test_set_with_and_without_ttl(self, backend, redis_client):
        await backend.set("k", "v", TTL.minutes(1))
        await backend.set("k2", "v2")

        assert redis_client.set.await_args_list[0].args == ("k", "v")
        assert redis_client.set.await_args_list[0].kwargs == {"ex": 60}
        assert redis_client.set.await_args_list[1].kwargs == {"ex": None}

    @pytest.mark.asyncio
    async def test_delete(self, backend, redis_client):
        await backend.delete("k")

        redis_client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_timeout_is_translated(self, backend, redis_client):
        redis_client.get.side_effect = RedisTimeoutError("timed out")

        with pytest.raises(CacheOperationTimeoutException) as exc_info:
            await backend.get("k")

        assert exc_info.value.key == "k"
        assert isinstance(exc_info.value.__cause__, RedisTimeoutError)

    @pytest.mark.asyncio
    async def test_connection_error_is_translated(self, backend, redis_client):
        redis_client.set.side_effect = RedisConnectionError("refused")

        with pytest.raises(CacheConnectionException) as exc_info:
            await backend.set("k", "v")

        assert exc_info.value.operation == "set"

    @pytest.mark.asyncio
    async def test_other_redis_errors_are_backend_errors(self, backend, redis_client):
        redis_client.delete.side_effect = ResponseError("WRONGTYPE")

        with pytest.raises(CacheBackendException) as exc_info:
            await backend.delete("k")

        assert exc_info.value.error_code == "CACHE_BACKEND_ERROR"

    @pytest.mark.asyncio
    async def test_ping_healthy(self, backend, redis_client):
        redis_client.ping.return_value = True

        health = await backend.ping()

        assert health["status"] == "healthy"
        assert health["backend"] == "redis"
        assert "response_time_ms" in health

    @pytest.mark.asyncio
    async def test_ping_unhealthy(self, backend, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("refused")

        health = await backend.ping()

        assert health["status"] == "unhealthy"
        assert health["error_code"] == "CACHE_CONNECTION_ERROR"

    @pytest.mark.asyncio
    async def test_close(self, backend, redis_client):
        await backend.close()

        redis_client.aclose.assert_awaited_once()

    def test_requires_url_or_client(self):
        with pytest.raises(ValueError):
            RedisCacheBackend()

    def test_builds_client_from_url(self):
        with patch(
            "cachehub.infrastructure.redis.redis_backend.Redis.from_url"
        ) as mock_from_url:
            RedisCacheBackend(
                redis_url="redis://localhost:6379/0",
                max_connections=5,
                socket_timeout=2.0,
            )

        mock_from_url.assert_called_once_with(
            "redis://localhost:6379/0",
            max_connections=5,
            socket_timeout=2.0,
            socket_connect_timeout=2.0,
            decode_responses=True,
        )
