"""
Unit tests for settings-driven cache service construction.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from cachehub.core.config import Settings
from cachehub.domain.cache.value_objects import DecodeFailurePolicy, TTL
from cachehub.infrastructure.memory.memory_backend import InMemoryCacheBackend
from cachehub.infrastructure.redis.redis_backend import RedisCacheBackend
from cachehub.services.cache.factory import create_backend, create_cache_service


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.CACHE_DECODE_FAILURE_POLICY is DecodeFailurePolicy.MISS
        assert settings.default_ttl is None
        assert settings.CACHE_REMOVE_CONCURRENCY == 16

    def test_default_ttl_property(self):
        settings = Settings(_env_file=None, CACHE_DEFAULT_TTL_SECONDS=120)
        assert settings.default_ttl == TTL(120)

    def test_invalid_redis_url_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, REDIS_URL="http://localhost:6379")

    def test_invalid_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CACHE_BACKEND="memcached")

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"


class TestCacheServiceFactory:
    def test_memory_backend_selected(self):
        settings = Settings(_env_file=None, CACHE_BACKEND="memory")
        assert isinstance(create_backend(settings), InMemoryCacheBackend)

    def test_redis_backend_selected(self):
        settings = Settings(
            _env_file=None,
            CACHE_BACKEND="redis",
            REDIS_URL="redis://cache:6379/1",
            REDIS_MAX_CONNECTIONS=7,
            REDIS_SOCKET_TIMEOUT=1.5,
        )

        with patch(
            "cachehub.infrastructure.redis.redis_backend.Redis.from_url"
        ) as mock_from_url:
            backend = create_backend(settings)

        assert isinstance(backend, RedisCacheBackend)
        assert mock_from_url.call_args.args == ("redis://cache:6379/1",)
        assert mock_from_url.call_args.kwargs["max_connections"] == 7

    def test_service_configured_from_settings(self):
        settings = Settings(
            _env_file=None,
            CACHE_DECODE_FAILURE_POLICY="strict",
            CACHE_DEFAULT_TTL_SECONDS=300,
            CACHE_REMOVE_CONCURRENCY=4,
        )

        service = create_cache_service(settings)

        assert service.backend_name == "memory"
        assert service.decode_failure_policy is DecodeFailurePolicy.STRICT
        assert service.default_ttl == TTL(300)
        assert service.remove_concurrency == 4

    def test_each_service_gets_its_own_registry(self):
        settings = Settings(_env_file=None)

        first = create_cache_service(settings)
        second = create_cache_service(settings)

        assert first._registry is not second._registry
