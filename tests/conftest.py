"""
Main pytest configuration for all tests.

Fixtures and configuration for unit and API tests.
"""

import os

# Set test environment variables before importing application modules
os.environ["ENVIRONMENT"] = "test"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest

from cachehub.domain.cache.key_registry import KeyRegistry
from cachehub.domain.cache.value_objects import DecodeFailurePolicy
from cachehub.infrastructure.memory.memory_backend import InMemoryCacheBackend
from cachehub.services.cache.cache_service import CacheService
from tests.fixtures.backends import RecordingBackend


@pytest.fixture
def memory_backend():
    """Fresh in-memory backend."""
    return InMemoryCacheBackend()


@pytest.fixture
def recording_backend():
    """In-memory backend that records every call."""
    return RecordingBackend()


@pytest.fixture
def registry():
    return KeyRegistry()


@pytest.fixture
def cache_service(recording_backend, registry):
    """Cache service with default (miss) decode policy."""
    return CacheService(recording_backend, registry=registry)


@pytest.fixture
def strict_cache_service(recording_backend):
    """Cache service that raises on undecodable entries."""
    return CacheService(
        recording_backend, decode_failure_policy=DecodeFailurePolicy.STRICT
    )


@pytest.fixture
def sample_forecast_data():
    """Five forecast records as plain JSON-compatible dicts."""
    return [
        {
            "date": f"2026-10-{day:02d}",
            "temperature_c": 10 + day,
            "summary": "Mild",
            "is_cached": False,
        }
        for day in range(18, 23)
    ]
