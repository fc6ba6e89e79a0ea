"""
Unit tests for the Key Registry.

Bookkeeping semantics and thread safety under concurrent callers.
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from cachehub.domain.cache.key_registry import KeyRegistry
from cachehub.infrastructure.memory.memory_backend import InMemoryCacheBackend
from cachehub.services.cache.cache_service import CacheService


class TestKeyRegistry:
    """Test KeyRegistry bookkeeping."""

    def test_add_is_idempotent(self, registry):
        assert registry.add("user:1") is True
        assert registry.add("user:1") is False
        assert len(registry) == 1

    def test_discard_reports_prior_membership(self, registry):
        registry.add("user:1")

        assert registry.discard("user:1") is True
        assert registry.discard("user:1") is False
        assert "user:1" not in registry

    def test_matching_uses_ordinal_prefix(self, registry):
        for key in ("user:1", "user:2", "User:3", "order:1"):
            registry.add(key)

        assert sorted(registry.matching("user:")) == ["user:1", "user:2"]
        assert sorted(registry.matching("")) == [
            "User:3",
            "order:1",
            "user:1",
            "user:2",
        ]

    def test_snapshot_is_detached_copy(self, registry):
        registry.add("a")
        snapshot = registry.snapshot()

        registry.add("b")
        registry.discard("a")

        assert snapshot == ["a"]

    def test_iteration_tolerates_mutation(self, registry):
        for index in range(5):
            registry.add(f"k{index}")

        for key in registry:
            registry.discard(key)

        assert len(registry) == 0

    def test_clear_returns_dropped_count(self, registry):
        registry.add("a")
        registry.add("b")

        assert registry.clear() == 2
        assert registry.snapshot() == []

    def test_contains_ignores_non_strings(self, registry):
        registry.add("1")
        assert 1 not in registry


@pytest.mark.concurrency
class TestKeyRegistryConcurrency:
    """Concurrent mutation never loses keys or corrupts state."""

    def test_concurrent_adds_from_threads(self):
        registry = KeyRegistry()
        barrier = threading.Barrier(8)

        def worker(worker_id: int) -> None:
            barrier.wait()
            for index in range(500):
                registry.add(f"w{worker_id}:{index}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(worker, range(8)))

        assert len(registry) == 8 * 500

    def test_concurrent_add_discard_and_snapshot(self):
        registry = KeyRegistry()
        for index in range(1000):
            registry.add(f"old:{index}")

        def writer() -> None:
            for index in range(1000):
                registry.add(f"new:{index}")

        def remover() -> None:
            for index in range(1000):
                registry.discard(f"old:{index}")

        def reader() -> None:
            for _ in range(200):
                registry.matching("new:")

        with ThreadPoolExecutor(max_workers=3) as pool:
            futures = [pool.submit(fn) for fn in (writer, remover, reader)]
            for future in futures:
                future.result()

        assert sorted(registry.snapshot()) == sorted(f"new:{i}" for i in range(1000))

    def test_concurrent_set_on_disjoint_keys_from_threads(self):
        service = CacheService(InMemoryCacheBackend())

        def worker(worker_id: int) -> None:
            async def write_all() -> None:
                await asyncio.gather(
                    *(service.set(f"t{worker_id}:{i}", i) for i in range(100))
                )

            asyncio.run(write_all())

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(worker, range(4)))

        assert len(service.tracked_keys()) == 400

    @pytest.mark.asyncio
    async def test_concurrent_set_on_disjoint_keys_from_tasks(self):
        service = CacheService(InMemoryCacheBackend())

        await asyncio.gather(*(service.set(f"task:{i}", {"i": i}) for i in range(200)))

        assert len(service.tracked_keys()) == 200
