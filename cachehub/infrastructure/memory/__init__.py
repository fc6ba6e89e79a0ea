"""In-process cache backend."""

from .memory_backend import InMemoryCacheBackend

__all__ = ["InMemoryCacheBackend"]
