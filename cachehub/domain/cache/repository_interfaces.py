"""
Cache Repository Interfaces

Abstract contracts for the collaborators the cache service is built on:
a raw key/value backend and a typed serializer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

from .value_objects import TTL

T = TypeVar("T")


class CacheBackend(ABC):
    """
    Abstract key/value store holding serialized cache values.

    Implementations own their expiration and eviction policy and raise
    CacheBackendException (or a subclass) for transport failures.
    asyncio.CancelledError must be allowed to propagate untouched.
    """

    name: str = "backend"

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None if absent.

        Raises CacheSerializationException if the stored bytes cannot be
        read as text.
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[TTL] = None) -> None:
        """Store value under key, overwriting any existing entry."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key. Deleting a missing key is not an error."""
        pass

    @abstractmethod
    async def ping(self) -> Dict[str, Any]:
        """Return backend health information."""
        pass

    async def close(self) -> None:
        """Release backend resources."""
        return None


class CacheSerializer(ABC):
    """Encode typed values to their wire string form and back."""

    @abstractmethod
    def encode(self, value: Any) -> str:
        """Encode value. Raises CacheSerializationException on failure."""
        pass

    @abstractmethod
    def decode(self, raw: str, value_type: Type[T]) -> T:
        """Decode raw into value_type. Raises CacheSerializationException."""
        pass
