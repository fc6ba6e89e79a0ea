"""
Cache Value Objects

Immutable value objects for the cache domain.
Provides type safety and validation for cache keys and expirations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DecodeFailurePolicy(str, Enum):
    """How the cache service treats payloads that fail to decode."""

    MISS = "miss"  # Report a cache miss so the entry is regenerated
    STRICT = "strict"  # Raise CacheSerializationException


class CacheBackendType(str, Enum):
    """Available backend implementations."""

    MEMORY = "memory"
    REDIS = "redis"


@dataclass(frozen=True)
class CacheKey:
    """
    Immutable cache key value object.

    Keys are opaque strings passed to the backend unchanged; only
    emptiness is rejected.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate cache key format."""
        if not isinstance(self.value, str):
            raise TypeError("Cache key must be a string")

        if not self.value:
            raise ValueError("Cache key cannot be empty")

    @classmethod
    def of(cls, key: Union[str, "CacheKey"]) -> "CacheKey":
        """Coerce a raw string or an existing key into a CacheKey."""
        if isinstance(key, CacheKey):
            return key
        return cls(key)

    @classmethod
    def join(cls, *parts: str, separator: str = ":") -> "CacheKey":
        """Create a key from namespace parts, e.g. ``join("user", "1")``."""
        return cls(separator.join(str(part) for part in parts))

    def has_prefix(self, prefix: str) -> bool:
        """Ordinal, case-sensitive prefix match."""
        return self.value.startswith(prefix)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TTL:
    """
    Time To Live value object for cache expiration.

    Expiration itself is enforced by the backend.
    """

    seconds: int

    def __post_init__(self) -> None:
        """Validate TTL value."""
        if self.seconds <= 0:
            raise ValueError("TTL must be positive")
        if self.seconds > 86400 * 365:  # Max 1 year
            raise ValueError("TTL too large (max 1 year)")

    @classmethod
    def minutes(cls, minutes: int) -> "TTL":
        """Create TTL from minutes."""
        return cls(minutes * 60)

    @classmethod
    def hours(cls, hours: int) -> "TTL":
        """Create TTL from hours."""
        return cls(hours * 3600)

    @classmethod
    def days(cls, days: int) -> "TTL":
        """Create TTL from days."""
        return cls(days * 86400)

    def __str__(self) -> str:
        return f"{self.seconds}s"
