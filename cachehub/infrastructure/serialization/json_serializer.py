"""
JSON Serializer

pydantic-backed JSON encoding for cache values. Encoding infers the
runtime type (models, dataclasses, dates, containers); decoding validates
the payload against the requested type.
"""

import logging
from functools import lru_cache
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from ...domain.cache.exceptions import CacheSerializationException
from ...domain.cache.repository_interfaces import CacheSerializer

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ANY_ADAPTER: TypeAdapter = TypeAdapter(Any)


@lru_cache(maxsize=256)
def _adapter_for(value_type: Any) -> TypeAdapter:
    """Build and memoize a TypeAdapter per target type."""
    return TypeAdapter(value_type)


def _type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)


class JsonSerializer(CacheSerializer):
    """Serialize cache values to JSON strings with pydantic."""

    def encode(self, value: Any) -> str:
        try:
            return _ANY_ADAPTER.dump_json(value).decode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CacheSerializationException(
                message=f"Failed to encode value of type {type(value).__name__}",
                direction="encode",
                target_type=type(value).__name__,
                original_error=e,
            ) from e

    def decode(self, raw: str, value_type: Type[T]) -> T:
        try:
            adapter = _adapter_for(value_type)
        except TypeError:
            # Unhashable type annotations cannot be memoized
            adapter = TypeAdapter(value_type)

        try:
            return adapter.validate_json(raw)
        except (ValidationError, ValueError, TypeError) as e:
            raise CacheSerializationException(
                message=f"Failed to decode cached payload as {_type_name(value_type)}",
                direction="decode",
                target_type=_type_name(value_type),
                original_error=e,
            ) from e
