"""Cache value serialization."""

from .json_serializer import JsonSerializer

__all__ = ["JsonSerializer"]
