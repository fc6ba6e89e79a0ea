"""
Cache Exceptions

Domain-specific exceptions for cache operations.
Backend and serialization failures are never swallowed here; callers
decide retry policy.
"""

from typing import Optional, Any, Dict, List, Sequence


class CacheException(Exception):
    """Base exception for cache-related errors.

    All cache operations raise this or its subclasses, except for
    factory failures (propagated unchanged) and asyncio cancellation.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or "CACHE_ERROR"
        self.details = details or {}
        if original_error is not None:
            self.details.setdefault("original_error", str(original_error))
            self.details.setdefault(
                "original_error_type", type(original_error).__name__
            )
        super().__init__(self.message)
        # Preserve exception context for debugging (exception chaining)
        if original_error is not None:
            self.__cause__ = original_error


class CacheBackendException(CacheException):
    """Raised when the backend store rejects or fails an operation."""

    def __init__(
        self,
        message: str = "Cache backend operation failed",
        operation: Optional[str] = None,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
        error_code: str = "CACHE_BACKEND_ERROR",
    ):
        details: Dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if key is not None:
            details["key"] = key

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original_error=original_error,
        )
        self.operation = operation
        self.key = key


class CacheConnectionException(CacheBackendException):
    """Raised when the backend is unreachable or the connection is lost."""

    def __init__(
        self,
        message: str = "Cache backend connection failed",
        operation: Optional[str] = None,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            operation=operation,
            key=key,
            original_error=original_error,
            error_code="CACHE_CONNECTION_ERROR",
        )


class CacheOperationTimeoutException(CacheBackendException):
    """Raised when a backend operation times out."""

    def __init__(
        self,
        operation: str,
        key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Cache operation '{operation}' timed out",
            operation=operation,
            key=key,
            original_error=original_error,
            error_code="CACHE_TIMEOUT_ERROR",
        )


class CacheSerializationException(CacheException):
    """Raised when a value cannot be encoded or a stored payload decoded."""

    def __init__(
        self,
        message: str,
        direction: str,
        key: Optional[str] = None,
        target_type: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details: Dict[str, Any] = {"direction": direction}
        if key is not None:
            details["key"] = key
        if target_type:
            details["target_type"] = target_type

        super().__init__(
            message=message,
            error_code="CACHE_SERIALIZATION_ERROR",
            details=details,
            original_error=original_error,
        )
        self.direction = direction
        self.key = key


class CacheBulkRemovalException(CacheException):
    """Raised when one or more removals of a prefix sweep fail.

    Every matching key is attempted; all failures are collected here.
    """

    def __init__(
        self,
        prefix: str,
        failed_keys: Sequence[str],
        errors: Sequence[BaseException],
        removed_count: int = 0,
    ):
        self.prefix = prefix
        self.failed_keys: List[str] = list(failed_keys)
        self.errors: List[BaseException] = list(errors)
        self.removed_count = removed_count

        super().__init__(
            message=(
                f"Failed to remove {len(self.failed_keys)} cache key(s) "
                f"with prefix '{prefix}'"
            ),
            error_code="CACHE_BULK_REMOVAL_ERROR",
            details={
                "prefix": prefix,
                "failed_keys": self.failed_keys,
                "errors": [str(error) for error in self.errors],
                "removed_count": removed_count,
            },
        )


class CacheConfigurationException(CacheException):
    """Raised when cache configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
    ):
        details: Dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        if config_value is not None:
            details["config_value"] = str(config_value)

        super().__init__(
            message=message, error_code="CACHE_CONFIGURATION_ERROR", details=details
        )
