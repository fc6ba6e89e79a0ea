"""
HTTP error mapping for cache exceptions.
"""

from ..domain.cache.exceptions import (
    CacheException,
    CacheBackendException,
    CacheBulkRemovalException,
)


def status_code_for(exc: CacheException) -> int:
    """HTTP status for a cache exception.

    Backend outages are reported as 503; everything else, including
    serialization failures, is a 500.
    """
    if isinstance(exc, (CacheBackendException, CacheBulkRemovalException)):
        return 503
    return 500
