"""
Cache administration endpoints.

Inspect tracked keys and invalidate single keys or key groups.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ...services.cache.cache_service import CacheService
from ..dependencies import get_cache_service

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/keys")
async def list_tracked_keys(
    cache: CacheService = Depends(get_cache_service),
) -> Dict[str, Any]:
    """Keys this instance believes are live in the backend."""
    keys = cache.tracked_keys()
    return {"count": len(keys), "keys": keys}


@router.delete("/keys/{key}")
async def remove_key(
    key: str,
    cache: CacheService = Depends(get_cache_service),
) -> Dict[str, Any]:
    """Remove one key."""
    was_tracked = await cache.remove(key)
    return {"key": key, "removed": was_tracked}


@router.delete("")
async def remove_by_prefix(
    prefix: str = Query(
        ..., description="Key prefix; an empty value matches every tracked key"
    ),
    cache: CacheService = Depends(get_cache_service),
) -> Dict[str, Any]:
    """Remove every tracked key starting with prefix."""
    removed = await cache.remove_by_prefix(prefix)
    return {"prefix": prefix, "removed": removed}
