"""
FastAPI dependencies.

The cache service is created in the application lifespan and stored on
``app.state``; endpoints receive it through ``get_cache_service``.
"""

from fastapi import Request

from ..services.cache.cache_service import CacheService


def get_cache_service(request: Request) -> CacheService:
    """Return the application's cache service."""
    return request.app.state.cache_service
