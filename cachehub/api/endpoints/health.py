"""
Health check endpoints for CacheHub API.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...constants import get_current_timestamp
from ...core.config import get_settings
from ...services.cache.cache_service import CacheService
from ..dependencies import get_cache_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    cache: CacheService = Depends(get_cache_service),
) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Reports the service as degraded when the cache backend is unhealthy.
    """
    settings = get_settings()
    cache_health = await cache.health_check()

    return {
        "status": "healthy" if cache_health["status"] == "healthy" else "degraded",
        "timestamp": get_current_timestamp().isoformat(),
        "service": settings.OTEL_SERVICE_NAME,
        "version": settings.OTEL_SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_health,
    }
