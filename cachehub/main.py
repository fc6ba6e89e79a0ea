"""
CacheHub - Main FastAPI Application

Demo HTTP surface over the cache service:
- Weather forecasts cached under a single key
- Orders served through the cache-aside helper
- Cache inspection and prefix invalidation
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry import trace

from .api.endpoints.cache_admin import router as cache_admin_router
from .api.endpoints.health import router as health_router
from .api.endpoints.orders import router as orders_router
from .api.endpoints.weather_forecast import router as weather_forecast_router
from .api.errors import status_code_for
from .constants import APP_NAME, APP_VERSION, get_current_timestamp
from .core.config import get_settings
from .core.logging import configure_logging
from .domain.cache.exceptions import CacheException
from .services.cache.cache_service import CacheService
from .services.cache.factory import create_cache_service

logger = structlog.get_logger()
settings = get_settings()


# Application lifecycle management
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the cache service on startup and close it on shutdown."""
    configure_logging(
        settings.OTEL_SERVICE_NAME, settings.LOG_LEVEL, json_logs=settings.LOG_JSON
    )

    # Tests may inject a prepared service before startup
    cache_service = getattr(app.state, "cache_service", None)
    if not isinstance(cache_service, CacheService):
        cache_service = create_cache_service(settings)
        app.state.cache_service = cache_service

    logger.info(
        "CacheHub API started",
        version=APP_VERSION,
        environment=settings.ENVIRONMENT,
        cache_backend=cache_service.backend_name,
    )

    yield

    logger.info("Shutting down CacheHub API")
    try:
        await cache_service.close()
    except CacheException as e:
        logger.error("Error closing cache service", error=e.message)


# Create FastAPI application
app = FastAPI(
    title=f"{APP_NAME} API",
    description="Typed cache facade with cache-aside and prefix invalidation",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Include API routers
app.include_router(health_router, tags=["health"])
app.include_router(weather_forecast_router, tags=["weather"])
app.include_router(orders_router, tags=["orders"])
app.include_router(cache_admin_router, tags=["cache"])


@app.exception_handler(CacheException)
async def cache_exception_handler(request: Request, exc: CacheException):
    """Map cache failures to JSON error responses."""
    span = trace.get_current_span()
    span.set_attribute("error.type", type(exc).__name__)
    span.set_attribute("error.code", exc.error_code)

    logger.error(
        "Cache operation failed",
        path=request.url.path,
        method=request.method,
        error_code=exc.error_code,
        error=exc.message,
    )

    return JSONResponse(
        status_code=status_code_for(exc),
        content={
            "error": exc.error_code,
            "message": exc.message,
            "details": exc.details,
            "timestamp": get_current_timestamp().isoformat(),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
