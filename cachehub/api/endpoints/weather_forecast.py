"""
Weather forecast endpoints.

Forecasts are generated on a miss and cached under a single key; cached
responses are flagged with ``is_cached``.
"""

import random
from datetime import timedelta
from typing import Any, Dict, List

import structlog
from fastapi import APIRouter, Depends

from ...constants import WEATHER_FORECAST_CACHE_KEY, get_current_timestamp
from ...models.forecast import FORECAST_SUMMARIES, WeatherForecast
from ...services.cache.cache_service import CacheService
from ..dependencies import get_cache_service

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["weather"])

FORECAST_DAYS = 5


def generate_forecasts(include_summary: bool = True) -> List[WeatherForecast]:
    """Create forecasts for the next FORECAST_DAYS days."""
    today = get_current_timestamp().date()
    return [
        WeatherForecast(
            date=today + timedelta(days=index),
            temperature_c=random.randint(-20, 54),
            summary=random.choice(FORECAST_SUMMARIES) if include_summary else None,
            is_cached=False,
        )
        for index in range(1, FORECAST_DAYS + 1)
    ]


@router.get(
    "/weatherforecast",
    response_model=List[WeatherForecast],
    name="getWeatherForecast",
)
async def get_weather_forecast(
    include_summary: bool = True,
    cache: CacheService = Depends(get_cache_service),
) -> List[WeatherForecast]:
    """Return cached forecasts, generating and caching them on a miss."""
    forecasts = await cache.get(WEATHER_FORECAST_CACHE_KEY, List[WeatherForecast])

    if forecasts is not None:
        for forecast in forecasts:
            forecast.is_cached = True
        return forecasts

    forecasts = generate_forecasts(include_summary)
    await cache.set(WEATHER_FORECAST_CACHE_KEY, forecasts)
    logger.info("Generated weather forecasts", count=len(forecasts))
    return forecasts


@router.get("/removeWeatherforecastCache", name="removeWeatherforecastCache")
async def remove_weather_forecast_cache(
    cache: CacheService = Depends(get_cache_service),
) -> Dict[str, Any]:
    """Invalidate the cached forecasts."""
    is_removed = await cache.remove(WEATHER_FORECAST_CACHE_KEY)

    return {
        "success": is_removed,
        "message": (
            "Weather forecast cache removed successfully"
            if is_removed
            else "Cache key not found"
        ),
    }
