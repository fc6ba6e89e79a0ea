"""
CacheHub Global Constants

Centralized location for all system-wide constants used across the application.
"""

from datetime import datetime, timezone

# Cache keys used by the HTTP layer
WEATHER_FORECAST_CACHE_KEY = "weatherforecast"
ORDERS_CACHE_PREFIX = "orders:"


def get_current_timestamp() -> datetime:
    """Get current timestamp with UTC timezone."""
    return datetime.now(timezone.utc)


# Application Constants
APP_NAME = "CacheHub"
APP_VERSION = "0.1.0"
