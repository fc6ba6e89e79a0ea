"""API models."""

from .forecast import WeatherForecast
from .order import Order

__all__ = ["WeatherForecast", "Order"]
