"""Weather forecast model served by the demo endpoints."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, computed_field

FORECAST_SUMMARIES = [
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
]


class WeatherForecast(BaseModel):
    """Single-day forecast."""

    date: dt.date
    temperature_c: int = Field(..., ge=-100, le=100)
    summary: Optional[str] = None
    is_cached: bool = False

    @computed_field
    @property
    def temperature_f(self) -> int:
        return 32 + int(self.temperature_c / 0.5556)
