"""Pydantic schemas for request/response validation."""
from forecastio.schemas.forecast import (
    ForecastOptions,
    ForecastRequest,
    ForecastResult,
    Outcome,
    WeatherCard,
)

__all__ = [
    "ForecastOptions",
    "ForecastRequest",
    "ForecastResult",
    "Outcome",
    "WeatherCard",
]
