"""The forecast call variants and the response shape each one produces."""

from dataclasses import dataclass
from enum import Enum


class ResponseShape(str, Enum):
    """How a successful payload is handed back to the caller."""

    RAW = "raw"
    CURRENT = "current"
    TODAY = "today"
    TOMORROW = "tomorrow"


@dataclass(frozen=True)
class Variant:
    """Which inputs a call accepts and how its response is shaped."""

    name: str
    shape: ResponseShape = ResponseShape.RAW
    accepts_options: bool = False
    requires_time: bool = False
    requires_lang: bool = False


CURRENT_WEATHER = Variant("current_weather", shape=ResponseShape.CURRENT)
CURRENT_FORECAST = Variant("current_forecast", accepts_options=True)
FORECAST = Variant(
    "forecast",
    accepts_options=True,
    requires_time=True,
    requires_lang=True,
)
TODAYS_FORECAST = Variant("todays_forecast", shape=ResponseShape.TODAY)
TOMORROWS_FORECAST = Variant("tomorrows_forecast", shape=ResponseShape.TOMORROW)

VARIANTS = {
    variant.name: variant
    for variant in (
        CURRENT_WEATHER,
        CURRENT_FORECAST,
        FORECAST,
        TODAYS_FORECAST,
        TOMORROWS_FORECAST,
    )
}
