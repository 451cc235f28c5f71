"""Pydantic schemas for Forecast.io requests and results."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Outcome(str, Enum):
    """Named outcome a forecast call resolves to."""

    SUCCESS = "success"
    INVALID_LAT_OR_LONG = "invalid_lat_or_long"
    INVALID_API_KEY = "invalid_api_key"
    INVALID_OPTIONS = "invalid_options"
    NO_API_KEY = "no_api_key"
    NO_LAT_OR_LONG = "no_lat_or_long"
    ERROR = "error"


class ForecastOptions(BaseModel):
    """
    Optional query parameters forwarded to the Forecast.io API.

    Values are not checked against the accepted sets here; the request
    validator does that so a bad value resolves to ``invalid_options``.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "callback": "logResult",
                "units": "si",
                "exclude": ["minutely", "hourly"],
                "extend": "hourly",
                "lang": "es"
            }
        }
    )

    callback: Optional[str] = Field(None, description="JSONP callback name, response is returned as raw text")
    units: Optional[str] = Field(None, description="Unit system: us, si, ca, uk or auto")
    exclude: List[str] = Field(default_factory=list, description="Data blocks to leave out of the response")
    lang: Optional[str] = Field(None, description="Language of the text summaries")
    extend: Optional[str] = Field(None, description="Passed to the API verbatim")

    @field_validator("exclude", mode="before")
    @classmethod
    def split_exclude(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


class ForecastRequest(BaseModel):
    """Caller-supplied inputs of a single forecast call."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "lat": "42.3507282",
                "lng": "-71.13212709999999",
                "api_key": "ab1d526c3c074c2a48c25476c19a9d0a",
                "time": "2013-05-06",
                "time_format": "%Y-%m-%d"
            }
        }
    )

    lat: Optional[str] = Field(None, description="Latitude in decimal degrees")
    lng: Optional[str] = Field(None, description="Longitude in decimal degrees")
    api_key: Optional[str] = Field(None, description="Forecast.io API key")
    options: Optional[ForecastOptions] = None
    time: Optional[str] = Field(None, description="Time to forecast for")
    time_format: Optional[str] = Field(None, description="strptime format of time, ISO 8601 when empty")

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def coerce_coordinate(cls, v: Any) -> Any:
        """Keep coordinates as text so the pattern check sees what the caller sent."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class WeatherCard(BaseModel):
    """Condensed view of a weather payload for display."""

    icon: Optional[str] = None
    summary: Optional[str] = None
    temperature: Optional[float] = None
    low: Optional[float] = None
    high: Optional[float] = None
    text: str = ""
    view: Optional[str] = Field(None, description="Rendered markup when a renderer is configured")
    weather: Optional[dict] = Field(None, description="Full Forecast.io payload, set on daily cards")


class ForecastResult(BaseModel):
    """Tagged outcome of a forecast call."""

    outcome: Outcome
    payload: Any = Field(None, description="Parsed JSON, raw callback text or weather cards")
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.outcome is Outcome.SUCCESS
