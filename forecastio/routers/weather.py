"""Weather API endpoints backed by Forecast.io."""

import logging
from typing import Any, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from forecastio.config import Settings
from forecastio.dependencies import get_http_client, get_settings
from forecastio.schemas.forecast import ForecastOptions, ForecastResult, Outcome
from forecastio.services.forecast_service import ForecastService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weather")

OUTCOME_STATUS_CODES = {
    Outcome.NO_LAT_OR_LONG: 422,
    Outcome.INVALID_LAT_OR_LONG: 422,
    Outcome.INVALID_OPTIONS: 422,
    Outcome.NO_API_KEY: 401,
    Outcome.INVALID_API_KEY: 403,
    Outcome.ERROR: 502,
}

ERROR_RESPONSES = {
    401: {"description": "No Forecast.io API key was passed or configured"},
    403: {
        "description": "Forecast.io rejected the API key",
        "content": {
            "application/json": {
                "example": {
                    "detail": "Your Forecast.io API key is not valid.",
                    "error_code": "INVALID_API_KEY"
                }
            }
        }
    },
    422: {
        "description": "Invalid or missing coordinates or options",
        "content": {
            "application/json": {
                "example": {
                    "detail": "You have passed in an invalid latitude or longitude: 91, 0",
                    "error_code": "INVALID_LAT_OR_LONG"
                }
            }
        }
    },
    502: {"description": "Forecast.io could not be reached or returned an error"},
}


class ForecastHTTPException(HTTPException):
    """HTTP error carrying the forecast outcome as its error code."""

    def __init__(self, status_code: int, detail: str, error_code: str) -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code


def get_forecast_service(
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> ForecastService:
    """
    Dependency to get forecast service instance.

    Args:
        settings: Application settings
        http_client: Request-scoped HTTP client

    Returns:
        ForecastService: Configured forecast service
    """
    return ForecastService(settings, http_client=http_client)


def to_response(result: ForecastResult) -> Any:
    """Return a successful payload or raise the matching HTTP error."""
    if result.ok:
        if isinstance(result.payload, str):
            return Response(content=result.payload, media_type="application/javascript")
        return result.payload

    raise ForecastHTTPException(
        status_code=OUTCOME_STATUS_CODES[result.outcome],
        detail=result.detail or result.outcome.value,
        error_code=result.outcome.value.upper(),
    )


def options_from_query(
    units: Optional[str] = Query(None, description="us, si, ca, uk or auto", examples=["si"]),
    exclude: Optional[str] = Query(
        None,
        description="Comma-separated blocks to exclude",
        examples=["minutely,hourly"],
    ),
    lang: Optional[str] = Query(None, description="Summary language", examples=["es"]),
    callback: Optional[str] = Query(None, description="JSONP callback name"),
    extend: Optional[str] = Query(None, description="Passed to Forecast.io verbatim"),
) -> Optional[ForecastOptions]:
    """Collect option query parameters, None when none were given."""
    if not any((units, exclude, lang, callback, extend)):
        return None
    return ForecastOptions(
        units=units,
        exclude=exclude,
        lang=lang,
        callback=callback,
        extend=extend,
    )


@router.get(
    "/current",
    summary="Current weather",
    description="Current conditions at a location as a single weather card.",
    responses=ERROR_RESPONSES,
)
async def current_weather(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees", examples=["42.3507282"]),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees", examples=["-71.13212709999999"]),
    api_key: Optional[str] = Query(None, description="Forecast.io API key"),
    forecast_service: ForecastService = Depends(get_forecast_service),
) -> Any:
    """Get the current weather."""
    logger.info(f"Current weather requested for {lat}, {lng}")
    return to_response(await forecast_service.get_current_weather(lat, lng, api_key=api_key))


@router.get(
    "/current-forecast",
    summary="Current forecast",
    description="""
    Full Forecast.io payload for a location right now.

    With `callback` set the JSONP body is returned untouched.
    """,
    responses=ERROR_RESPONSES,
)
async def current_forecast(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    api_key: Optional[str] = Query(None, description="Forecast.io API key"),
    options: Optional[ForecastOptions] = Depends(options_from_query),
    forecast_service: ForecastService = Depends(get_forecast_service),
) -> Any:
    """Get the current forecast."""
    return to_response(
        await forecast_service.get_current_forecast(lat, lng, api_key=api_key, options=options)
    )


@router.get(
    "/forecast",
    summary="Forecast at a time",
    description="""
    Full Forecast.io payload for a location at a given time.

    `time` is parsed with `time_format` (strptime syntax) or as ISO 8601
    when no format is given. When any option is passed, `lang` is required.
    """,
    responses=ERROR_RESPONSES,
)
async def forecast(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    time: Optional[str] = Query(None, description="Time to forecast for", examples=["2013-05-06"]),
    time_format: Optional[str] = Query(None, description="strptime format of time", examples=["%Y-%m-%d"]),
    api_key: Optional[str] = Query(None, description="Forecast.io API key"),
    options: Optional[ForecastOptions] = Depends(options_from_query),
    forecast_service: ForecastService = Depends(get_forecast_service),
) -> Any:
    """Get the forecast at a specific time."""
    return to_response(
        await forecast_service.get_forecast(
            lat,
            lng,
            time,
            time_format=time_format,
            api_key=api_key,
            options=options,
        )
    )


@router.get(
    "/today",
    summary="Today's forecast",
    description="Today's low, high and summary as a single weather card.",
    responses=ERROR_RESPONSES,
)
async def todays_forecast(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    api_key: Optional[str] = Query(None, description="Forecast.io API key"),
    forecast_service: ForecastService = Depends(get_forecast_service),
) -> Any:
    """Get today's forecast."""
    return to_response(await forecast_service.get_todays_forecast(lat, lng, api_key=api_key))


@router.get(
    "/tomorrow",
    summary="Tomorrow's forecast",
    description="Tomorrow's low, high and summary as a single weather card.",
    responses=ERROR_RESPONSES,
)
async def tomorrows_forecast(
    lat: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    lng: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    api_key: Optional[str] = Query(None, description="Forecast.io API key"),
    forecast_service: ForecastService = Depends(get_forecast_service),
) -> Any:
    """Get tomorrow's forecast."""
    return to_response(await forecast_service.get_tomorrows_forecast(lat, lng, api_key=api_key))
