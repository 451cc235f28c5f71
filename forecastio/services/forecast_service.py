"""Forecast.io request service: validate, send one GET, classify the response."""

import logging
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaValidationError

from forecastio.config import Settings
from forecastio.exceptions import (
    AuthError,
    ForecastError,
    ResponseParseError,
    TransportError,
    UpstreamError,
)
from forecastio.schemas.forecast import (
    ForecastOptions,
    ForecastRequest,
    ForecastResult,
    Outcome,
)
from forecastio.services.query_builder import build_query_string, build_request_url
from forecastio.services.shapes import CardRenderer, shape_payload
from forecastio.services.validation import validate_request
from forecastio.services.variants import (
    CURRENT_FORECAST,
    CURRENT_WEATHER,
    FORECAST,
    TODAYS_FORECAST,
    TOMORROWS_FORECAST,
    Variant,
)

logger = logging.getLogger(__name__)

OptionsInput = Union[ForecastOptions, dict, None]


def classify_response(response: httpx.Response, raw: bool = False) -> Any:
    """
    Map a Forecast.io response to a payload or an error.

    Args:
        response: Response of the single GET request
        raw: Return the body text untouched (callback/JSONP responses)

    Returns:
        Parsed JSON, or the body text when ``raw`` is set

    Raises:
        AuthError: On HTTP 403
        UpstreamError: On HTTP 400 or any other non-200 status
        ResponseParseError: If a 200 body is not valid JSON
    """
    status = response.status_code

    if status == 200:
        if raw:
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(
                f"There was an error parsing forecast.io's response: {e}"
            )

    if status == 403:
        raise AuthError("Your Forecast.io API key is not valid.")

    if status == 400:
        raise UpstreamError(
            "There was an error formatting a valid API request, "
            "check the options passed to forecast.io.",
            status_code=status,
        )

    raise UpstreamError(
        f"An error was returned from the forecast.io API with HTTP status code: {status}",
        status_code=status,
    )


class ForecastService:
    """
    Service wrapping the Forecast.io forecast endpoint.

    Each call validates its inputs, sends at most one GET request and
    resolves to a ``ForecastResult``. Nothing is shared between calls
    except the optional HTTP client passed in.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        renderer: Optional[CardRenderer] = None,
    ):
        """
        Initialize forecast service.

        Args:
            settings: Application settings
            http_client: Optional shared client; a short-lived one is
                created per request when omitted
            renderer: Optional card renderer for shaped variants
        """
        self.settings = settings
        self.base_url = settings.forecast_base_url
        self.default_api_key = settings.forecast_api_key
        self.http_client = http_client
        self.renderer = renderer

    async def run(self, variant: Variant, request: ForecastRequest) -> ForecastResult:
        """
        Run one forecast call for the given variant.

        Args:
            variant: Variant describing accepted inputs and response shape
            request: Caller inputs

        Returns:
            ForecastResult tagged with the outcome of the call
        """
        api_key = request.api_key or self.default_api_key

        try:
            epoch = validate_request(variant, request, api_key)
            options = request.options if variant.accepts_options else None

            url = build_request_url(
                self.base_url,
                api_key,
                request.lat.strip(),
                request.lng.strip(),
                epoch=epoch,
                query_string=build_query_string(options),
            )
            payload = await self._fetch(
                url,
                api_key,
                raw=bool(options and options.callback),
            )
            payload = shape_payload(variant.shape, payload, self.renderer)
        except ForecastError as e:
            logger.warning(f"{variant.name} resolved to {e.outcome.value}: {e.detail}")
            return ForecastResult(outcome=e.outcome, detail=e.detail)

        return ForecastResult(outcome=Outcome.SUCCESS, payload=payload)

    async def _fetch(self, url: str, api_key: str, raw: bool = False) -> Any:
        """Send the GET request and classify the response."""
        logger.info(f"Requesting forecast: {url.replace(quote(api_key, safe=''), '***')}")

        try:
            if self.http_client is not None:
                response = await self.http_client.get(url)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.error("Forecast.io request timeout")
            raise TransportError(
                f"The request to forecast.io timed out: {e!r}"
            )
        except httpx.RequestError as e:
            logger.error(f"Forecast.io request error: {e!r}")
            raise TransportError(
                f"An error occurred while attempting to make a request to forecast.io: {e!r}"
            )
        except httpx.InvalidURL as e:
            logger.error(f"Forecast.io request URL rejected: {e!r}")
            raise TransportError(
                f"Could not build a valid request URL for forecast.io: {e!r}"
            )

        return classify_response(response, raw=raw)

    def _schema_error_result(
        self, inputs: dict, error: SchemaValidationError
    ) -> ForecastResult:
        """Classify a schema error in the same order ``validate_request`` checks."""
        fields = {str(item["loc"][0]) for item in error.errors() if item["loc"]}
        api_key = inputs.get("api_key") or self.default_api_key

        if "api_key" in fields:
            return ForecastResult(
                outcome=Outcome.NO_API_KEY,
                detail="Your Forecast.io API key must be a string.",
            )
        if not api_key:
            return ForecastResult(
                outcome=Outcome.NO_API_KEY,
                detail="You did not pass in a Forecast.io API key.",
            )
        if any(inputs.get(name) is None or inputs.get(name) == "" for name in ("lat", "lng")):
            return ForecastResult(
                outcome=Outcome.NO_LAT_OR_LONG,
                detail="You did not provide both a latitude and a longitude.",
            )
        if fields & {"lat", "lng"}:
            return ForecastResult(outcome=Outcome.INVALID_LAT_OR_LONG, detail=str(error))
        return ForecastResult(outcome=Outcome.INVALID_OPTIONS, detail=str(error))

    async def _run_with(self, variant: Variant, **inputs: Any) -> ForecastResult:
        try:
            request = ForecastRequest(**inputs)
        except SchemaValidationError as e:
            result = self._schema_error_result(inputs, e)
            logger.warning(f"{variant.name} resolved to {result.outcome.value}: {result.detail}")
            return result
        return await self.run(variant, request)

    async def get_current_weather(
        self,
        lat: Union[str, float],
        lng: Union[str, float],
        api_key: Optional[str] = None,
    ) -> ForecastResult:
        """Get the current conditions at a location as a weather card."""
        return await self._run_with(CURRENT_WEATHER, lat=lat, lng=lng, api_key=api_key)

    async def get_current_forecast(
        self,
        lat: Union[str, float],
        lng: Union[str, float],
        api_key: Optional[str] = None,
        options: OptionsInput = None,
    ) -> ForecastResult:
        """Get the full forecast for a location right now."""
        return await self._run_with(
            CURRENT_FORECAST, lat=lat, lng=lng, api_key=api_key, options=options
        )

    async def get_forecast(
        self,
        lat: Union[str, float],
        lng: Union[str, float],
        time: str,
        time_format: Optional[str] = None,
        api_key: Optional[str] = None,
        options: OptionsInput = None,
    ) -> ForecastResult:
        """
        Get the forecast for a location at a specific time.

        Args:
            lat: Latitude in decimal degrees
            lng: Longitude in decimal degrees
            time: Time to forecast for
            time_format: ``strptime`` format of ``time``; ISO 8601 when empty
            api_key: Forecast.io API key, the configured key when omitted
            options: Query options; ``lang`` must be set for this call

        Returns:
            ForecastResult with the raw payload on success
        """
        return await self._run_with(
            FORECAST,
            lat=lat,
            lng=lng,
            time=time,
            time_format=time_format,
            api_key=api_key,
            options=options,
        )

    async def get_todays_forecast(
        self,
        lat: Union[str, float],
        lng: Union[str, float],
        api_key: Optional[str] = None,
    ) -> ForecastResult:
        """Get today's low, high and summary as a weather card."""
        return await self._run_with(TODAYS_FORECAST, lat=lat, lng=lng, api_key=api_key)

    async def get_tomorrows_forecast(
        self,
        lat: Union[str, float],
        lng: Union[str, float],
        api_key: Optional[str] = None,
    ) -> ForecastResult:
        """Get tomorrow's low, high and summary as a weather card."""
        return await self._run_with(TOMORROWS_FORECAST, lat=lat, lng=lng, api_key=api_key)
