"""Errors raised while validating, sending or shaping a forecast request.

Every error carries the outcome tag it resolves to and a human-readable
detail string. ``ForecastService`` turns them into a ``ForecastResult``.
"""

from typing import Optional

from forecastio.schemas.forecast import Outcome


class ForecastError(Exception):
    """Base class for all forecast call failures."""

    outcome: Outcome = Outcome.ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(ForecastError):
    """Inputs rejected before any network call."""


class MissingAPIKey(ValidationError):
    outcome = Outcome.NO_API_KEY


class MissingCoordinates(ValidationError):
    outcome = Outcome.NO_LAT_OR_LONG


class InvalidCoordinates(ValidationError):
    outcome = Outcome.INVALID_LAT_OR_LONG


class InvalidOptions(ValidationError):
    outcome = Outcome.INVALID_OPTIONS


class AuthError(ForecastError):
    """API key rejected by Forecast.io (HTTP 403)."""

    outcome = Outcome.INVALID_API_KEY


class TransportError(ForecastError):
    """DNS, connection or timeout failure."""


class ResponseParseError(ForecastError):
    """Body was not valid JSON when JSON was expected."""


class UpstreamError(ForecastError):
    """Non-2xx status other than 403."""

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(detail)
        self.status_code = status_code


class ShapeError(ForecastError):
    """Payload lacks the fields a response shape needs."""
