"""Input validation for forecast requests.

Checks run in a fixed order and the first failure wins, so a request with
both a missing API key and bad coordinates always reports the API key.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from forecastio.exceptions import (
    InvalidCoordinates,
    InvalidOptions,
    MissingAPIKey,
    MissingCoordinates,
)
from forecastio.schemas.forecast import ForecastOptions, ForecastRequest
from forecastio.services.variants import Variant

logger = logging.getLogger(__name__)

# Matches "<lat>, <lng>" with lat in [-90, 90] and lng in [-180, 180].
# ASCII digits only, and the whole string must match.
LAT_LONG_PATTERN = re.compile(
    r"^[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?),\s*"
    r"[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)$",
    re.ASCII,
)

VALID_UNITS = ("us", "si", "ca", "uk", "auto")
VALID_EXCLUDES = ("currently", "minutely", "hourly", "daily", "alerts", "flags")
VALID_LANGUAGES = (
    "ar", "bs", "de", "en", "es", "fr", "it", "nl",
    "pl", "pt", "ru", "sv", "tet", "tr", "x-pig-latin", "zh",
)


def is_valid_coordinate_pair(lat: str, lng: str) -> bool:
    """Return True if ``lat``/``lng`` form a valid geographic point."""
    return LAT_LONG_PATTERN.fullmatch(f"{lat}, {lng}") is not None


def parse_time(time: Optional[str], time_format: Optional[str] = None) -> int:
    """
    Convert a caller-supplied time into Unix epoch seconds.

    Args:
        time: Time string to parse
        time_format: ``strptime`` format; ISO 8601 is expected when empty

    Returns:
        Whole seconds since the epoch. Naive times are taken as UTC.

    Raises:
        InvalidOptions: If time is missing or does not match the format
    """
    if not time:
        raise InvalidOptions("A time input is required for this forecast.")

    try:
        if time_format:
            parsed = datetime.strptime(time, time_format)
        else:
            parsed = datetime.fromisoformat(time)
    except ValueError:
        raise InvalidOptions(
            f"Your time input ({time}) does not match the time format "
            f"({time_format or 'ISO 8601'})."
        )

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def validate_options(options: ForecastOptions, require_lang: bool = False) -> None:
    """
    Check an options bag against the values Forecast.io accepts.

    Raises:
        InvalidOptions: On the first unsupported units, exclude or lang value
    """
    if options.units and options.units not in VALID_UNITS:
        raise InvalidOptions(
            f"Your units option ({options.units}) is not a valid value: "
            f"{', '.join(VALID_UNITS)}"
        )

    if options.exclude:
        unknown = [item for item in options.exclude if item not in VALID_EXCLUDES]
        if unknown:
            raise InvalidOptions(
                f"Your exclude option ({','.join(options.exclude)}) is not a valid value: "
                f"{', '.join(VALID_EXCLUDES)}"
            )

    if (require_lang or options.lang) and options.lang not in VALID_LANGUAGES:
        raise InvalidOptions(
            f"Your language option ({options.lang}) is not a valid value: "
            f"{', '.join(VALID_LANGUAGES)}"
        )


def validate_request(
    variant: Variant,
    request: ForecastRequest,
    api_key: Optional[str],
) -> Optional[int]:
    """
    Validate a request for the given variant.

    Args:
        variant: Variant being called
        request: Caller inputs
        api_key: Effective API key (the caller's or the configured one)

    Returns:
        Epoch seconds of the requested time for variants that take one,
        otherwise None.

    Raises:
        ValidationError: Subclass naming the first rule that failed
    """
    if not api_key:
        raise MissingAPIKey("You did not pass in a Forecast.io API key.")

    lat = (request.lat or "").strip()
    lng = (request.lng or "").strip()
    if not lat or not lng:
        raise MissingCoordinates("You did not provide both a latitude and a longitude.")

    if not is_valid_coordinate_pair(lat, lng):
        raise InvalidCoordinates(
            f"You have passed in an invalid latitude or longitude: {lat}, {lng}"
        )

    if request.options is not None:
        if variant.accepts_options:
            validate_options(request.options, require_lang=variant.requires_lang)
        else:
            logger.debug(f"Ignoring options for {variant.name}, it does not take any")

    if variant.requires_time:
        return parse_time(request.time, request.time_format)
    return None
