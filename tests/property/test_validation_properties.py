"""Property-based tests for forecast request validation.

Feature: forecast-request-validation
"""

import pytest
from hypothesis import given, settings, strategies as st, HealthCheck

from forecastio.exceptions import InvalidCoordinates, InvalidOptions
from forecastio.schemas.forecast import ForecastOptions, ForecastRequest, Outcome
from forecastio.services.validation import (
    VALID_EXCLUDES,
    VALID_LANGUAGES,
    VALID_UNITS,
    is_valid_coordinate_pair,
    validate_request,
)
from forecastio.services.variants import CURRENT_FORECAST, FORECAST


valid_latitude_strategy = st.floats(min_value=-90.0, max_value=90.0, allow_nan=False, allow_infinity=False)
valid_longitude_strategy = st.floats(min_value=-180.0, max_value=180.0, allow_nan=False, allow_infinity=False)

out_of_range_latitude_strategy = st.one_of(
    st.floats(min_value=90.001, max_value=1e6, allow_nan=False, allow_infinity=False),
    st.floats(min_value=-1e6, max_value=-90.001, allow_nan=False, allow_infinity=False),
)
out_of_range_longitude_strategy = st.one_of(
    st.floats(min_value=180.001, max_value=1e6, allow_nan=False, allow_infinity=False),
    st.floats(min_value=-1e6, max_value=-180.001, allow_nan=False, allow_infinity=False),
)

invalid_units_strategy = st.text(min_size=1, max_size=12).filter(lambda s: s not in VALID_UNITS)


class TestCoordinateProperties:
    """
    Property: Coordinate Range

    Coordinates inside [-90, 90] x [-180, 180] are accepted and anything
    outside is rejected before a request is built.
    """

    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(lat=valid_latitude_strategy, lng=valid_longitude_strategy)
    def test_property_in_range_coordinates_accepted(self, lat: float, lng: float) -> None:
        """Property: In-range decimal coordinates always match the pattern."""
        assert is_valid_coordinate_pair(f"{lat:.6f}", f"{lng:.6f}")

    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(lat=out_of_range_latitude_strategy, lng=valid_longitude_strategy)
    def test_property_out_of_range_latitude_rejected(self, lat: float, lng: float) -> None:
        """Property: Latitudes beyond +/-90 resolve to invalid_lat_or_long."""
        request = ForecastRequest(lat=f"{lat:.3f}", lng=f"{lng:.6f}")

        with pytest.raises(InvalidCoordinates) as exc_info:
            validate_request(CURRENT_FORECAST, request, api_key="VALID")

        assert exc_info.value.outcome is Outcome.INVALID_LAT_OR_LONG

    @settings(max_examples=200, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(lat=valid_latitude_strategy, lng=out_of_range_longitude_strategy)
    def test_property_out_of_range_longitude_rejected(self, lat: float, lng: float) -> None:
        """Property: Longitudes beyond +/-180 resolve to invalid_lat_or_long."""
        request = ForecastRequest(lat=f"{lat:.6f}", lng=f"{lng:.3f}")

        with pytest.raises(InvalidCoordinates):
            validate_request(CURRENT_FORECAST, request, api_key="VALID")

    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(lat=st.text(alphabet="abcxyz.,- ", min_size=1, max_size=10))
    def test_property_non_numeric_latitude_rejected(self, lat: str) -> None:
        """Property: Text that is not a number is never a valid latitude."""
        assert not is_valid_coordinate_pair(lat, "0")


class TestOptionsProperties:
    """
    Property: Options Sets

    Units, exclude and lang are accepted exactly when they come from the
    values Forecast.io documents.
    """

    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(units=invalid_units_strategy)
    def test_property_unknown_units_rejected(self, units: str) -> None:
        """Property: Any units outside the five known systems is invalid_options."""
        request = ForecastRequest(lat="0", lng="0", options=ForecastOptions(units=units))

        with pytest.raises(InvalidOptions) as exc_info:
            validate_request(CURRENT_FORECAST, request, api_key="VALID")

        assert exc_info.value.outcome is Outcome.INVALID_OPTIONS

    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(
        units=st.sampled_from(VALID_UNITS),
        exclude=st.lists(st.sampled_from(VALID_EXCLUDES), unique=True),
        lang=st.sampled_from(VALID_LANGUAGES),
    )
    def test_property_known_options_accepted(self, units: str, exclude: list, lang: str) -> None:
        """Property: Any combination of documented values passes validation."""
        request = ForecastRequest(
            lat="0",
            lng="0",
            options=ForecastOptions(units=units, exclude=exclude, lang=lang),
            time="2013-05-06",
            time_format="%Y-%m-%d",
        )

        assert validate_request(FORECAST, request, api_key="VALID") == 1367798400

    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(
        exclude=st.lists(st.sampled_from(VALID_EXCLUDES), max_size=3),
        extra=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=10).filter(
            lambda s: s not in VALID_EXCLUDES
        ),
    )
    def test_property_unknown_exclude_rejected(self, exclude: list, extra: str) -> None:
        """Property: One unknown block anywhere in exclude makes it invalid."""
        request = ForecastRequest(
            lat="0",
            lng="0",
            options=ForecastOptions(exclude=exclude + [extra]),
        )

        with pytest.raises(InvalidOptions):
            validate_request(CURRENT_FORECAST, request, api_key="VALID")
