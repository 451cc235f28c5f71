"""Shared test fixtures and configuration."""

import copy
import os
from typing import AsyncGenerator, Callable, Generator, List

import httpx
import pytest

# Set TESTING flag to prevent loading .env file
os.environ['TESTING'] = '1'

from forecastio.config import Settings


VALID_LAT = "42.3507282"
VALID_LNG = "-71.13212709999999"
VALID_API_KEY = "VALID"

BOSTON_WEATHER = {
    "latitude": 42.3507282,
    "longitude": -71.13212709999999,
    "currently": {
        "icon": "clear-day",
        "temperature": 72,
        "summary": "Clear"
    },
    "daily": {
        "data": [
            {
                "icon": "partly-cloudy-day",
                "temperatureMin": 58.1,
                "temperatureMax": 74.6,
                "summary": "Partly cloudy in the afternoon."
            },
            {
                "icon": "rain",
                "temperatureMin": 55.0,
                "temperatureMax": 63.2,
                "summary": "Light rain throughout the day."
            }
        ]
    }
}


class RecordingTransport(httpx.MockTransport):
    """Mock transport remembering every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture(autouse=True)
def setup_test_env() -> Generator[None, None, None]:
    """Set up test environment variables before each test."""
    original_env = os.environ.copy()

    os.environ['TESTING'] = '1'
    os.environ.pop('FORECAST_API_KEY', None)

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no configured API key."""
    return Settings(forecast_api_key="")


@pytest.fixture
def weather_payload() -> dict:
    """A fresh copy of the Boston sample payload."""
    return copy.deepcopy(BOSTON_WEATHER)


@pytest.fixture
def json_transport(weather_payload: dict) -> RecordingTransport:
    """Transport answering every request with the sample payload."""
    return RecordingTransport(lambda request: httpx.Response(200, json=weather_payload))


@pytest.fixture
async def async_client(json_transport: RecordingTransport) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client for the API with Forecast.io mocked out."""
    from httpx import ASGITransport
    from forecastio.main import app
    from forecastio.dependencies import get_http_client, get_settings

    async def override_get_http_client():
        async with httpx.AsyncClient(transport=json_transport) as client:
            yield client

    def override_get_settings():
        return Settings(forecast_api_key="CONFIGURED")

    app.dependency_overrides[get_http_client] = override_get_http_client
    app.dependency_overrides[get_settings] = override_get_settings

    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
