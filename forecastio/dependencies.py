"""FastAPI dependencies for settings and outbound HTTP access."""
from typing import AsyncGenerator

import httpx

from forecastio.config import Settings


# Initialize settings
settings = Settings()


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    Dependency to get an HTTP client scoped to the incoming request.

    Yields:
        httpx.AsyncClient: Client closed once the response is sent
    """
    async with httpx.AsyncClient() as client:
        yield client


def get_settings() -> Settings:
    """Dependency returning the application settings."""
    return settings
