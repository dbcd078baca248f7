"""
Client for the weather proxy.

Talks to /api/weather only; it never sees the upstream API key.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

import httpx

from .errors import WeatherError
from .schemas import Coordinates, Locator, WeatherQuery

logger = logging.getLogger(__name__)


class WeatherApiClient:
    """Fetches current conditions and forecasts from the proxy."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    async def _get(self, query: WeatherQuery, failure: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
                r = await client.get("/api/weather", params=query.to_params())
        except httpx.HTTPError as exc:
            logger.warning("Proxy unreachable for %s: %s", query.to_params(), exc)
            raise WeatherError("Failed to fetch weather data") from exc

        if not r.is_success:
            logger.info("Proxy answered %s for %s", r.status_code, query.to_params())
            raise WeatherError(failure)
        try:
            return r.json()
        except ValueError as exc:
            raise WeatherError(failure) from exc

    async def fetch_current(self, locator: Locator) -> Dict[str, Any]:
        """Current conditions for a city name or coordinate pair."""
        failure = "Weather data not available" if isinstance(locator, Coordinates) else "City not found"
        return await self._get(WeatherQuery.for_locator(locator, "current"), failure)

    async def fetch_forecast(self, locator: Locator) -> Dict[str, Any]:
        """5-day / 3-hour forecast for a city name or coordinate pair."""
        return await self._get(WeatherQuery.for_locator(locator, "forecast"), "Forecast not available")
