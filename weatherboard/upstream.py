"""
Upstream weather client used by the proxy.

Kept apart from the FastAPI endpoint:
- URL building is testable without a server
- main.py only maps results onto HTTP responses
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
import logging

import httpx

from .errors import MissingParameters, UpstreamUnavailable
from .schemas import WeatherQuery

logger = logging.getLogger(__name__)

CURRENT_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"


@dataclass(frozen=True)
class UpstreamRequest:
    """A fully built upstream call (endpoint + query params)."""
    url: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def full_url(self) -> str:
        return str(httpx.URL(self.url, params=self.params))


@dataclass(frozen=True)
class UpstreamResult:
    """
    What the proxy hands back to its caller.

    Successful answers carry the parsed JSON `payload`; rejections carry the
    upstream `content` bytes and `media_type` untouched.
    """
    status_code: int
    payload: Any = None
    content: bytes = b""
    media_type: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status_code == 200


class OpenWeatherProxy:
    """
    OpenWeatherMap relay.

    Endpoints used:
    - Current weather:
        /data/2.5/weather?q=...|lat=...&lon=...&units=metric&appid=KEY
    - 5-day forecast (3-hour increments):
        /data/2.5/forecast?q=...|lat=...&lon=...&units=metric&appid=KEY

    Each relay is a single best-effort call: no retry, no caching, no timeout.
    """

    def __init__(
        self,
        api_key: str,
        base: str = "https://api.openweathermap.org",
        units: str = "metric",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base = base.rstrip("/")
        self.units = units
        self.transport = transport

    def build_request(self, query: WeatherQuery) -> Optional[UpstreamRequest]:
        """
        Pick the endpoint and location parameters for a query.

        Returns None when the query names neither a city nor a lat/lon pair.
        """
        path = FORECAST_PATH if query.kind == "forecast" else CURRENT_PATH

        if query.city:
            params: Dict[str, Any] = {"q": query.city}
        elif query.has_coordinates:
            params = {"lat": query.lat, "lon": query.lon}
        else:
            return None

        params["appid"] = self.api_key
        params["units"] = self.units
        return UpstreamRequest(url=f"{self.base}{path}", params=params)

    async def relay(self, query: WeatherQuery) -> UpstreamResult:
        """
        Forward one query upstream and return its status/body.

        Non-2xx upstream answers are returned unchanged; transport failures
        and unreadable bodies raise UpstreamUnavailable.
        """
        request = self.build_request(query)
        if request is None:
            raise MissingParameters()

        try:
            async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
                r = await client.get(request.url, params=request.params)
        except httpx.HTTPError as exc:
            # Only the endpoint path is logged; params carry the key.
            logger.exception("Upstream %s request to %s failed", query.kind, request.url)
            raise UpstreamUnavailable() from exc

        if not r.is_success:
            logger.warning("Upstream rejected %s request (%s): %s", query.kind, r.status_code, r.text)
            return UpstreamResult(
                status_code=r.status_code,
                content=r.content,
                media_type=r.headers.get("content-type"),
            )

        try:
            payload = r.json()
        except ValueError as exc:
            logger.exception("Upstream %s answer from %s is not JSON", query.kind, request.url)
            raise UpstreamUnavailable() from exc

        return UpstreamResult(status_code=200, payload=payload)
