"""
FastAPI entrypoint for the weather proxy.

This file focuses on:
- routing
- request/response handling
- wiring the upstream client in through a dependency
"""

from __future__ import annotations

from typing import Optional
import logging

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse, Response

from .errors import MissingParameters, UpstreamUnavailable
from .schemas import WeatherQuery
from .settings import get_proxy_settings
from .upstream import OpenWeatherProxy

logger = logging.getLogger(__name__)


def get_proxy() -> OpenWeatherProxy:
    """Dependency returning the upstream relay (overridden in tests)."""
    settings = get_proxy_settings()
    return OpenWeatherProxy(settings.api_key, base=settings.openweather_base, units=settings.units)


def create_app() -> FastAPI:
    app = FastAPI(title="Weatherboard proxy")

    @app.get("/api/weather")
    async def api_weather(
        city: Optional[str] = None,
        lat: Optional[str] = None,
        lon: Optional[str] = None,
        kind: Optional[str] = Query(None, alias="type"),
        proxy: OpenWeatherProxy = Depends(get_proxy),
    ):
        """
        Relay a current-conditions or forecast lookup:
        - by city name (?city=Paris)
        - or by coordinates (?lat=..&lon=..)
        - type=forecast selects the forecast endpoint, anything else current
        """
        query = WeatherQuery.from_params(city=city, lat=lat, lon=lon, type=kind)
        try:
            result = await proxy.relay(query)
        except MissingParameters as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except UpstreamUnavailable as e:
            return JSONResponse(status_code=500, content={"error": str(e)})

        if not result.is_success:
            return Response(content=result.content, status_code=result.status_code, media_type=result.media_type)
        return JSONResponse(status_code=200, content=result.payload)

    return app


app = create_app()


def run() -> None:
    """Serve the proxy with uvicorn (console script: weatherboard-proxy)."""
    import uvicorn

    settings = get_proxy_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs at INFO, appid included
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info("Starting %s", settings.app_name)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
