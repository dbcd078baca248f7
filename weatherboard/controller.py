"""
Client controller: fetch, merge, keep the list, drive the UI.

The controller knows nothing about a concrete toolkit. It talks to:
- a WeatherApiClient (the proxy)
- a WeatherList it prepends to
- a UserInterface it renders into
- an optional GeolocationProvider
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol
import asyncio
import logging

from .errors import GeolocationUnavailable, WeatherError
from .events import EventSource
from .formatting import round_half_up
from .proxy_client import WeatherApiClient
from .rendering import render_detail, render_weather_list
from .schemas import Coordinates, Locator
from .state import WeatherList, WeatherRecord

logger = logging.getLogger(__name__)


class UserInterface(Protocol):
    def show_loading(self, show: bool) -> None: ...

    def show_message(self, message: str, is_error: bool = True) -> None: ...

    def hide_message(self) -> None: ...

    def render_list(self, text: str) -> None: ...

    def render_detail(self, text: str) -> None: ...

    def hide_detail(self) -> None: ...


class GeolocationProvider(Protocol):
    async def current_position(self) -> Coordinates:
        """Resolve the user's position or raise GeolocationUnavailable."""
        ...


class WeatherController:
    def __init__(
        self,
        api: WeatherApiClient,
        weather_list: WeatherList,
        ui: UserInterface,
        geolocation: Optional[GeolocationProvider] = None,
        default_city: str = "Port Elizabeth",
        message_seconds: float = 3.0,
    ):
        self.api = api
        self.weather_list = weather_list
        self.ui = ui
        self.geolocation = geolocation
        self.default_city = default_city
        self.message_seconds = message_seconds
        self._dismiss: Optional[asyncio.TimerHandle] = None

    def _flash(self, message: str, is_error: bool = True) -> None:
        """Show a message and hide it again after message_seconds."""
        self.ui.show_message(message, is_error)
        if self._dismiss is not None:
            self._dismiss.cancel()
        loop = asyncio.get_running_loop()
        self._dismiss = loop.call_later(self.message_seconds, self.ui.hide_message)

    def refresh(self) -> None:
        self.ui.render_list(render_weather_list(self.weather_list))

    async def add_location(self, locator: Locator) -> Optional[WeatherRecord]:
        """
        Fetch current + forecast for a locator, merge and prepend.

        A failed lookup by coordinates (the geolocation path) falls back to
        the default city.
        """
        try:
            self.ui.show_loading(True)
            self.ui.hide_message()

            # Current first: its failure message wins for an unknown place
            current = await self.api.fetch_current(locator)
            forecast = await self.api.fetch_forecast(locator)
            record = WeatherRecord.merge(current, forecast)
            self.weather_list.prepend(record)

            self.refresh()
            self._flash(f"Added {record.name} - {round_half_up(record.temperature)}°C", is_error=False)
            return record
        except WeatherError as e:
            logger.info("Lookup for %s failed: %s", locator, e)
            self._flash(str(e))
            if isinstance(locator, Coordinates):
                logger.info("Falling back to %s", self.default_city)
                return await self.add_location(self.default_city)
            return None
        finally:
            self.ui.show_loading(False)

    def show_detail(self, record_id: str) -> Optional[WeatherRecord]:
        """Render the detail view; unknown ids are ignored."""
        record = self.weather_list.get(record_id)
        if record is None:
            logger.debug("No record with id %s", record_id)
            return None
        self.ui.render_detail(render_detail(record))
        return record

    def hide_detail(self) -> None:
        self.ui.hide_detail()

    async def search(self, text: str) -> Optional[WeatherRecord]:
        city = (text or "").strip()
        if not city:
            self._flash("Please enter a city name")
            return None
        return await self.add_location(city)

    async def locate(self) -> Optional[WeatherRecord]:
        """User asked for the weather at their current position."""
        if self.geolocation is None:
            self._flash("Geolocation not supported")
            return None

        self.ui.show_loading(True)
        try:
            position = await self.geolocation.current_position()
        except GeolocationUnavailable as e:
            logger.info("Geolocation failed: %s", e)
            self._flash("Unable to get location. Using default city.")
            return await self.add_location(self.default_city)
        finally:
            self.ui.show_loading(False)
        return await self.add_location(position)

    async def start(self) -> Optional[WeatherRecord]:
        """Startup: current position if available, otherwise the default city."""
        if self.geolocation is not None:
            try:
                position = await self.geolocation.current_position()
            except GeolocationUnavailable as e:
                logger.info("Geolocation unavailable at startup: %s", e)
            else:
                return await self.add_location(position)
        return await self.add_location(self.default_city)

    def register(self, events: EventSource) -> None:
        """Bind UI events to controller operations."""

        async def on_load(_: Dict[str, Any]) -> None:
            await self.start()

        async def on_search(data: Dict[str, Any]) -> None:
            await self.search(data.get("city", ""))

        async def on_locate(_: Dict[str, Any]) -> None:
            await self.locate()

        async def on_select(data: Dict[str, Any]) -> None:
            self.show_detail(data.get("record_id", ""))

        async def on_back(_: Dict[str, Any]) -> None:
            self.hide_detail()

        events.subscribe("load", on_load)
        events.subscribe("search", on_search)
        events.subscribe("locate", on_locate)
        events.subscribe("select", on_select)
        events.subscribe("back", on_back)
