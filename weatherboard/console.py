"""
Console front end.

Prints rendered cards and details; reads commands from stdin:
- a city name        add that city
- :here              weather at the current position (needs --lat/--lon)
- :show N            details for card N
- :back              leave the detail view
- :list              print the list again
- :quit              exit
"""

from __future__ import annotations

from typing import List, Optional
import argparse
import asyncio
import logging

from .controller import WeatherController
from .errors import GeolocationUnavailable
from .events import EventSource
from .proxy_client import WeatherApiClient
from .schemas import Coordinates
from .settings import get_client_settings
from .state import WeatherList

logger = logging.getLogger(__name__)


class ConsoleUI:
    """UserInterface that writes to stdout."""

    def __init__(self, out=print):
        self.out = out
        self.message: Optional[str] = None

    def show_loading(self, show: bool) -> None:
        if show:
            self.out("Loading...")

    def show_message(self, message: str, is_error: bool = True) -> None:
        self.message = message
        self.out(f"{'!' if is_error else '*'} {message}")

    def hide_message(self) -> None:
        self.message = None

    def render_list(self, text: str) -> None:
        self.out(text)

    def render_detail(self, text: str) -> None:
        self.out(text)

    def hide_detail(self) -> None:
        self.out("")


class StaticGeolocation:
    """Position fixed on the command line; raises when none was given."""

    def __init__(self, lat: Optional[float] = None, lon: Optional[float] = None):
        self.lat = lat
        self.lon = lon

    async def current_position(self) -> Coordinates:
        if self.lat is None or self.lon is None:
            raise GeolocationUnavailable("No position configured")
        return Coordinates(lat=self.lat, lon=self.lon)


async def dispatch(line: str, events: EventSource, weather_list: WeatherList, report=print) -> bool:
    """Turn one input line into an event. Returns False to stop."""
    line = line.strip()
    if line == ":quit":
        return False
    if line == ":here":
        await events.emit("locate")
    elif line == ":back":
        await events.emit("back")
    elif line == ":list":
        await events.emit("list")
    elif line == ":show" or line.startswith(":show "):
        try:
            record = weather_list.at(int(line.split()[1]) - 1)
        except (IndexError, ValueError):
            record = None
        if record is not None:
            await events.emit("select", {"record_id": record.record_id})
    elif line.startswith(":"):
        report(f"Unknown command: {line}")
    else:
        await events.emit("search", {"city": line})
    return True


async def run_console(args: argparse.Namespace) -> None:
    settings = get_client_settings()
    weather_list = WeatherList()
    controller = WeatherController(
        WeatherApiClient(args.proxy_url or settings.proxy_url),
        weather_list,
        ConsoleUI(),
        geolocation=StaticGeolocation(args.lat, args.lon),
        default_city=settings.default_city,
        message_seconds=settings.message_seconds,
    )

    events = EventSource()
    controller.register(events)

    async def on_list(_) -> None:
        controller.refresh()

    events.subscribe("list", on_list)

    await events.emit("load")
    for city in args.city:
        await events.emit("search", {"city": city})

    if args.no_input:
        return

    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if not await dispatch(line, events, weather_list):
            break


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="weatherboard", description="Current weather and forecasts by city")
    parser.add_argument("--proxy-url", default=None, help="Base URL of the weather proxy")
    parser.add_argument("--lat", type=float, default=None, help="Latitude used as the current position")
    parser.add_argument("--lon", type=float, default=None, help="Longitude used as the current position")
    parser.add_argument("--city", action="append", default=[], help="City to add after startup (repeatable)")
    parser.add_argument("--no-input", action="store_true", help="Exit after startup instead of reading commands")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=get_client_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_console(args))


if __name__ == "__main__":
    main()
