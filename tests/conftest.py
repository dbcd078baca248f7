"""
Shared fixtures: OpenWeather-shaped payloads, a recording UI and a fake
upstream built on httpx.MockTransport.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from weatherboard.main import create_app, get_proxy
from weatherboard.upstream import OpenWeatherProxy

API_KEY = "test-key"

# 2023-11-14 22:13:20 UTC
BASE_TS = 1700000000


def current_payload(name: str = "Paris", temp: float = 18, **main: Any) -> Dict[str, Any]:
    m = {"temp": temp, "feels_like": 17.4, "temp_min": 15.2, "temp_max": 19.8, "pressure": 1012, "humidity": 60}
    m.update(main)
    return {
        "name": name,
        "dt": BASE_TS,
        "timezone": 0,
        "main": m,
        "weather": [{"description": "scattered clouds", "icon": "03d"}],
        "wind": {"speed": 3.6},
        "visibility": 10000,
        "clouds": {"all": 40},
        "sys": {"sunrise": 1699944000, "sunset": 1699978000},
    }


def forecast_samples(highs: List[float], lows: List[float]) -> List[Dict[str, Any]]:
    return [
        {
            "dt": BASE_TS + i * 10800,
            "main": {"temp": (hi + lo) / 2, "temp_max": hi, "temp_min": lo},
            "weather": [{"description": "light rain"}],
            "pop": 0.2,
        }
        for i, (hi, lo) in enumerate(zip(highs, lows))
    ]


def forecast_payload(name: str = "Paris", samples=None) -> Dict[str, Any]:
    if samples is None:
        samples = forecast_samples([20, 21, 22, 19], [12, 11, 13, 14])
    return {"cod": "200", "city": {"name": name, "timezone": 0}, "list": samples}


class FakeUpstream:
    """Records requests and answers like OpenWeather for known cities."""

    def __init__(self, cities=None):
        self.requests: List[httpx.Request] = []
        self.cities = cities if cities is not None else {"Paris": 18, "Port Elizabeth": 21}
        self.fail_with: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        params = request.url.params
        name = params.get("q")
        if name is None:
            name = f"Loc {params.get('lat')},{params.get('lon')}"
            self.cities.setdefault(name, 16)
        if name not in self.cities:
            return httpx.Response(404, json={"cod": "404", "message": "city not found"})

        if request.url.path.endswith("/forecast"):
            return httpx.Response(200, json=forecast_payload(name))
        return httpx.Response(200, json=current_payload(name, self.cities[name]))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def proxy_app(upstream):
    app = create_app()
    app.dependency_overrides[get_proxy] = lambda: OpenWeatherProxy(API_KEY, transport=upstream.transport())
    return app


@pytest.fixture
def client(proxy_app) -> TestClient:
    return TestClient(proxy_app)


class RecordingUI:
    """UserInterface that remembers every call."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.loading = False
        self.message = None
        self.message_is_error = None
        self.lists: List[str] = []
        self.details: List[str] = []

    def show_loading(self, show: bool) -> None:
        self.calls.append(("loading", show))
        self.loading = show

    def show_message(self, message: str, is_error: bool = True) -> None:
        self.calls.append(("message", message, is_error))
        self.message = message
        self.message_is_error = is_error

    def hide_message(self) -> None:
        self.calls.append(("hide_message",))
        self.message = None

    def render_list(self, text: str) -> None:
        self.lists.append(text)

    def render_detail(self, text: str) -> None:
        self.details.append(text)

    def hide_detail(self) -> None:
        self.calls.append(("hide_detail",))

    def messages(self) -> List[str]:
        return [c[1] for c in self.calls if c[0] == "message"]


@pytest.fixture
def ui() -> RecordingUI:
    return RecordingUI()
