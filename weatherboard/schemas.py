"""
Pydantic schemas.

Why:
- Normalizes raw query parameters before routing
- Defines the locator types shared by proxy and client
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class Coordinates(BaseModel):
    """A latitude/longitude pair, usually resolved by geolocation."""
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


# Either a city name or a coordinate pair.
Locator = Union[str, Coordinates]


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None


class WeatherQuery(BaseModel):
    """
    One proxy request: a location form plus the kind of data wanted.

    City takes precedence over coordinates; `has_location` is False when
    neither a city nor a full lat/lon pair is present.
    """
    city: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    kind: Literal["current", "forecast"] = "current"

    @classmethod
    def from_params(
        cls,
        city: Optional[str] = None,
        lat: Optional[str] = None,
        lon: Optional[str] = None,
        type: Optional[str] = None,
    ) -> "WeatherQuery":
        """Build a query from raw query-string values."""
        city = city.strip() if city else None
        return cls(
            city=city or None,
            lat=_parse_number(lat),
            lon=_parse_number(lon),
            kind="forecast" if type == "forecast" else "current",
        )

    @classmethod
    def for_locator(cls, locator: Locator, kind: str = "current") -> "WeatherQuery":
        if isinstance(locator, Coordinates):
            return cls(lat=locator.lat, lon=locator.lon, kind=kind)
        return cls(city=locator, kind=kind)

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def has_location(self) -> bool:
        return bool(self.city) or self.has_coordinates

    def to_params(self) -> dict:
        """Query parameters the client sends to the proxy."""
        if self.city:
            params = {"city": self.city}
        else:
            params = {"lat": self.lat, "lon": self.lon}
        params["type"] = self.kind
        return params
