"""
In-memory session state: merged weather records, newest first.

Nothing here is persisted; a new session starts with an empty list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
import uuid


@dataclass
class WeatherRecord:
    """
    Current conditions for one location with its forecast samples attached.

    `current` is the raw OpenWeather current-weather payload and `forecast`
    the `list` of its 3-hour forecast payload; both stay loosely typed.
    """
    current: Dict[str, Any]
    forecast: List[Dict[str, Any]] = field(default_factory=list)
    record_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def merge(cls, current: Dict[str, Any], forecast: Dict[str, Any]) -> "WeatherRecord":
        return cls(current=current, forecast=list(forecast.get("list") or []))

    @property
    def name(self) -> str:
        return self.current.get("name", "")

    @property
    def main(self) -> Dict[str, Any]:
        return self.current.get("main") or {}

    @property
    def temperature(self) -> float:
        return float(self.main.get("temp", 0))

    @property
    def description(self) -> str:
        w = (self.current.get("weather") or [{}])[0]
        return w.get("description", "")

    @property
    def tz_offset(self) -> int:
        # seconds offset from UTC
        return int(self.current.get("timezone", 0))


class WeatherList:
    """
    Ordered records, most recently added first.

    Records are looked up by `record_id`; positions shift on every insert.
    """

    def __init__(self) -> None:
        self._records: List[WeatherRecord] = []

    def prepend(self, record: WeatherRecord) -> None:
        self._records.insert(0, record)

    def get(self, record_id: str) -> Optional[WeatherRecord]:
        for record in self._records:
            if record.record_id == record_id:
                return record
        return None

    def at(self, index: int) -> Optional[WeatherRecord]:
        """Positional access; only valid until the next insertion."""
        if 0 <= index < len(self._records):
            return self._records[index]
        return None

    def clear(self) -> None:
        self._records.clear()

    def __iter__(self) -> Iterator[WeatherRecord]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)
