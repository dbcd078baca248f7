"""
Display helpers: turn raw OpenWeather payloads into card/detail values.

All temperatures are metric (the proxy fixes units=metric).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List
import math

from .state import WeatherRecord

# 8 samples at 3-hour steps ~ the next 24 hours
HIGH_LOW_WINDOW = 8


@dataclass(frozen=True)
class HighLow:
    high: float
    low: float


def round_half_up(value: float) -> int:
    """Round .5 up, the way the display has always rounded."""
    return int(math.floor(float(value) + 0.5))


def _local(ts: int, tz_offset: int = 0) -> datetime:
    return datetime.fromtimestamp(int(ts) + tz_offset, tz=timezone.utc)


def format_time(ts: int, tz_offset: int = 0) -> str:
    """Unix timestamp -> 24-hour "HH:MM"."""
    return _local(ts, tz_offset).strftime("%H:%M")


def format_date(ts: int, tz_offset: int = 0) -> str:
    """Unix timestamp -> "Oct 19, 02:05 PM"."""
    d = _local(ts, tz_offset)
    return f"{d.strftime('%b')} {d.day}, {d.strftime('%I:%M %p')}"


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def calculate_high_low(samples: List[Dict[str, Any]]) -> HighLow:
    """
    High/low over the first HIGH_LOW_WINDOW forecast samples.

    High is the max of `main.temp_max`, low the min of `main.temp_min`.
    An empty sample list gives HighLow(0, 0).
    """
    if not samples:
        return HighLow(high=0, low=0)

    window = samples[:HIGH_LOW_WINDOW]
    high = max(float(x["main"]["temp_max"]) for x in window)
    low = min(float(x["main"]["temp_min"]) for x in window)
    return HighLow(high=high, low=low)


def summary_view(record: WeatherRecord) -> Dict[str, Any]:
    """Fields shown on a list card."""
    hl = calculate_high_low(record.forecast)
    main = record.main

    # 0 means "no forecast window": use the record's own range instead
    high = hl.high or main.get("temp_max", 0)
    low = hl.low or main.get("temp_min", 0)

    return {
        "record_id": record.record_id,
        "name": record.name,
        "time": format_time(record.current.get("dt", 0), record.tz_offset),
        "temp": f"{round_half_up(record.temperature)}°",
        "description": capitalize_first(record.description),
        "high": f"{round_half_up(high)}°",
        "low": f"{round_half_up(low)}°",
    }


def detail_view(record: WeatherRecord) -> Dict[str, Any]:
    """Full field set for the detail screen."""
    c = record.current
    main = record.main
    sys = c.get("sys") or {}
    tz = record.tz_offset

    return {
        "record_id": record.record_id,
        "name": record.name,
        "temp": f"{round_half_up(record.temperature)}°C",
        "description": capitalize_first(record.description),
        "feels_like": f"Feels like {round_half_up(main.get('feels_like', 0))}°C",
        "humidity": f"{main.get('humidity', 0)}%",
        "wind": f"{float((c.get('wind') or {}).get('speed', 0)):.2f} m/s",
        "pressure": f"{main.get('pressure', 0)} hPa",
        "visibility": f"{float(c.get('visibility', 0)) / 1000:.1f} km",
        "clouds": f"{(c.get('clouds') or {}).get('all', 0)}%",
        "sunrise": format_time(sys.get("sunrise", 0), tz),
        "sunset": format_time(sys.get("sunset", 0), tz),
        "updated": f"Last updated: {format_date(c.get('dt', 0), tz)}",
        "daily": summarize_daily(record.forecast, tz),
    }


def summarize_daily(samples: List[Dict[str, Any]], tz_offset: int = 0, days: int = 5) -> List[Dict[str, Any]]:
    """
    Collapse 3-hour forecast samples into one entry per local day.

    For each day:
    - temp min/max over all steps
    - the most frequent description
    - the highest precipitation probability, as a percentage
    """
    grouped: Dict[date, List[Dict[str, Any]]] = {}
    for item in samples:
        d = _local(item["dt"], tz_offset).date()
        grouped.setdefault(d, []).append(item)

    out: List[Dict[str, Any]] = []
    for d in sorted(grouped.keys())[:days]:
        steps = grouped[d]

        temps = [float(x["main"]["temp"]) for x in steps if "temp" in (x.get("main") or {})]
        pops = [float(x["pop"]) for x in steps if x.get("pop") is not None]

        counts: Dict[str, int] = {}
        for x in steps:
            desc = (x.get("weather") or [{}])[0].get("description", "")
            counts[desc] = counts.get(desc, 0) + 1
        desc, _ = max(counts.items(), key=lambda kv: kv[1])

        out.append({
            "date": d.isoformat(),
            "dow": d.strftime("%a"),  # e.g., "Fri"
            "tmin": round_half_up(min(temps)) if temps else None,
            "tmax": round_half_up(max(temps)) if temps else None,
            "description": capitalize_first(desc),
            "pop_pct": round(max(pops) * 100) if pops else None,
        })

    return out
