"""
Text rendering for the list and detail views.

Templates live in weatherboard/templates; state is always passed in.
"""

from __future__ import annotations

from jinja2 import Environment, PackageLoader

from .formatting import detail_view, summary_view
from .state import WeatherList, WeatherRecord

env = Environment(loader=PackageLoader("weatherboard"), autoescape=False)


def render_card(record: WeatherRecord) -> str:
    return env.get_template("card.txt").render(card=summary_view(record))


def render_weather_list(weather_list: WeatherList) -> str:
    """One card per record, newest first."""
    cards = [render_card(r) for r in weather_list]
    return env.get_template("list.txt").render(cards=cards)


def render_detail(record: WeatherRecord) -> str:
    return env.get_template("detail.txt").render(d=detail_view(record))
