import pytest

from weatherboard.console import ConsoleUI, StaticGeolocation, dispatch
from weatherboard.errors import GeolocationUnavailable
from weatherboard.events import EventSource
from weatherboard.state import WeatherList, WeatherRecord

from .conftest import current_payload


@pytest.fixture
def recorded():
    events = EventSource()
    seen = []

    for name in ("search", "locate", "select", "back", "list"):
        async def handler(data, name=name):
            seen.append((name, data))

        events.subscribe(name, handler)
    return events, seen


async def test_plain_text_is_a_search(recorded):
    events, seen = recorded
    assert await dispatch("Paris", events, WeatherList()) is True
    assert seen == [("search", {"city": "Paris"})]


async def test_show_maps_card_number_to_record_id(recorded):
    events, seen = recorded
    wl = WeatherList()
    paris = WeatherRecord(current_payload("Paris"))
    wl.prepend(paris)
    wl.prepend(WeatherRecord(current_payload("Oslo")))

    await dispatch(":show 2", events, wl)
    assert seen == [("select", {"record_id": paris.record_id})]


@pytest.mark.parametrize("line", [":show", ":show x", ":show 9"])
async def test_show_with_bad_number_is_ignored(recorded, line):
    events, seen = recorded
    await dispatch(line, events, WeatherList())
    assert seen == []


async def test_commands(recorded):
    events, seen = recorded
    wl = WeatherList()
    await dispatch(":here", events, wl)
    await dispatch(":back", events, wl)
    await dispatch(":list", events, wl)
    assert [name for name, _ in seen] == ["locate", "back", "list"]
    assert await dispatch(":quit", events, wl) is False


async def test_static_geolocation():
    assert (await StaticGeolocation(1.5, 2.5).current_position()).lat == 1.5
    with pytest.raises(GeolocationUnavailable):
        await StaticGeolocation().current_position()


def test_console_ui_prints_messages():
    lines = []
    ui = ConsoleUI(out=lines.append)
    ui.show_message("City not found")
    ui.show_message("Added Paris - 18°C", is_error=False)
    ui.hide_message()

    assert lines == ["! City not found", "* Added Paris - 18°C"]
    assert ui.message is None


@pytest.mark.parametrize("line", [":foo", ":shows 1", ":"])
async def test_unknown_command_is_reported_not_searched(recorded, line):
    events, seen = recorded
    reported = []

    assert await dispatch(line, events, WeatherList(), report=reported.append) is True
    assert seen == []
    assert reported == [f"Unknown command: {line}"]
