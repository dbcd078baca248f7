from weatherboard.events import EventSource


async def test_handlers_run_in_registration_order():
    events = EventSource()
    received = []

    async def first(data):
        received.append(("first", data["city"]))

    async def second(data):
        received.append(("second", data["city"]))

    events.subscribe("search", first)
    events.subscribe("search", second)
    await events.emit("search", {"city": "Paris"})

    assert received == [("first", "Paris"), ("second", "Paris")]


async def test_failing_handler_does_not_stop_others():
    events = EventSource()
    received = []

    async def broken(data):
        raise RuntimeError("boom")

    async def ok(data):
        received.append(data)

    events.subscribe("load", broken)
    events.subscribe("load", ok)
    await events.emit("load")

    assert received == [{}]


async def test_unsubscribe():
    events = EventSource()
    received = []

    async def handler(data):
        received.append(data)

    events.subscribe("back", handler)
    events.unsubscribe("back", handler)
    events.unsubscribe("back", handler)
    await events.emit("back")

    assert received == []


async def test_emit_without_handlers_is_noop():
    await EventSource().emit("nothing", {"x": 1})
