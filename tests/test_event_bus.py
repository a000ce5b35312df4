from bat7gui.services.event_bus import EventBus, GUIEvent


def test_publish_subscribe_and_once():
    bus = EventBus()
    got = []
    bus.subscribe(GUIEvent.FILTER_CHANGED, lambda e: got.append(("all", e.payload)))
    bus.subscribe(GUIEvent.FILTER_CHANGED, lambda e: got.append(("once", e.payload)), once=True)
    bus.publish(GUIEvent.FILTER_CHANGED, 1)
    bus.publish("filter_changed", 2)
    assert got == [("all", 1), ("once", 1), ("all", 2)]
    assert bus.subscriber_count(GUIEvent.FILTER_CHANGED) == 1


def test_handler_errors_are_isolated():
    bus = EventBus()
    got = []

    def bad(evt):
        raise RuntimeError("handler failed")

    bus.subscribe(GUIEvent.SORT_CHANGED, bad)
    bus.subscribe(GUIEvent.SORT_CHANGED, lambda e: got.append(e.name))
    bus.publish(GUIEvent.SORT_CHANGED)
    assert got == ["sort_changed"]
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_unsubscribe_and_tracing():
    bus = EventBus()
    sub = bus.subscribe(GUIEvent.SELECTION_CHANGED, lambda e: None)
    bus.unsubscribe(sub)
    assert bus.subscriber_count(GUIEvent.SELECTION_CHANGED) == 0
    bus.enable_tracing(capacity=2)
    for i in range(3):
        bus.publish(GUIEvent.SELECTION_CHANGED, {"keys": [i]})
    traces = bus.recent_traces()
    assert len(traces) == 2
    assert traces[-1][0] == "selection_changed"
