import pytest

from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.services.selection import SelectionModel


def test_select_toggle_and_order():
    sel = SelectionModel()
    a, b = {"id": 1}, {"id": 2}
    sel.select(b)
    sel.select(a)
    sel.select(a)
    assert sel.selected_keys() == [2, 1]
    assert sel.toggle(b) is False
    assert sel.selected_keys() == [1]
    assert sel.is_selected(a)


def test_select_all_and_clear_publish():
    bus = EventBus()
    payloads = []
    bus.subscribe(GUIEvent.SELECTION_CHANGED, lambda e: payloads.append(e.payload["keys"]))
    sel = SelectionModel(event_bus=bus)
    sel.select_all([{"key": "x"}, {"key": "y"}])
    sel.clear()
    assert payloads == [["x", "y"], []]
    assert len(sel) == 0


def test_deselect_unknown_is_silent():
    bus = EventBus()
    payloads = []
    bus.subscribe(GUIEvent.SELECTION_CHANGED, lambda e: payloads.append(e.payload))
    SelectionModel(event_bus=bus).deselect({"id": 9})
    assert payloads == []


def test_custom_key_and_missing_key():
    sel = SelectionModel(key_func=lambda r: r["doc"])
    sel.select({"doc": "123A"})
    assert sel.selected_keys() == ["123A"]
    with pytest.raises(ValueError):
        SelectionModel().select({"name": "no id"})
