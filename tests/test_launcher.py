from bat7gui.components.virtualized_list import VirtualizedList
from bat7gui.launcher import build_demo_window
from bat7gui.sample_data import generate_candidates
from bat7gui.services.error_handling_service import ErrorHandlingService
from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.views.candidate_table_view import CandidateTableView


def test_sample_data_is_deterministic():
    a = generate_candidates(20, seed=3)
    b = generate_candidates(20, seed=3)
    assert [c.full_name for c in a] == [c.full_name for c in b]
    assert all(c.completed == all(v is not None for v in c.scores.values()) for c in a)


def test_demo_window_wires_table_and_list(qtbot):
    bus = EventBus()
    strategies = []
    bus.subscribe(GUIEvent.RENDER_STRATEGY_CHANGED, lambda e: strategies.append(e.payload))
    window = build_demo_window(150, bus, ErrorHandlingService())
    qtbot.addWidget(window)
    table = window.findChild(CandidateTableView)
    lst = window.findChild(VirtualizedList)
    assert table.table.rowCount() == 150
    assert lst.is_virtualized()
    assert strategies == [{"strategy": "virtualized", "count": 150}]
