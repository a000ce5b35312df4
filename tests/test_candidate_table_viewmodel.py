from datetime import date

from bat7gui.models import CandidateResultEntry
from bat7gui.services.comparator import NullPlacement
from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.services.render_strategy import RenderStrategy
from bat7gui.viewmodels.candidate_table_viewmodel import CandidateTableViewModel


def _rows():
    return [
        CandidateResultEntry("C1", "Lucía Gómez", "111A", "IES Norte", date(2024, 3, 1), {"V": 70, "R": 40}),
        CandidateResultEntry("C2", "Pablo Díaz", "222B", None, None, {"V": 85, "R": None}),
        CandidateResultEntry(
            "C3", "Ana García", "333C", "IES Norte", date(2024, 2, 1), {"V": 70, "R": 90}, completed=True
        ),
    ]


def test_summary_counts_and_text():
    vm = CandidateTableViewModel()
    assert vm.summary.as_text() == "No candidates"
    vm.set_rows(_rows())
    assert vm.summary.total == 3
    assert vm.summary.completed == 1
    assert vm.summary.as_text() == "3 of 3 candidates | Completed: 1"


def test_filter_then_sort():
    vm = CandidateTableViewModel()
    vm.set_rows(_rows())
    vm.set_search("ies norte")
    vm.sort_state.set_single_sort("full_name")
    assert [r.candidate_id for r in vm.display_rows()] == ["C3", "C1"]
    assert vm.summary.visible == 2


def test_nested_score_sort_with_tie_break():
    vm = CandidateTableViewModel()
    vm.set_rows(_rows())
    vm.sort_state.add_criterion("scores.V", "desc")
    vm.sort_state.add_criterion("test_date", "asc")
    assert [r.candidate_id for r in vm.display_rows()] == ["C2", "C3", "C1"]


def test_display_rows_memoized_until_state_changes():
    vm = CandidateTableViewModel()
    vm.set_rows(_rows())
    vm.sort_state.set_single_sort("scores.R")
    first = vm.display_rows()
    assert [r.candidate_id for r in first] == ["C1", "C3", "C2"]
    assert vm.display_rows() == first
    vm.sort_state.toggle_sort("scores.R")
    assert [r.candidate_id for r in vm.display_rows()] == ["C2", "C3", "C1"]


def test_null_placement_change_invalidates_display_rows():
    vm = CandidateTableViewModel()
    vm.set_rows(
        [
            CandidateResultEntry("1", "Ana", "A1", scores={"V": None}),
            CandidateResultEntry("2", "Bea", "B2", scores={"V": 50}),
            CandidateResultEntry("3", "Cris", "C3", scores={"V": 10}),
        ]
    )
    vm.sort_state.set_single_sort("scores.V", "desc")
    assert [r.candidate_id for r in vm.display_rows()] == ["1", "2", "3"]
    vm.sort_state.null_placement = NullPlacement.ALWAYS_LAST
    assert [r.candidate_id for r in vm.display_rows()] == ["2", "3", "1"]


def test_search_publishes_filter_event():
    bus = EventBus()
    terms = []
    bus.subscribe(GUIEvent.FILTER_CHANGED, lambda e: terms.append(e.payload["term"]))
    vm = CandidateTableViewModel(event_bus=bus)
    vm.set_search(" ana ")
    vm.set_search("ana")
    assert terms == ["ana"]


def test_render_strategy_uses_visible_count():
    vm = CandidateTableViewModel()
    vm.set_rows(_rows())
    assert vm.render_strategy(threshold=2) is RenderStrategy.VIRTUALIZED
    vm.set_search("pablo")
    assert vm.render_strategy(threshold=2) is RenderStrategy.FULL
