"""Demo launcher for `python -m bat7gui`.

Opens a window with the candidate results table and a windowed list of the
same candidates, wired to shared logging, error and event services.
"""

from __future__ import annotations

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication, QHBoxLayout, QWidget

from bat7gui.components.virtualized_list import VirtualizedList
from bat7gui.sample_data import generate_candidates
from bat7gui.services.error_handling_service import ErrorHandlingService
from bat7gui.services.event_bus import EventBus
from bat7gui.services.selection import SelectionModel
from bat7gui.services.logging_service import LoggingService
from bat7gui.viewmodels.candidate_table_viewmodel import CandidateTableViewModel
from bat7gui.views.candidate_table_view import CandidateTableView

logger = logging.getLogger(__name__)


def build_demo_window(count: int, bus: EventBus, errors: ErrorHandlingService) -> QWidget:
    candidates = generate_candidates(count)
    window = QWidget()
    window.setWindowTitle("BAT-7 Candidates")
    layout = QHBoxLayout(window)
    table = CandidateTableView(
        viewmodel=CandidateTableViewModel(event_bus=bus),
        error_service=errors,
        selection=SelectionModel(event_bus=bus),
    )
    table.set_rows(candidates)
    layout.addWidget(table, 3)
    lst = VirtualizedList(
        variant="striped",
        event_bus=bus,
        render_item=lambda c, i: f"{i + 1}. {c.full_name} ({c.document_id})",
    )
    lst.set_items(candidates)
    layout.addWidget(lst, 1)
    return window


def main():  # pragma: no cover - runtime
    bus = EventBus()
    log_svc = LoggingService(event_bus=bus)
    log_svc.attach_root()
    errors = ErrorHandlingService(logger=logging.getLogger("bat7gui"), event_bus=bus)
    errors.install()
    app = QApplication.instance() or QApplication(sys.argv)
    count = int(os.environ.get("BAT7_DEMO_CANDIDATES", "250"))
    logger.info("Launching demo with %d candidates", count)
    window = build_demo_window(count, bus, errors)
    window.resize(1200, 500)
    window.show()
    try:
        return app.exec()
    finally:
        errors.uninstall()
        log_svc.detach_root()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
