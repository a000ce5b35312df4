"""CandidateTableView

QTableWidget-based view of BAT-7 candidate results with a search box and
header-click sorting. Backed by ``CandidateTableViewModel``.

Header interaction:
 - click: toggle single-column sort on that column
 - shift-click: add the column as the next tie-break criterion (or flip it
   if already present, which moves it to the end of the chain)

Row selection is mirrored into a ``SelectionModel`` keyed by candidate id, so
selected candidates stay selected when sorting or searching moves them.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional, Sequence, Tuple

from PyQt6.QtCore import QItemSelection, QItemSelectionModel, Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QHeaderView,
    QLabel,
    QLineEdit,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from bat7gui.components.empty_state import EmptyStateWidget
from bat7gui.models import CandidateColumn, CandidateResultEntry, candidate_columns
from bat7gui.services.comparator import Field, SortDirection, resolve_path
from bat7gui.services.error_handling_service import ErrorHandlingService
from bat7gui.services.selection import SelectionModel
from bat7gui.services.sort_state import SortIcon
from bat7gui.viewmodels.candidate_table_viewmodel import CandidateTableViewModel

__all__ = ["CandidateTableView"]

logger = logging.getLogger(__name__)

_ARROWS = {SortIcon.ASCENDING: "▲", SortIcon.DESCENDING: "▼"}


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:.1f}"
    return str(value)


class CandidateTableView(QWidget):
    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        viewmodel: CandidateTableViewModel | None = None,
        error_service: ErrorHandlingService | None = None,
        selection: SelectionModel | None = None,
    ):
        super().__init__(parent)
        self.viewmodel = viewmodel or CandidateTableViewModel()
        self.error_service = error_service or ErrorHandlingService(logger=logger)
        self.columns: List[CandidateColumn] = candidate_columns()
        self.selection = selection or SelectionModel()
        self._rows: List[CandidateResultEntry] = []
        self._syncing_selection = False
        self._sort_failed = False
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.title_label = QLabel("BAT-7 Results")
        self.title_label.setObjectName("viewTitleLabel")
        root.addWidget(self.title_label)
        self.search_edit = QLineEdit()
        self.search_edit.setObjectName("candidateSearch")
        self.search_edit.setPlaceholderText("Search name, document or institution")
        self.search_edit.textChanged.connect(self.set_search)  # type: ignore
        root.addWidget(self.search_edit)
        self.table = QTableWidget(0, len(self.columns))
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.table.itemSelectionChanged.connect(self._on_table_selection_changed)  # type: ignore
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        root.addWidget(self.table)
        self.summary_label = QLabel()
        self.summary_label.setObjectName("candidateSummary")
        root.addWidget(self.summary_label)
        self.empty_state = EmptyStateWidget("no_candidates")
        self.empty_state.setObjectName("candidateEmptyState")
        self.empty_state.actionRequested.connect(self._on_empty_action)  # type: ignore
        root.addWidget(self.empty_state)
        self._refresh()

    # Public API -------------------------------------------------------
    def set_rows(self, rows: Sequence[CandidateResultEntry]):
        self.viewmodel.set_rows(rows)
        self._refresh()

    def set_search(self, term: str):
        self.viewmodel.set_search(term)
        if self.search_edit.text().strip() != self.viewmodel.search:
            self.search_edit.blockSignals(True)
            self.search_edit.setText(self.viewmodel.search)
            self.search_edit.blockSignals(False)
        self._refresh()

    def header_clicked(self, column: int, *, extend: bool = False):
        """Apply the header interaction for ``column`` (``extend`` = shift)."""
        state = self.viewmodel.sort_state
        field = self.columns[column].field
        if extend and state.multi_sort:
            current = state.direction_for(field)
            state.add_criterion(field, current.flipped() if current else SortDirection.ASC)
        else:
            # Criteria added by shift-click are not the single-sort field, so
            # flip whatever direction the column currently shows
            current = state.direction_for(field)
            state.set_single_sort(field, current.flipped() if current else SortDirection.ASC)
        self._refresh()

    def apply_sort(self, criteria: Sequence[Tuple[Field, SortDirection | str]]):
        """Programmatically set the sort chain as (field, direction) pairs."""
        state = self.viewmodel.sort_state
        state.clear()
        for i, (field, direction) in enumerate(criteria):
            if i == 0:
                state.set_single_sort(field, direction)
            else:
                state.add_criterion(field, direction)
        self._refresh()

    def clear_sort(self):
        self.viewmodel.sort_state.clear()
        self._refresh()

    def select_rows(self, rows: Sequence[int]):
        """Select the given displayed row indices, replacing the selection."""
        self._apply_table_selection(rows)

    def selected_row_indices(self) -> List[int]:
        return sorted(index.row() for index in self.table.selectionModel().selectedRows())

    def displayed_column(self, column: int) -> List[str]:
        out = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, column)
            out.append(item.text() if item else "")
        return out

    def header_text(self, column: int) -> str:
        item = self.table.horizontalHeaderItem(column)
        return item.text() if item else ""

    def empty_state_key(self) -> Optional[str]:
        return None if self.empty_state.isHidden() else self.empty_state.template_key()

    def sort_failed(self) -> bool:
        return self._sort_failed

    # Internal ---------------------------------------------------------
    def _refresh(self):
        try:
            rows = self.viewmodel.display_rows()
            self._sort_failed = False
        except Exception as exc:  # noqa: BLE001 - custom comparators may raise anything
            self.error_service.handle_exception(type(exc), exc, exc.__traceback__, context="sort")
            rows = self.viewmodel.filtered_rows()
            self._sort_failed = True
        self._rows = rows
        self._syncing_selection = True
        try:
            self._populate(rows)
            self._apply_table_selection(
                [r for r, entry in enumerate(rows) if self.selection.is_selected(entry)]
            )
        finally:
            self._syncing_selection = False
        self._update_headers()
        self.summary_label.setText(self.viewmodel.summary.as_text())
        self._update_empty_state()

    def _populate(self, rows: List[CandidateResultEntry]):
        self.table.setRowCount(len(rows))
        for r, entry in enumerate(rows):
            for c, col in enumerate(self.columns):
                self.table.setItem(r, c, QTableWidgetItem(_cell_text(resolve_path(entry, col.field))))

    def _apply_table_selection(self, rows: Sequence[int]):
        model = self.table.model()
        last = len(self.columns) - 1
        selection = QItemSelection()
        for r in rows:
            selection.select(model.index(r, 0), model.index(r, last))
        flags = (
            QItemSelectionModel.SelectionFlag.ClearAndSelect
            | QItemSelectionModel.SelectionFlag.Rows
        )
        self.table.selectionModel().select(selection, flags)

    def _update_headers(self):
        state = self.viewmodel.sort_state
        show_priority = state.sort_count > 1
        labels = []
        for col in self.columns:
            text = col.title
            arrow = _ARROWS.get(state.sort_icon(col.field))
            if arrow:
                text = f"{text} {arrow}"
                index = state.sort_index(col.field)
                if show_priority and index is not None:
                    text = f"{text}{index}"
            labels.append(text)
        self.table.setHorizontalHeaderLabels(labels)

    def _update_empty_state(self):
        summary = self.viewmodel.summary
        if summary.total == 0:
            key = "no_candidates"
        elif summary.visible == 0:
            key = "no_matches"
        elif self._sort_failed:
            key = "sort_failed"
        else:
            self.empty_state.hide()
            return
        self.empty_state.set_template(key)
        self.empty_state.show()

    def _on_table_selection_changed(self):
        if self._syncing_selection:
            return
        selected = [self._rows[r] for r in self.selected_row_indices() if r < len(self._rows)]
        self.selection.select_all(selected)

    def _on_empty_action(self, key: str):
        if key == "no_matches":
            self.set_search("")
        elif key == "sort_failed":
            self.clear_sort()

    def _on_header_clicked(self, logical_index: int):  # pragma: no cover - UI callback
        shift = QApplication.keyboardModifiers() & Qt.KeyboardModifier.ShiftModifier
        self.header_clicked(logical_index, extend=bool(shift))
