"""Windowed list widget for large candidate lists.

Purpose
-------
Render a list of items as fixed-height ``QLabel`` rows. Lists up to the
virtualization threshold are materialized in full; longer lists only
materialize the rows intersecting the viewport plus an overscan margin
(see ``bat7gui.services.render_strategy.visible_range``).

Scrolling
---------
The widget drives its own vertical ``QScrollBar`` and positions rows on an
inner canvas, so the window is computed from a scroll offset the widget
owns rather than from a ``QScrollArea`` whose ranges are only settled once
shown. Switching between full and windowed rendering (because the item
count crossed the threshold) resets the scroll position to the top.

Styling hooks
-------------
objectName ``virtualizedList`` with dynamic properties ``density``
(comfortable/compact), ``variant`` (plain/striped) and ``strategy``
(full/virtualized). Rows use objectName ``virtualizedListRow`` and an
``alt`` property for striping.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QScrollBar, QSizePolicy, QWidget

from bat7gui.config import settings
from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.services.render_strategy import (
    RenderStrategy,
    VisibleRange,
    choose_strategy,
    visible_range,
)
from bat7gui.services.settings_service import SettingsService

__all__ = ["VirtualizedList"]

logger = logging.getLogger(__name__)


class VirtualizedList(QWidget):
    """List widget that windows its rows past a size threshold.

    Parameters
    ----------
    parent:
        Optional parent widget.
    density / variant:
        Styling hints exposed as dynamic properties.
    threshold, overscan, item_height:
        Rendering parameters; default to ``SettingsService.instance`` values.
    container_height:
        Fixed widget height in pixels, also the viewport height used for
        window computation.
    render_item:
        ``fn(item, index) -> str`` producing row text; defaults to ``str``.
    event_bus:
        Receives ``GUIEvent.RENDER_STRATEGY_CHANGED`` on strategy switches.

    Signals
    -------
    strategyChanged(str):
        Emitted with the new ``RenderStrategy`` value on a switch.
    """

    strategyChanged = pyqtSignal(str)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        density: str = "comfortable",
        variant: str = "plain",
        threshold: Optional[int] = None,
        overscan: Optional[int] = None,
        item_height: Optional[int] = None,
        container_height: int = settings.DEFAULT_CONTAINER_HEIGHT,
        render_item: Optional[Callable[[Any, int], str]] = None,
        event_bus: EventBus | None = None,
    ) -> None:
        super().__init__(parent)
        prefs = SettingsService.instance
        self.setObjectName("virtualizedList")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self._density = density if density in {"comfortable", "compact"} else "comfortable"
        self._variant = variant if variant in {"plain", "striped"} else "plain"
        self._threshold = prefs.virtualization_threshold if threshold is None else threshold
        self._overscan = prefs.overscan if overscan is None else overscan
        self._item_height = prefs.item_height if item_height is None else item_height
        self._container_height = container_height
        self._render_item = render_item or (lambda item, _index: str(item))
        self._event_bus = event_bus
        self._items: List[Any] = []
        self._rows: Dict[int, QLabel] = {}
        self._scroll_top = 0
        self._strategy = RenderStrategy.FULL
        self._syncing = False
        self.setProperty("density", self._density)
        self.setProperty("variant", self._variant)
        self.setProperty("strategy", self._strategy.value)
        self.setFixedHeight(container_height)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self._canvas = QWidget(self)
        self._canvas.setObjectName("virtualizedListCanvas")
        self._canvas.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        layout.addWidget(self._canvas, 1)
        self._scrollbar = QScrollBar(Qt.Orientation.Vertical, self)
        self._scrollbar.setSingleStep(self._item_height)
        self._scrollbar.setPageStep(container_height)
        self._scrollbar.valueChanged.connect(self._on_scrollbar_moved)  # type: ignore
        layout.addWidget(self._scrollbar)

    # Public API -----------------------------------------------------
    def set_items(self, items: Iterable[Any]) -> None:
        """Replace the list contents and re-render the visible rows."""
        self._items = list(items)
        strategy = choose_strategy(len(self._items), self._threshold)
        self._clear_rows()
        self._update_scroll_range()
        if strategy is not self._strategy:
            self._switch_strategy(strategy)
        else:
            self._set_scroll_top(self._scroll_top)
        self._refresh_window()

    def set_threshold(self, threshold: int) -> None:
        self._threshold = threshold
        self.set_items(self._items)

    def items(self) -> List[Any]:
        return list(self._items)

    def row_count(self) -> int:
        """Number of materialized row widgets."""
        return len(self._rows)

    def rendered_indices(self) -> List[int]:
        return sorted(self._rows)

    def row_text(self, index: int) -> Optional[str]:
        label = self._rows.get(index)
        return label.text() if label is not None else None

    def density(self) -> str:
        return self._density

    def variant(self) -> str:
        return self._variant

    def strategy(self) -> RenderStrategy:
        return self._strategy

    def is_virtualized(self) -> bool:
        return self._strategy is RenderStrategy.VIRTUALIZED

    def scroll_top(self) -> int:
        return self._scroll_top

    def visible_range(self) -> VisibleRange:
        if not self.is_virtualized():
            return VisibleRange(0, len(self._items) - 1)
        return visible_range(
            self._scroll_top,
            self._item_height,
            self._container_height,
            len(self._items),
            self._overscan,
        )

    def scroll_to_index(self, index: int) -> None:
        self._set_scroll_top(index * self._item_height)
        self._refresh_window()

    def scroll_to_top(self) -> None:
        self.scroll_to_index(0)

    # Qt events --------------------------------------------------------
    def wheelEvent(self, event):  # noqa: N802 - Qt override
        steps = event.angleDelta().y() // 120
        self._scrollbar.setValue(self._scrollbar.value() - steps * 3 * self._item_height)
        event.accept()

    def resizeEvent(self, event):  # noqa: N802 - Qt override
        super().resizeEvent(event)
        self._layout_rows()

    # Internal -------------------------------------------------------
    def _max_scroll(self) -> int:
        return max(0, len(self._items) * self._item_height - self._container_height)

    def _update_scroll_range(self) -> None:
        self._syncing = True
        try:
            self._scrollbar.setRange(0, self._max_scroll())
        finally:
            self._syncing = False

    def _set_scroll_top(self, value: int) -> None:
        self._scroll_top = min(max(0, int(value)), self._max_scroll())
        self._syncing = True
        try:
            self._scrollbar.setValue(self._scroll_top)
        finally:
            self._syncing = False

    def _on_scrollbar_moved(self, value: int) -> None:
        if self._syncing:
            return
        self._scroll_top = value
        self._refresh_window()

    def _switch_strategy(self, strategy: RenderStrategy) -> None:
        previous = self._strategy
        self._strategy = strategy
        self.setProperty("strategy", strategy.value)
        self._set_scroll_top(0)
        logger.debug(
            "List render strategy %s -> %s (%d items)",
            previous.value,
            strategy.value,
            len(self._items),
        )
        self.strategyChanged.emit(strategy.value)
        if self._event_bus is not None:
            self._event_bus.publish(
                GUIEvent.RENDER_STRATEGY_CHANGED,
                {"strategy": strategy.value, "count": len(self._items)},
            )

    def _clear_rows(self) -> None:
        for label in self._rows.values():
            label.setParent(None)
            label.deleteLater()
        self._rows.clear()

    def _refresh_window(self) -> None:
        wanted = set(self.visible_range().indices())
        for idx in [i for i in self._rows if i not in wanted]:
            label = self._rows.pop(idx)
            label.setParent(None)
            label.deleteLater()
        for idx in sorted(wanted - set(self._rows)):
            label = QLabel(self._render_item(self._items[idx], idx), self._canvas)
            label.setObjectName("virtualizedListRow")
            label.setProperty("alt", bool(idx % 2))
            label.show()
            self._rows[idx] = label
        self._layout_rows()

    def _layout_rows(self) -> None:
        width = self._canvas.width()
        for idx, label in self._rows.items():
            label.setGeometry(0, idx * self._item_height - self._scroll_top, width, self._item_height)
