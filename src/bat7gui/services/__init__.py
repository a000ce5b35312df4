"""Service layer exports.

Pure (Qt-free) building blocks for list views: comparator, sort state,
render strategy, search filter, selection, plus event bus, logging, error
handling and settings services.
"""

from .comparator import NullPlacement, SortDirection, compare_values, resolve_path  # noqa: F401
from .event_bus import Event, EventBus, GUIEvent  # noqa: F401
from .list_filter import filter_records  # noqa: F401
from .render_strategy import (  # noqa: F401
    RenderStrategy,
    VisibleRange,
    choose_strategy,
    should_virtualize,
    visible_range,
)
from .selection import SelectionModel  # noqa: F401
from .sort_state import SortCriterion, SortIcon, SortState  # noqa: F401
