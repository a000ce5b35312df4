"""BAT-7 candidate list toolkit.

Sorting, filtering, selection and render-strategy utilities for candidate
result lists, plus the PyQt6 widgets that consume them. Importing the
package does not import Qt.
"""

from __future__ import annotations

from .services.event_bus import Event, EventBus, GUIEvent  # noqa: F401
from .services.sort_state import SortState  # noqa: F401

__version__ = "0.1.0"
