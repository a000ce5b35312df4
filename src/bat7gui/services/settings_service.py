"""Runtime settings for list rendering and sorting.

Accessed through the ``SettingsService.instance`` singleton; tests and the
application bootstrap may replace or mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from bat7gui.config import settings

from .comparator import NullPlacement


@dataclass
class SettingsService:
    """Runtime preferences.

    Attributes:
        virtualization_threshold: Lists longer than this use the windowed
            renderer.
        overscan: Extra rows materialized above and below the viewport.
        item_height: Row height in pixels for the windowed renderer.
        case_sensitive_sort: Case-aware string ordering when True.
        multi_sort_enabled: Allows shift-click multi-column sorting in tables.
        null_placement: Where empty values land when sorting.
    """

    instance: ClassVar["SettingsService"]

    virtualization_threshold: int = settings.DEFAULT_VIRTUALIZATION_THRESHOLD
    overscan: int = settings.DEFAULT_OVERSCAN
    item_height: int = settings.DEFAULT_ITEM_HEIGHT
    case_sensitive_sort: bool = False
    multi_sort_enabled: bool = True
    null_placement: NullPlacement = NullPlacement.FOLLOW_DIRECTION


SettingsService.instance = SettingsService()
