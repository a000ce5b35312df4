"""Render strategy selection for list views.

Small collections are rendered in full. Collections longer than the
threshold go through a windowed renderer that only materializes the rows in
the viewport plus an overscan margin. ``visible_range`` computes that window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from bat7gui.config import settings

__all__ = [
    "RenderStrategy",
    "VisibleRange",
    "ListPreset",
    "LIST_PRESETS",
    "get_preset",
    "should_virtualize",
    "choose_strategy",
    "visible_range",
]


class RenderStrategy(str, Enum):
    FULL = "full"
    VIRTUALIZED = "virtualized"


@dataclass(frozen=True)
class VisibleRange:
    start: int
    end: int  # inclusive; end < start means nothing to render

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)

    def indices(self) -> range:
        return range(self.start, self.end + 1)


@dataclass(frozen=True)
class ListPreset:
    item_height: int
    height: int
    threshold: int


LIST_PRESETS: Dict[str, ListPreset] = {
    "small": ListPreset(item_height=40, height=200, threshold=50),
    "medium": ListPreset(item_height=60, height=400, threshold=100),
    "large": ListPreset(item_height=80, height=600, threshold=200),
}


def get_preset(name: str) -> ListPreset:
    try:
        return LIST_PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown list preset '{name}'") from None


def should_virtualize(length: int, threshold: int = settings.DEFAULT_VIRTUALIZATION_THRESHOLD) -> bool:
    return length > threshold


def choose_strategy(
    length: int, threshold: int = settings.DEFAULT_VIRTUALIZATION_THRESHOLD
) -> RenderStrategy:
    if should_virtualize(length, threshold):
        return RenderStrategy.VIRTUALIZED
    return RenderStrategy.FULL


def visible_range(
    scroll_top: float,
    item_height: int,
    viewport_height: int,
    item_count: int,
    overscan: int = settings.DEFAULT_OVERSCAN,
) -> VisibleRange:
    """Return the inclusive row window to materialize for a scroll offset.

    The window covers the rows intersecting the viewport, widened by
    ``overscan`` rows on both sides and clamped to ``[0, item_count - 1]``.
    """
    if item_count <= 0:
        return VisibleRange(0, -1)
    if item_height <= 0:
        raise ValueError("item_height must be positive")
    first = int(max(0.0, scroll_top) // item_height)
    first = min(first, item_count - 1)
    visible_count = math.ceil(max(0, viewport_height) / item_height)
    end = min(first + visible_count + overscan, item_count - 1)
    start = max(0, first - overscan)
    return VisibleRange(start, end)
