"""Reusable Qt widgets for candidate lists."""

from __future__ import annotations

from .empty_state import EmptyStateWidget, empty_state_registry
from .virtualized_list import VirtualizedList

__all__ = ["EmptyStateWidget", "empty_state_registry", "VirtualizedList"]
