"""Global configuration and constants for candidate list rendering."""

from __future__ import annotations

import os
from typing import Final

# Lists longer than this are rendered through the windowed list widget
DEFAULT_VIRTUALIZATION_THRESHOLD: Final = int(os.environ.get("BAT7_VIRTUALIZE_THRESHOLD", "100"))
DEFAULT_OVERSCAN: Final = 5  # rows rendered above/below the viewport
DEFAULT_ITEM_HEIGHT: Final = 60  # pixels
DEFAULT_CONTAINER_HEIGHT: Final = 400  # pixels
LOG_BUFFER_CAPACITY: Final = 500
DATA_DIR: Final = os.environ.get("BAT7_DATA_DIR", "data")
