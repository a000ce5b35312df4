"""Error capture for uncaught and view-guarded exceptions.

``install()`` hooks ``sys.excepthook`` and ``threading.excepthook``. Views
that guard a failing operation (for example a custom sort comparator that
raises) call ``handle_exception`` directly so the failure is recorded,
logged and published without crashing the UI.

Records are kept in a bounded ring buffer; repeated exceptions with the same
type and traceback are also grouped into ``DedupEntry`` counters.
"""

from __future__ import annotations

import sys
import threading
import traceback
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Optional

from .event_bus import EventBus, GUIEvent

__all__ = ["ErrorRecord", "DedupEntry", "ErrorHandlingService"]


@dataclass(frozen=True)
class ErrorRecord:
    exc_type: type
    exc_value: BaseException
    traceback_str: str
    timestamp: float
    iso_time: str
    thread_name: str
    context: str | None = None  # what the caller was doing, e.g. "sort"

    def summary(self, max_len: int = 120) -> str:
        msg = f"{self.exc_type.__name__}: {self.exc_value}"
        return msg if len(msg) <= max_len else msg[: max_len - 3] + "..."


@dataclass
class DedupEntry:
    key: str
    first: ErrorRecord
    count: int
    last_timestamp: float


class ErrorHandlingService:
    """Installable global error hook manager.

    Parameters
    ----------
    capacity:
        Ring buffer size for raw records (minimum 1).
    logger:
        Object with an ``error(msg)`` method, usually a ``logging.Logger``.
    event_bus:
        Receives ``GUIEvent.UNCAUGHT_EXCEPTION`` for every handled error.
    """

    def __init__(
        self,
        *,
        capacity: int = 20,
        logger: Any | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._errors: Deque[ErrorRecord] = deque(maxlen=max(1, capacity))
        self._logger = logger
        self._event_bus = event_bus
        self._installed = False
        self._prev_sys_hook = None
        self._prev_threading_hook = None
        self._dedup: Dict[str, DedupEntry] = {}

    # Installation -----------------------------------------------------
    def install(self) -> None:
        if self._installed:
            return
        self._prev_sys_hook = sys.excepthook
        sys.excepthook = self._sys_hook
        self._prev_threading_hook = threading.excepthook
        threading.excepthook = self._thread_hook
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        if self._prev_sys_hook is not None:
            sys.excepthook = self._prev_sys_hook
        if self._prev_threading_hook is not None:
            threading.excepthook = self._prev_threading_hook
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    def _sys_hook(self, exc_type, exc_value, tb):  # pragma: no cover - delegate
        self.handle_exception(exc_type, exc_value, tb)
        if self._prev_sys_hook is not None:
            self._prev_sys_hook(exc_type, exc_value, tb)

    def _thread_hook(self, args):  # pragma: no cover - delegate
        self.handle_exception(args.exc_type, args.exc_value, args.exc_traceback, thread=args.thread)
        if self._prev_threading_hook is not None:
            self._prev_threading_hook(args)

    # Core -------------------------------------------------------------
    def handle_exception(
        self,
        exc_type,
        exc_value,
        tb,
        *,
        thread: Optional[threading.Thread] = None,
        context: str | None = None,
    ) -> ErrorRecord:
        trace_text = "".join(traceback.format_exception(exc_type, exc_value, tb))
        now = datetime.now(timezone.utc)
        record = ErrorRecord(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback_str=trace_text,
            timestamp=now.timestamp(),
            iso_time=now.isoformat().replace("+00:00", "Z"),
            thread_name=(thread or threading.current_thread()).name,
            context=context,
        )
        self._errors.append(record)
        key = f"{exc_type.__name__}|{hash(trace_text)}"
        entry = self._dedup.get(key)
        if entry is None:
            self._dedup[key] = DedupEntry(key=key, first=record, count=1, last_timestamp=record.timestamp)
        else:
            entry.count += 1
            entry.last_timestamp = record.timestamp
        if self._logger is not None:
            where = f" during {context}" if context else ""
            self._logger.error(
                f"Uncaught exception{where} ({record.thread_name}) {record.summary()}"
            )
        if self._event_bus is not None:
            self._event_bus.publish(
                GUIEvent.UNCAUGHT_EXCEPTION,
                {
                    "type": exc_type.__name__,
                    "message": str(exc_value),
                    "thread": record.thread_name,
                    "context": context,
                    "iso_time": record.iso_time,
                },
            )
        return record

    # Introspection ----------------------------------------------------
    def recent_errors(self) -> List[ErrorRecord]:
        return list(self._errors)

    def dedup_entries(self) -> List[DedupEntry]:
        """Grouped occurrences in first-seen order."""
        return list(self._dedup.values())

    def clear(self) -> None:
        self._errors.clear()
        self._dedup.clear()
