import logging

from bat7gui.services.error_handling_service import ErrorHandlingService
from bat7gui.services.event_bus import EventBus, GUIEvent
from bat7gui.services.logging_service import LoggingService


def _raise(exc):
    try:
        raise exc
    except Exception as e:  # noqa: BLE001
        return type(e), e, e.__traceback__


def test_handle_exception_records_and_limits():
    svc = ErrorHandlingService(capacity=2)
    for exc in (ValueError("boom1"), RuntimeError("boom2"), KeyError("boom3")):
        svc.handle_exception(*_raise(exc))
    errs = svc.recent_errors()
    assert len(errs) == 2
    assert errs[0].exc_type is RuntimeError
    assert errs[-1].exc_type is KeyError


def test_dedup_groups_identical_tracebacks():
    svc = ErrorHandlingService()
    args = _raise(ValueError("same"))
    svc.handle_exception(*args)
    svc.handle_exception(*args)
    entries = svc.dedup_entries()
    assert len(entries) == 1 and entries[0].count == 2
    svc.clear()
    assert svc.recent_errors() == [] and svc.dedup_entries() == []


def test_logging_integration():
    logging_svc = LoggingService(capacity=5)
    logging_svc.attach_root()
    try:
        svc = ErrorHandlingService(logger=logging.getLogger("bat7gui.errors"))
        svc.handle_exception(*_raise(AssertionError("failure")), context="sort")
        recs = logging_svc.filter(name_contains="errors")
        assert any("during sort" in r.message for r in recs)
    finally:
        logging_svc.detach_root()


def test_event_bus_emission():
    bus = EventBus()
    received = []
    bus.subscribe(GUIEvent.UNCAUGHT_EXCEPTION, lambda evt: received.append(evt.payload))
    svc = ErrorHandlingService(event_bus=bus)
    record = svc.handle_exception(*_raise(RuntimeError("hazard")))
    assert received[0]["type"] == "RuntimeError"
    assert received[0]["message"] == "hazard"
    assert record.iso_time.endswith("Z")


def test_install_uninstall_restores_hooks():
    import sys
    import threading

    before_sys, before_thread = sys.excepthook, threading.excepthook
    svc = ErrorHandlingService()
    svc.install()
    assert svc.installed and sys.excepthook is not before_sys
    svc.uninstall()
    assert sys.excepthook is before_sys
    assert threading.excepthook is before_thread
