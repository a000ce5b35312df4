# Headless Qt for widget tests, plus a minimal 'qtbot' fallback when
# pytest-qt is not installed. If pytest-qt is present its fixture wins.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        QApplication = pytest.importorskip("PyQt6.QtWidgets").QApplication
        app = QApplication.instance() or QApplication(sys.argv)
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            def wait(self, ms):
                app.processEvents()

        yield Bot()
        for w in widgets:
            w.close()


@pytest.fixture(autouse=True)
def _reset_settings():
    from bat7gui.services.settings_service import SettingsService

    saved = SettingsService.instance
    SettingsService.instance = SettingsService()
    yield
    SettingsService.instance = saved
