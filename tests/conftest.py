# Shared fixtures: headless Qt platform, a single QApplication for widget
# tests, and isolation of the process-wide generator cache / motion preference.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from shadows import generator  # noqa: E402
from shadows import motion  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_global_state():
    generator.clear_cache()
    previous = motion.is_reduced_motion()
    motion.set_reduced_motion(False)
    yield
    motion.set_reduced_motion(previous)
    generator.clear_cache()


@pytest.fixture(scope="module")
def qapp():
    """Ensure a single QApplication instance for widget tests.

    Module scope avoids creation/destruction churn which can hang some PyQt
    builds when effects are applied without a running application.
    """
    widgets = pytest.importorskip("PyQt6.QtWidgets")
    app = widgets.QApplication.instance() or widgets.QApplication(sys.argv[:1])
    yield app
