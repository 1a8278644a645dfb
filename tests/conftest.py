# Shared fixtures plus a fallback 'qtbot' fixture if pytest-qt is not installed.
# If pytest-qt is installed, its fixture wins.

import os
import sys
import random

import pytest

# Headless platform for any Qt smoke test; must be set before QApplication exists
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from contrastgrid.services.grid_persistence import GridPersistence, InMemoryStore
from contrastgrid.viewmodels.contrast_grid_viewmodel import GridState

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover

    @pytest.fixture
    def qtbot():  # type: ignore
        widgets_mod = pytest.importorskip("PyQt6.QtWidgets")
        app = widgets_mod.QApplication.instance() or widgets_mod.QApplication(sys.argv)
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        yield Bot()
        for w in widgets:
            w.close()
        app.processEvents()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def persistence(store):
    return GridPersistence(store)


@pytest.fixture
def grid(persistence):
    return GridState(persistence, rng=random.Random(1234))
