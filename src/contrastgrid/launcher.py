"""Launcher for `python -m contrastgrid` or the `contrast-grid` script.

Configures logging, wires the persistence stores to the data directory and
shows the main window.
"""

from __future__ import annotations

import logging
import sys

from .app.preferences import ThemePreferenceStore
from .config import settings
from .services.grid_persistence import GridPersistence, JsonFileStore
from .viewmodels.contrast_grid_viewmodel import GridState

_logger = logging.getLogger(__name__)


def configure_logging(level: str | int = settings.LOG_LEVEL) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_state(data_dir: str | None = None) -> tuple[GridState, ThemePreferenceStore]:
    store = JsonFileStore(data_dir or settings.DATA_DIR)
    return GridState(GridPersistence(store)), ThemePreferenceStore(store)


def main():  # pragma: no cover - runtime
    configure_logging()
    from PyQt6.QtWidgets import QApplication

    from .views.contrast_grid_window import ContrastGridWindow

    app = QApplication(sys.argv)
    grid, theme_store = build_state()
    _logger.info("Using data directory %s", settings.DATA_DIR)
    win = ContrastGridWindow(grid, theme_store)
    win.resize(960, 720)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover
    main()
