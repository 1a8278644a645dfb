"""Theme preference persistence.

Stores the dark/light choice under its own key, independent from the grid
state. When nothing valid is stored the platform's reported color scheme is
used; the core only stores the boolean, it never computes it.
"""

from __future__ import annotations

import json
import logging

from ..config import settings
from ..services.grid_persistence import KeyValueStore

__all__ = ["ThemePreferenceStore", "DARK", "LIGHT"]

DARK = "dark"
LIGHT = "light"

_logger = logging.getLogger(__name__)


class ThemePreferenceStore:
    def __init__(self, store: KeyValueStore, key: str = settings.THEME_KEY):
        self.store = store
        self.key = key

    def load(self, platform_dark: bool = False) -> bool:
        raw = self.store.get(self.key)
        try:
            value = json.loads(raw) if raw is not None else None
        except ValueError:
            value = raw.strip()
        if value == DARK:
            return True
        if value == LIGHT:
            return False
        return platform_dark

    def save(self, dark: bool) -> None:
        try:
            self.store.set(self.key, json.dumps(DARK if dark else LIGHT))
        except Exception:  # noqa: BLE001 - foreign stores may raise anything
            _logger.warning("Could not persist theme preference", exc_info=True)

    def toggle(self, current: bool) -> bool:
        new_value = not current
        self.save(new_value)
        return new_value
