"""Global configuration and constants for the contrast grid."""

from __future__ import annotations

import os
from typing import Final

DATA_DIR: Final = os.environ.get("CONTRASTGRID_DATA_DIR", "data")
LOG_LEVEL: Final = os.environ.get("CONTRASTGRID_LOG_LEVEL", "INFO")

# Storage keys (one key-value entry each)
GRID_STATE_KEY: Final = "contrast-grid-colors"
THEME_KEY: Final = "contrast-grid-theme"

# WCAG 2.x thresholds for normal text
AAA_THRESHOLD: Final = 7.0
AA_THRESHOLD: Final = 4.5

DEFAULT_FOREGROUND: Final = ("#FFFFFF", "#000000", "#FF0000")
DEFAULT_BACKGROUND: Final = ("#000000", "#FFFFFF", "#0000FF")

# (color, label) used by GridState.clear()
CLEARED_FOREGROUND: Final = ("#FFFFFF", "White")
CLEARED_BACKGROUND: Final = ("#000000", "Black")

RANDOM_FIXED_COUNT: Final = 3
RANDOM_MIN_COUNT: Final = 2
RANDOM_MAX_COUNT: Final = 6
