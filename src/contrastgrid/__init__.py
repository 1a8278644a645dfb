"""Contrast Grid public API.

Curated surface for the CLI, the Qt launcher and tests. Importing this package
never touches Qt; the views are imported lazily by the launcher.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .models import Axis, ColorEntry, HSL, RGB, PersistedState  # noqa: F401
from .errors import ContrastGridError, InvalidColorError, StorageError  # noqa: F401
from .design.color_model import (  # noqa: F401
    parse_color,
    is_valid,
    to_hex,
    to_rgb,
    to_hsl,
    from_rgb,
    from_hsl,
)
from .design.contrast import ContrastLevel, ContrastResult, classify, contrast_ratio  # noqa: F401
from .services.entry_parser import EntryParser, ParsePolicy  # noqa: F401
from .services.event_bus import EventBus, GridEvent  # noqa: F401
from .services.grid_persistence import GridPersistence, InMemoryStore, JsonFileStore  # noqa: F401
from .viewmodels.contrast_grid_viewmodel import GridState  # noqa: F401
