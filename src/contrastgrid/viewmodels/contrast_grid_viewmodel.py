"""ViewModel owning the two grid axes (GridState).

Rows are background entries, columns are foreground entries. Every mutation
persists the whole configuration through the injected GridPersistence and
publishes GridEvent.AXIS_CHANGED so views can re-render. Contrast cells are
recomputed on demand; nothing is cached.

Failure policy:
 - invalid colors never raise, they produce a (0.0, FAIL) cell
 - a stale index passed to update_entry_color is ignored
 - a failed save is logged and the state lives on in memory
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..design.accessible_reorder import (
    KEY_OPERATIONS,
    ReorderActionResult,
    interpret_key_command,
    reorder,
)
from ..design.contrast import ContrastLevel, ContrastResult, NOT_COMPUTABLE, evaluate
from ..design.color_model import normalize_color_token
from ..design.random_palette import RandomPolicy, random_entries
from ..errors import StorageError
from ..models import Axis, ColorEntry, PersistedState, cleared_state, default_state
from ..services.entry_parser import EntryParser
from ..services.event_bus import EventBus, GridEvent
from ..services.grid_persistence import GridPersistence, InMemoryStore

__all__ = ["GridState", "NOT_COMPUTABLE_RESULT"]

_logger = logging.getLogger(__name__)

NOT_COMPUTABLE_RESULT = ContrastResult(ratio=NOT_COMPUTABLE, level=ContrastLevel.FAIL)


class GridState:
    def __init__(
        self,
        persistence: GridPersistence | None = None,
        *,
        parser: EntryParser | None = None,
        rng: random.Random | None = None,
        random_policy: RandomPolicy | None = None,
        bus: EventBus | None = None,
    ):
        self._persistence = persistence or GridPersistence(InMemoryStore())
        self.parser = parser or EntryParser()
        self._rng = rng or random.Random()
        self.random_policy = random_policy or RandomPolicy()
        self.bus = bus or EventBus()
        self.last_save_error: Optional[StorageError] = None
        defaults = default_state()
        loaded = self._persistence.load(default=defaults)
        state = loaded or defaults
        self._axes: Dict[Axis, List[ColorEntry]] = {
            Axis.FOREGROUND: list(state.fg),
            Axis.BACKGROUND: list(state.bg),
        }

    # Queries ------------------------------------------------------------
    def axis(self, which: Axis | str) -> List[ColorEntry]:
        return list(self._axes[Axis.coerce(which)])

    def rows(self) -> List[ColorEntry]:
        return self.axis(Axis.BACKGROUND)

    def columns(self) -> List[ColorEntry]:
        return self.axis(Axis.FOREGROUND)

    def axis_text(self, which: Axis | str) -> str:
        return self.parser.format_text(self._axes[Axis.coerce(which)])

    def snapshot(self) -> PersistedState:
        return PersistedState(
            fg=tuple(self._axes[Axis.FOREGROUND]),
            bg=tuple(self._axes[Axis.BACKGROUND]),
        )

    def cell_ratio(self, row_index: int, col_index: int) -> ContrastResult:
        rows = self._axes[Axis.BACKGROUND]
        cols = self._axes[Axis.FOREGROUND]
        if not (0 <= row_index < len(rows) and 0 <= col_index < len(cols)):
            _logger.debug("cell_ratio out of range: row=%s col=%s", row_index, col_index)
            return NOT_COMPUTABLE_RESULT
        return evaluate(cols[col_index].color, rows[row_index].color)

    def grid(self) -> List[List[ContrastResult]]:
        return [
            [self.cell_ratio(r, c) for c in range(len(self._axes[Axis.FOREGROUND]))]
            for r in range(len(self._axes[Axis.BACKGROUND]))
        ]

    # Mutations ----------------------------------------------------------
    def set_axis(self, which: Axis | str, entries: Iterable[ColorEntry]) -> None:
        axis = Axis.coerce(which)
        self._axes[axis] = list(entries)
        self._commit(GridEvent.AXIS_CHANGED, axis.value)

    def set_axis_text(self, which: Axis | str, text: str) -> None:
        self.set_axis(which, self.parser.parse_text(text))

    def update_entry_color(self, which: Axis | str, index: int, new_color: str) -> bool:
        """Replace the color of one entry, keeping its label.

        Returns False (and changes nothing) when `index` no longer exists.
        """
        axis = Axis.coerce(which)
        entries = self._axes[axis]
        if not 0 <= index < len(entries):
            _logger.debug("Ignoring stale color update for %s[%s]", axis.value, index)
            return False
        entries[index] = replace(entries[index], color=normalize_color_token(new_color))
        self._commit(GridEvent.AXIS_CHANGED, axis.value)
        return True

    def reorder(self, which: Axis | str, from_index: int, to_index: int) -> bool:
        axis = Axis.coerce(which)
        current = self._axes[axis]
        if from_index == to_index:
            return False
        if not (0 <= from_index < len(current) and 0 <= to_index < len(current)):
            return False
        self._axes[axis] = reorder(current, from_index, to_index)
        self._commit(GridEvent.AXIS_CHANGED, axis.value)
        return True

    def move(self, which: Axis | str, index: int, command: str) -> ReorderActionResult:
        """Keyboard reorder fallback (up/down/top/bottom)."""
        axis = Axis.coerce(which)
        verb = interpret_key_command(command)
        operation = KEY_OPERATIONS.get(verb)
        entries = self._axes[axis]
        if operation is None:
            return ReorderActionResult(tuple(entries), False, index, "No change")
        result = operation(entries, index)
        if result.changed:
            self._axes[axis] = list(result.items)
            self._commit(GridEvent.AXIS_CHANGED, axis.value)
        return result

    def clear(self) -> None:
        state = cleared_state()
        self._axes[Axis.FOREGROUND] = list(state.fg)
        self._axes[Axis.BACKGROUND] = list(state.bg)
        self._commit(GridEvent.GRID_CLEARED, None)

    def randomize(self, policy: RandomPolicy | None = None) -> None:
        policy = policy or self.random_policy
        self._axes[Axis.FOREGROUND] = random_entries(Axis.FOREGROUND, policy, self._rng)
        self._axes[Axis.BACKGROUND] = random_entries(Axis.BACKGROUND, policy, self._rng)
        self._commit(GridEvent.GRID_RANDOMIZED, None)

    # Internal -----------------------------------------------------------
    def _commit(self, event: GridEvent, payload) -> None:
        self._save()
        self.bus.publish(event, payload)

    def _save(self) -> None:
        try:
            self._persistence.save(self.snapshot())
        except StorageError as exc:
            self.last_save_error = exc
            _logger.warning("Grid state not persisted, keeping it in memory: %s", exc)
            self.bus.publish(GridEvent.PERSISTENCE_FAILED, str(exc))
        else:
            self.last_save_error = None
