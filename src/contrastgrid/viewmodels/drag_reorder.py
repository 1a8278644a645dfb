"""Drag interaction state for axis reordering.

Idle -> begin(axis, index) -> Dragging(axis, original_index, current_index)
Every pointer-over event calls over(index), which moves the dragged entry from
its *current* position to `index` and remembers the new position. Releasing the
pointer anywhere (end) or aborting (cancel) returns to Idle; the list is
consistent after every step, so an interrupted drag leaves a valid order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..models import Axis
from .contrast_grid_viewmodel import GridState

__all__ = ["Dragging", "DragReorderController"]


@dataclass(frozen=True)
class Dragging:
    axis: Axis
    original_index: int
    current_index: int


class DragReorderController:
    def __init__(self, grid: GridState):
        self._grid = grid
        self.state: Optional[Dragging] = None  # None == Idle

    @property
    def is_dragging(self) -> bool:
        return self.state is not None

    def begin(self, axis: Axis | str, index: int) -> None:
        self.state = Dragging(Axis.coerce(axis), index, index)

    def over(self, index: int) -> bool:
        """Pointer moved over `index`; returns True when the order changed."""
        if self.state is None:
            return False
        changed = self._grid.reorder(self.state.axis, self.state.current_index, index)
        if changed:
            self.state = Dragging(self.state.axis, self.state.original_index, index)
        return changed

    def end(self) -> Optional[Dragging]:
        finished, self.state = self.state, None
        return finished

    cancel = end
