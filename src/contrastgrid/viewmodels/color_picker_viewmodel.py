"""ViewModel for the swatch color picker.

States: Closed (target is None) or Open(axis, index).

 - click_swatch on a different swatch (or while closed) opens the picker there
 - click_swatch on the open swatch, close() or click_outside() closes it

The HSL/RGB/hex mirror is rebuilt from the entry's current color on every
open. While open, slider edits are kept exactly as set: an HSL edit derives
hex and RGB from the slider values and never re-reads HSL from the rounded
hex, so repeated slider moves do not drift. RGB and hex edits re-derive HSL.
Each edit writes the new hex into the grid through update_entry_color.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..design.color_model import CanonicalColor, from_hsl, from_rgb, parse_color, to_hsl, to_rgb
from ..models import Axis, HSL, RGB
from ..services.event_bus import GridEvent
from .contrast_grid_viewmodel import GridState

__all__ = ["PickerTarget", "ColorPickerViewModel"]

_BLACK = "#000000"


@dataclass(frozen=True)
class PickerTarget:
    axis: Axis
    index: int


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


class ColorPickerViewModel:
    def __init__(self, grid: GridState):
        self._grid = grid
        self.target: Optional[PickerTarget] = None
        self._reset_mirror(_BLACK)

    @property
    def is_open(self) -> bool:
        return self.target is not None

    # State transitions -------------------------------------------------
    def click_swatch(self, axis: Axis | str, index: int) -> None:
        target = PickerTarget(Axis.coerce(axis), index)
        if target == self.target:
            self.close()
            return
        entries = self._grid.axis(target.axis)
        if not 0 <= index < len(entries):
            return
        self.target = target
        result = parse_color(entries[index].color)
        self._reset_mirror(result.hex if isinstance(result, CanonicalColor) else _BLACK)
        self._grid.bus.publish(
            GridEvent.PICKER_OPENED, {"axis": target.axis.value, "index": target.index}
        )

    def close(self) -> None:
        if self.target is None:
            return
        self.target = None
        self._grid.bus.publish(GridEvent.PICKER_CLOSED, None)

    click_outside = close

    # Edits ---------------------------------------------------------------
    def set_hsl(self, h: int | None = None, s: int | None = None, l: int | None = None) -> bool:  # noqa: E741
        if self.target is None:
            return False
        self.hsl = HSL(
            _clamp(self.hsl.h if h is None else h, 0, 360),
            _clamp(self.hsl.s if s is None else s, 0, 100),
            _clamp(self.hsl.l if l is None else l, 0, 100),
        )
        # Sliders brought back to where they started restore the exact starting color
        self.hex = self._origin[1] if self.hsl == self._origin[0] else from_hsl(self.hsl)
        self.rgb = to_rgb(self.hex)
        return self._apply()

    def set_rgb(self, r: int | None = None, g: int | None = None, b: int | None = None) -> bool:
        if self.target is None:
            return False
        self.rgb = RGB(
            _clamp(self.rgb.r if r is None else r, 0, 255),
            _clamp(self.rgb.g if g is None else g, 0, 255),
            _clamp(self.rgb.b if b is None else b, 0, 255),
        )
        self.hex = from_rgb(self.rgb)
        self.hsl = to_hsl(self.hex)
        return self._apply()

    def set_hex(self, value: str) -> bool:
        """Apply a typed hex/CSS color; invalid text leaves everything untouched."""
        if self.target is None:
            return False
        result = parse_color(value)
        if not isinstance(result, CanonicalColor):
            return False
        self._reset_mirror(result.hex)
        return self._apply()

    # Internal -----------------------------------------------------------
    def _reset_mirror(self, hex_value: str) -> None:
        self.hex = hex_value
        self.rgb = to_rgb(hex_value)
        self.hsl = to_hsl(hex_value)
        self._origin = (self.hsl, self.hex)

    def _apply(self) -> bool:
        assert self.target is not None
        return self._grid.update_entry_color(self.target.axis, self.target.index, self.hex)
