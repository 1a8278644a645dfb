"""Core value types shared by the color model, grid state and views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .config import settings

__all__ = [
    "Axis",
    "ColorEntry",
    "HSL",
    "RGB",
    "PersistedState",
    "default_state",
    "cleared_state",
]


class Axis(str, Enum):
    """Grid axis. Foreground entries form the columns, background entries the rows."""

    FOREGROUND = "fg"
    BACKGROUND = "bg"

    @classmethod
    def coerce(cls, value: "Axis | str") -> "Axis":
        if isinstance(value, cls):
            return value
        return cls(value)


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: int
    s: int
    l: int  # noqa: E741


@dataclass(frozen=True)
class ColorEntry:
    """One line of user input: a color plus an optional label.

    `color` is not validated here; it may hold whatever the user typed.
    `delimiter` is the character that separated color and label in the
    source text and is only meaningful when `label` is not None.
    """

    color: str
    label: Optional[str] = None
    delimiter: str = ","

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"color": self.color}
        if self.label is not None:
            data["label"] = self.label
            if self.delimiter != ",":
                data["delimiter"] = self.delimiter
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "ColorEntry":
        # Older saves stored a bare list of color strings
        if isinstance(data, str):
            return cls(color=data)
        if not isinstance(data, dict) or not isinstance(data.get("color"), str):
            raise ValueError(f"Invalid color entry: {data!r}")
        label = data.get("label")
        if label is not None and not isinstance(label, str):
            raise ValueError(f"Invalid label: {label!r}")
        delimiter = data.get("delimiter", ",")
        if delimiter not in (",", " "):
            raise ValueError(f"Invalid delimiter: {delimiter!r}")
        return cls(color=data["color"], label=label, delimiter=delimiter)


def _entries(colors: Iterable[str]) -> Tuple[ColorEntry, ...]:
    return tuple(ColorEntry(color=c) for c in colors)


def _axis_from_raw(raw: Any) -> Tuple[ColorEntry, ...]:
    if not isinstance(raw, list):
        raise ValueError("axis must be a list")
    return tuple(ColorEntry.from_dict(item) for item in raw)


@dataclass(frozen=True)
class PersistedState:
    """The whole color configuration, persisted under a single key."""

    fg: Tuple[ColorEntry, ...] = field(default_factory=tuple)
    bg: Tuple[ColorEntry, ...] = field(default_factory=tuple)

    def axis(self, which: Axis | str) -> Tuple[ColorEntry, ...]:
        return self.fg if Axis.coerce(which) is Axis.FOREGROUND else self.bg

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "fg": [e.to_dict() for e in self.fg],
            "bg": [e.to_dict() for e in self.bg],
        }

    @classmethod
    def from_dict(
        cls, data: Any, *, default: "PersistedState | None" = None
    ) -> "PersistedState":
        """Build state from decoded JSON.

        Each axis is parsed independently. A malformed axis is replaced by the
        matching axis of `default`; without a default it raises ValueError.
        """
        if not isinstance(data, dict):
            if default is None:
                raise ValueError("persisted state must be an object")
            return default
        axes: Dict[str, Tuple[ColorEntry, ...]] = {}
        for key in ("fg", "bg"):
            try:
                axes[key] = _axis_from_raw(data.get(key))
            except ValueError:
                if default is None:
                    raise
                axes[key] = default.axis(key)
        return cls(fg=axes["fg"], bg=axes["bg"])


def default_state() -> PersistedState:
    return PersistedState(
        fg=_entries(settings.DEFAULT_FOREGROUND),
        bg=_entries(settings.DEFAULT_BACKGROUND),
    )


def cleared_state() -> PersistedState:
    fg_color, fg_label = settings.CLEARED_FOREGROUND
    bg_color, bg_label = settings.CLEARED_BACKGROUND
    return PersistedState(
        fg=(ColorEntry(fg_color, fg_label, " "),),
        bg=(ColorEntry(bg_color, bg_label, " "),),
    )
