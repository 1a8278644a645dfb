"""Random color generation for the "randomize" action.

Colors are sampled uniformly over the 24-bit sRGB cube. The random source is
injected so tests can use a seeded `random.Random`.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from ..config import settings
from ..models import Axis, ColorEntry, RGB
from .color_model import from_rgb

__all__ = ["RandomPolicy", "random_color", "random_entries"]

_logger = logging.getLogger(__name__)

FIXED = "fixed"
RANGE = "range"


@dataclass(frozen=True)
class RandomPolicy:
    """How many entries to generate and how to label them.

    Attributes
    ----------
    mode: "fixed" uses `count`; "range" draws a count in [min_count, max_count].
    label_prefix: when set, entries are labelled "<prefix> 1", "<prefix> 2", ...
    """

    mode: str = FIXED
    count: int = settings.RANDOM_FIXED_COUNT
    min_count: int = settings.RANDOM_MIN_COUNT
    max_count: int = settings.RANDOM_MAX_COUNT
    label_prefix: Optional[str] = None

    def __post_init__(self) -> None:
        if self.mode not in (FIXED, RANGE):
            raise ValueError(f"Unknown random mode: {self.mode}")
        if self.mode == FIXED and self.count < 1:
            raise ValueError("count must be at least 1")
        if self.mode == RANGE and not 1 <= self.min_count <= self.max_count:
            raise ValueError("require 1 <= min_count <= max_count")

    def draw_count(self, rng: random.Random) -> int:
        if self.mode == FIXED:
            return self.count
        return rng.randint(self.min_count, self.max_count)


def random_color(rng: random.Random) -> str:
    value = rng.randrange(0x1000000)
    return from_rgb(RGB((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF))


def random_entries(
    axis: Axis | str, policy: RandomPolicy | None = None, rng: random.Random | None = None
) -> List[ColorEntry]:
    """Generate a fresh list of random entries for one axis."""
    axis = Axis.coerce(axis)
    policy = policy or RandomPolicy()
    rng = rng or random.Random()
    entries: List[ColorEntry] = []
    for i in range(policy.draw_count(rng)):
        label = f"{policy.label_prefix} {i + 1}" if policy.label_prefix else None
        if label is None:
            entries.append(ColorEntry(color=random_color(rng)))
        else:
            entries.append(ColorEntry(color=random_color(rng), label=label, delimiter=" "))
    _logger.debug("Generated %d random %s entries", len(entries), axis.value)
    return entries
