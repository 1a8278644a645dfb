"""Contrast utilities for grid cells.

Implements WCAG 2.x contrast ratio calculations and AA/AAA classification.

Public API:
- relative_luminance(color: str) -> float
- contrast_ratio(fg: str, bg: str) -> float   (0.0 when either color is invalid)
- classify(ratio: float) -> ContrastLevel
- evaluate(fg: str, bg: str) -> ContrastResult
- format_ratio(ratio: float) -> str

A ratio of 0.0 is a sentinel for "not computable"; real ratios always lie in
[1, 21]. The sentinel classifies as FAIL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..config import settings
from ..models import RGB
from .color_model import CanonicalColor, parse_color, to_rgb

__all__ = [
    "ContrastLevel",
    "ContrastResult",
    "NOT_COMPUTABLE",
    "relative_luminance",
    "contrast_ratio",
    "classify",
    "evaluate",
    "format_ratio",
]

NOT_COMPUTABLE = 0.0


class ContrastLevel(str, Enum):
    AAA = "AAA"
    AA = "AA"
    FAIL = "FAIL"


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    level: ContrastLevel

    @property
    def computable(self) -> bool:
        return self.ratio != NOT_COMPUTABLE


def _linear_channel(c: float) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _luminance(rgb: RGB) -> float:
    r_l = _linear_channel(rgb.r)
    g_l = _linear_channel(rgb.g)
    b_l = _linear_channel(rgb.b)
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * r_l + 0.7152 * g_l + 0.0722 * b_l


def relative_luminance(color: str) -> float:
    """Relative luminance of a color; raises InvalidColorError for bad input."""
    return _luminance(to_rgb(color))


def contrast_ratio(fg: str, bg: str) -> float:
    a = parse_color(fg)
    b = parse_color(bg)
    if not isinstance(a, CanonicalColor) or not isinstance(b, CanonicalColor):
        return NOT_COMPUTABLE
    l1 = _luminance(a.rgb)
    l2 = _luminance(b.rgb)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def classify(ratio: float) -> ContrastLevel:
    if ratio >= settings.AAA_THRESHOLD:
        return ContrastLevel.AAA
    if ratio >= settings.AA_THRESHOLD:
        return ContrastLevel.AA
    return ContrastLevel.FAIL


def evaluate(fg: str, bg: str) -> ContrastResult:
    ratio = contrast_ratio(fg, bg)
    return ContrastResult(ratio=ratio, level=classify(ratio))


def format_ratio(ratio: float) -> str:
    return f"{ratio:.2f}"
