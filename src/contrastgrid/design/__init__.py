"""Headless color and contrast primitives (no Qt dependency)."""

from .color_model import (  # noqa: F401
    CanonicalColor,
    InvalidColor,
    parse_color,
    is_valid,
    to_hex,
    to_rgb,
    to_hsl,
    from_rgb,
    from_hsl,
    normalize_color_token,
)
from .contrast import (  # noqa: F401
    ContrastLevel,
    ContrastResult,
    classify,
    contrast_ratio,
    evaluate,
    format_ratio,
    relative_luminance,
)
