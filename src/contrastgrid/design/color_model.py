"""Color model: parsing, validation and hex/RGB/HSL conversion.

All colors are reduced to a single authoritative representation, an uppercase
6-digit hex string (#RRGGBB). RGB and HSL are derived views recomputed from it.

Public API:
- normalize_color_token(token) -> str
- parse_color(spec) -> CanonicalColor | InvalidColor  (never raises)
- is_valid(spec) -> bool
- to_hex(spec) / to_rgb(spec) / to_hsl(spec)  (raise InvalidColorError)
- from_rgb(rgb) / from_hsl(hsl) -> str

Plain hex (#RGB, #RRGGBB) is decoded directly. Every other CSS form (rgb(),
hsl(), named colors, ...) goes through coloraide, is converted to sRGB and
fitted into gamut. Alpha is dropped.
"""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass
from typing import Union

from coloraide import Color

from ..errors import InvalidColorError
from ..models import HSL, RGB

__all__ = [
    "CanonicalColor",
    "InvalidColor",
    "ParseResult",
    "normalize_color_token",
    "parse_color",
    "is_valid",
    "to_hex",
    "to_rgb",
    "to_hsl",
    "from_rgb",
    "from_hsl",
]

BARE_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{6}")
HEX_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{3})")


@dataclass(frozen=True)
class CanonicalColor:
    hex: str  # #RRGGBB uppercase
    rgb: RGB


@dataclass(frozen=True)
class InvalidColor:
    raw: str
    reason: str


ParseResult = Union[CanonicalColor, InvalidColor]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(v: int, lo: int, hi: int) -> int:
    return lo if v < lo else hi if v > hi else v


def normalize_color_token(token: str) -> str:
    """Prefix a bare 6-digit hex token with '#'; return anything else verbatim."""
    if BARE_HEX_PATTERN.fullmatch(token):
        return "#" + token
    return token


def _decode_hex(value: str) -> RGB:
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def parse_color(spec: str) -> ParseResult:
    """Interpret `spec` as a color.

    Returns CanonicalColor on success and InvalidColor otherwise; no
    exception escapes for bad input.
    """
    if not isinstance(spec, str):
        return InvalidColor(raw=repr(spec), reason="color must be a string")
    text = normalize_color_token(spec.strip())
    if not text:
        return InvalidColor(raw=spec, reason="empty color")
    if HEX_PATTERN.fullmatch(text):
        rgb = _decode_hex(text)
        return CanonicalColor(hex=from_rgb(rgb), rgb=rgb)
    try:
        color = Color(text)
    except (ValueError, TypeError) as exc:
        return InvalidColor(raw=spec, reason=str(exc))
    serialized = color.convert("srgb").to_string(hex=True)
    rgb = _decode_hex(serialized[:7])
    return CanonicalColor(hex=from_rgb(rgb), rgb=rgb)


def is_valid(spec: str) -> bool:
    return isinstance(parse_color(spec), CanonicalColor)


def _require(spec: str) -> CanonicalColor:
    result = parse_color(spec)
    if isinstance(result, InvalidColor):
        raise InvalidColorError(
            f"Invalid color: {result.raw}", context={"reason": result.reason}
        )
    return result


def to_hex(spec: str) -> str:
    return _require(spec).hex


def to_rgb(spec: str) -> RGB:
    return _require(spec).rgb


def from_rgb(rgb: RGB | tuple[int, int, int]) -> str:
    """Render RGB channels as uppercase #RRGGBB. Channels are clamped to 0..255."""
    r, g, b = (_clamp(int(c), 0, 255) for c in rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def _rgb_to_hsl(rgb: RGB) -> HSL:
    h, l, s = colorsys.rgb_to_hls(rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0)
    if math.isnan(h) or s == 0:
        h = 0.0
    hue = _round_half_up(h * 360) % 360
    return HSL(hue, _round_half_up(s * 100), _round_half_up(l * 100))


def to_hsl(spec: str) -> HSL:
    """Convert a color to integer HSL (degrees, percent, percent).

    Hue is undefined for achromatic colors and reported as 0.
    """
    return _rgb_to_hsl(_require(spec).rgb)


# Rounding HSL to integers moves a channel by at most ~6.5 units, so every
# integer HSL produced by to_hsl has a preimage within this radius.
_PREIMAGE_RADIUS = 7
_PREIMAGE_OFFSETS = sorted(
    (
        (dr, dg, db)
        for dr in range(-_PREIMAGE_RADIUS, _PREIMAGE_RADIUS + 1)
        for dg in range(-_PREIMAGE_RADIUS, _PREIMAGE_RADIUS + 1)
        for db in range(-_PREIMAGE_RADIUS, _PREIMAGE_RADIUS + 1)
    ),
    key=lambda d: (d[0] * d[0] + d[1] * d[1] + d[2] * d[2], d),
)


def from_hsl(hsl: HSL | tuple[int, int, int]) -> str:
    """Convert HSL to uppercase #RRGGBB. Hue wraps at 360, s/l clamp to 0..100.

    When the direct conversion does not read back as the same integer HSL,
    the closest color that does is returned, so
    ``to_hsl(from_hsl(to_hsl(c))) == to_hsl(c)`` for every color. HSL values
    no 8-bit color maps to fall back to the direct conversion.
    """
    h, s, l = hsl  # noqa: E741
    target = HSL(h % 360, _clamp(s, 0, 100), _clamp(l, 0, 100))
    r, g, b = colorsys.hls_to_rgb(target.h / 360.0, target.l / 100.0, target.s / 100.0)
    direct = RGB(*(_round_half_up(c * 255) for c in (r, g, b)))
    for dr, dg, db in _PREIMAGE_OFFSETS:
        candidate = RGB(direct.r + dr, direct.g + dg, direct.b + db)
        if not all(0 <= c <= 255 for c in candidate):
            continue
        if _rgb_to_hsl(candidate) == target:
            return from_rgb(candidate)
    return from_rgb(direct)
