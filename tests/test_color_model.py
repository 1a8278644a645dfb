import random

import pytest

from contrastgrid.design.color_model import (
    CanonicalColor,
    InvalidColor,
    from_hsl,
    from_rgb,
    is_valid,
    normalize_color_token,
    parse_color,
    to_hex,
    to_hsl,
    to_rgb,
)
from contrastgrid.errors import InvalidColorError
from contrastgrid.models import HSL, RGB


def test_bare_hex_is_prefixed():
    assert normalize_color_token("FF00FF") == "#FF00FF"
    assert normalize_color_token("ff00ff") == "#ff00ff"
    # Only six-digit tokens get the prefix
    assert normalize_color_token("F0F") == "F0F"
    assert normalize_color_token("red") == "red"


def test_is_valid_common_forms():
    assert is_valid("FF0000")
    assert is_valid("#FF0000")
    assert is_valid("#f00")
    assert is_valid("red")
    assert is_valid("rgb(255, 0, 0)")
    assert is_valid("hsl(120, 100%, 50%)")


@pytest.mark.parametrize("spec", ["not-a-color", "", "   ", "#GGGGGG", "#12345", "rgb(", "12345"])
def test_is_valid_rejects_garbage(spec):
    assert is_valid(spec) is False


def test_parse_color_returns_result_objects():
    ok = parse_color("red")
    assert isinstance(ok, CanonicalColor)
    assert ok.hex == "#FF0000"
    assert ok.rgb == RGB(255, 0, 0)
    bad = parse_color("not-a-color")
    assert isinstance(bad, InvalidColor)
    assert bad.raw == "not-a-color"
    assert bad.reason


def test_parse_color_css_functions_canonicalize():
    assert to_hex("rgb(255, 0, 0)") == "#FF0000"
    assert to_hex("hsl(120, 100%, 50%)") == "#00FF00"
    assert to_hex("#abc") == "#AABBCC"
    assert to_hex("00ff7f") == "#00FF7F"


def test_strict_conversions_raise_invalid_color_error():
    with pytest.raises(InvalidColorError):
        to_rgb("nope")
    with pytest.raises(ValueError):  # InvalidColorError is a ValueError
        to_hsl("nope")


def test_to_hsl_primaries():
    assert to_hsl("#FF0000") == HSL(0, 100, 50)
    assert to_hsl("#00FF00") == HSL(120, 100, 50)
    assert to_hsl("#0000FF") == HSL(240, 100, 50)
    assert to_hsl("#FFFFFF") == HSL(0, 0, 100)


def test_achromatic_hue_defaults_to_zero():
    assert to_hsl("#808080").h == 0
    assert to_hsl("#000000") == HSL(0, 0, 0)


def test_from_hsl_wraps_hue_and_clamps():
    assert from_hsl((360, 100, 50)) == from_hsl((0, 100, 50)) == "#FF0000"
    assert from_hsl((480, 100, 50)) == "#00FF00"
    assert from_hsl((0, 150, 120)) == "#FFFFFF"


def test_hsl_round_trip_fully_saturated_hues():
    for h in range(360):
        assert to_hsl(from_hsl((h, 100, 50))) == (h, 100, 50)


def test_hsl_round_trip_grays():
    for light in range(101):
        assert to_hsl(from_hsl((0, 0, light))) == (0, 0, light)


def test_rgb_round_trip():
    values = list(range(0, 256, 17))
    for r in values:
        for g in values:
            for b in values:
                assert to_rgb(from_rgb((r, g, b))) == (r, g, b)


def test_from_rgb_is_uppercase_six_digits_and_clamped():
    assert from_rgb(RGB(10, 171, 255)) == "#0AABFF"
    assert from_rgb((300, -4, 0)) == "#FF0000"


def test_rounded_hsl_reads_back_unchanged():
    hsl = to_hsl("#A168F4")
    assert hsl == HSL(264, 86, 68)
    assert to_hsl(from_hsl(hsl)) == hsl


def test_hsl_is_stable_once_rounded():
    rng = random.Random(2024)
    for _ in range(2000):
        color = from_rgb((rng.randrange(256), rng.randrange(256), rng.randrange(256)))
        hsl = to_hsl(color)
        assert to_hsl(from_hsl(hsl)) == hsl, color
