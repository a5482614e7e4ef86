"""HSL <-> RGB conversion helpers.

Hue is in degrees, saturation and lightness in [0, 1], RGB channels are
integers in [0, 255]. See https://en.wikipedia.org/wiki/HSL_and_HSV.
"""

from __future__ import annotations

import math


def round_up(value: float, threshold: int = 5) -> int:
    """Round to an integer, going up once the decimal part reaches ``threshold`` tenths."""
    add_on = (10 - threshold) * 0.1
    ceiling = math.ceil(value)
    return ceiling if value + add_on >= ceiling else math.floor(value)


def _to_byte(value: float) -> int:
    return max(0, min(255, math.floor(value * 255)))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    hue_prime = hue / 60
    x = chroma * (1 - abs(hue_prime % 2 - 1))
    m = lightness - chroma * 0.5

    sector = math.floor(hue_prime)
    if sector == 0:
        r, g, b = chroma, x, 0.0
    elif sector == 1:
        r, g, b = x, chroma, 0.0
    elif sector == 2:
        r, g, b = 0.0, chroma, x
    elif sector == 3:
        r, g, b = 0.0, x, chroma
    elif sector == 4:
        r, g, b = x, 0.0, chroma
    elif sector == 5 or sector == 6:
        # sector 6 is hue in [360, 420); at exactly 360 x == 0 so it is pure red
        r, g, b = chroma, 0.0, x
    else:
        r, g, b = 0.0, 0.0, 0.0

    # m can come out a few ulps below zero, e.g. lightness 0.15
    return _to_byte(r + m), _to_byte(g + m), _to_byte(b + m)


def rgb_to_hsl(red: int, green: int, blue: int) -> tuple[int, float, float]:
    """Convert 8-bit RGB to HSL quantized to whole degrees and whole percent."""
    r = red / 255
    g = green / 255
    b = blue / 255

    high = max(r, g, b)
    low = min(r, g, b)

    if high == low:
        hue = 0.0
    elif high == r:
        hue = 60 * (g - b) / (high - low)
    elif high == g:
        hue = 60 * (2.0 + (b - r) / (high - low))
    else:
        hue = 60 * (4.0 + (r - g) / (high - low))

    if hue < 0:
        hue += 360.0

    lightness = (high + low) * 0.5
    if high == 0 or low == 1:
        saturation = 0.0
    else:
        saturation = (high - lightness) / min(lightness, 1 - lightness)

    return (
        round_up(hue, 5),
        round_up(saturation * 100, 5) * 0.01,
        round_up(lightness * 100, 5) * 0.01,
    )


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    r, g, b = (int(rgb[0]) & 0xFF, int(rgb[1]) & 0xFF, int(rgb[2]) & 0xFF)
    return f"#{r:02x}{g:02x}{b:02x}"
