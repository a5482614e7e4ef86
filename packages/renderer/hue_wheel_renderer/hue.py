"""Angle to hue mapping for the wheel."""

from __future__ import annotations

from .models import Direction


def get_hue(red_start: float, theta: float, direction: Direction | int = Direction.CW_RBG) -> float:
    """Map a polar angle to a hue in [0, 360).

    red_start: where pure red sits, in degrees counterclockwise from 3 o'clock
        (90 puts red at 12 o'clock).
    theta: angle of the pixel, counterclockwise from the positive x axis.
    direction: CW_RBG keeps the angle as is, CW_RGB mirrors it around red_start.
    """
    angle = theta or 1

    if direction != Direction.CW_RBG:
        angle = (360 + 2 * red_start - angle) % 360

    hue = (360 + angle - red_start) % 360
    # -1e-17 % 360 == 360.0 in floating point
    if hue >= 360:
        hue -= 360
    return hue
