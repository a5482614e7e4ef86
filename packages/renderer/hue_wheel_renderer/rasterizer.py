"""Annulus rasterizer writing RGBA bytes for every pixel inside the ring."""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor

from .color import hsl_to_rgb
from .hue import get_hue
from .models import RenderStats, WheelConfig

logger = logging.getLogger("hue_wheel.renderer")

BYTES_PER_PIXEL = 4


def _clamp_byte(value: float) -> int:
    return max(0, min(255, int(value)))


def allocate_buffer(config: WheelConfig) -> bytearray:
    side = config.side_length
    return bytearray(side * side * BYTES_PER_PIXEL)


def row_bands(rows: int, workers: int) -> list[tuple[int, int]]:
    """Split ``rows`` into at most ``workers`` contiguous, non-empty [start, stop) bands."""
    workers = max(1, min(int(workers), rows))
    base, extra = divmod(rows, workers)
    bands: list[tuple[int, int]] = []
    start = 0
    for i in range(workers):
        stop = start + base + (1 if i < extra else 0)
        if stop > start:
            bands.append((start, stop))
        start = stop
    return bands


def _render_rows(config: WheelConfig, buffer, side: int, row_start: int, row_stop: int) -> int:
    outer = config.outer_radius
    square_outer = outer * outer
    square_inner = config.inner_radius * config.inner_radius
    red_start = config.red_start
    direction = config.direction
    saturation = config.saturation
    lightness = config.lightness
    opacity = _clamp_byte(config.opacity)

    written = 0
    for row in range(row_start, row_stop):
        y = row - outer
        square_y = y * y
        for col in range(side):
            x = col - outer
            square_d = x * x + square_y
            if square_d > square_outer or square_d < square_inner:
                continue

            index = (row * side + col) * BYTES_PER_PIXEL
            # rows grow downwards, flip y so the angle runs counterclockwise
            theta = (360 + math.degrees(math.atan2(-y, x))) % 360
            hue = get_hue(red_start, theta, direction)
            r, g, b = hsl_to_rgb(hue, saturation, lightness)

            buffer[index] = r
            buffer[index + 1] = g
            buffer[index + 2] = b
            buffer[index + 3] = opacity
            written += 1
    return written


def render(config: WheelConfig, buffer, side_length: int, workers: int = 1) -> RenderStats:
    """Write the wheel described by ``config`` into ``buffer``.

    ``buffer`` is a caller-owned writable sequence of bytes laid out row-major
    as RGBA. Pixels outside the ring are left untouched, so the caller clears
    the buffer first when transparency matters.
    """
    if side_length != config.side_length:
        raise ValueError(f"side_length must be {config.side_length} for this wheel, got {side_length}")
    needed = side_length * side_length * BYTES_PER_PIXEL
    if len(buffer) < needed:
        raise ValueError(f"buffer holds {len(buffer)} bytes, wheel needs {needed}")

    start = time.perf_counter()
    bands = row_bands(side_length, workers)
    if len(bands) <= 1:
        written = _render_rows(config, buffer, side_length, 0, side_length)
    else:
        with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="hue-wheel") as pool:
            futures = [pool.submit(_render_rows, config, buffer, side_length, lo, hi) for lo, hi in bands]
            written = sum(f.result() for f in futures)

    stats = RenderStats(
        side_length=side_length,
        pixels_written=written,
        rows=side_length,
        workers=max(1, len(bands)),
        duration_s=time.perf_counter() - start,
    )
    logger.debug(
        f"wheel rendered side={side_length} pixels={written} in {stats.duration_s:.3f}s",
        extra={"event": "wheel_rendered"},
    )
    return stats


def render_bytes(config: WheelConfig, workers: int = 1) -> bytes:
    buffer = allocate_buffer(config)
    render(config, buffer, config.side_length, workers=workers)
    return bytes(buffer)
