"""Renderer package for hue wheel rasterization."""

from .color import hsl_to_rgb, rgb_to_hex, rgb_to_hsl, round_up
from .hue import get_hue
from .models import Direction, FrameBuffer, InvalidConfig, RenderStats, WheelConfig
from .rasterizer import allocate_buffer, render, render_bytes
from .surface import WheelSurface, draw_hue_wheel

__all__ = [
    "Direction",
    "FrameBuffer",
    "InvalidConfig",
    "RenderStats",
    "WheelConfig",
    "WheelSurface",
    "allocate_buffer",
    "draw_hue_wheel",
    "get_hue",
    "hsl_to_rgb",
    "render",
    "render_bytes",
    "rgb_to_hex",
    "rgb_to_hsl",
    "round_up",
]
