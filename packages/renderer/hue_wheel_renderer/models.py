"""Typed renderer models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


class InvalidConfig(ValueError):
    """Raised when a wheel configuration cannot describe a ring."""


class Direction(IntEnum):
    # red -> blue -> green -> red going clockwise
    CW_RBG = 0
    # red -> green -> blue -> red going clockwise
    CW_RGB = 1


@dataclass(frozen=True)
class WheelConfig:
    inner_radius: float
    thickness: float
    red_start: float = 90.0
    direction: Direction = Direction.CW_RBG
    saturation: float = 1.0
    lightness: float = 0.5
    opacity: int = 255

    def __post_init__(self) -> None:
        for name in ("inner_radius", "thickness", "red_start", "saturation", "lightness", "opacity"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidConfig(f"{name} must be a finite number, got {value!r}")
        if self.inner_radius < 0:
            raise InvalidConfig(f"inner_radius must be >= 0, got {self.inner_radius}")
        if self.thickness <= 0:
            raise InvalidConfig(f"thickness must be > 0, got {self.thickness}")
        try:
            direction = Direction(int(self.direction))
        except (TypeError, ValueError):
            raise InvalidConfig(f"direction must be 0 or 1, got {self.direction!r}") from None

        object.__setattr__(self, "direction", direction)
        object.__setattr__(self, "red_start", self.red_start % 360)

    @property
    def outer_radius(self) -> float:
        return self.inner_radius + self.thickness

    @property
    def side_length(self) -> int:
        return math.ceil(2 * self.outer_radius)

    def scaled(self, ratio: float) -> WheelConfig:
        """Same wheel with both radii measured in device pixels."""
        return WheelConfig(
            inner_radius=self.inner_radius * ratio,
            thickness=self.thickness * ratio,
            red_start=self.red_start,
            direction=self.direction,
            saturation=self.saturation,
            lightness=self.lightness,
            opacity=self.opacity,
        )


@dataclass(frozen=True)
class RenderStats:
    side_length: int
    pixels_written: int
    rows: int
    workers: int
    duration_s: float


@dataclass(frozen=True)
class FrameBuffer:
    width: int
    height: int
    pixel_format: str
    bytes: bytes
