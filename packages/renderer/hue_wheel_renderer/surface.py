"""Pillow-backed drawing surface for rendered wheels.

The rasterizer only knows about flat RGBA buffers in device pixels. This
module owns the rest: sizing the buffer for the display density, handing the
finished raster over to an image and writing it out.
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image

from .models import FrameBuffer, RenderStats, WheelConfig
from .rasterizer import BYTES_PER_PIXEL, allocate_buffer, render

logger = logging.getLogger("hue_wheel.renderer")

BASE_DPI = 96


class WheelSurface:
    """Device-pixel surface sized for one wheel."""

    def __init__(self, config: WheelConfig, device_pixel_ratio: float = 1.0) -> None:
        if not device_pixel_ratio or device_pixel_ratio <= 0:
            raise ValueError(f"device_pixel_ratio must be > 0, got {device_pixel_ratio}")
        self.config = config
        self.device_pixel_ratio = float(device_pixel_ratio)
        self.device_config = config.scaled(self.device_pixel_ratio)

    @property
    def css_size(self) -> float:
        return 2 * self.config.outer_radius

    @property
    def side_length(self) -> int:
        return self.device_config.side_length

    def allocate(self) -> bytearray:
        return allocate_buffer(self.device_config)

    def _check(self, buffer) -> None:
        expected = self.side_length * self.side_length * BYTES_PER_PIXEL
        if len(buffer) != expected:
            raise ValueError(f"buffer holds {len(buffer)} bytes, surface needs {expected}")

    def commit(self, buffer) -> Image.Image:
        """Turn a finished RGBA buffer into an image placed at (0, 0)."""
        self._check(buffer)
        side = self.side_length
        pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape((side, side, BYTES_PER_PIXEL))
        return Image.fromarray(pixels)

    def to_frame_buffer(self, buffer) -> FrameBuffer:
        self._check(buffer)
        return FrameBuffer(width=self.side_length, height=self.side_length, pixel_format="RGBA8888", bytes=bytes(buffer))

    def save_png(self, image: Image.Image, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        dpi = BASE_DPI * self.device_pixel_ratio
        image.save(path, format="PNG", dpi=(dpi, dpi))
        logger.info(f"wheel saved to {path}", extra={"event": "wheel_saved"})
        return path

    def draw(self, workers: int = 1) -> tuple[Image.Image, RenderStats]:
        """Allocate a buffer, render the wheel into it and commit the result."""
        buffer = self.allocate()
        stats = render(self.device_config, buffer, self.side_length, workers=workers)
        image = self.commit(buffer)
        logger.info(
            f"hue wheel drawn {self.side_length}x{self.side_length} ratio={self.device_pixel_ratio}",
            extra={"event": "wheel_drawn"},
        )
        return image, stats

    @staticmethod
    def preview_data_url(image: Image.Image) -> str:
        buf = BytesIO()
        image.save(buf, format="PNG")
        b64 = base64.b64encode(buf.getvalue()).decode("ascii")
        return f"data:image/png;base64,{b64}"


def draw_hue_wheel(
    config: WheelConfig,
    device_pixel_ratio: float = 1.0,
    workers: int = 1,
) -> tuple[Image.Image, RenderStats]:
    return WheelSurface(config, device_pixel_ratio=device_pixel_ratio).draw(workers=workers)
