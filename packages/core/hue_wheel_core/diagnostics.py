"""Environment report for bug reports and `hue-wheel doctor`."""

from __future__ import annotations

import platform
from dataclasses import asdict
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

from .config import AppConfig, config_path
from .logging_setup import log_dir


LIBRARIES = ("numpy", "Pillow", "psutil")


def library_versions() -> dict[str, str | None]:
    versions: dict[str, str | None] = {}
    for name in LIBRARIES:
        try:
            versions[name] = metadata.version(name)
        except metadata.PackageNotFoundError:
            versions[name] = None
    return versions


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    wheel = cfg.wheel_config()
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "libraries": library_versions(),
        "config_path": str(config_path()),
        "log_dir": str(log_dir()),
        "config": asdict(cfg),
        "wheel": {
            "outer_radius": wheel.outer_radius,
            "side_length": wheel.side_length,
            "device_side_length": wheel.scaled(cfg.render.device_pixel_ratio).side_length,
        },
    }
