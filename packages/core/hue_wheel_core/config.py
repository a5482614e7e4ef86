"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from hue_wheel_renderer.models import WheelConfig


CONFIG_VERSION = 2


@dataclass
class WheelSettings:
    inner_radius: float = 100.0
    thickness: float = 40.0
    red_start: float = 90.0
    direction: int = 0
    saturation: float = 1.0
    lightness: float = 0.5
    opacity: int = 255


@dataclass
class RenderSettings:
    device_pixel_ratio: float = 1.0
    workers: int = 1
    output_dir: str | None = None


@dataclass
class DiagnosticsSettings:
    keep_log_files: int = 7


@dataclass
class PerformanceSettings:
    render_ms_max: float = 2000.0
    rss_mb_max: float = 300.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    wheel: WheelSettings = field(default_factory=WheelSettings)
    render: RenderSettings = field(default_factory=RenderSettings)
    diagnostics: DiagnosticsSettings = field(default_factory=DiagnosticsSettings)
    performance: PerformanceSettings = field(default_factory=PerformanceSettings)

    def wheel_config(self, **overrides: Any) -> WheelConfig:
        """Build a validated WheelConfig from the saved defaults.

        Overrides set to None fall back to the saved value.
        """
        values = asdict(self.wheel)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return WheelConfig(**values)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "HueWheel"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "HueWheel"
    return Path.home() / ".config" / "hue-wheel"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _clamp(value: Any, low: float, high: float, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if number != number:
        return fallback
    return max(low, min(high, number))


def _normalize_wheel(cfg: AppConfig) -> None:
    defaults = WheelSettings()
    wheel = cfg.wheel
    wheel.inner_radius = _clamp(wheel.inner_radius, 0.0, 4096.0, defaults.inner_radius)
    wheel.thickness = _clamp(wheel.thickness, 0.0, 4096.0, defaults.thickness)
    if wheel.thickness <= 0:
        wheel.thickness = defaults.thickness
    wheel.red_start = _clamp(wheel.red_start, -1e9, 1e9, defaults.red_start) % 360
    if wheel.direction not in (0, 1):
        wheel.direction = defaults.direction
    wheel.saturation = _clamp(wheel.saturation, 0.0, 1.0, defaults.saturation)
    wheel.lightness = _clamp(wheel.lightness, 0.0, 1.0, defaults.lightness)
    wheel.opacity = int(_clamp(wheel.opacity, 0, 255, defaults.opacity))


def _normalize_render(cfg: AppConfig) -> None:
    cfg.render.device_pixel_ratio = _clamp(cfg.render.device_pixel_ratio, 0.25, 8.0, 1.0)
    cfg.render.workers = int(_clamp(cfg.render.workers, 1, 64, 1))


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.render_ms_max = _clamp(cfg.performance.render_ms_max, 10.0, 600_000.0, 2000.0)
    cfg.performance.rss_mb_max = _clamp(cfg.performance.rss_mb_max, 64.0, 65_536.0, 300.0)
    cfg.diagnostics.keep_log_files = int(_clamp(cfg.diagnostics.keep_log_files, 2, 365, 7))


def _version(raw: dict[str, Any]) -> int:
    try:
        return int(raw.get("config_version", 1))
    except (TypeError, ValueError):
        return 1


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    return dict(value) if isinstance(value, dict) else {}


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = _version(raw)
    data = dict(raw)

    if version < 2:
        # v2 renames wheel.style -> wheel.direction and render.scale -> render.device_pixel_ratio.
        wheel = _section(data, "wheel")
        if "style" in wheel:
            wheel.setdefault("direction", wheel.pop("style"))
        data["wheel"] = wheel
        render = _section(data, "render")
        if "scale" in render:
            render.setdefault("device_pixel_ratio", render.pop("scale"))
        data["render"] = render
        data.setdefault("performance", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=_version(data),
        wheel=_merge(WheelSettings, data.get("wheel", {})),
        render=_merge(RenderSettings, data.get("render", {})),
        diagnostics=_merge(DiagnosticsSettings, data.get("diagnostics", {})),
        performance=_merge(PerformanceSettings, data.get("performance", {})),
    )

    _normalize_wheel(cfg)
    _normalize_render(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path


def set_value(cfg: AppConfig, dotted_key: str, value: str) -> None:
    """Set ``section.field`` from a string, converting to the field's current type."""
    section_name, _, field_name = dotted_key.partition(".")
    section = getattr(cfg, section_name, None)
    if section is None or not field_name or not hasattr(section, field_name):
        raise KeyError(f"Unknown setting: {dotted_key}")

    current = getattr(section, field_name)
    if isinstance(current, bool):
        converted: Any = value.strip().lower() in ("1", "true", "yes", "on")
    elif isinstance(current, int):
        converted = int(value)
    elif isinstance(current, float):
        converted = float(value)
    elif value.lower() in ("", "none", "null"):
        converted = None
    else:
        converted = value
    setattr(section, field_name, converted)
