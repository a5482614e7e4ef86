import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from hue_wheel_core.config import AppConfig, load_config, save_config, set_value
from hue_wheel_renderer.models import Direction, InvalidConfig


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.wheel.red_start, 90.0)
            self.assertEqual(cfg.wheel.direction, 0)
            self.assertEqual(cfg.render.workers, 1)

    def test_load_default_when_corrupt(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.wheel.thickness = 64.0
            cfg.render.device_pixel_ratio = 2.0
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.wheel.thickness, 64.0)
            self.assertEqual(reloaded.render.device_pixel_ratio, 2.0)

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {
                "wheel": {"inner_radius": 50, "style": 1},
                "render": {"scale": 2},
            }
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.wheel.inner_radius, 50)
            self.assertEqual(cfg.wheel.direction, 1)
            self.assertEqual(cfg.render.device_pixel_ratio, 2)

    def test_normalizes_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 2,
                "wheel": {"thickness": -5, "saturation": 3, "direction": 7, "opacity": 999, "red_start": 450},
                "render": {"workers": 0, "device_pixel_ratio": 100},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.wheel.thickness, 40.0)
            self.assertEqual(cfg.wheel.saturation, 1.0)
            self.assertEqual(cfg.wheel.direction, 0)
            self.assertEqual(cfg.wheel.opacity, 255)
            self.assertEqual(cfg.wheel.red_start, 90.0)
            self.assertEqual(cfg.render.workers, 1)
            self.assertEqual(cfg.render.device_pixel_ratio, 8.0)

    def test_load_default_when_version_corrupt(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"config_version": "x", "wheel": {"style": 1}}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.config_version, 2)
            self.assertEqual(cfg.wheel.direction, 1)

    def test_non_dict_sections_fall_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"config_version": 2, "wheel": 5, "render": ["x"], "performance": None}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.wheel, AppConfig().wheel)
            self.assertEqual(cfg.render, AppConfig().render)
            self.assertEqual(cfg.performance, AppConfig().performance)

    def test_v1_with_non_dict_sections(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"wheel": "bad", "render": 3}), encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_wheel_config_overrides(self):
        cfg = AppConfig()
        wheel = cfg.wheel_config(thickness=12, direction=None)
        self.assertEqual(wheel.thickness, 12)
        self.assertEqual(wheel.inner_radius, cfg.wheel.inner_radius)
        self.assertIs(wheel.direction, Direction.CW_RBG)

    def test_wheel_config_validates(self):
        with self.assertRaises(InvalidConfig):
            AppConfig().wheel_config(thickness=0)

    def test_set_value(self):
        cfg = AppConfig()
        set_value(cfg, "wheel.thickness", "60")
        set_value(cfg, "render.workers", "4")
        set_value(cfg, "render.output_dir", "/tmp/wheels")
        self.assertEqual(cfg.wheel.thickness, 60.0)
        self.assertEqual(cfg.render.workers, 4)
        self.assertEqual(cfg.render.output_dir, "/tmp/wheels")

    def test_set_value_unknown_key(self):
        with self.assertRaises(KeyError):
            set_value(AppConfig(), "wheel.color", "red")
        with self.assertRaises(KeyError):
            set_value(AppConfig(), "nope", "1")


if __name__ == "__main__":
    unittest.main()
