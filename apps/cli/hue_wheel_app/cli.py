"""CLI entrypoints for rendering hue wheels, color conversion, and diagnostics."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

from hue_wheel_core import (
    PerformanceController,
    PerformanceTargets,
    build_doctor_payload,
    load_config,
    save_config,
    set_value,
)
from hue_wheel_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from hue_wheel_renderer import (
    Direction,
    InvalidConfig,
    WheelSurface,
    draw_hue_wheel,
    get_hue,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)

DIRECTIONS = {"rbg": Direction.CW_RBG, "rgb": Direction.CW_RGB, "0": Direction.CW_RBG, "1": Direction.CW_RGB}


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _direction(value: str) -> Direction:
    try:
        return DIRECTIONS[value.strip().lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(f"direction must be one of {sorted(DIRECTIONS)}") from None


def _wheel_from_args(cfg, args: argparse.Namespace):
    return cfg.wheel_config(
        inner_radius=args.inner_radius,
        thickness=args.thickness,
        red_start=args.red_start,
        direction=args.direction,
        saturation=args.saturation,
        lightness=args.lightness,
        opacity=args.opacity,
    )


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    wheel = _wheel_from_args(cfg, args)
    ratio = args.scale if args.scale is not None else cfg.render.device_pixel_ratio
    workers = args.workers if args.workers is not None else cfg.render.workers

    if args.out:
        out = Path(args.out).expanduser()
    else:
        out_dir = Path(cfg.render.output_dir).expanduser() if cfg.render.output_dir else Path.cwd()
        out = out_dir / "hue-wheel.png"

    surface = WheelSurface(wheel, device_pixel_ratio=ratio)
    image, stats = surface.draw(workers=workers)
    path = surface.save_png(image, out.resolve())

    _print_json(
        {
            "success": True,
            "path": str(path),
            "css_size": surface.css_size,
            "wheel": asdict(wheel),
            "stats": asdict(stats),
        }
    )
    return 0


def cmd_hsl2rgb(args: argparse.Namespace) -> int:
    rgb = hsl_to_rgb(args.hue, args.saturation, args.lightness)
    _print_json({"rgb": list(rgb), "hex": rgb_to_hex(rgb)})
    return 0


def cmd_rgb2hsl(args: argparse.Namespace) -> int:
    for value in (args.red, args.green, args.blue):
        if not 0 <= value <= 255:
            print(f"error: channel out of range: {value}", file=sys.stderr)
            return 2
    hue, saturation, lightness = rgb_to_hsl(args.red, args.green, args.blue)
    _print_json({"hsl": [hue, round(saturation, 2), round(lightness, 2)]})
    return 0


def cmd_hue(args: argparse.Namespace) -> int:
    hue = get_hue(args.red_start, args.theta, args.direction)
    _print_json({"hue": hue, "rgb": list(hsl_to_rgb(hue, 1.0, 0.5))})
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    wheel = cfg.wheel_config(inner_radius=args.inner_radius, thickness=args.thickness)
    workers = args.workers if args.workers is not None else cfg.render.workers
    perf = PerformanceController(
        PerformanceTargets(
            render_ms_max=cfg.performance.render_ms_max,
            rss_mb_max=cfg.performance.rss_mb_max,
        )
    )

    samples = []
    start = time.perf_counter()
    for _ in range(max(1, args.iterations)):
        _, stats = draw_hue_wheel(wheel, device_pixel_ratio=cfg.render.device_pixel_ratio, workers=workers)
        samples.append(asdict(perf.sample(stats.duration_s * 1000.0, workers=workers)))
    elapsed = max(time.perf_counter() - start, 1e-9)

    render_ms_max = max(s["render_ms"] for s in samples)
    rss_max = max(s["rss_mb"] for s in samples)
    pass_time = render_ms_max <= cfg.performance.render_ms_max
    pass_mem = rss_max <= cfg.performance.rss_mb_max

    _print_json(
        {
            "iterations": len(samples),
            "workers": workers,
            "renders_per_second": len(samples) / elapsed,
            "budget": {
                "targets": asdict(cfg.performance),
                "max_observed": {"render_ms": render_ms_max, "rss_mb": rss_max},
                "pass": bool(pass_time and pass_mem),
                "checks": {"render_time": pass_time, "memory": pass_mem},
                "recommended_workers": samples[-1]["recommended_workers"],
            },
        }
    )
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    _print_json(asdict(load_config()))
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        set_value(cfg, args.key, args.value)
    except (KeyError, ValueError) as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 2
    path = save_config(cfg)
    # reload so the printed values are the normalized ones
    _print_json({"path": str(path), "config": asdict(load_config(path))})
    return 0


def _add_wheel_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--inner-radius", type=float, default=None, help="Radius of the empty center, CSS pixels")
    parser.add_argument("--thickness", type=float, default=None, help="Width of the ring, CSS pixels")
    parser.add_argument("--red-start", type=float, default=None, help="Angle of pure red, degrees counterclockwise from 3 o'clock")
    parser.add_argument("--direction", type=_direction, default=None, help="Clockwise order: rbg (default) or rgb")
    parser.add_argument("--saturation", type=float, default=None)
    parser.add_argument("--lightness", type=float, default=None)
    parser.add_argument("--opacity", type=int, default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hue-wheel", description="Hue wheel renderer and color tools")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a hue wheel to PNG")
    _add_wheel_arguments(render_cmd)
    render_cmd.add_argument("--scale", type=float, default=None, help="Device pixel ratio, 2 for HiDPI screens")
    render_cmd.add_argument("--workers", type=int, default=None, help="Render threads, split by rows")
    render_cmd.add_argument("--out", default=None, help="Output PNG path")
    render_cmd.set_defaults(func=cmd_render)

    hsl_cmd = sub.add_parser("hsl2rgb", help="Convert HSL to RGB")
    hsl_cmd.add_argument("hue", type=float)
    hsl_cmd.add_argument("saturation", type=float)
    hsl_cmd.add_argument("lightness", type=float)
    hsl_cmd.set_defaults(func=cmd_hsl2rgb)

    rgb_cmd = sub.add_parser("rgb2hsl", help="Convert RGB to HSL")
    rgb_cmd.add_argument("red", type=int)
    rgb_cmd.add_argument("green", type=int)
    rgb_cmd.add_argument("blue", type=int)
    rgb_cmd.set_defaults(func=cmd_rgb2hsl)

    hue_cmd = sub.add_parser("hue", help="Hue at an angle of the wheel")
    hue_cmd.add_argument("--red-start", type=float, default=90.0)
    hue_cmd.add_argument("--theta", type=float, required=True)
    hue_cmd.add_argument("--direction", type=_direction, default=Direction.CW_RBG)
    hue_cmd.set_defaults(func=cmd_hue)

    bench_cmd = sub.add_parser("benchmark", help="Render repeatedly and check the performance budget")
    bench_cmd.add_argument("--iterations", type=int, default=5)
    bench_cmd.add_argument("--inner-radius", type=float, default=None)
    bench_cmd.add_argument("--thickness", type=float, default=None)
    bench_cmd.add_argument("--workers", type=int, default=None)
    bench_cmd.set_defaults(func=cmd_benchmark)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and effective settings")
    doctor_cmd.set_defaults(func=cmd_doctor)

    config_cmd = sub.add_parser("config", help="Inspect or change saved defaults")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print saved settings")
    show_cmd.set_defaults(func=cmd_config_show)
    set_cmd = config_sub.add_parser("set", help="Persist one setting, e.g. wheel.thickness 60")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    set_cmd.set_defaults(func=cmd_config_set)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except InvalidConfig as exc:
        get_logger().error(f"invalid wheel configuration: {exc}", extra={"event": "invalid_config"})
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
