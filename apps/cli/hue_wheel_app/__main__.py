from __future__ import annotations

import sys

try:
    # Normal package import path.
    from .cli import build_parser, main as _cli_main
except ImportError:
    # Script entrypoint path.
    from hue_wheel_app.cli import build_parser, main as _cli_main


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        build_parser().print_help()
        return 0
    return int(_cli_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
