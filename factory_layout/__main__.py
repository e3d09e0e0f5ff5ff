"""
Factory Layout — command line.

    python -m factory_layout serve
    python -m factory_layout serve --floor 40x25 --extent footprint --port 3000
"""

from __future__ import annotations

import argparse
import math
from dataclasses import replace

from factory_layout.config import LAYOUT_RULES, LayoutRules


EXTENT_CHOICES = ("body", "footprint")


def floor_size(text: str) -> tuple[float, float]:
    """Parse ``WxH`` in meters, e.g. ``30x20`` or ``12.5X8``."""
    try:
        width, height = (float(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT in meters, got {text!r}")
    if not (math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0):
        raise argparse.ArgumentTypeError(f"floor dimensions must be positive, got {text!r}")
    return (width, height)


def positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {text!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="factory_layout", description="Factory floor layout engine",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sv = sub.add_parser("serve", help="Run the layout web API")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")
    sv.add_argument("--floor", type=floor_size, default=None, metavar="WxH",
                    help="Initial floor size in meters (default 30x20)")
    sv.add_argument("--extent", choices=EXTENT_CHOICES, default=LAYOUT_RULES.extent_mode,
                    help="Box used for collision, distances and clamping")
    sv.add_argument("--ppm", type=positive_float, default=None,
                    help="Canvas scale in pixels per meter")
    return p


def rules_from_args(args: argparse.Namespace) -> LayoutRules:
    """Layout rules for the served session, overriding only what was given."""
    changes: dict = {"extent_mode": args.extent}
    if args.floor is not None:
        changes["floor_width_m"], changes["floor_height_m"] = args.floor
    if args.ppm is not None:
        changes["pixels_per_meter"] = args.ppm
    return replace(LAYOUT_RULES, **changes)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.cmd == "serve":
        from factory_layout.web.server import main as serve
        serve(host=args.host, port=args.port, rules=rules_from_args(args))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
