"""Background grid — 1 px guide lines at every grid step."""

from __future__ import annotations

import math

from factory_layout.config import LayoutRules, GRID_FILL

from .models import FloorPlan, Shape, ROLE_GRID


def build_grid(floor: FloorPlan, rules: LayoutRules) -> list[Shape]:
    """Vertical then horizontal guide lines, both borders included.

    The lines are decoration only; nothing in collision or distance
    logic looks at them.
    """
    ppm = rules.pixels_per_meter
    step = rules.grid_step_m
    width_px = floor.width_m * ppm
    height_px = floor.height_m * ppm

    lines: list[Shape] = []
    for i in range(math.floor(floor.width_m / step + 1e-9) + 1):
        lines.append(Shape(
            kind="rect", role=ROLE_GRID,
            x=i * step * ppm, y=0, width=1, height=height_px, fill=GRID_FILL,
        ))
    for i in range(math.floor(floor.height_m / step + 1e-9) + 1):
        lines.append(Shape(
            kind="rect", role=ROLE_GRID,
            x=0, y=i * step * ppm, width=width_px, height=1, fill=GRID_FILL,
        ))
    return lines
