"""Axis-aligned box helpers for the layout engine.

All boxes live in canvas pixel space: origin top-left, Y growing down.
Rotation angles are in degrees, clockwise on screen, about a pivot.
"""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import box as shapely_box


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)

    def translated(self, dx: float, dy: float) -> BoundingBox:
        return BoundingBox(self.left + dx, self.top + dy, self.width, self.height)

    @classmethod
    def from_edges(
        cls, left: float, top: float, right: float, bottom: float,
    ) -> BoundingBox:
        return cls(left, top, right - left, bottom - top)


def union_box(boxes: list[BoundingBox]) -> BoundingBox:
    """Smallest box enclosing every box in *boxes* (must be non-empty)."""
    return BoundingBox.from_edges(
        min(b.left for b in boxes),
        min(b.top for b in boxes),
        max(b.right for b in boxes),
        max(b.bottom for b in boxes),
    )


def _quarter_turns(angle: float) -> int:
    """Number of clockwise quarter turns in *angle* (0-3)."""
    turns = angle / 90.0
    if abs(turns - round(turns)) > 1e-9:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {angle}")
    return int(round(turns)) % 4


def rotate_point(x: float, y: float, angle: float) -> tuple[float, float]:
    """Rotate (x, y) a whole number of quarter turns about the origin."""
    turns = _quarter_turns(angle)
    if turns == 0:
        return (x, y)
    if turns == 1:
        return (-y, x)
    if turns == 2:
        return (-x, -y)
    return (y, -x)


def rotated_bounds(
    local: BoundingBox,
    pivot: tuple[float, float],
    angle: float,
) -> BoundingBox:
    """World AABB of *local* rotated by *angle* about the origin, then
    moved so the origin lands on *pivot*.

    *local* is expressed relative to the pivot.  Objects only turn in
    quarter turns, so the result is exact and computed from the corners.
    """
    px, py = pivot
    corners = [
        rotate_point(x, y, angle)
        for x in (local.left, local.right)
        for y in (local.top, local.bottom)
    ]
    xs = [c[0] for c in corners]
    ys = [c[1] for c in corners]
    return BoundingBox.from_edges(
        min(xs) + px, min(ys) + py, max(xs) + px, max(ys) + py,
    )


def boxes_overlap(a: BoundingBox, b: BoundingBox) -> bool:
    """Separating-axis test on two AABBs.

    Strict inequalities: boxes that merely touch count as overlapping.
    """
    separated = (
        a.right < b.left
        or b.right < a.left
        or a.bottom < b.top
        or b.bottom < a.top
    )
    return not separated


def edge_gaps(a: BoundingBox, b: BoundingBox) -> tuple[float, float]:
    """Nearest-edge gaps (dx, dy) between two AABBs.

    A gap is 0 on any axis where the boxes' projections overlap or touch.
    """
    if a.right < b.left:
        dx = b.left - a.right
    elif b.right < a.left:
        dx = a.left - b.right
    else:
        dx = 0.0

    if a.bottom < b.top:
        dy = b.top - a.bottom
    elif b.bottom < a.top:
        dy = a.top - b.bottom
    else:
        dy = 0.0
    return (dx, dy)


def clamp_center(
    cx: float, cy: float,
    half_w: float, half_h: float,
    width: float, height: float,
) -> tuple[float, float, bool]:
    """Clamp a centre so a box of the given half-extents stays inside
    ``[0, width] x [0, height]``.

    Returns ``(x, y, was_clamped)``.  A box larger than the area on an
    axis is centred on that axis.
    """
    x = _clamp_axis(cx, half_w, width)
    y = _clamp_axis(cy, half_h, height)
    return (x, y, x != cx or y != cy)


def _clamp_axis(value: float, half: float, extent: float) -> float:
    lo, hi = half, extent - half
    if lo > hi:
        return extent / 2
    return min(max(value, lo), hi)


def box_inside_area(bbox: BoundingBox, width: float, height: float) -> bool:
    """True if *bbox* lies within ``[0, width] x [0, height]`` (edges allowed)."""
    area = shapely_box(0, 0, width, height)
    return area.covers(shapely_box(bbox.left, bbox.top, bbox.right, bbox.bottom))
