"""Distance annotation — nearest-edge gaps between placed machines.

For every pair of machines whose bounding boxes are apart on at least
one axis, a connector is drawn and labelled with the edge-to-edge
distance in the active unit:

  * apart vertically only   → vertical line through the middle of the
                              shared horizontal span
  * apart horizontally only → horizontal line, likewise
  * apart on both axes      → diagonal line between the nearest corners,
                              labelled with the Euclidean distance

Pairs that overlap or touch on both axes get no annotation.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from factory_layout.geometry import BoundingBox, edge_gaps

from .collision import collidable_objects
from .models import DistanceAnnotation, PlacedObject
from .units import format_length, px_to_meters

if TYPE_CHECKING:
    from .session import LayoutSession


log = logging.getLogger("factory_layout.distances")


def connector(
    a: BoundingBox, b: BoundingBox, dx: float, dy: float,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Start (on *a*) and end (on *b*) of the connector between two boxes."""
    if dx == 0:
        x = (max(a.left, b.left) + min(a.right, b.right)) / 2
        if a.bottom < b.top:
            return (x, a.bottom), (x, b.top)
        return (x, a.top), (x, b.bottom)

    if dy == 0:
        y = (max(a.top, b.top) + min(a.bottom, b.bottom)) / 2
        if a.right < b.left:
            return (a.right, y), (b.left, y)
        return (a.left, y), (b.right, y)

    ax, bx = (a.right, b.left) if a.right < b.left else (a.left, b.right)
    ay, by = (a.bottom, b.top) if a.bottom < b.top else (a.top, b.bottom)
    return (ax, ay), (bx, by)


def measure_pair(
    session: LayoutSession, a: PlacedObject, b: PlacedObject,
) -> DistanceAnnotation | None:
    """Annotation for one pair, or None when the boxes overlap or touch."""
    box_a = session.bounding_box(a)
    box_b = session.bounding_box(b)
    dx, dy = edge_gaps(box_a, box_b)
    if dx == 0 and dy == 0:
        return None

    start, end = connector(box_a, box_b, dx, dy)
    gap_px = math.hypot(dx, dy)
    distance_m = px_to_meters(gap_px, session.rules.pixels_per_meter)
    mid_x = (start[0] + end[0]) / 2
    mid_y = (start[1] + end[1]) / 2
    return DistanceAnnotation(
        from_id=a.id,
        to_id=b.id,
        pixel_gap=gap_px,
        start=start,
        end=end,
        distance_m=distance_m,
        label_text=format_length(distance_m, session.use_meters),
        label_position=(mid_x, mid_y - session.rules.distance_label_offset_px),
    )


def draw_distance_lines(session: LayoutSession) -> list[DistanceAnnotation]:
    """Replace the session's annotations with a fresh set."""
    session.annotations = []
    objects = collidable_objects(session)
    for i in range(len(objects)):
        for j in range(i + 1, len(objects)):
            ann = measure_pair(session, objects[i], objects[j])
            if ann is not None:
                session.annotations.append(ann)
    log.debug("Drew %d distance annotations", len(session.annotations))
    return session.annotations
