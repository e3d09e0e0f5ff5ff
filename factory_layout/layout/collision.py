"""Collision detection — flags overlapping machines on the floor.

Detection is advisory: overlapping placements are allowed, the offending
bodies are painted in the alarm colour and a single banner is shown.
Every pair is compared (O(n²)); floors hold tens of machines, so no
spatial index is kept.  Rotated objects are tested by their axis-aligned
bounding box, which over-reports for rotations other than quarter turns.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from factory_layout.config import ALARM_FILL, ALARM_STROKE, palette_for
from factory_layout.geometry import boxes_overlap

from .labels import make_text
from .models import (
    CollisionReport, PlacedObject, Shape,
    ROLE_BODY, ROLE_WORKING_AREA, ROLE_BANNER,
)

if TYPE_CHECKING:
    from .session import LayoutSession


log = logging.getLogger("factory_layout.collision")

BANNER_TEXT = "Collision Detected!"


def collidable_objects(session: LayoutSession) -> list[PlacedObject]:
    """Machines that take part in collision and distance checks."""
    return [o for o in session.objects.values() if o.is_machine]


def reset_palette(obj: PlacedObject) -> None:
    """Restore the body and working-area colours of a machine."""
    palette = palette_for(obj.is_custom_machine)
    working = obj.shape(ROLE_WORKING_AREA)
    if working is not None:
        working.fill = palette.working_fill
        working.stroke = palette.working_stroke
    body = obj.shape(ROLE_BODY)
    if body is not None:
        body.fill = palette.body_fill
        body.stroke = palette.body_stroke
    obj.is_collision_highlighted = False


def highlight(obj: PlacedObject) -> None:
    body = obj.shape(ROLE_BODY)
    if body is not None:
        body.fill = ALARM_FILL
        body.stroke = ALARM_STROKE
    obj.is_collision_highlighted = True


def make_banner(session: LayoutSession) -> Shape:
    """The warning text, horizontally centred at the top of the floor."""
    rules = session.rules
    banner = make_text(
        ROLE_BANNER, BANNER_TEXT, 0, rules.banner_top_px, 24,
        ALARM_STROKE, rules, bold=True,
    )
    banner.x = session.floor_width_px / 2 - banner.width / 2
    return banner


def detect_collisions(session: LayoutSession) -> CollisionReport:
    """Recolour overlapping machines and refresh the warning banner."""
    objects = collidable_objects(session)
    session.banner = None

    for obj in objects:
        reset_palette(obj)

    boxes = [session.bounding_box(o) for o in objects]
    report = CollisionReport()
    for i in range(len(objects)):
        for j in range(i + 1, len(objects)):
            if boxes_overlap(boxes[i], boxes[j]):
                a, b = objects[i], objects[j]
                report.pairs.append((a.id, b.id))
                report.colliding_ids.update((a.id, b.id))

    for obj in objects:
        if obj.id in report.colliding_ids:
            highlight(obj)

    if report.any_collision:
        session.banner = make_banner(session)
        log.debug("Collisions among %d machines: %s", len(objects), report.pairs)

    session.collisions = report
    return report
