"""Placement engine — add, select, move, rotate and delete canvas objects.

These functions are the only writers of the session's object arena.
Every mutation re-runs the collision check and the distance annotator;
structural changes (add, delete, rotate, end of drag, typed position)
also republish the placed-machine records.

Nothing here raises for bad data: out-of-bounds moves are clamped,
unusable dimensions fall back to defaults, and the user gets a
notification where an action could not be honoured as asked.
"""

from __future__ import annotations

import logging

from factory_layout.catalog import (
    MachineSpec, finite_number, parse_machine, validate_machine,
)
from factory_layout.geometry import clamp_center, union_box

from .clearance import margins_for, working_area_rect
from .labels import build_buffer_zone_children, build_machine_children
from .models import (
    MACHINE, BUFFER_ZONE, PlacedObject, PositionUpdate, Shape,
)
from .session import LayoutSession
from .units import mm_to_px, meters_to_px, to_meters


log = logging.getLogger("factory_layout.placement")

OUT_OF_BOUNDS_MESSAGE = "Out of bounds — machine center must stay inside factory."
DEFAULT_ZONE_LABEL = "Working Area"


# ── Construction ───────────────────────────────────────────────────


def _new_object(
    session: LayoutSession,
    kind: str,
    children: list[Shape],
    offset_px: tuple[float, float],
    **fields,
) -> PlacedObject:
    """Build an object whose visual group's top-left sits at *offset_px*."""
    obj = PlacedObject(
        id=session.new_id("m" if kind == MACHINE else "wa"),
        kind=kind, center=(0.0, 0.0), anchor=(0.0, 0.0),
        children=children, **fields,
    )
    group = union_box([c.box for c in children])
    anchor = obj.local_box(session.rules.extent_mode).center
    obj.anchor = anchor
    obj.center = (
        anchor[0] - group.left + offset_px[0],
        anchor[1] - group.top + offset_px[1],
    )
    session.objects[obj.id] = obj
    session.active_id = obj.id
    return obj


def build_machine(session: LayoutSession, spec: MachineSpec) -> list[Shape]:
    """Children of a machine: working area, body and labels."""
    ppm = session.rules.pixels_per_meter
    body_w = mm_to_px(spec.width_mm, ppm)
    body_h = mm_to_px(spec.length_mm, ppm)
    working = working_area_rect(body_w, body_h, margins_for(spec.type_label), ppm)
    return build_machine_children(spec, body_w, body_h, working, session.rules)


def add_machine(session: LayoutSession, record: dict) -> PlacedObject:
    """Place a catalog or custom machine at the default offset and select it.

    Problems with the record are logged; the machine is still placed,
    with fallback dimensions where its own are unusable.
    """
    for problem in validate_machine(record):
        log.warning("Machine %r: %s", record.get("machine_name"), problem)
    spec = parse_machine(record, session.rules)
    obj = _new_object(
        session, MACHINE, build_machine(session, spec),
        session.rules.machine_offset_px,
        metadata=dict(record),
        is_custom_machine=spec.is_custom,
    )
    log.info(
        "Placed %s (%s, %.0fx%.0f mm) as %s",
        spec.name, spec.type_label or "generic",
        spec.width_mm, spec.length_mm, obj.id,
    )
    session.refresh()
    session.publish()
    session.notify("success", f"{spec.name} added to layout")
    return obj


def add_custom_working_area(
    session: LayoutSession,
    width_m: float = 4.0,
    height_m: float = 3.0,
    label: str = DEFAULT_ZONE_LABEL,
) -> PlacedObject:
    """Place a free-floating buffer zone.

    Buffer zones have no body and no clearance, are rotation-locked, and
    never take part in collision or distance checks.
    """
    rules = session.rules
    width = finite_number(width_m)
    height = finite_number(height_m)
    if width is None or width <= 0:
        width = rules.fallback_width_mm / 1000
    if height is None or height <= 0:
        height = rules.fallback_length_mm / 1000

    ppm = rules.pixels_per_meter
    children = build_buffer_zone_children(
        meters_to_px(width, ppm), meters_to_px(height, ppm), label, rules,
    )
    obj = _new_object(
        session, BUFFER_ZONE, children, rules.buffer_zone_offset_px,
        rotation_locked=True,
    )
    log.info("Placed buffer zone %r (%.2f x %.2f m) as %s", label, width, height, obj.id)
    session.notify("success", "Working area added")
    return obj


def place_selection(session: LayoutSession, record: dict) -> PlacedObject:
    """Entry point for a catalog pick: machines, or a bare working area."""
    spec = parse_machine(record, session.rules)
    if not spec.is_working_area:
        return add_machine(session, record)

    width_mm = finite_number(record.get("width_mm"))
    length_mm = finite_number(record.get("length_mm"))
    return add_custom_working_area(
        session,
        (width_mm if width_mm is not None else session.rules.fallback_width_mm) / 1000,
        (length_mm if length_mm is not None else session.rules.fallback_length_mm) / 1000,
        record.get("machine_name") or DEFAULT_ZONE_LABEL,
    )


# ── Selection ──────────────────────────────────────────────────────


def select_object(session: LayoutSession, object_id: str) -> PlacedObject:
    obj = session.get(object_id)
    session.active_id = obj.id
    return obj


def clear_selection(session: LayoutSession) -> None:
    session.active_id = None


# ── Mutations of the active object ─────────────────────────────────


def move_active_object(
    session: LayoutSession, center_px: tuple[float, float],
) -> PositionUpdate | None:
    """Drag step: move the active object's centre, clamped to the floor.

    The clamp uses the half-extents of the rotated bounding box, so the
    whole box stays on the floor.  Records are republished only when the
    drag settles (see ``settle_active_object``).
    """
    obj = session.active
    if obj is None:
        return None
    cx = finite_number(center_px[0])
    cy = finite_number(center_px[1])
    if cx is None or cy is None:
        log.warning("Ignoring move of %s to non-finite point %r", obj.id, center_px)
        return None

    bbox = session.bounding_box(obj)
    x, y, clamped = clamp_center(
        cx, cy, bbox.width / 2, bbox.height / 2,
        session.floor_width_px, session.floor_height_px,
    )
    obj.center = (x, y)
    if clamped:
        log.debug("Clamped %s to (%.1f, %.1f) px", obj.id, x, y)
    session.refresh()
    xm, ym = session.position_of(obj)
    return PositionUpdate(xm, ym, clamped)


def settle_active_object(session: LayoutSession) -> list[dict]:
    """End of a drag gesture: publish the final positions."""
    return session.publish()


def rotate_active_object(session: LayoutSession) -> int | None:
    """Turn the active object a quarter turn clockwise about its centre."""
    obj = session.active
    if obj is None:
        return None
    if obj.rotation_locked:
        log.info("%s is rotation-locked; ignoring rotate", obj.id)
        return obj.angle

    obj.angle = (obj.angle + 90) % 360
    log.info("Rotated %s to %d°", obj.id, obj.angle)

    # The swapped extents can reach past a floor edge.
    bbox = session.bounding_box(obj)
    x, y, clamped = clamp_center(
        obj.center[0], obj.center[1], bbox.width / 2, bbox.height / 2,
        session.floor_width_px, session.floor_height_px,
    )
    if clamped:
        obj.center = (x, y)
        log.debug("Clamped %s to (%.1f, %.1f) px after rotating", obj.id, x, y)
        session.notify("error", OUT_OF_BOUNDS_MESSAGE)
    session.refresh()
    session.publish()
    return obj.angle


def delete_active_object(session: LayoutSession) -> PlacedObject | None:
    """Remove the active object and clear the selection."""
    obj = session.active
    if obj is None:
        return None
    del session.objects[obj.id]
    session.active_id = None
    log.info("Removed %s", obj.id)
    session.refresh()
    session.publish()
    session.notify("success", "Machine removed")
    return obj


def set_position_from_input(
    session: LayoutSession, axis: str, value: float,
) -> PositionUpdate | None:
    """Typed X or Y input (display unit) for the active object's centre.

    The other coordinate is kept.  The centre is clamped so the bounding
    box stays on the floor; clamping raises an "out of bounds" error
    notification but still applies the clamped position.
    """
    obj = session.active
    if obj is None:
        return None
    if axis not in ("x", "y"):
        log.warning("Unknown axis %r for position input", axis)
        return None
    number = finite_number(value)
    if number is None:
        log.warning("Ignoring non-numeric %s input %r", axis, value)
        return None

    ppm = session.rules.pixels_per_meter
    mapper = session.mapper
    meters = to_meters(number, session.use_meters)
    cur_x, cur_y = mapper.canvas_center_to_cartesian(*obj.center)
    target_x = meters if axis == "x" else cur_x
    target_y = meters if axis == "y" else cur_y

    bbox = session.bounding_box(obj)
    x, y, clamped = clamp_center(
        target_x, target_y,
        bbox.width / ppm / 2, bbox.height / ppm / 2,
        session.floor.width_m, session.floor.height_m,
    )
    if clamped:
        session.notify("error", OUT_OF_BOUNDS_MESSAGE)

    obj.center = mapper.cartesian_to_canvas_center(x, y)
    session.refresh()
    session.publish()
    return PositionUpdate(x, y, clamped)
