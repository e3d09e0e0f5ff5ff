"""Render snapshot — JSON-safe view of a session for the drawing layer.

Layouts are not persisted, so there is no parser for this format; it
only feeds renderers (and the web adapter's responses).
"""

from __future__ import annotations

from dataclasses import asdict

from factory_layout.config import FLOOR_BACKGROUND
from factory_layout.geometry import BoundingBox

from .models import DistanceAnnotation, PlacedObject, Shape
from .session import LayoutSession


def box_to_dict(b: BoundingBox) -> dict:
    return {"left": b.left, "top": b.top, "width": b.width, "height": b.height}


def shape_to_dict(s: Shape) -> dict:
    d = asdict(s)
    if s.dash is not None:
        d["dash"] = list(s.dash)
    return d


def object_to_dict(session: LayoutSession, obj: PlacedObject) -> dict:
    x, y = session.position_of(obj)
    return {
        "id": obj.id,
        "kind": obj.kind,
        "center": list(obj.center),
        "anchor": list(obj.anchor),
        "angle": obj.angle,
        "position": {"x": x, "y": y},
        "bounding_box": box_to_dict(session.bounding_box(obj)),
        "group_box": box_to_dict(obj.group_box()),
        "active": obj.id == session.active_id,
        "is_custom_machine": obj.is_custom_machine,
        "is_collision_highlighted": obj.is_collision_highlighted,
        "rotation_locked": obj.rotation_locked,
        "metadata": obj.metadata,
        "children": [shape_to_dict(c) for c in obj.children],
    }


def annotation_to_dict(a: DistanceAnnotation) -> dict:
    return {
        "from_id": a.from_id,
        "to_id": a.to_id,
        "pixel_gap": a.pixel_gap,
        "line": [list(a.start), list(a.end)],
        "distance_m": a.distance_m,
        "label": a.label_text,
        "label_position": list(a.label_position),
    }


def session_to_dict(session: LayoutSession) -> dict:
    """Everything a renderer needs to draw one frame."""
    inputs = session.position_inputs()
    return {
        "floor": {
            "width_m": session.floor.width_m,
            "height_m": session.floor.height_m,
            "width_px": session.floor_width_px,
            "height_px": session.floor_height_px,
            "area": session.floor_area(),
            "inputs": list(session.floor_inputs()),
            "background": FLOOR_BACKGROUND,
        },
        "units": session.unit_label,
        "view": {"zoom": session.zoom, "pan": list(session.pan)},
        "grid": [shape_to_dict(g) for g in session.grid],
        "objects": [object_to_dict(session, o) for o in session.objects.values()],
        "active_id": session.active_id,
        "position_inputs": list(inputs) if inputs is not None else None,
        "collision": {
            "any": session.collisions.any_collision,
            "ids": sorted(session.collisions.colliding_ids),
            "pairs": [list(p) for p in session.collisions.pairs],
        },
        "banner": shape_to_dict(session.banner) if session.banner is not None else None,
        "annotations": [annotation_to_dict(a) for a in session.annotations],
    }
