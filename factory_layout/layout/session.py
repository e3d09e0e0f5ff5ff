"""Layout session — the single mutable canvas state for one floor plan.

A session owns the floor plan, the object arena (id → PlacedObject, in
canvas z-order), the active selection, the unit and view state, and the
overlays the detectors draw (collision banner, distance annotations).
The placement functions in ``placement`` are the only code that adds,
removes or moves objects; the detectors only restyle bodies and replace
their own overlays.

Everything is synchronous: each public call runs to completion, detector
passes included, before returning.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Callable

from factory_layout.config import LAYOUT_RULES, LayoutRules
from factory_layout.geometry import BoundingBox, box_inside_area

from .aggregate import publish_placed_machines
from .collision import detect_collisions
from .coords import CoordinateMapper
from .distances import draw_distance_lines
from .grid import build_grid
from .models import (
    CollisionReport, DistanceAnnotation, FloorPlan, LayoutError,
    Notification, PlacedObject, Shape,
)
from .units import floor_area_summary, from_meters, to_meters, unit_suffix


log = logging.getLogger("factory_layout.session")

MAX_NOTIFICATIONS = 50


class LayoutSession:
    """Canvas state for one floor plan, passed into every engine call."""

    def __init__(
        self,
        rules: LayoutRules = LAYOUT_RULES,
        *,
        on_machines_update: Callable[[list[dict]], None] | None = None,
        on_notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self.rules = rules
        self.floor = FloorPlan(rules.floor_width_m, rules.floor_height_m)
        self.objects: dict[str, PlacedObject] = {}
        self.active_id: str | None = None
        self.use_meters = True
        self.zoom = 1.0
        self.pan: tuple[float, float] = (0.0, 0.0)
        self.grid: list[Shape] = build_grid(self.floor, rules)
        self.banner: Shape | None = None
        self.annotations: list[DistanceAnnotation] = []
        self.collisions = CollisionReport()
        self.notifications: deque[Notification] = deque(maxlen=MAX_NOTIFICATIONS)
        self.on_machines_update = on_machines_update
        self.on_notify = on_notify
        self._next_id = 1

    # ── Geometry accessors ─────────────────────────────────────────

    @property
    def floor_width_px(self) -> float:
        return self.floor.width_m * self.rules.pixels_per_meter

    @property
    def floor_height_px(self) -> float:
        return self.floor.height_m * self.rules.pixels_per_meter

    @property
    def mapper(self) -> CoordinateMapper:
        return CoordinateMapper(self.floor.height_m, self.rules.pixels_per_meter)

    def bounding_box(self, obj: PlacedObject) -> BoundingBox:
        """The box collision, distance and clamping work with."""
        return obj.bounding_box(self.rules.extent_mode)

    def position_of(self, obj: PlacedObject) -> tuple[float, float]:
        """Cartesian meters of an object's bounding-box centre."""
        return self.mapper.box_to_cartesian(self.bounding_box(obj))

    def is_inside_floor(self, obj: PlacedObject) -> bool:
        return box_inside_area(
            self.bounding_box(obj), self.floor_width_px, self.floor_height_px,
        )

    # ── Arena ──────────────────────────────────────────────────────

    def new_id(self, prefix: str) -> str:
        oid = f"{prefix}{self._next_id}"
        self._next_id += 1
        return oid

    def get(self, object_id: str) -> PlacedObject:
        try:
            return self.objects[object_id]
        except KeyError:
            raise LayoutError(object_id, "not on the canvas") from None

    @property
    def active(self) -> PlacedObject | None:
        if self.active_id is None:
            return None
        return self.objects.get(self.active_id)

    def machines(self) -> list[PlacedObject]:
        return [o for o in self.objects.values() if o.is_machine]

    # ── Notifications / recompute ──────────────────────────────────

    def notify(self, level: str, message: str) -> None:
        """Record a user-visible message and forward it to the UI."""
        note = Notification(level, message)
        self.notifications.append(note)
        if level == "error":
            log.warning("%s", message)
        else:
            log.info("%s", message)
        if self.on_notify is not None:
            self.on_notify(note)

    def drain_notifications(self) -> list[Notification]:
        notes = list(self.notifications)
        self.notifications.clear()
        return notes

    def refresh(self) -> CollisionReport:
        """Re-run the collision check, then redraw distance lines."""
        report = detect_collisions(self)
        draw_distance_lines(self)
        return report

    def publish(self) -> list[dict]:
        return publish_placed_machines(self)

    # ── View ───────────────────────────────────────────────────────

    def zoom_in(self) -> float:
        self.zoom = min(self.zoom * self.rules.zoom_step, self.rules.zoom_max)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = max(self.zoom / self.rules.zoom_step, self.rules.zoom_min)
        return self.zoom

    def reset_view(self) -> None:
        self.zoom = 1.0
        self.pan = (0.0, 0.0)

    # ── Units ──────────────────────────────────────────────────────

    def set_units(self, use_meters: bool) -> None:
        """Switch the display unit.  Objects never move."""
        self.use_meters = use_meters
        draw_distance_lines(self)

    def toggle_units(self) -> bool:
        self.set_units(not self.use_meters)
        return self.use_meters

    def format_value(self, value_m: float) -> str:
        """A meter value as the text of a numeric input in the display unit."""
        return f"{from_meters(value_m, self.use_meters):.2f}"

    def position_inputs(self) -> tuple[str, str] | None:
        """X/Y inputs for the active object, or None when nothing is selected."""
        obj = self.active
        if obj is None:
            return None
        x, y = self.position_of(obj)
        return (self.format_value(x), self.format_value(y))

    def floor_inputs(self) -> tuple[str, str]:
        return (self.format_value(self.floor.width_m), self.format_value(self.floor.height_m))

    def floor_area(self) -> str:
        return floor_area_summary(self.floor.width_m, self.floor.height_m)

    @property
    def unit_label(self) -> str:
        return unit_suffix(self.use_meters)

    # ── Floor plan ─────────────────────────────────────────────────

    def set_floor_dimensions(
        self, width: float, height: float, *, in_display_units: bool = False,
    ) -> bool:
        """Resize the floor, rebuild the grid and re-check every object.

        Objects keep their canvas position, so any that no longer fit
        stay where they are until their next move.  Returns False (and
        leaves the floor untouched) for non-positive or non-finite sizes.
        """
        if in_display_units:
            width = to_meters(width, self.use_meters)
            height = to_meters(height, self.use_meters)
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            self.notify("error", "Floor dimensions must be positive numbers.")
            return False

        self.floor = FloorPlan(width, height)
        self.grid = build_grid(self.floor, self.rules)
        outside = [o.id for o in self.objects.values() if not self.is_inside_floor(o)]
        if outside:
            log.warning(
                "Floor resized to %.2f x %.2f m; %d object(s) now outside: %s",
                width, height, len(outside), outside,
            )
        else:
            log.info("Floor resized to %.2f x %.2f m", width, height)
        self.refresh()
        self.publish()
        return True
