"""Layout dataclasses — the canvas entities the engine owns and reports."""

from __future__ import annotations

from dataclasses import dataclass, field

from factory_layout.geometry import BoundingBox, rotated_bounds, union_box


# ── Object kinds / shape roles ─────────────────────────────────────

MACHINE = "machine"
BUFFER_ZONE = "buffer_zone"

ROLE_BODY = "body"
ROLE_WORKING_AREA = "working_area"
ROLE_WORKING_LABEL = "working_label"
ROLE_NAME = "name_label"
ROLE_PRODUCTIVITY = "productivity_label"
ROLE_DIMENSIONS = "dimension_label"
ROLE_ZONE = "zone"
ROLE_ZONE_LABEL = "zone_label"
ROLE_GRID = "grid"
ROLE_BANNER = "collision_banner"

EXTENT_BODY = "body"
EXTENT_FOOTPRINT = "footprint"


class LayoutError(Exception):
    """Raised for programming errors, e.g. addressing an unknown object."""

    def __init__(self, object_id: str | None, reason: str) -> None:
        self.object_id = object_id
        self.reason = reason
        if object_id is None:
            super().__init__(reason)
        else:
            super().__init__(f"Object '{object_id}': {reason}")


# ── Drawables ──────────────────────────────────────────────────────


@dataclass
class Shape:
    """One drawable child of a placed object (or a free overlay).

    Geometry is the unrotated top-left box, in px.  For children it is
    relative to the owning object's body top-left corner; for grid lines
    and the banner it is absolute canvas space.
    """

    kind: str                           # "rect" | "text"
    role: str
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 0.0
    dash: tuple[float, ...] | None = None
    opacity: float = 1.0
    radius: float = 0.0
    text: str = ""
    font_size: float = 0.0
    bold: bool = False
    scale_x: float = 1.0                # horizontal text squeeze, <= 1

    @property
    def box(self) -> BoundingBox:
        return BoundingBox(self.x, self.y, self.width, self.height)


@dataclass
class FloorPlan:
    width_m: float
    height_m: float


@dataclass
class PlacedObject:
    """A composite canvas entity: body, working area and labels.

    ``anchor`` is the local point (relative to the body top-left) that
    sits at ``center`` on the canvas; the object rotates about it.  It is
    the centre of the object's extent box, so rotating never moves the
    reported position.
    """

    id: str
    kind: str                           # MACHINE | BUFFER_ZONE
    center: tuple[float, float]         # canvas px
    anchor: tuple[float, float]         # local px
    children: list[Shape]
    angle: int = 0                      # 0, 90, 180, 270
    metadata: dict | None = None        # source machine record, uninterpreted
    is_custom_machine: bool = False
    is_collision_highlighted: bool = False
    rotation_locked: bool = False

    @property
    def is_buffer_zone(self) -> bool:
        return self.kind == BUFFER_ZONE

    @property
    def is_machine(self) -> bool:
        return self.metadata is not None and not self.is_buffer_zone

    def shape(self, role: str) -> Shape | None:
        return next((c for c in self.children if c.role == role), None)

    def local_box(self, extent_mode: str) -> BoundingBox:
        """Unrotated extent box in local coordinates."""
        if extent_mode == EXTENT_BODY:
            core = self.shape(ROLE_ZONE if self.is_buffer_zone else ROLE_BODY)
            if core is not None:
                return core.box
        return union_box([c.box for c in self.children])

    def bounding_box(self, extent_mode: str) -> BoundingBox:
        """Axis-aligned canvas box that contains the rotated extent."""
        ax, ay = self.anchor
        return rotated_bounds(
            self.local_box(extent_mode).translated(-ax, -ay),
            self.center, self.angle,
        )

    def group_box(self) -> BoundingBox:
        """Canvas AABB of every child (the whole visual group)."""
        return self.bounding_box(EXTENT_FOOTPRINT)


@dataclass
class DistanceAnnotation:
    """A connector line and label between two placed objects."""

    from_id: str
    to_id: str
    pixel_gap: float
    start: tuple[float, float]
    end: tuple[float, float]
    distance_m: float
    label_text: str
    label_position: tuple[float, float]


@dataclass
class CollisionReport:
    colliding_ids: set[str] = field(default_factory=set)
    pairs: list[tuple[str, str]] = field(default_factory=list)

    @property
    def any_collision(self) -> bool:
        return bool(self.colliding_ids)


@dataclass
class PositionUpdate:
    """Result of a clamped move, in Cartesian meters."""

    x: float
    y: float
    was_clamped: bool


@dataclass
class Notification:
    level: str                          # "success" | "info" | "error"
    message: str
