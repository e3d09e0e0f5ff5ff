"""Layout engine — machines on a scaled factory floor plan.

Submodules:
  models        Canvas entities (PlacedObject, Shape, annotations) and LayoutError.
  units         Meter/feet and meter/pixel conversion.
  coords        Canvas (top-left, px) ↔ Cartesian (bottom-left, m) mapping.
  clearance     Per-type working-area margins.
  labels        Child shapes and text fitting.
  grid          Background guide lines.
  session       LayoutSession — the mutable canvas state.
  placement     Add / select / move / rotate / delete operations.
  collision     Bounding-box overlap detection and highlighting.
  distances     Nearest-edge distance annotations.
  aggregate     Placed-machine records for external collaborators.
  serialization Render snapshot (session_to_dict).
"""

from .models import (
    PlacedObject, Shape, FloorPlan, DistanceAnnotation, CollisionReport,
    PositionUpdate, Notification, LayoutError,
)
from .units import to_meters, from_meters, format_length, floor_area_summary
from .coords import CoordinateMapper
from .clearance import Margins, margins_for, working_area_rect
from .session import LayoutSession
from .placement import (
    add_machine, add_custom_working_area, place_selection,
    select_object, clear_selection,
    move_active_object, settle_active_object, rotate_active_object,
    delete_active_object, set_position_from_input,
)
from .collision import detect_collisions
from .distances import draw_distance_lines
from .aggregate import collect_placed_machines, publish_placed_machines
from .serialization import session_to_dict

__all__ = [
    # Models
    "PlacedObject", "Shape", "FloorPlan", "DistanceAnnotation",
    "CollisionReport", "PositionUpdate", "Notification", "LayoutError",
    # Units / coordinates / clearance
    "to_meters", "from_meters", "format_length", "floor_area_summary",
    "CoordinateMapper", "Margins", "margins_for", "working_area_rect",
    # Session and engine
    "LayoutSession",
    "add_machine", "add_custom_working_area", "place_selection",
    "select_object", "clear_selection",
    "move_active_object", "settle_active_object", "rotate_active_object",
    "delete_active_object", "set_position_from_input",
    # Detectors / aggregation / serialization
    "detect_collisions", "draw_distance_lines",
    "collect_placed_machines", "publish_placed_machines",
    "session_to_dict",
]
