"""Clearance rules — mandatory working area around each machine type.

Margins are in meters and asymmetric: some machines need room on one
side only (an edge bander's infeed and outfeed, a panel saw's unloading
table).  Unknown types get the default margin on every side.
"""

from __future__ import annotations

from dataclasses import dataclass

from factory_layout.geometry import BoundingBox

from .units import meters_to_px


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float


DEFAULT_MARGINS = Margins(top=0.5, bottom=0.5, left=0.5, right=0.5)

CLEARANCE_RULES: dict[str, Margins] = {
    "panel dividing": Margins(top=0.5, bottom=3.0, left=0.5, right=0.5),
    "edgeband": Margins(top=3.0, bottom=3.0, left=0.5, right=3.0),
    "cnc drilling": Margins(top=0.5, bottom=0.5, left=0.5, right=2.0),
}


def _normalize(type_label: str | None) -> str:
    return " ".join((type_label or "").split()).lower()


def margins_for(type_label: str | None) -> Margins:
    """Look up the working-area margins for a machine type label."""
    return CLEARANCE_RULES.get(_normalize(type_label), DEFAULT_MARGINS)


def working_area_rect(
    body_width_px: float,
    body_height_px: float,
    margins: Margins,
    pixels_per_meter: float,
) -> BoundingBox:
    """Working-area box relative to the body's top-left corner."""
    top = meters_to_px(margins.top, pixels_per_meter)
    bottom = meters_to_px(margins.bottom, pixels_per_meter)
    left = meters_to_px(margins.left, pixels_per_meter)
    right = meters_to_px(margins.right, pixels_per_meter)
    return BoundingBox(
        -left, -top,
        body_width_px + left + right,
        body_height_px + top + bottom,
    )
