"""Canvas ↔ Cartesian coordinate mapping.

The canvas has its origin at the top-left with Y growing down; users see
the floor with its origin at the bottom-left, Y growing up, in meters.
A Cartesian position always refers to the centre of an object's
bounding box.
"""

from __future__ import annotations

from dataclasses import dataclass

from factory_layout.geometry import BoundingBox


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps between the two spaces for one floor height."""

    floor_height_m: float
    pixels_per_meter: float

    @property
    def floor_height_px(self) -> float:
        return self.floor_height_m * self.pixels_per_meter

    def cartesian_to_canvas_center(
        self, x_m: float, y_m: float,
    ) -> tuple[float, float]:
        """Cartesian meters → canvas px for an object's centre (Y flipped)."""
        ppm = self.pixels_per_meter
        return (x_m * ppm, self.floor_height_px - y_m * ppm)

    def canvas_to_cartesian(
        self,
        top_left_px: tuple[float, float],
        size_px: tuple[float, float],
    ) -> tuple[float, float]:
        """Centre of a canvas bounding box in Cartesian meters.

        Rounded to 4 decimals so readouts do not flicker.
        """
        left, top = top_left_px
        width, height = size_px
        ppm = self.pixels_per_meter
        x_m = (left + width / 2) / ppm
        y_m = (self.floor_height_px - (top + height / 2)) / ppm
        return (round(x_m, 4), round(y_m, 4))

    def canvas_center_to_cartesian(
        self, px: float, py: float,
    ) -> tuple[float, float]:
        """Unrounded inverse of ``cartesian_to_canvas_center``."""
        ppm = self.pixels_per_meter
        return (px / ppm, (self.floor_height_px - py) / ppm)

    def box_to_cartesian(self, bbox: BoundingBox) -> tuple[float, float]:
        return self.canvas_to_cartesian((bbox.left, bbox.top), (bbox.width, bbox.height))
