"""Unit conversion — meters/feet and meters/pixels.

Pure functions with no validation: NaN or negative inputs pass straight
through, callers decide what is acceptable.
"""

from __future__ import annotations

from factory_layout.config import LAYOUT_RULES

FEET_PER_METER = LAYOUT_RULES.feet_per_meter
SQ_FEET_PER_SQ_METER = LAYOUT_RULES.sq_feet_per_sq_meter


def to_meters(value: float, unit_is_meters: bool) -> float:
    """Convert a display value (meters or feet) to meters."""
    return value if unit_is_meters else value / FEET_PER_METER


def from_meters(value: float, unit_is_meters: bool) -> float:
    """Convert meters to the display unit."""
    return value if unit_is_meters else value * FEET_PER_METER


def unit_suffix(unit_is_meters: bool) -> str:
    return "m" if unit_is_meters else "ft"


def meters_to_px(value_m: float, pixels_per_meter: float) -> float:
    return value_m * pixels_per_meter


def px_to_meters(value_px: float, pixels_per_meter: float) -> float:
    return value_px / pixels_per_meter


def mm_to_px(value_mm: float, pixels_per_meter: float) -> float:
    return value_mm * pixels_per_meter / 1000


def format_length(value_m: float, unit_is_meters: bool) -> str:
    """``4.0 -> "4.00m"`` or, in feet mode, ``"13.12ft"``."""
    return f"{from_meters(value_m, unit_is_meters):.2f}{unit_suffix(unit_is_meters)}"


def floor_area_summary(width_m: float, height_m: float) -> str:
    """Floor area in both units, e.g. ``"600 m² / 6458 ft²"``."""
    area = width_m * height_m
    return f"{round(area)} m² / {round(area * SQ_FEET_PER_SQ_METER)} ft²"
