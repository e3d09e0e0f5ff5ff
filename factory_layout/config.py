"""Shared layout constants for the floor-plan engine.

Every stage of the layout engine (placement, collision, distances,
aggregation) reads its scale and defaults from this single source of
truth.  A session can be built with its own ``LayoutRules`` instance;
the module-level ``LAYOUT_RULES`` is the default.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutRules:
    """Scale, defaults and view limits for a floor-plan session.

    Distances are in meters unless the field name says otherwise.
    """

    pixels_per_meter: float = 40.0
    """Fixed canvas scale."""

    feet_per_meter: float = 3.28084
    """Conversion factor for the feet display unit."""

    sq_feet_per_sq_meter: float = 10.7639

    floor_width_m: float = 30.0
    floor_height_m: float = 20.0
    """Floor plan created at session start."""

    grid_step_m: float = 1.0

    machine_offset_px: tuple[float, float] = (50.0, 50.0)
    """Top-left of a freshly added machine group."""

    buffer_zone_offset_px: tuple[float, float] = (80.0, 80.0)
    """Top-left of a freshly added custom working area."""

    fallback_width_mm: float = 4000.0
    fallback_length_mm: float = 3000.0
    """Used when a record has missing or unusable dimensions."""

    zoom_step: float = 1.2
    zoom_min: float = 0.5
    zoom_max: float = 3.0

    label_padding_px: float = 6.0
    """Inset of body labels from the body's left edge (each side)."""

    glyph_width_ratio: float = 0.6
    """Average glyph advance as a fraction of the font size.  No font
    metrics are available without a renderer, so text width is estimated
    as ``len(text) * font_size * ratio``."""

    distance_label_offset_px: float = 10.0
    banner_top_px: float = 10.0

    extent_mode: str = "body"
    """Which box collision, distance and clamping use:
    ``"body"`` (machine body only) or ``"footprint"`` (the whole visual
    group, working area and labels included)."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def floor_width_px(self) -> float:
        return self.floor_width_m * self.pixels_per_meter

    @property
    def floor_height_px(self) -> float:
        return self.floor_height_m * self.pixels_per_meter


@dataclass(frozen=True)
class Palette:
    """Fill/stroke colours for one machine family."""

    body_fill: str
    body_stroke: str
    working_fill: str
    working_stroke: str
    name_fill: str


STANDARD_PALETTE = Palette(
    body_fill="#3B82F6",
    body_stroke="#1D4ED8",
    working_fill="rgba(34,197,94,0.15)",
    working_stroke="#22c55e",
    name_fill="#fff",
)

CUSTOM_PALETTE = Palette(
    body_fill="#9333EA",
    body_stroke="#7E22CE",
    working_fill="rgba(168,85,247,0.15)",
    working_stroke="#A855F7",
    name_fill="#FDF4FF",
)

ALARM_FILL = "rgba(255,0,0,0.5)"
ALARM_STROKE = "red"

BUFFER_ZONE_FILL = "rgba(0, 213, 255, 0.12)"
BUFFER_ZONE_STROKE = "#091d20ff"
WORKING_LABEL_FILL = "#166534"
GRID_FILL = "#eee"
FLOOR_BACKGROUND = "#d4c7c7ff"


def palette_for(is_custom_machine: bool) -> Palette:
    """Pick the palette for a machine (user-defined machines are purple)."""
    return CUSTOM_PALETTE if is_custom_machine else STANDARD_PALETTE


# Module-level singleton — importable everywhere.
LAYOUT_RULES = LayoutRules()
