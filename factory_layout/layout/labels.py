"""Label and child-shape construction for placed objects.

Text is measured without a renderer: width is estimated from the font
size and a glyph-advance ratio (see ``LayoutRules.glyph_width_ratio``).
Labels that do not fit are squeezed horizontally, never enlarged.
"""

from __future__ import annotations

from factory_layout.catalog import MachineSpec
from factory_layout.config import (
    LayoutRules, palette_for,
    BUFFER_ZONE_FILL, BUFFER_ZONE_STROKE, WORKING_LABEL_FILL,
)
from factory_layout.geometry import BoundingBox

from .models import (
    Shape,
    ROLE_BODY, ROLE_WORKING_AREA, ROLE_WORKING_LABEL, ROLE_NAME,
    ROLE_PRODUCTIVITY, ROLE_DIMENSIONS, ROLE_ZONE, ROLE_ZONE_LABEL,
)

LINE_HEIGHT = 1.16
PRODUCTIVITY_FILL = "#E5F0FF"


def text_width(text: str, font_size: float, rules: LayoutRules) -> float:
    """Estimated unscaled width of a single line of text, in px."""
    return len(text) * font_size * rules.glyph_width_ratio


def fit_scale(natural_width: float, max_width: float) -> float:
    """Horizontal scale that makes *natural_width* fit in *max_width*."""
    if natural_width <= max_width or natural_width <= 0:
        return 1.0
    return max(max_width, 0.0) / natural_width


def make_text(
    role: str, text: str, x: float, y: float,
    font_size: float, fill: str, rules: LayoutRules,
    *, max_width: float | None = None, bold: bool = False,
) -> Shape:
    """A text shape whose box is the (squeezed) rendered extent."""
    natural = text_width(text, font_size, rules)
    scale = fit_scale(natural, max_width) if max_width is not None else 1.0
    return Shape(
        kind="text", role=role,
        x=x, y=y, width=natural * scale, height=font_size * LINE_HEIGHT,
        fill=fill, text=text, font_size=font_size, bold=bold, scale_x=scale,
    )


def dimension_text(spec: MachineSpec) -> str:
    return f"{spec.width_mm / 1000:.2f}m × {spec.length_mm / 1000:.2f}m"


def build_machine_children(
    spec: MachineSpec,
    body_w: float,
    body_h: float,
    working: BoundingBox,
    rules: LayoutRules,
) -> list[Shape]:
    """Working area, body and labels of one machine, bottom to top."""
    palette = palette_for(spec.is_custom)
    pad = rules.label_padding_px
    inner = body_w - 2 * pad

    working_rect = Shape(
        kind="rect", role=ROLE_WORKING_AREA,
        x=working.left, y=working.top,
        width=working.width, height=working.height,
        fill=palette.working_fill, stroke=palette.working_stroke,
        stroke_width=2, dash=(8, 6), radius=8,
    )

    # Caption sits near the bottom of the working area, centred under the body.
    caption = make_text(
        ROLE_WORKING_LABEL, "Working Space", 0, 0, 12,
        WORKING_LABEL_FILL, rules, max_width=body_w, bold=True,
    )
    caption.x = (body_w - caption.width) / 2
    caption.y = min(working.bottom - 15, working.bottom - caption.height)

    body = Shape(
        kind="rect", role=ROLE_BODY,
        x=0, y=0, width=body_w, height=body_h,
        fill=palette.body_fill, stroke=palette.body_stroke,
        stroke_width=2, opacity=0.85, radius=4,
    )

    name = make_text(
        ROLE_NAME, spec.name, pad, pad, 14,
        palette.name_fill, rules, max_width=inner, bold=True,
    )
    children = [working_rect, caption, body, name]

    avg = spec.average_productivity
    if avg is not None:
        children.append(make_text(
            ROLE_PRODUCTIVITY, f"{avg} boards / shift",
            pad, pad + name.height + 4, 11,
            PRODUCTIVITY_FILL, rules, max_width=inner,
        ))

    children.append(make_text(
        ROLE_DIMENSIONS, dimension_text(spec), pad, body_h - 18, 12,
        "#fff", rules, max_width=inner,
    ))
    return children


def build_buffer_zone_children(
    width_px: float, height_px: float, label: str, rules: LayoutRules,
) -> list[Shape]:
    """Dashed zone rectangle with a centred caption."""
    zone = Shape(
        kind="rect", role=ROLE_ZONE,
        x=0, y=0, width=width_px, height=height_px,
        fill=BUFFER_ZONE_FILL, stroke=BUFFER_ZONE_STROKE,
        stroke_width=2, dash=(10, 6), radius=10,
    )
    caption = make_text(
        ROLE_ZONE_LABEL, label, 0, 0, 16, WORKING_LABEL_FILL, rules,
        max_width=width_px, bold=True,
    )
    caption.x = (width_px - caption.width) / 2
    caption.y = (height_px - caption.height) / 2
    return [zone, caption]
