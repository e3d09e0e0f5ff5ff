from .boxes import (
    BoundingBox,
    union_box,
    rotate_point,
    rotated_bounds,
    boxes_overlap,
    edge_gaps,
    clamp_center,
    box_inside_area,
)
