"""Machine dataclasses — typed view of a catalog or custom-dialog record."""

from __future__ import annotations

from dataclasses import dataclass, field


WORKING_AREA_TYPE = "WORKING_AREA"


@dataclass
class MachineSpec:
    """The fields the layout engine reads from a machine record.

    ``record`` is the untouched source dict; it is carried through as
    the placed object's metadata and never interpreted here.
    """

    name: str
    type_label: str
    width_mm: float
    length_mm: float
    productivity_min: float | None = None
    productivity_max: float | None = None
    is_custom: bool = False
    dims_defaulted: bool = False        # width/length fell back to defaults
    record: dict = field(default_factory=dict)

    @property
    def is_working_area(self) -> bool:
        return self.type_label == WORKING_AREA_TYPE

    @property
    def average_productivity(self) -> int | None:
        """Mean of the boards/shift range, rounded half-up.

        Only defined when the minimum is a finite number; a missing
        maximum falls back to the minimum.
        """
        if self.productivity_min is None:
            return None
        hi = self.productivity_max
        if hi is None:
            hi = self.productivity_min
        return int((self.productivity_min + hi) / 2 + 0.5)
