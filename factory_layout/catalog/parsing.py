"""Machine record parsing — convert raw dicts into MachineSpec."""

from __future__ import annotations

import logging
import math

from factory_layout.config import LAYOUT_RULES, LayoutRules

from .models import MachineSpec


log = logging.getLogger("factory_layout.catalog")


def finite_number(value) -> float | None:
    """Return *value* as a float if it is a finite real number, else None.

    Booleans and numeric strings are rejected: records come from JSON and
    a string where a number belongs is malformed metadata.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _positive(value) -> float | None:
    num = finite_number(value)
    if num is None or num <= 0:
        return None
    return num


def validate_machine(record: dict) -> list[str]:
    """Check a raw record for problems. Returns messages (empty = clean).

    None of these stop a placement; they explain which defaults
    ``parse_machine`` will substitute.
    """
    problems: list[str] = []
    for key in ("width_mm", "length_mm"):
        if key not in record or record[key] is None:
            problems.append(f"'{key}' is missing")
        elif _positive(record[key]) is None:
            problems.append(f"'{key}' must be a positive number, got {record[key]!r}")
    for key in ("productivity_boards_min", "productivity_boards_max"):
        if record.get(key) is not None and finite_number(record[key]) is None:
            problems.append(f"'{key}' is not a finite number: {record[key]!r}")
    return problems


def parse_machine(record: dict, rules: LayoutRules = LAYOUT_RULES) -> MachineSpec:
    """Parse a machine record, substituting defaults for unusable fields."""
    width = _positive(record.get("width_mm"))
    length = _positive(record.get("length_mm"))
    defaulted = width is None or length is None
    if defaulted:
        log.debug(
            "Machine %r: using fallback %.0f x %.0f mm",
            record.get("machine_name"),
            rules.fallback_width_mm, rules.fallback_length_mm,
        )

    name = record.get("machine_name")
    return MachineSpec(
        name=str(name) if name is not None else "",
        type_label=str(record.get("type") or ""),
        width_mm=width if width is not None else rules.fallback_width_mm,
        length_mm=length if length is not None else rules.fallback_length_mm,
        productivity_min=finite_number(record.get("productivity_boards_min")),
        productivity_max=finite_number(record.get("productivity_boards_max")),
        is_custom=record.get("isCustom") is True,
        dims_defaulted=defaulted,
        record=record,
    )
