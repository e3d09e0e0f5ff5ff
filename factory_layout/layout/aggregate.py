"""Layout state aggregation — the placed-machine list for collaborators."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import LayoutSession


log = logging.getLogger("factory_layout.aggregate")


def collect_placed_machines(session: LayoutSession) -> list[dict]:
    """One flat record per machine: source metadata plus x, y, rotation.

    x and y are Cartesian meters (bottom-left origin) of the machine's
    bounding-box centre.  Buffer zones carry no metadata and are skipped.
    """
    records: list[dict] = []
    for obj in session.objects.values():
        if obj.metadata is None:
            continue
        x, y = session.position_of(obj)
        records.append({
            **obj.metadata,
            "x": x,
            "y": y,
            "rotation": obj.angle,
        })
    return records


def publish_placed_machines(session: LayoutSession) -> list[dict]:
    """Collect the records and hand them to the session's callback."""
    records = collect_placed_machines(session)
    if session.on_machines_update is not None:
        session.on_machines_update(records)
    log.debug("Published %d placed machines", len(records))
    return records
