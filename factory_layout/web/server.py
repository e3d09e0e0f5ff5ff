"""
FastAPI web adapter — thin HTTP layer over one in-process LayoutSession.

Each endpoint maps a user-facing control (add machine, drag, rotate,
typed position, unit toggle, zoom, floor resize) onto the matching
engine call and answers with the render snapshot plus any notifications
the call raised.  The engine is single-threaded, so every request runs
under one lock.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from factory_layout.config import LAYOUT_RULES, LayoutRules
from factory_layout.layout import (
    LayoutError, LayoutSession, session_to_dict,
    place_selection, add_custom_working_area, select_object, clear_selection,
    move_active_object, settle_active_object, rotate_active_object,
    delete_active_object, set_position_from_input, collect_placed_machines,
)


log = logging.getLogger("factory_layout.server")

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="Factory Layout")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Session state (persists across requests) ───────────────────────

_rules: LayoutRules = LAYOUT_RULES
_session = LayoutSession(_rules)
_session_lock = threading.Lock()


def configure(rules: LayoutRules) -> None:
    """Use *rules* for the current session and every later reset."""
    global _rules, _session
    with _session_lock:
        _rules = rules
        _session = LayoutSession(rules)
    log.info(
        "Serving a %.1f x %.1f m floor at %.0f px/m (extent: %s)",
        rules.floor_width_m, rules.floor_height_m,
        rules.pixels_per_meter, rules.extent_mode,
    )


def _respond(result: Any = None) -> dict:
    """Snapshot + notifications raised since the previous response."""
    return {
        "result": result,
        "layout": session_to_dict(_session),
        "notifications": [
            {"level": n.level, "message": n.message}
            for n in _session.drain_notifications()
        ],
    }


# ── Models ─────────────────────────────────────────────────────────

class MachineRecord(BaseModel):
    """A catalog or custom-dialog machine; unknown fields are carried through."""

    model_config = {"extra": "allow"}

    id: int | str | None = None
    machine_name: str | None = None
    type: str | None = None
    # Numeric fields stay untyped: the engine falls back to defaults for
    # unusable values, and the record is carried through unchanged.
    width_mm: Any = None
    length_mm: Any = None
    productivity_boards_min: Any = None
    productivity_boards_max: Any = None
    isCustom: bool | None = None


class WorkingAreaRequest(BaseModel):
    width_m: float = 4.0
    height_m: float = 3.0
    label: str = "Working Area"


class SelectRequest(BaseModel):
    id: str | None = None


class MoveRequest(BaseModel):
    center: tuple[float, float]


class PositionRequest(BaseModel):
    axis: Literal["x", "y"]
    value: float


class FloorRequest(BaseModel):
    width: float
    height: float
    in_display_units: bool = False


class UnitsRequest(BaseModel):
    use_meters: bool | None = None      # None toggles


class ViewAction(str, Enum):
    zoom_in = "zoom_in"
    zoom_out = "zoom_out"
    reset = "reset"


# ── Routes ─────────────────────────────────────────────────────────

@app.post("/api/reset")
def reset_session():
    """Start over with an empty floor plan."""
    global _session
    with _session_lock:
        _session = LayoutSession(_rules)
        return _respond()


@app.get("/api/layout")
def get_layout():
    with _session_lock:
        return _respond()


@app.get("/api/machines")
def get_machines():
    """Placed-machine records, as published to metrics and reports."""
    with _session_lock:
        return collect_placed_machines(_session)


@app.post("/api/machines")
def add_machine_route(req: MachineRecord):
    record = req.model_dump(exclude_none=True)
    with _session_lock:
        obj = place_selection(_session, record)
        return _respond({"id": obj.id})


@app.post("/api/working_areas")
def add_working_area_route(req: WorkingAreaRequest):
    with _session_lock:
        obj = add_custom_working_area(_session, req.width_m, req.height_m, req.label)
        return _respond({"id": obj.id})


@app.post("/api/select")
def select_route(req: SelectRequest):
    with _session_lock:
        if req.id is None:
            clear_selection(_session)
            return _respond()
        try:
            select_object(_session, req.id)
        except LayoutError as exc:
            raise HTTPException(404, str(exc)) from exc
        return _respond({"id": req.id})


@app.post("/api/active/move")
def move_route(req: MoveRequest):
    with _session_lock:
        update = move_active_object(_session, req.center)
        return _respond(_update_dict(update))


@app.post("/api/active/settle")
def settle_route():
    with _session_lock:
        settle_active_object(_session)
        return _respond()


@app.post("/api/active/rotate")
def rotate_route():
    with _session_lock:
        return _respond({"angle": rotate_active_object(_session)})


@app.delete("/api/active")
def delete_route():
    with _session_lock:
        obj = delete_active_object(_session)
        return _respond({"id": obj.id if obj is not None else None})


@app.post("/api/active/position")
def position_route(req: PositionRequest):
    with _session_lock:
        update = set_position_from_input(_session, req.axis, req.value)
        return _respond(_update_dict(update))


@app.post("/api/floor")
def floor_route(req: FloorRequest):
    with _session_lock:
        ok = _session.set_floor_dimensions(
            req.width, req.height, in_display_units=req.in_display_units,
        )
        return _respond({"ok": ok})


@app.post("/api/units")
def units_route(req: UnitsRequest):
    with _session_lock:
        if req.use_meters is None:
            _session.toggle_units()
        else:
            _session.set_units(req.use_meters)
        return _respond({"units": _session.unit_label})


@app.post("/api/view/{action}")
def view_route(action: ViewAction):
    with _session_lock:
        if action is ViewAction.zoom_in:
            _session.zoom_in()
        elif action is ViewAction.zoom_out:
            _session.zoom_out()
        else:
            _session.reset_view()
        return _respond({"zoom": _session.zoom})


def _update_dict(update) -> dict | None:
    if update is None:
        return None
    return {"x": update.x, "y": update.y, "was_clamped": update.was_clamped}


def main(host: str = "127.0.0.1", port: int = 8000, rules: LayoutRules | None = None):
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if rules is not None:
        configure(rules)
    uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
