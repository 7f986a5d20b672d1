"""Simulation routes (controllers). No business logic here."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from kuji.schemas.setup import SetupRequestSchema
from kuji.schemas.simulation import DrawRequestSchema, SessionStateSchema, TicketSchema
from kuji.services.simulation_service import SessionState, SimulationSession
from kuji.store import get_setup_service, get_simulation_service
from kuji.utils.responses import ok

simulation_bp = Blueprint("simulation", __name__, url_prefix="/simulation")

_setup_schema = SetupRequestSchema()
_draw_schema = DrawRequestSchema()
_state_schema = SessionStateSchema()
_tickets_schema = TicketSchema(many=True)


def _state_view(session: SimulationSession) -> dict[str, Any]:
    return _state_schema.dump(
        {
            "state": session.state.value,
            "is_drawing": session.is_drawing,
            "remaining_tickets": session.remaining_tickets,
            "settings": session.settings,
            "prizes": session.tier_status(),
            "metrics": session.metrics(),
            "advice": session.advice(),
            "pending_count": len(session.pending_batch),
            "history_count": len(session.history),
        }
    )


@simulation_bp.post("")
def start_simulation():
    payload = request.get_json(silent=True) or {}
    data = _setup_schema.load(payload)

    result = get_setup_service().build_settings(data)
    session = get_simulation_service().start(result.settings)

    return ok({**_state_view(session), "adjustments": result.adjustments}, status_code=201)


@simulation_bp.get("")
def get_simulation():
    service = get_simulation_service()
    if service.state is SessionState.SETUP:
        return ok({"state": SessionState.SETUP.value})
    return ok(_state_view(service.current()))


@simulation_bp.delete("")
def reset_simulation():
    service = get_simulation_service()
    service.reset()
    return ok({"state": service.state.value})


@simulation_bp.post("/draw")
def draw_tickets():
    payload = request.get_json(silent=True) or {}
    data = _draw_schema.load(payload)

    service = get_simulation_service()
    outcome = service.draw(int(data["count"]), reveal=bool(data["reveal"]))
    session = service.current()

    return ok(
        {
            "batch": _tickets_schema.dump(outcome.batch),
            "pending": session.is_drawing,
            "simulation": _state_view(session),
        }
    )


@simulation_bp.post("/commit")
def commit_draw():
    service = get_simulation_service()
    batch = service.commit()

    return ok(
        {
            "batch": _tickets_schema.dump(batch),
            "simulation": _state_view(service.current()),
        }
    )


@simulation_bp.get("/pool")
def get_pool():
    session = get_simulation_service().current()
    return ok({"remaining_tickets": session.remaining_tickets, "tickets": _tickets_schema.dump(session.pool)})


@simulation_bp.get("/history")
def get_history():
    session = get_simulation_service().current()
    return ok({"count": len(session.history), "tickets": _tickets_schema.dump(session.history)})
