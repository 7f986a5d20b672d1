"""Stateless advice route."""

from __future__ import annotations

from flask import Blueprint, request

from kuji.models import PrizeTier
from kuji.schemas.setup import AdviceRequestSchema
from kuji.schemas.simulation import AdviceSchema, MetricsSchema
from kuji.services import advisory_service
from kuji.utils.responses import ok

advice_bp = Blueprint("advice", __name__)

_request_schema = AdviceRequestSchema()
_advice_schema = AdviceSchema()
_metrics_schema = MetricsSchema()


@advice_bp.post("/advice")
def get_advice():
    """Advice for an arbitrary box state, without starting a session."""

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    prizes = [
        PrizeTier(
            id=str(p.get("id") or i + 1),
            name=str(p.get("name") or ""),
            remaining_count=int(p["remaining_count"]),
            market_value=float(p.get("market_value") or 0),
        )
        for i, p in enumerate(data["prizes"])
    ]
    args = (
        int(data["remaining_tickets"]),
        float(data["price_per_ticket"]),
        prizes,
        float(data["small_prize_value"]),
        float(data["last_one_value"]),
    )

    return ok(
        {
            "advice": _advice_schema.dump(advisory_service.evaluate(*args)),
            "metrics": _metrics_schema.dump(advisory_service.compute_metrics(*args)),
        }
    )
