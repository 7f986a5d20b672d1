"""Schemas for draws and session state."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from kuji.models import TicketType
from kuji.services.advisory_service import AdviceTier, AdviceTone


class DrawRequestSchema(Schema):
    count = fields.Integer(required=False, load_default=1, validate=validate.Range(min=1))

    # False skips the reveal step: the draw is committed immediately.
    reveal = fields.Boolean(required=False, load_default=True)


class TicketSchema(Schema):
    id = fields.String()
    name = fields.String()
    value = fields.Float()
    type = fields.Enum(TicketType, by_value=True)
    tier_id = fields.String(allow_none=True)


class TierStatusSchema(Schema):
    id = fields.String()
    name = fields.String()
    initial_count = fields.Integer()
    remaining_count = fields.Integer()
    market_value = fields.Float()
    remaining_value = fields.Float()
    percent_left = fields.Float()


class MetricsSchema(Schema):
    remaining_tickets = fields.Integer()
    grand_count = fields.Integer()
    small_count = fields.Integer()
    probability = fields.Float()
    prizes_value = fields.Float()
    small_value = fields.Float()
    total_box_value = fields.Float()
    cost_to_clear = fields.Float()
    profit_clearing = fields.Float()
    single_draw_ev = fields.Float()
    ev_ratio = fields.Float()


class AdviceSchema(Schema):
    tier = fields.Enum(AdviceTier, by_value=True)
    tone = fields.Enum(AdviceTone, by_value=True)
    message = fields.String()
    last_one_note = fields.Boolean()


class SettingsSchema(Schema):
    total_tickets = fields.Integer()
    remaining_tickets = fields.Integer()
    price_per_ticket = fields.Float()
    small_prize_value = fields.Float()
    last_one_value = fields.Float()
    is_financial_mode = fields.Boolean()


class SessionStateSchema(Schema):
    """Dashboard view of a session. Counters reflect committed draws only."""

    state = fields.String()
    is_drawing = fields.Boolean()
    remaining_tickets = fields.Integer()
    settings = fields.Nested(SettingsSchema)
    prizes = fields.List(fields.Nested(TierStatusSchema))
    metrics = fields.Nested(MetricsSchema)
    advice = fields.Nested(AdviceSchema)
    pending_count = fields.Integer()
    history_count = fields.Integer()
