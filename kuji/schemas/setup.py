"""Schemas for session setup and stateless advice requests."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from kuji.services.setup_service import DEFAULT_BASIC_TARGET


class PrizeTierInputSchema(Schema):
    id = fields.String(required=False, load_default=None)
    name = fields.String(required=False, load_default=None, validate=validate.Length(max=100))
    remaining_count = fields.Integer(required=True, validate=validate.Range(min=0))
    market_value = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))


def _check_unique_ids(prizes: list[dict] | None) -> None:
    ids = [p["id"] for p in (prizes or []) if p.get("id")]
    if len(ids) != len(set(ids)):
        raise ValidationError({"prizes": ["Tier ids must be unique"]})


class SetupRequestSchema(Schema):
    mode = fields.String(
        required=False,
        load_default="basic",
        validate=validate.OneOf(["basic", "advanced"]),
    )

    total_tickets = fields.Integer(required=False, load_default=80, validate=validate.Range(min=0))
    remaining_tickets = fields.Integer(required=True, validate=validate.Range(min=0))

    # basic mode
    basic_target_count = fields.Integer(required=False, load_default=DEFAULT_BASIC_TARGET, validate=validate.Range(min=0))

    # advanced mode
    price_per_ticket = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))
    prizes = fields.List(fields.Nested(PrizeTierInputSchema), required=False, load_default=list)
    small_prize_value = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))
    last_one_value = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))

    @validates_schema
    def _validate_prizes(self, data, **kwargs):  # type: ignore[no-untyped-def]
        _check_unique_ids(data.get("prizes"))


class AdviceRequestSchema(Schema):
    remaining_tickets = fields.Integer(required=True, validate=validate.Range(min=0))
    price_per_ticket = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))
    prizes = fields.List(fields.Nested(PrizeTierInputSchema), required=False, load_default=list)
    small_prize_value = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))
    last_one_value = fields.Float(required=False, load_default=0, validate=validate.Range(min=0))

    @validates_schema
    def _validate_prizes(self, data, **kwargs):  # type: ignore[no-untyped-def]
        _check_unique_ids(data.get("prizes"))
