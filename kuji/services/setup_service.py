"""Turn submitted setup form data into LotterySettings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kuji.errors import ConfigurationError, ValidationError
from kuji.models import LotterySettings, PrizeTier

logger = logging.getLogger(__name__)

BASIC_TIER_ID = "basic-target"
BASIC_TIER_NAME = "Grand Prize"
DEFAULT_BASIC_TARGET = 5


@dataclass(frozen=True)
class SetupResult:
    settings: LotterySettings
    # field -> {"requested": ..., "applied": ...} for every auto-corrected value
    adjustments: dict[str, dict[str, Any]] = field(default_factory=dict)


def _default_tier_name(index: int) -> str:
    return f"{chr(ord('A') + index)} Prize" if index < 26 else f"Prize {index + 1}"


class SetupService:
    """Setup use-cases.

    Basic mode only knows how many grand prizes are left, so it produces a
    single valueless tier and forces simple mode. Advanced mode takes the
    full tier list and prices; an undersized ``remaining_tickets`` is clamped
    up to the declared prize count unless ``strict`` is set.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def build_settings(self, data: dict[str, Any]) -> SetupResult:
        mode = str(data.get("mode") or "basic").lower()
        if mode == "basic":
            return self._basic(data)
        if mode == "advanced":
            return self._advanced(data)
        raise ValidationError(message="Invalid mode", details={"mode": ["Must be one of basic|advanced"]})

    def _basic(self, data: dict[str, Any]) -> SetupResult:
        remaining = int(data["remaining_tickets"])
        raw_target = data.get("basic_target_count", DEFAULT_BASIC_TARGET)
        requested_target = int(raw_target if raw_target is not None else DEFAULT_BASIC_TARGET)
        target = min(requested_target, remaining)

        adjustments: dict[str, dict[str, Any]] = {}
        if target != requested_target:
            adjustments["basic_target_count"] = {"requested": requested_target, "applied": target}
            logger.info("Grand prize count %d exceeds remaining tickets; using %d", requested_target, target)

        settings = LotterySettings(
            total_tickets=int(data.get("total_tickets") or 0),
            remaining_tickets=remaining,
            price_per_ticket=0,
            prizes=(PrizeTier(id=BASIC_TIER_ID, name=BASIC_TIER_NAME, remaining_count=target, market_value=0),),
            small_prize_value=0,
            last_one_value=0,
        )
        return SetupResult(settings=settings, adjustments=adjustments)

    def _advanced(self, data: dict[str, Any]) -> SetupResult:
        prizes = tuple(
            PrizeTier(
                id=str(raw.get("id") or i + 1),
                name=str(raw.get("name") or _default_tier_name(i)),
                remaining_count=int(raw.get("remaining_count") or 0),
                market_value=float(raw.get("market_value") or 0),
            )
            for i, raw in enumerate(data.get("prizes") or [])
        )

        ids = [p.id for p in prizes]
        if len(ids) != len(set(ids)):
            raise ConfigurationError(message="Prize tier ids must be unique", details={"prizes": ["Duplicate tier id"]})

        remaining = int(data["remaining_tickets"])
        required = sum(p.remaining_count for p in prizes)

        adjustments: dict[str, dict[str, Any]] = {}
        if remaining < required:
            if self._strict:
                raise ConfigurationError(
                    message="remaining_tickets is smaller than the number of declared prizes",
                    details={"remaining_tickets": remaining, "declared_prizes": required},
                )
            logger.info("Clamping remaining_tickets from %d up to %d", remaining, required)
            adjustments["remaining_tickets"] = {"requested": remaining, "applied": required}
            remaining = required

        settings = LotterySettings(
            total_tickets=int(data.get("total_tickets") or 0),
            remaining_tickets=remaining,
            price_per_ticket=float(data.get("price_per_ticket") or 0),
            prizes=prizes,
            small_prize_value=float(data.get("small_prize_value") or 0),
            last_one_value=float(data.get("last_one_value") or 0),
        )
        return SetupResult(settings=settings, adjustments=adjustments)
