"""Materialize a shuffled ticket pool from declared prize counts."""

from __future__ import annotations

import logging
import random
from collections import Counter

from kuji.errors import ConfigurationError
from kuji.models import LotterySettings, Pool, Ticket, TicketType

logger = logging.getLogger(__name__)

DEFAULT_SMALL_PRIZE_LABEL = "Small Prize"


def _check_tiers(settings: LotterySettings) -> None:
    duplicated = sorted(tid for tid, n in Counter(p.id for p in settings.prizes).items() if n > 1)
    if duplicated:
        raise ConfigurationError(
            message="Prize tier ids must be unique",
            details={"prizes": [f"Duplicate tier id: {tid}" for tid in duplicated]},
        )

    negative = [p.id for p in settings.prizes if p.remaining_count < 0]
    if negative:
        raise ConfigurationError(
            message="Prize counts must be >= 0",
            details={"prizes": [f"Negative remaining_count for tier {tid}" for tid in negative]},
        )


def build_pool(
    settings: LotterySettings,
    rng: random.Random | None = None,
    small_prize_label: str = DEFAULT_SMALL_PRIZE_LABEL,
) -> Pool:
    """Build the initial pool for a session.

    Emits one grand ticket per unit of each tier's ``remaining_count`` (in
    declared tier order), pads with small tickets up to ``remaining_tickets``
    and shuffles the result uniformly. Does not clamp: if the tiers need more
    tickets than ``remaining_tickets`` a ``ConfigurationError`` is raised.
    """

    _check_tiers(settings)
    rng = rng or random.Random()

    tickets: list[Ticket] = []
    for tier in settings.prizes:
        for i in range(tier.remaining_count):
            tickets.append(
                Ticket(
                    id=f"grand:{tier.id}:{i}",
                    name=tier.name,
                    value=tier.market_value,
                    type=TicketType.GRAND,
                    tier_id=tier.id,
                )
            )

    filler_count = settings.remaining_tickets - len(tickets)
    if filler_count < 0:
        raise ConfigurationError(
            message="remaining_tickets is smaller than the number of declared prizes",
            details={
                "remaining_tickets": settings.remaining_tickets,
                "declared_prizes": len(tickets),
            },
        )

    for i in range(filler_count):
        tickets.append(
            Ticket(
                id=f"small:{i}",
                name=small_prize_label,
                value=settings.small_prize_value,
                type=TicketType.SMALL,
            )
        )

    # random.shuffle is Fisher-Yates: every ordering is equally likely.
    rng.shuffle(tickets)

    logger.debug("Built pool: %d grand, %d small", len(tickets) - filler_count, filler_count)
    return tuple(tickets)
