"""Draw tickets from the front of a pre-shuffled pool."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from kuji.errors import DrawUnderflowError, ValidationError
from kuji.models import Pool, PrizeTier, Ticket


@dataclass(frozen=True)
class DrawOutcome:
    batch: tuple[Ticket, ...]
    pool: Pool
    tiers: tuple[PrizeTier, ...]

    @property
    def grand_drawn(self) -> int:
        return sum(1 for t in self.batch if t.is_grand)


def draw(pool: Pool, tiers: Sequence[PrizeTier], n: int) -> DrawOutcome:
    """Take the first ``n`` tickets off ``pool``.

    The pool was shuffled once at build time, so the front ``n`` is a
    uniform draw without replacement. Inputs are not mutated; the new pool
    and tier counts are returned alongside the batch (in pool order).
    """

    if n < 1:
        raise ValidationError(message="Invalid count", details={"count": ["Must be >= 1"]})
    if n > len(pool):
        raise DrawUnderflowError(requested=n, available=len(pool))

    batch = tuple(pool[:n])
    drawn_per_tier = Counter(t.tier_id for t in batch if t.is_grand)

    new_tiers = tuple(
        tier.with_count(tier.remaining_count - drawn_per_tier[tier.id]) if tier.id in drawn_per_tier else tier
        for tier in tiers
    )

    return DrawOutcome(batch=batch, pool=tuple(pool[n:]), tiers=new_tiers)
