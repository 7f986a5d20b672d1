"""Lottery session settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from kuji.models.prize import PrizeTier


@dataclass(frozen=True)
class LotterySettings:
    """Declared configuration of one lottery box.

    ``price_per_ticket == 0`` means simple mode (odds only, no financial
    metrics). ``total_tickets`` is informational; the pool is sized from
    ``remaining_tickets``.
    """

    total_tickets: int
    remaining_tickets: int
    price_per_ticket: float = 0
    prizes: tuple[PrizeTier, ...] = field(default_factory=tuple)
    small_prize_value: float = 0
    last_one_value: float = 0

    @property
    def is_financial_mode(self) -> bool:
        return self.price_per_ticket > 0

    @property
    def grand_count(self) -> int:
        return sum(p.remaining_count for p in self.prizes)

    @property
    def small_count(self) -> int:
        return max(0, self.remaining_tickets - self.grand_count)
