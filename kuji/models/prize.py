"""Prize tier model."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PrizeTier:
    """A named grand prize category and how many of it are left in the box."""

    id: str
    name: str
    remaining_count: int
    market_value: float = 0

    @property
    def remaining_value(self) -> float:
        return self.remaining_count * self.market_value

    def with_count(self, remaining_count: int) -> PrizeTier:
        # Counts never go below zero.
        return replace(self, remaining_count=max(0, int(remaining_count)))
