"""Ticket model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TicketType(str, Enum):
    GRAND = "grand"
    SMALL = "small"


@dataclass(frozen=True)
class Ticket:
    """One physical ticket in the box.

    Grand tickets carry the id of the tier they were built from; small
    (filler) tickets have ``tier_id=None``.
    """

    id: str
    name: str
    value: float
    type: TicketType
    tier_id: str | None = None

    @property
    def is_grand(self) -> bool:
        return self.type is TicketType.GRAND


# Front of the tuple is the next ticket to be drawn.
Pool = tuple[Ticket, ...]
