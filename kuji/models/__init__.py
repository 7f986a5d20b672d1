"""Domain models."""

from kuji.models.prize import PrizeTier
from kuji.models.settings import LotterySettings
from kuji.models.ticket import Pool, Ticket, TicketType

__all__ = ["LotterySettings", "Pool", "PrizeTier", "Ticket", "TicketType"]
