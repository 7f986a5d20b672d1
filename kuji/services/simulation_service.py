"""Simulation session lifecycle: setup, two-phase draws, reset."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from threading import Lock

from kuji.errors import ConflictError, NotFoundError, ReentrantDrawError
from kuji.models import LotterySettings, Pool, PrizeTier, Ticket
from kuji.services import advisory_service
from kuji.services.advisory_service import Advice, BoxMetrics
from kuji.services.draw_engine import DrawOutcome, draw
from kuji.services.pool_builder import DEFAULT_SMALL_PRIZE_LABEL, build_pool

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    SETUP = "setup"
    SIMULATING = "simulating"
    SOLD_OUT = "sold_out"


@dataclass(frozen=True)
class TierStatus:
    id: str
    name: str
    initial_count: int
    remaining_count: int
    market_value: float
    remaining_value: float
    percent_left: float


class SimulationSession:
    """One box being drawn.

    ``draw`` resolves the outcome immediately but, when revealed, holds it as
    pending until ``commit``. Until then every aggregate (pool, tiers,
    metrics, advice) reports the pre-draw state and further draws are
    refused.
    """

    def __init__(
        self,
        settings: LotterySettings,
        rng: random.Random | None = None,
        small_prize_label: str = DEFAULT_SMALL_PRIZE_LABEL,
    ) -> None:
        self.settings = settings
        self._pool: Pool = build_pool(settings, rng=rng, small_prize_label=small_prize_label)
        self._tiers: tuple[PrizeTier, ...] = tuple(settings.prizes)
        self._history: list[Ticket] = []
        self._pending: DrawOutcome | None = None

    @property
    def pool(self) -> Pool:
        return self._pool

    @property
    def tiers(self) -> tuple[PrizeTier, ...]:
        return self._tiers

    @property
    def history(self) -> tuple[Ticket, ...]:
        return tuple(self._history)

    @property
    def remaining_tickets(self) -> int:
        return len(self._pool)

    @property
    def is_drawing(self) -> bool:
        return self._pending is not None

    @property
    def pending_batch(self) -> tuple[Ticket, ...]:
        return self._pending.batch if self._pending is not None else ()

    @property
    def state(self) -> SessionState:
        if not self._pool and self._pending is None:
            return SessionState.SOLD_OUT
        return SessionState.SIMULATING

    def draw(self, n: int, reveal: bool = True) -> DrawOutcome:
        if self._pending is not None:
            raise ReentrantDrawError()

        outcome = draw(self._pool, self._tiers, n)
        logger.info(
            "Drew %d ticket(s), %d grand; %d left after commit",
            len(outcome.batch),
            outcome.grand_drawn,
            len(outcome.pool),
        )

        if reveal:
            self._pending = outcome
        else:
            self._apply(outcome)
        return outcome

    def commit(self) -> tuple[Ticket, ...]:
        if self._pending is None:
            raise ConflictError(message="No draw is waiting to be committed")

        outcome = self._pending
        self._apply(outcome)
        logger.info("Committed %d ticket(s); %d left", len(outcome.batch), len(self._pool))
        return outcome.batch

    def _apply(self, outcome: DrawOutcome) -> None:
        self._pool = outcome.pool
        self._tiers = outcome.tiers
        # History is most-recent-first, so the batch goes in reversed.
        self._history[:0] = reversed(outcome.batch)
        self._pending = None

    def metrics(self) -> BoxMetrics:
        s = self.settings
        return advisory_service.compute_metrics(
            self.remaining_tickets, s.price_per_ticket, self._tiers, s.small_prize_value, s.last_one_value
        )

    def advice(self) -> Advice:
        s = self.settings
        return advisory_service.evaluate(
            self.remaining_tickets, s.price_per_ticket, self._tiers, s.small_prize_value, s.last_one_value
        )

    def tier_status(self) -> list[TierStatus]:
        initial = {p.id: p.remaining_count for p in self.settings.prizes}
        out: list[TierStatus] = []
        for tier in self._tiers:
            start = initial.get(tier.id, 0)
            out.append(
                TierStatus(
                    id=tier.id,
                    name=tier.name,
                    initial_count=start,
                    remaining_count=tier.remaining_count,
                    market_value=tier.market_value,
                    remaining_value=tier.remaining_value,
                    percent_left=(tier.remaining_count / start * 100) if start > 0 else 0.0,
                )
            )
        return out


class SimulationService:
    """Owns the single active session (if any).

    The RNG is created once per service so a fixed ``seed`` makes the whole
    sequence of sessions reproducible.
    """

    def __init__(
        self,
        seed: int | None = None,
        small_prize_label: str = DEFAULT_SMALL_PRIZE_LABEL,
    ) -> None:
        self._rng = random.Random(seed)
        self._small_prize_label = small_prize_label
        self._lock = Lock()
        self._session: SimulationSession | None = None

    @property
    def state(self) -> SessionState:
        if self._session is None:
            return SessionState.SETUP
        return self._session.state

    def start(self, settings: LotterySettings) -> SimulationSession:
        with self._lock:
            if self._session is not None:
                raise ConflictError(message="A simulation is already running; reset it first")

            self._session = SimulationSession(settings, rng=self._rng, small_prize_label=self._small_prize_label)
            logger.info(
                "Started simulation: %d tickets, %d grand, price %s",
                settings.remaining_tickets,
                settings.grand_count,
                settings.price_per_ticket,
            )
            return self._session

    def current(self) -> SimulationSession:
        session = self._session
        if session is None:
            raise NotFoundError(message="No simulation is running")
        return session

    def draw(self, n: int, reveal: bool = True) -> DrawOutcome:
        with self._lock:
            return self.current().draw(n, reveal=reveal)

    def commit(self) -> tuple[Ticket, ...]:
        with self._lock:
            return self.current().commit()

    def reset(self) -> None:
        with self._lock:
            if self._session is not None:
                logger.info("Reset simulation with %d ticket(s) left", self._session.remaining_tickets)
            self._session = None
