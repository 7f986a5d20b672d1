"""Draw a kuji box until it is sold out, logging advice after every batch.

Usage:
  python scripts/simulate_box.py --remaining 60 --price 300 \
      --prize "A Prize:1:2000" --prize "B Prize:1:1500" --prize "C Prize:2:800" \
      --small-value 50 --last-one 1200 --batch 5 --seed 7

Options:
  --remaining N       tickets left in the box (required)
  --total N           total tickets in a full box (informational)
  --price X           price per draw; 0 = simple mode (default 0)
  --prize NAME:COUNT:VALUE   repeatable; VALUE optional
  --grand N           basic mode: number of grand prizes left (ignored with --prize)
  --small-value X     average value of a small prize
  --last-one X        Last One bonus value
  --batch N           tickets per draw (default 1)
  --seed N            shuffle seed
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence
from typing import Any

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from kuji.errors import AppError
from kuji.services.setup_service import SetupService
from kuji.services.simulation_service import SessionState, SimulationService


logger = logging.getLogger(__name__)


def _parse_prize(raw: str) -> dict[str, Any]:
    parts = raw.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Expected NAME:COUNT[:VALUE], got {raw!r}")
    try:
        count = int(parts[1])
        value = float(parts[2]) if len(parts) == 3 else 0.0
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid count/value in {raw!r}") from e
    return {"name": parts[0], "remaining_count": count, "market_value": value}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Simulate clearing a kuji box")
    p.add_argument("--remaining", type=int, required=True)
    p.add_argument("--total", type=int, default=80)
    p.add_argument("--price", type=float, default=0.0)
    p.add_argument("--prize", type=_parse_prize, action="append", default=[])
    p.add_argument("--grand", type=int, default=5)
    p.add_argument("--small-value", type=float, default=0.0)
    p.add_argument("--last-one", type=float, default=0.0)
    p.add_argument("--batch", type=int, default=1)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--strict", action="store_true", help="reject undersized --remaining instead of clamping")
    p.add_argument("--log-level", default="INFO")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    form = {
        "mode": "advanced" if args.prize or args.price > 0 else "basic",
        "total_tickets": args.total,
        "remaining_tickets": args.remaining,
        "basic_target_count": args.grand,
        "price_per_ticket": args.price,
        "prizes": args.prize,
        "small_prize_value": args.small_value,
        "last_one_value": args.last_one,
    }

    try:
        setup = SetupService(strict=args.strict).build_settings(form)
        for name, change in setup.adjustments.items():
            logger.warning("Adjusted %s: %s -> %s", name, change["requested"], change["applied"])

        service = SimulationService(seed=args.seed)
        session = service.start(setup.settings)
        logger.info("Opening advice:\n%s", session.advice().message)

        while service.state is SessionState.SIMULATING:
            n = min(max(1, args.batch), session.remaining_tickets)
            service.draw(n, reveal=True)
            batch = service.commit()
            logger.info(
                "Drew: %s | %d left",
                ", ".join(t.name for t in batch),
                session.remaining_tickets,
            )
            logger.info("Advice:\n%s", session.advice().message)
    except AppError as e:
        logger.error("%s: %s %s", e.code, e.message, e.details or "")
        return 2

    grand = [t for t in session.history if t.is_grand]
    logger.info(
        "Box cleared: %d tickets drawn, %d grand prizes (%s)",
        len(session.history),
        len(grand),
        ", ".join(t.name for t in reversed(grand)) or "none",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
