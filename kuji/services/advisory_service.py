"""Rule-based buy/hold advice computed from the current box state.

Everything here is a pure function of its arguments: no caching, no
incremental state. Callers recompute after every committed draw.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from kuji.models import PrizeTier

LAST_ONE_WINDOW = 15
STRIKING_RANGE_LOSS = -1000


class AdviceTier(str, Enum):
    SOLD_OUT = "sold_out"
    # simple mode
    EXTREMELY_HOT = "extremely_hot"
    GOOD_ODDS = "good_odds"
    AVERAGE = "average"
    LOW_ODDS = "low_odds"
    # financial mode
    GUARANTEED_PROFIT = "guaranteed_profit"
    STRIKING_RANGE = "striking_range"
    EXCELLENT = "excellent"
    GOOD = "good"
    CAUTION = "caution"
    POOR = "poor"


class AdviceTone(str, Enum):
    GOOD = "good"
    NEUTRAL = "neutral"
    BAD = "bad"


_TONES = {
    AdviceTier.EXTREMELY_HOT: AdviceTone.GOOD,
    AdviceTier.GUARANTEED_PROFIT: AdviceTone.GOOD,
    AdviceTier.EXCELLENT: AdviceTone.GOOD,
    AdviceTier.LOW_ODDS: AdviceTone.BAD,
    AdviceTier.POOR: AdviceTone.BAD,
}


@dataclass(frozen=True)
class BoxMetrics:
    remaining_tickets: int
    grand_count: int
    small_count: int
    probability: float
    prizes_value: float
    small_value: float
    total_box_value: float
    cost_to_clear: float
    profit_clearing: float
    single_draw_ev: float
    ev_ratio: float


@dataclass(frozen=True)
class Advice:
    tier: AdviceTier
    message: str
    tone: AdviceTone
    last_one_note: bool = False


def _money(value: float) -> str:
    # Halves round up (62.5 -> $63), not to even.
    whole = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${whole:,}"


def compute_metrics(
    remaining_tickets: int,
    price_per_ticket: float,
    prizes: Sequence[PrizeTier],
    small_prize_value: float,
    last_one_value: float,
) -> BoxMetrics:
    grand_count = sum(p.remaining_count for p in prizes)
    small_count = max(0, remaining_tickets - grand_count)

    prizes_value = sum(p.remaining_count * p.market_value for p in prizes)
    small_value = small_count * small_prize_value
    total_box_value = prizes_value + small_value + last_one_value
    cost_to_clear = remaining_tickets * price_per_ticket

    if remaining_tickets > 0:
        probability = grand_count / remaining_tickets * 100
        # Last One is only won on the final draw, so it is not part of per-draw EV.
        single_draw_ev = (prizes_value + small_value) / remaining_tickets
    else:
        probability = 0.0
        single_draw_ev = 0.0

    ev_ratio = single_draw_ev / price_per_ticket * 100 if price_per_ticket > 0 else 0.0

    return BoxMetrics(
        remaining_tickets=remaining_tickets,
        grand_count=grand_count,
        small_count=small_count,
        probability=probability,
        prizes_value=prizes_value,
        small_value=small_value,
        total_box_value=total_box_value,
        cost_to_clear=cost_to_clear,
        profit_clearing=total_box_value - cost_to_clear,
        single_draw_ev=single_draw_ev,
        ev_ratio=ev_ratio,
    )


def _simple_advice(m: BoxMetrics) -> Advice:
    p = m.probability
    header = (
        f"🎯 **Grand prize odds: {p:.1f}%**\n"
        f"({m.grand_count} grand prizes left / {m.remaining_tickets} tickets)\n\n"
    )

    if p >= 50:
        tier = AdviceTier.EXTREMELY_HOT
        body = "🔥 **Extremely hot box!**\nAbout one grand prize every two draws. Odds this high are worth going for."
    elif p >= 20:
        tier = AdviceTier.GOOD_ODDS
        body = "📈 **Good odds**\nGrand prizes are denser than usual. Worth trying your luck."
    elif p >= 10:
        tier = AdviceTier.AVERAGE
        body = "⚖️ **Average box**\nOdds are middling. Decide by how much you want the prizes."
    else:
        tier = AdviceTier.LOW_ODDS
        body = "📉 **Low odds**\nFew grand prizes are left. Consider waiting and letting others draw first."

    message = header + body
    last_one_note = m.remaining_tickets <= LAST_ONE_WINDOW
    if last_one_note:
        message += "\n\n💡 **Last One opportunity**\nOnly a few tickets are left. Consider buying out the box to take the Last One prize."

    return Advice(tier=tier, message=message, tone=_TONES.get(tier, AdviceTone.NEUTRAL), last_one_note=last_one_note)


def _financial_advice(m: BoxMetrics, price_per_ticket: float) -> Advice:
    ev = _money(m.single_draw_ev)
    ratio = f"{m.ev_ratio:.1f}%"

    if m.profit_clearing > 0:
        tier = AdviceTier.GUARANTEED_PROFIT
        message = (
            "🤑 **Guaranteed profit! Buy out the whole box!**\n"
            f"Clearing costs {_money(m.cost_to_clear)} but the box is worth {_money(m.total_box_value)}.\n"
            f"Buying it all nets {_money(m.profit_clearing)}. Clear it now."
        )
    elif m.profit_clearing > STRIKING_RANGE_LOSS and m.remaining_tickets <= LAST_ONE_WINDOW:
        tier = AdviceTier.STRIKING_RANGE
        message = (
            "🔥 **Within striking range!**\n"
            f"Clearing the box only loses {_money(abs(m.profit_clearing))}. "
            "If you love these prizes, consider buying out and taking the Last One.\n"
            f"Current single-draw return: {ratio}."
        )
    elif m.ev_ratio >= 120:
        tier = AdviceTier.EXCELLENT
        message = (
            "🌟 **Excellent box! Very high expected value**\n"
            f"Each draw is worth about {ev} on average, well above the {_money(price_per_ticket)} price.\n"
            "Drawing now has positive expectation."
        )
    elif m.ev_ratio >= 90:
        tier = AdviceTier.GOOD
        message = (
            "📈 **Good box**\n"
            f"Single-draw return is {ratio}; prize density or value is decent.\n"
            "If you like these prizes this is a reasonable time to draw."
        )
    elif m.ev_ratio >= 60:
        tier = AdviceTier.CAUTION
        message = (
            "⚖️ **Average box, proceed with caution**\n"
            f"Single-draw expected value {ev} ({ratio} return).\n"
            "Unless you really want a particular prize, consider waiting."
        )
    else:
        tier = AdviceTier.POOR
        message = (
            "📉 **Poor box (not recommended)**\n"
            f"Single-draw expected value is only {ev}; each draw loses about "
            f"{_money(price_per_ticket - m.single_draw_ev)} on average.\n"
            f"Clearing the box would lose about {_money(abs(m.profit_clearing))}.\n"
            "Keep your wallet closed and walk away."
        )

    return Advice(tier=tier, message=message, tone=_TONES.get(tier, AdviceTone.NEUTRAL))


def evaluate(
    remaining_tickets: int,
    price_per_ticket: float,
    prizes: Sequence[PrizeTier],
    small_prize_value: float,
    last_one_value: float,
) -> Advice:
    """Pick the advice tier for the given box state and render its message."""

    if remaining_tickets <= 0:
        return Advice(
            tier=AdviceTier.SOLD_OUT,
            message="The box is sold out. Congratulations on clearing it!",
            tone=AdviceTone.NEUTRAL,
        )

    metrics = compute_metrics(remaining_tickets, price_per_ticket, prizes, small_prize_value, last_one_value)
    if price_per_ticket == 0:
        return _simple_advice(metrics)
    return _financial_advice(metrics, price_per_ticket)


def advise(
    remaining_tickets: int,
    price_per_ticket: float,
    prizes: Sequence[PrizeTier],
    small_prize_value: float,
    last_one_value: float,
) -> str:
    return evaluate(remaining_tickets, price_per_ticket, prizes, small_prize_value, last_one_value).message
