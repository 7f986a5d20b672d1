from __future__ import annotations

import pytest

from kuji.models import PrizeTier
from kuji.services.advisory_service import AdviceTier, AdviceTone, advise, compute_metrics, evaluate


def _tiers(*rows: tuple[int, float]) -> list[PrizeTier]:
    return [
        PrizeTier(id=str(i), name=f"{chr(65 + i)} Prize", remaining_count=count, market_value=value)
        for i, (count, value) in enumerate(rows)
    ]


def test_sold_out():
    advice = evaluate(0, 300, _tiers((1, 2000)), 50, 1200)

    assert advice.tier is AdviceTier.SOLD_OUT
    assert advice.tone is AdviceTone.NEUTRAL
    assert "sold out" in advice.message


def test_simple_mode_quarter_odds():
    advice = evaluate(4, 0, _tiers((1, 2000)), 50, 0)

    assert advice.tier is AdviceTier.GOOD_ODDS
    assert "25.0%" in advice.message
    assert advice.last_one_note is True
    assert "Last One" in advice.message


@pytest.mark.parametrize(
    ("grand", "tier", "tone"),
    [
        (10, AdviceTier.EXTREMELY_HOT, AdviceTone.GOOD),
        (4, AdviceTier.GOOD_ODDS, AdviceTone.NEUTRAL),
        (2, AdviceTier.AVERAGE, AdviceTone.NEUTRAL),
        (1, AdviceTier.LOW_ODDS, AdviceTone.BAD),
        (0, AdviceTier.LOW_ODDS, AdviceTone.BAD),
    ],
)
def test_simple_mode_thresholds(grand, tier, tone):
    advice = evaluate(20, 0, _tiers((grand, 0)), 0, 0)

    assert advice.tier is tier
    assert advice.tone is tone
    assert advice.last_one_note is False


def test_last_one_note_boundary():
    assert evaluate(15, 0, _tiers((1, 0)), 0, 0).last_one_note is True
    assert evaluate(16, 0, _tiers((1, 0)), 0, 0).last_one_note is False


def test_financial_guaranteed_profit():
    advice = evaluate(1, 100, _tiers((1, 2000)), 0, 0)

    assert advice.tier is AdviceTier.GUARANTEED_PROFIT
    assert advice.tone is AdviceTone.GOOD
    assert "$1,900" in advice.message
    assert "$100" in advice.message


def test_financial_striking_range():
    # 2000 + 9 * 50 = 2450 in the box, 3000 to clear
    advice = evaluate(10, 300, _tiers((1, 2000)), 50, 0)

    assert advice.tier is AdviceTier.STRIKING_RANGE
    assert "$550" in advice.message


def test_striking_range_needs_few_tickets():
    # same loss, but too many tickets left
    advice = evaluate(20, 100, _tiers((1, 1500)), 0, 0)

    assert advice.tier is not AdviceTier.STRIKING_RANGE


@pytest.mark.parametrize(
    ("count", "value", "tier"),
    [
        (19, 500, AdviceTier.GOOD),
        (7, 1000, AdviceTier.CAUTION),
        (1, 2000, AdviceTier.POOR),
    ],
)
def test_financial_ev_tiers(count, value, tier):
    advice = evaluate(100, 100, _tiers((count, value)), 0, 0)

    assert advice.tier is tier


def test_poor_box_message_figures():
    advice = evaluate(100, 100, _tiers((1, 2000)), 0, 0)

    assert advice.tone is AdviceTone.BAD
    assert "$20" in advice.message
    assert "$80" in advice.message
    assert "$8,000" in advice.message


def test_last_one_is_not_part_of_single_draw_ev():
    metrics = compute_metrics(10, 100, _tiers((1, 1000)), 0, 5000)

    assert metrics.single_draw_ev == 100
    assert metrics.ev_ratio == 100
    assert metrics.total_box_value == 6000
    assert metrics.profit_clearing == 5000


def test_metrics_clamp_small_count():
    metrics = compute_metrics(2, 100, _tiers((3, 10)), 50, 0)

    assert metrics.small_count == 0
    assert metrics.small_value == 0


def test_metrics_for_empty_box():
    metrics = compute_metrics(0, 100, _tiers((0, 10)), 50, 300)

    assert metrics.probability == 0
    assert metrics.single_draw_ev == 0
    assert metrics.cost_to_clear == 0
    assert metrics.profit_clearing == 300


def test_simple_mode_has_no_ev_ratio():
    assert compute_metrics(10, 0, _tiers((2, 500)), 0, 0).ev_ratio == 0


def test_advise_is_pure():
    args = (37, 300, _tiers((1, 2000), (2, 800)), 50, 1200)

    assert advise(*args) == advise(*args) == evaluate(*args).message


@pytest.mark.parametrize(
    ("count", "value", "tier"),
    [
        # exactly 100% with no Last One: clearing breaks even, so not a guaranteed profit
        (10, 1000, AdviceTier.GOOD),
        (9, 1000, AdviceTier.GOOD),
        (6, 1000, AdviceTier.CAUTION),
        (1, 5900, AdviceTier.POOR),
    ],
)
def test_financial_ev_band_edges(count, value, tier):
    assert evaluate(100, 100, _tiers((count, value)), 0, 0).tier is tier


@pytest.mark.parametrize(
    ("value", "tier"),
    [
        (2000, AdviceTier.CAUTION),
        (2001, AdviceTier.STRIKING_RANGE),
    ],
)
def test_striking_range_loss_edge(value, tier):
    # 10 tickets at 300: clearing costs 3000, so a 2000 box loses exactly 1000
    assert evaluate(10, 300, _tiers((1, value)), 0, 0).tier is tier


def test_money_rounds_halves_up():
    # single-draw EV is 62.5
    advice = evaluate(20, 100, _tiers((1, 1250)), 0, 0)

    assert advice.tier is AdviceTier.CAUTION
    assert "$63 (62.5% return)" in advice.message
