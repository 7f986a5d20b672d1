from __future__ import annotations

import random
from collections import Counter

import pytest

from kuji.errors import ConfigurationError
from kuji.models import LotterySettings, PrizeTier, TicketType
from kuji.services.pool_builder import build_pool


def test_pool_matches_declared_counts(box_settings, rng):
    pool = build_pool(box_settings, rng=rng)

    assert len(pool) == box_settings.remaining_tickets
    assert Counter(t.tier_id for t in pool) == {"1": 1, "2": 1, "3": 2, None: 16}
    assert Counter(t.type for t in pool) == {TicketType.GRAND: 4, TicketType.SMALL: 16}
    assert len({t.id for t in pool}) == len(pool)


def test_grand_tickets_carry_tier_name_and_value(box_settings, rng):
    pool = build_pool(box_settings, rng=rng)
    by_tier = {p.id: p for p in box_settings.prizes}

    for ticket in pool:
        if ticket.is_grand:
            tier = by_tier[ticket.tier_id]
            assert ticket.name == tier.name
            assert ticket.value == tier.market_value
        else:
            assert ticket.value == box_settings.small_prize_value
            assert ticket.tier_id is None


def test_four_ticket_box(rng):
    settings = LotterySettings(
        total_tickets=80,
        remaining_tickets=4,
        prizes=(PrizeTier(id="a", name="A", remaining_count=1, market_value=2000),),
        small_prize_value=50,
    )

    pool = build_pool(settings, rng=rng)

    assert len(pool) == 4
    grand = [t for t in pool if t.is_grand]
    assert [(t.name, t.value) for t in grand] == [("A", 2000)]
    assert sorted(t.value for t in pool if not t.is_grand) == [50, 50, 50]


def test_small_prize_label_is_configurable(rng):
    settings = LotterySettings(total_tickets=3, remaining_tickets=3)

    pool = build_pool(settings, rng=rng, small_prize_label="Rubber strap")

    assert {t.name for t in pool} == {"Rubber strap"}


def test_empty_box_builds_empty_pool():
    assert build_pool(LotterySettings(total_tickets=80, remaining_tickets=0)) == ()


def test_undersized_box_is_rejected_not_clamped():
    settings = LotterySettings(
        total_tickets=10,
        remaining_tickets=2,
        prizes=(PrizeTier(id="a", name="A", remaining_count=3),),
    )

    with pytest.raises(ConfigurationError) as excinfo:
        build_pool(settings)

    assert excinfo.value.details == {"remaining_tickets": 2, "declared_prizes": 3}


def test_duplicate_tier_ids_are_rejected():
    settings = LotterySettings(
        total_tickets=10,
        remaining_tickets=10,
        prizes=(
            PrizeTier(id="a", name="A", remaining_count=1),
            PrizeTier(id="a", name="B", remaining_count=1),
        ),
    )

    with pytest.raises(ConfigurationError):
        build_pool(settings)


def test_same_seed_gives_same_order(box_settings):
    first = build_pool(box_settings, rng=random.Random(7))
    second = build_pool(box_settings, rng=random.Random(7))

    assert [t.id for t in first] == [t.id for t in second]


def test_shuffle_is_close_to_uniform():
    settings = LotterySettings(
        total_tickets=4,
        remaining_tickets=4,
        prizes=(
            PrizeTier(id="a", name="A", remaining_count=1),
            PrizeTier(id="b", name="B", remaining_count=1),
        ),
    )
    rng = random.Random(2024)
    trials = 4000
    positions: dict[str, Counter] = {"grand:a:0": Counter(), "grand:b:0": Counter(), "small:0": Counter(), "small:1": Counter()}

    for _ in range(trials):
        for index, ticket in enumerate(build_pool(settings, rng=rng)):
            positions[ticket.id][index] += 1

    expected = trials / 4
    for counts in positions.values():
        for index in range(4):
            assert abs(counts[index] - expected) < expected * 0.15


def test_tier_named_like_filler_keeps_ids_unique(rng):
    settings = LotterySettings(
        total_tickets=4,
        remaining_tickets=4,
        prizes=(PrizeTier(id="small", name="Small figure", remaining_count=2),),
    )

    pool = build_pool(settings, rng=rng)

    assert len({t.id for t in pool}) == 4
    assert sorted(t.id for t in pool if t.is_grand) == ["grand:small:0", "grand:small:1"]
