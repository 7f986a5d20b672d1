from __future__ import annotations

import random

import pytest

from kuji import create_app
from kuji.models import LotterySettings, PrizeTier


@pytest.fixture()
def app():
    return create_app({"TESTING": True, "KUJI_RANDOM_SEED": 1234, "KUJI_STRICT_SETUP": False, "LOG_LEVEL": "WARNING"})


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture()
def box_settings() -> LotterySettings:
    return LotterySettings(
        total_tickets=80,
        remaining_tickets=20,
        price_per_ticket=300,
        prizes=(
            PrizeTier(id="1", name="A Prize", remaining_count=1, market_value=2000),
            PrizeTier(id="2", name="B Prize", remaining_count=1, market_value=1500),
            PrizeTier(id="3", name="C Prize", remaining_count=2, market_value=800),
        ),
        small_prize_value=50,
        last_one_value=1200,
    )
