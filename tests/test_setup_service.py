from __future__ import annotations

import pytest

from kuji.errors import ConfigurationError, ValidationError
from kuji.services.setup_service import BASIC_TIER_ID, SetupService


def _advanced(**overrides):
    form = {
        "mode": "advanced",
        "total_tickets": 80,
        "remaining_tickets": 60,
        "price_per_ticket": 300,
        "prizes": [
            {"name": "A Prize", "remaining_count": 1, "market_value": 2000},
            {"name": "B Prize", "remaining_count": 1, "market_value": 1500},
            {"name": "C Prize", "remaining_count": 2, "market_value": 800},
        ],
        "small_prize_value": 50,
        "last_one_value": 1200,
    }
    form.update(overrides)
    return form


def test_basic_mode_builds_single_valueless_tier():
    result = SetupService().build_settings({"mode": "basic", "total_tickets": 80, "remaining_tickets": 60, "basic_target_count": 5})

    settings = result.settings
    assert [(p.id, p.remaining_count, p.market_value) for p in settings.prizes] == [(BASIC_TIER_ID, 5, 0)]
    assert settings.price_per_ticket == 0
    assert settings.last_one_value == 0
    assert not settings.is_financial_mode
    assert result.adjustments == {}


def test_basic_mode_caps_target_at_remaining():
    result = SetupService().build_settings({"mode": "basic", "remaining_tickets": 3, "basic_target_count": 5})

    assert result.settings.prizes[0].remaining_count == 3
    assert result.adjustments == {"basic_target_count": {"requested": 5, "applied": 3}}


def test_advanced_mode_keeps_declared_values():
    settings = SetupService().build_settings(_advanced()).settings

    assert settings.is_financial_mode
    assert settings.remaining_tickets == 60
    assert settings.grand_count == 4
    assert settings.small_count == 56
    assert [p.id for p in settings.prizes] == ["1", "2", "3"]


def test_advanced_mode_clamps_remaining_up():
    result = SetupService().build_settings(_advanced(remaining_tickets=2))

    assert result.settings.remaining_tickets == 4
    assert result.adjustments == {"remaining_tickets": {"requested": 2, "applied": 4}}


def test_strict_setup_rejects_undersized_box():
    with pytest.raises(ConfigurationError):
        SetupService(strict=True).build_settings(_advanced(remaining_tickets=2))


def test_default_tier_names():
    form = _advanced(prizes=[{"remaining_count": 1}, {"remaining_count": 2, "name": ""}])

    settings = SetupService().build_settings(form).settings

    assert [p.name for p in settings.prizes] == ["A Prize", "B Prize"]
    assert [p.market_value for p in settings.prizes] == [0, 0]


def test_duplicate_tier_ids_rejected():
    form = _advanced(prizes=[{"id": "x", "remaining_count": 1}, {"id": "x", "remaining_count": 1}])

    with pytest.raises(ConfigurationError):
        SetupService().build_settings(form)


def test_unknown_mode_rejected():
    with pytest.raises(ValidationError):
        SetupService().build_settings({"mode": "expert", "remaining_tickets": 10})


def test_basic_target_defaults_to_five():
    result = SetupService().build_settings({"mode": "basic", "remaining_tickets": 60})

    assert result.settings.prizes[0].remaining_count == 5


def test_basic_target_zero_is_kept():
    result = SetupService().build_settings({"mode": "basic", "remaining_tickets": 60, "basic_target_count": 0})

    assert result.settings.prizes[0].remaining_count == 0
    assert result.adjustments == {}
