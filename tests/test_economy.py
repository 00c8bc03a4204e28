"""Tests for economy module."""
import math

import pytest

from idleclicker.achievement import AchievementDef
from idleclicker.defaults import define_economy
from idleclicker.definition import EconomyConfig, EconomyDefinition
from idleclicker.economy import Economy
from idleclicker.requirement import Req
from idleclicker.upgrade import UpgradeDef


def _make_economy() -> Economy:
    return Economy(
        EconomyDefinition(
            config=EconomyConfig(
                name="Test",
                base_rate=1.0,
                prestige_base=1.5,
                prestige_threshold=1_000_000,
                prestige_unit=1_000_000,
            ),
            upgrades=[
                UpgradeDef("miner", base_cost=10, growth_factor=1.15, per_level_yield=0.5),
                UpgradeDef("pickaxe", base_cost=50, growth_factor=2, per_level_yield=2),
            ],
            achievements=[
                AchievementDef("a", trigger=Req.clicks(">=", 1), bonus=1.1),
                AchievementDef("b", trigger=Req.clicks(">=", 2), bonus=1.2),
            ],
        )
    )


def test_invalid_definition_rejected():
    defn = EconomyDefinition(upgrades=[UpgradeDef("miner", 10, 1.0, 0.5)])
    with pytest.raises(ValueError, match="Invalid EconomyDefinition"):
        Economy(defn)


def test_upgrade_cost():
    eco = _make_economy()
    assert eco.upgrade_cost("pickaxe", 0) == 50
    assert eco.upgrade_cost("pickaxe", 1) == 100
    assert eco.upgrade_cost("pickaxe", 4) == 800
    assert eco.upgrade_cost("miner", 1) == pytest.approx(11.5)


def test_upgrade_cost_unknown_kind():
    with pytest.raises(KeyError):
        _make_economy().upgrade_cost("nope", 0)


def test_cost_strictly_increases_for_default_table():
    eco = Economy(define_economy())
    for kind in eco.definition.upgrade_ids:
        costs = [eco.upgrade_cost(kind, n) for n in range(40)]
        assert all(b > a for a, b in zip(costs, costs[1:])), kind


def test_cost_never_negative():
    eco = _make_economy()
    assert eco.upgrade_cost("pickaxe", -3) == 50


def test_cost_table():
    eco = _make_economy()
    assert eco.cost_table("pickaxe", range(3)) == [(0, 50), (1, 100), (2, 200)]


def test_base_rate_only():
    eco = _make_economy()
    assert eco.production_rate({}, 0, set()) == pytest.approx(1.0)


def test_rate_sums_levels():
    eco = _make_economy()
    rate = eco.production_rate({"miner": 4, "pickaxe": 3}, 0, set())
    assert rate == pytest.approx(1.0 + 4 * 0.5 + 3 * 2)


def test_prestige_multiplier_is_exponential():
    eco = _make_economy()
    assert eco.prestige_multiplier(0) == 1.0
    assert eco.prestige_multiplier(1) == pytest.approx(1.5)
    assert eco.prestige_multiplier(2) == pytest.approx(2.25)
    assert eco.prestige_multiplier(3) == pytest.approx(3.375)


def test_rate_with_prestige_and_achievements():
    eco = _make_economy()
    rate = eco.production_rate({"pickaxe": 2}, 2, {"a", "b"})
    assert rate == pytest.approx(5.0 * 2.25 * 1.1 * 1.2)


def test_unknown_achievement_has_no_bonus():
    eco = _make_economy()
    assert eco.production_rate({}, 0, {"ghost"}) == pytest.approx(1.0)


def test_rate_never_negative():
    eco = _make_economy()
    assert eco.production_rate({"miner": -5}, 0, set()) >= 0


def test_huge_prestige_saturates():
    eco = _make_economy()
    assert eco.prestige_multiplier(5000) == math.inf


def test_click_reward():
    eco = _make_economy()
    assert eco.click_reward(0) == 1.0
    assert eco.click_reward(2) == pytest.approx(2.25)


def test_prestige_gain():
    eco = _make_economy()
    assert eco.prestige_gain(2_500_000) == 2
    assert eco.prestige_gain(999_999) == 0
    assert eco.prestige_gain(0) == 0


def test_can_prestige():
    eco = _make_economy()
    assert eco.can_prestige(1_000_000)
    assert not eco.can_prestige(999_999.99)
