"""Tests for state module."""
import json

import pytest

from idleclicker.defaults import define_economy
from idleclicker.state import PlayerProgress, PlayerStats


def test_new_progress():
    p = PlayerProgress.new(define_economy(), now=1000.0)
    assert p.coins == 0.0
    assert p.total_earned == 0.0
    assert p.prestige_level == 0
    assert p.prestige_points == 0
    assert p.last_update == 1000.0
    assert p.achievements == set()
    assert set(p.levels) == {
        "miner", "pickaxe", "mining_rig", "data_center", "quantum_computer"
    }
    assert all(v == 0 for v in p.levels.values())


def test_level_unknown_kind():
    p = PlayerProgress()
    assert p.level("nope") == 0


def test_has_achievement():
    p = PlayerProgress(achievements={"first_million"})
    assert p.has_achievement("first_million")
    assert not p.has_achievement("speed_demon")


def test_to_dict_is_json_ready():
    p = PlayerProgress(
        coins=12.5,
        total_earned=100.0,
        levels={"miner": 3},
        prestige_level=1,
        prestige_points=2,
        last_update=55.0,
        achievements={"b", "a"},
        stats=PlayerStats(clicks=7, purchases={"miner": 3}, upgrades_bought=3),
    )
    data = p.to_dict()
    assert data["achievements"] == ["a", "b"]
    assert json.loads(json.dumps(data)) == data


def test_from_dict_restores():
    p = PlayerProgress(
        coins=12.5,
        total_earned=100.0,
        levels={"miner": 3},
        prestige_level=1,
        prestige_points=2,
        last_update=55.0,
        achievements={"a"},
        stats=PlayerStats(clicks=7, play_time=12.0, prestiges=1),
    )
    assert PlayerProgress.from_dict(p.to_dict()) == p


def test_from_dict_aligns_levels_with_definition():
    data = {"levels": {"miner": 4, "retired_kind": 9}}
    p = PlayerProgress.from_dict(data, define_economy())
    assert p.levels["miner"] == 4
    assert p.levels["pickaxe"] == 0
    assert "retired_kind" not in p.levels


def test_from_dict_defaults_and_clamps():
    p = PlayerProgress.from_dict({"coins": -5})
    assert p.coins == 0.0
    assert p.stats == PlayerStats()
