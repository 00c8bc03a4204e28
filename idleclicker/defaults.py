"""Default economy: the crypto-mining clicker table."""
from __future__ import annotations

from idleclicker.achievement import AchievementDef
from idleclicker.definition import EconomyConfig, EconomyDefinition
from idleclicker.requirement import Req
from idleclicker.upgrade import UpgradeDef


def define_economy() -> EconomyDefinition:
    return EconomyDefinition(
        config=EconomyConfig(
            name="Crypto Miner",
            base_rate=1.0,
            click_base=1.0,
            prestige_base=1.5,
            prestige_threshold=1_000_000,
            prestige_unit=1_000_000,
        ),
        upgrades=[
            UpgradeDef(
                id="miner",
                display_name="Miner",
                base_cost=10,
                growth_factor=1.15,
                per_level_yield=0.5,
            ),
            UpgradeDef(
                id="pickaxe",
                display_name="Pickaxe",
                base_cost=50,
                growth_factor=2,
                per_level_yield=2,
            ),
            UpgradeDef(
                id="mining_rig",
                display_name="Mining Rig",
                base_cost=500,
                growth_factor=3,
                per_level_yield=10,
            ),
            UpgradeDef(
                id="data_center",
                display_name="Data Center",
                base_cost=5000,
                growth_factor=5,
                per_level_yield=50,
            ),
            UpgradeDef(
                id="quantum_computer",
                display_name="Quantum Computer",
                base_cost=50000,
                growth_factor=10,
                per_level_yield=200,
            ),
        ],
        achievements=[
            AchievementDef(
                id="first_million",
                trigger=Req.total_earned(">=", 1_000_000),
                bonus=1.1,
                description="Earn one million coins",
            ),
            AchievementDef(
                id="speed_demon",
                trigger=Req.clicks(">=", 1000),
                bonus=1.2,
                description="Click 1000 times",
            ),
            AchievementDef(
                id="crypto_whale",
                trigger=Req.prestige_level(">=", 5),
                bonus=1.3,
                description="Reach prestige level 5",
            ),
        ],
    )
