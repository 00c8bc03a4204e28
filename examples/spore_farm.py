"""Spore farm economy: gentle 1.15 curves and no passive income until the first buy.

Run with: IDLECLICKER_ECONOMY_MODULE=examples.spore_farm idleclicker show alice
"""
from __future__ import annotations

from idleclicker.achievement import AchievementDef
from idleclicker.definition import EconomyConfig, EconomyDefinition
from idleclicker.requirement import Req
from idleclicker.upgrade import UpgradeDef


def define_economy() -> EconomyDefinition:
    return EconomyDefinition(
        config=EconomyConfig(
            name="Spore Farm",
            base_rate=0.0,
            click_base=1.0,
            prestige_base=1.5,
            prestige_threshold=100_000,
            prestige_unit=10_000,
        ),
        upgrades=[
            UpgradeDef(
                id="spore_collector",
                display_name="Spore Collector",
                base_cost=10,
                growth_factor=1.15,
                per_level_yield=0.1,
            ),
            UpgradeDef(
                id="mycelium_weaver",
                display_name="Mycelium Weaver",
                base_cost=100,
                growth_factor=1.15,
                per_level_yield=1,
            ),
            UpgradeDef(
                id="enzyme_reactor",
                display_name="Enzyme Reactor",
                base_cost=1000,
                growth_factor=1.15,
                per_level_yield=10,
            ),
        ],
        achievements=[
            AchievementDef(
                id="first_harvest",
                trigger=Req.purchases(">=", 1),
                bonus=1.05,
                description="Buy anything",
            ),
            AchievementDef(
                id="full_network",
                trigger=Req.all(
                    Req.level("spore_collector", ">=", 10),
                    Req.level("mycelium_weaver", ">=", 10),
                    Req.level("enzyme_reactor", ">=", 10),
                ),
                bonus=1.25,
                description="Own ten of every building at once",
            ),
        ],
    )
