from __future__ import annotations

import math
from typing import Iterable, Mapping

from idleclicker._types import safe_pow
from idleclicker.definition import EconomyDefinition


class Economy:
    """Pure cost and production formulas over a validated economy table.

    Every method is deterministic and side-effect free. Costs and rates are
    real numbers; a value too large for a float saturates to ``math.inf``.
    """

    def __init__(self, definition: EconomyDefinition) -> None:
        errors = definition.validate()
        if errors:
            raise ValueError(
                "Invalid EconomyDefinition:\n" + "\n".join(f"  - {e}" for e in errors)
            )
        self.definition = definition
        self.config = definition.config

    def has_upgrade(self, kind: str) -> bool:
        return self.definition.get_upgrade(kind) is not None

    def upgrade_cost(self, kind: str, current_level: int) -> float:
        """Price of the next level of *kind* when *current_level* are owned."""
        udef = self.definition.get_upgrade(kind)
        if udef is None:
            raise KeyError(kind)
        return udef.cost_at(max(0, current_level))

    def cost_table(self, kind: str, levels: Iterable[int]) -> list[tuple[int, float]]:
        return [(n, self.upgrade_cost(kind, n)) for n in levels]

    def prestige_multiplier(self, prestige_level: int) -> float:
        """prestige_base ^ level, so each prestige compounds on the last."""
        return safe_pow(self.config.prestige_base, max(0, prestige_level))

    def achievement_multiplier(self, achievements: Iterable[str]) -> float:
        mult = 1.0
        for aid in achievements:
            adef = self.definition.get_achievement(aid)
            if adef is not None:
                mult *= adef.bonus
        return mult

    def base_production(self, levels: Mapping[str, int]) -> float:
        """Production before prestige and achievement multipliers."""
        total = self.config.base_rate
        for udef in self.definition.upgrades:
            total += max(0, levels.get(udef.id, 0)) * udef.per_level_yield
        return total

    def production_rate(
        self,
        levels: Mapping[str, int],
        prestige_level: int,
        achievements: Iterable[str],
    ) -> float:
        """Coins per second for the given levels, prestige and achievements."""
        base = self.base_production(levels)
        if base == 0.0:
            return 0.0
        return (
            base
            * self.prestige_multiplier(prestige_level)
            * self.achievement_multiplier(achievements)
        )

    def click_reward(self, prestige_level: int) -> float:
        return self.config.click_base * self.prestige_multiplier(prestige_level)

    def prestige_gain(self, total_earned: float) -> int:
        """Prestige points awarded for resetting at *total_earned*."""
        if total_earned <= 0 or not math.isfinite(total_earned):
            return 0
        return math.floor(total_earned / self.config.prestige_unit)

    def can_prestige(self, total_earned: float) -> bool:
        return total_earned >= self.config.prestige_threshold
