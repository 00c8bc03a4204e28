from __future__ import annotations

import importlib
import math
from dataclasses import dataclass, field

from idleclicker.achievement import AchievementDef
from idleclicker.upgrade import UpgradeDef


@dataclass(frozen=True)
class EconomyConfig:
    """Scalar constants of the economy."""

    name: str = "Untitled"
    base_rate: float = 1.0
    click_base: float = 1.0
    prestige_base: float = 1.5
    prestige_threshold: float = 1_000_000.0
    prestige_unit: float = 1_000_000.0


@dataclass
class EconomyDefinition:
    """Complete static definition of the upgrade and achievement tables."""

    config: EconomyConfig = field(default_factory=EconomyConfig)
    upgrades: list[UpgradeDef] = field(default_factory=list)
    achievements: list[AchievementDef] = field(default_factory=list)

    # Lookup dicts built in __post_init__
    _upgrades_by_id: dict[str, UpgradeDef] = field(
        default_factory=dict, init=False, repr=False
    )
    _achievements_by_id: dict[str, AchievementDef] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self._upgrades_by_id = {u.id: u for u in self.upgrades}
        self._achievements_by_id = {a.id: a for a in self.achievements}

    @property
    def upgrade_ids(self) -> list[str]:
        return [u.id for u in self.upgrades]

    def get_upgrade(self, id: str) -> UpgradeDef | None:
        return self._upgrades_by_id.get(id)

    def get_achievement(self, id: str) -> AchievementDef | None:
        return self._achievements_by_id.get(id)

    def validate(self) -> list[str]:
        """Check for table errors. Returns list of error messages."""
        errors: list[str] = []
        cfg = self.config

        if not _finite(cfg.base_rate) or cfg.base_rate < 0:
            errors.append(f"base_rate must be finite and >= 0 (got {cfg.base_rate!r})")
        if not _finite(cfg.click_base) or cfg.click_base < 0:
            errors.append(f"click_base must be finite and >= 0 (got {cfg.click_base!r})")
        if not _finite(cfg.prestige_base) or cfg.prestige_base < 1:
            errors.append(
                f"prestige_base must be finite and >= 1 (got {cfg.prestige_base!r})"
            )
        if not _finite(cfg.prestige_threshold) or cfg.prestige_threshold <= 0:
            errors.append(
                f"prestige_threshold must be finite and > 0 (got {cfg.prestige_threshold!r})"
            )
        if not _finite(cfg.prestige_unit) or cfg.prestige_unit <= 0:
            errors.append(
                f"prestige_unit must be finite and > 0 (got {cfg.prestige_unit!r})"
            )

        seen_u: set[str] = set()
        for u in self.upgrades:
            if u.id in seen_u:
                errors.append(f"Duplicate upgrade ID: {u.id!r}")
            seen_u.add(u.id)
            if not _finite(u.base_cost) or u.base_cost <= 0:
                errors.append(
                    f"Upgrade {u.id!r} base_cost must be finite and > 0 (got {u.base_cost!r})"
                )
            if not _finite(u.growth_factor) or u.growth_factor <= 1:
                errors.append(
                    f"Upgrade {u.id!r} growth_factor must be finite and > 1 "
                    f"(got {u.growth_factor!r})"
                )
            if not _finite(u.per_level_yield) or u.per_level_yield < 0:
                errors.append(
                    f"Upgrade {u.id!r} per_level_yield must be finite and >= 0 "
                    f"(got {u.per_level_yield!r})"
                )

        seen_a: set[str] = set()
        for a in self.achievements:
            if a.id in seen_a:
                errors.append(f"Duplicate achievement ID: {a.id!r}")
            seen_a.add(a.id)
            if not _finite(a.bonus) or a.bonus < 1:
                errors.append(
                    f"Achievement {a.id!r} bonus must be finite and >= 1 (got {a.bonus!r})"
                )

        return errors


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def load_economy(module_path: str) -> EconomyDefinition:
    """Import module and call define_economy()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_economy"):
        raise ValueError(f"Module {module_path!r} has no define_economy() function")
    definition = mod.define_economy()
    if not isinstance(definition, EconomyDefinition):
        raise ValueError(
            f"{module_path}.define_economy() returned {type(definition).__name__}, "
            "expected EconomyDefinition"
        )
    return definition
