from __future__ import annotations

from dataclasses import dataclass, field

from idleclicker.cost_scaling import CostScaling


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of a purchasable upgrade or miner kind."""

    id: str
    base_cost: float
    growth_factor: float
    per_level_yield: float
    display_name: str = ""
    description: str = ""
    cost_scaling: CostScaling | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.display_name:
            object.__setattr__(self, "display_name", self.id)
        # Invalid growth factors are reported by EconomyDefinition.validate()
        if self.growth_factor > 1.0:
            object.__setattr__(self, "cost_scaling", CostScaling(self.growth_factor))

    def cost_at(self, level: int) -> float:
        if self.cost_scaling is None:
            raise ValueError(f"Upgrade {self.id!r} has no valid cost curve")
        return self.cost_scaling.compute(self.base_cost, level)


@dataclass(frozen=True)
class UpgradeStatus:
    """Read-only snapshot of one upgrade kind for query results."""

    id: str
    display_name: str
    level: int
    cost: float
    affordable: bool
    yield_per_level: float
