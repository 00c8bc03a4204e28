from __future__ import annotations

from idleclicker._types import safe_pow


class CostScaling:
    """Determines how an upgrade's price grows with the level already owned."""

    def __init__(self, growth_factor: float) -> None:
        if not growth_factor > 1.0:
            raise ValueError(
                f"growth_factor must be greater than 1 (got {growth_factor!r})"
            )
        self.growth_factor = float(growth_factor)

    def compute(self, base_cost: float, current_level: int) -> float:
        """Cost = base * growth_factor^level."""
        return base_cost * safe_pow(self.growth_factor, current_level)

    @classmethod
    def geometric(cls, growth_factor: float = 1.15) -> CostScaling:
        return cls(growth_factor)

    def __repr__(self) -> str:
        return f"CostScaling.geometric({self.growth_factor!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CostScaling):
            return NotImplemented
        return self.growth_factor == other.growth_factor

    def __hash__(self) -> int:
        return hash(self.growth_factor)
