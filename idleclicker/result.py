from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Failure(Enum):
    """Business-rule rejections returned by progression actions."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    PRESTIGE_INELIGIBLE = "prestige_ineligible"
    INVALID_UPGRADE_KIND = "invalid_upgrade_kind"


@dataclass(frozen=True)
class TickResult:
    """Outcome of applying accrual up to a point in time."""

    delta: float = 0.0
    elapsed: float = 0.0
    offline: bool = False
    new_achievements: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a click or a purchase attempt."""

    success: bool
    failure: Failure | None = None
    reason: str = ""
    amount: float = 0.0
    kind: str = ""
    new_level: int = 0
    tick: TickResult | None = None
    new_achievements: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige attempt."""

    success: bool
    failure: Failure | None = None
    reason: str = ""
    points_gained: int = 0
    new_level: int = 0
    new_achievements: list[str] = field(default_factory=list)
