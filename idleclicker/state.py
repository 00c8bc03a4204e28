from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from idleclicker.definition import EconomyDefinition


@dataclass
class PlayerStats:
    """Lifetime counters that feed achievements and the stats screen."""

    clicks: int = 0
    purchases: dict[str, int] = field(default_factory=dict)
    upgrades_bought: int = 0
    play_time: float = 0.0
    offline_earned: float = 0.0
    prestiges: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "clicks": self.clicks,
            "purchases": dict(self.purchases),
            "upgrades_bought": self.upgrades_bought,
            "play_time": self.play_time,
            "offline_earned": self.offline_earned,
            "prestiges": self.prestiges,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerStats:
        return cls(
            clicks=int(data.get("clicks", 0)),
            purchases={k: int(v) for k, v in data.get("purchases", {}).items()},
            upgrades_bought=int(data.get("upgrades_bought", 0)),
            play_time=float(data.get("play_time", 0.0)),
            offline_earned=float(data.get("offline_earned", 0.0)),
            prestiges=int(data.get("prestiges", 0)),
        )


@dataclass
class PlayerProgress:
    """Mutable save of a single player; mutated in place by every action."""

    coins: float = 0.0
    total_earned: float = 0.0
    levels: dict[str, int] = field(default_factory=dict)
    prestige_level: int = 0
    prestige_points: int = 0
    last_update: float = 0.0
    achievements: set[str] = field(default_factory=set)
    stats: PlayerStats = field(default_factory=PlayerStats)

    @classmethod
    def new(cls, definition: EconomyDefinition, now: float) -> PlayerProgress:
        """Fresh progress with every configured upgrade kind at level 0."""
        return cls(
            levels={kind: 0 for kind in definition.upgrade_ids},
            last_update=now,
        )

    def level(self, kind: str) -> int:
        return self.levels.get(kind, 0)

    def has_achievement(self, id: str) -> bool:
        return id in self.achievements

    def to_dict(self) -> dict[str, Any]:
        return {
            "coins": self.coins,
            "total_earned": self.total_earned,
            "levels": dict(self.levels),
            "prestige_level": self.prestige_level,
            "prestige_points": self.prestige_points,
            "last_update": self.last_update,
            "achievements": sorted(self.achievements),
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        definition: EconomyDefinition | None = None,
    ) -> PlayerProgress:
        """Rebuild progress from :meth:`to_dict` output.

        With a *definition*, levels are aligned to its table: kinds added since
        the save was written start at 0 and kinds no longer configured are
        dropped.
        """
        levels = {k: int(v) for k, v in data.get("levels", {}).items()}
        if definition is not None:
            levels = {kind: levels.get(kind, 0) for kind in definition.upgrade_ids}
        return cls(
            coins=max(0.0, float(data.get("coins", 0.0))),
            total_earned=max(0.0, float(data.get("total_earned", 0.0))),
            levels=levels,
            prestige_level=int(data.get("prestige_level", 0)),
            prestige_points=int(data.get("prestige_points", 0)),
            last_update=float(data.get("last_update", 0.0)),
            achievements=set(data.get("achievements", [])),
            stats=PlayerStats.from_dict(data.get("stats", {})),
        )
