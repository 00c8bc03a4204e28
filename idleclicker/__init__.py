# idleclicker — Idle Clicker Progression Engine

from idleclicker._types import compare
from idleclicker.requirement import Requirement, Req
from idleclicker.cost_scaling import CostScaling
from idleclicker.upgrade import UpgradeDef, UpgradeStatus
from idleclicker.achievement import AchievementDef
from idleclicker.definition import EconomyConfig, EconomyDefinition, load_economy
from idleclicker.economy import Economy
from idleclicker.accrual import (
    MAX_OFFLINE_SECONDS,
    OFFLINE_EFFICIENCY,
    ONLINE_GRACE_SECONDS,
    AccrualPolicy,
    accrue,
)
from idleclicker.state import PlayerProgress, PlayerStats
from idleclicker.result import Failure, TickResult, ActionResult, PrestigeResult
from idleclicker.runtime import ProgressionRuntime
from idleclicker.store import ProgressStore, MemoryStore, JsonFileStore, StoreError
from idleclicker.repository import PlayerRepository, LeaderboardEntry
from idleclicker.driver import TickDriver

__all__ = [
    # Types
    "compare",
    # Requirements
    "Requirement",
    "Req",
    # Economy table
    "CostScaling",
    "UpgradeDef",
    "UpgradeStatus",
    "AchievementDef",
    "EconomyConfig",
    "EconomyDefinition",
    "load_economy",
    # Economy model
    "Economy",
    # Accrual
    "MAX_OFFLINE_SECONDS",
    "OFFLINE_EFFICIENCY",
    "ONLINE_GRACE_SECONDS",
    "AccrualPolicy",
    "accrue",
    # State
    "PlayerProgress",
    "PlayerStats",
    # Results
    "Failure",
    "TickResult",
    "ActionResult",
    "PrestigeResult",
    # Runtime
    "ProgressionRuntime",
    # Persistence
    "ProgressStore",
    "MemoryStore",
    "JsonFileStore",
    "StoreError",
    "PlayerRepository",
    "LeaderboardEntry",
    # Scheduling
    "TickDriver",
]
