from __future__ import annotations

from dataclasses import dataclass

from idleclicker.requirement import Requirement


@dataclass(frozen=True)
class AchievementDef:
    """A one-time unlock that multiplies production once its trigger is met."""

    id: str
    trigger: Requirement
    bonus: float = 1.0
    description: str = ""
