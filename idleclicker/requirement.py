from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from idleclicker._types import check_operator, compare

if TYPE_CHECKING:
    from idleclicker.state import PlayerProgress


class Requirement(ABC):
    """Base class for all requirements — boolean conditions on player progress."""

    @abstractmethod
    def evaluate(self, progress: PlayerProgress) -> bool: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _StatRequirement(Requirement):
    """Compares one numeric stat pulled from progress against a threshold."""

    def __init__(
        self,
        name: str,
        getter: Callable[[PlayerProgress], float],
        op: str,
        threshold: float,
    ) -> None:
        self.name = name
        self.getter = getter
        self.op = check_operator(op)
        self.threshold = threshold

    def evaluate(self, progress: PlayerProgress) -> bool:
        return compare(self.getter(progress), self.op, self.threshold)

    def __repr__(self) -> str:
        return f"Req({self.name} {self.op} {self.threshold!r})"


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, progress: PlayerProgress) -> bool:
        return all(r.evaluate(progress) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, progress: PlayerProgress) -> bool:
        return any(r.evaluate(progress) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[PlayerProgress], bool]) -> None:
        self.fn = fn

    def evaluate(self, progress: PlayerProgress) -> bool:
        return self.fn(progress)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def total_earned(op: str, threshold: float) -> Requirement:
        return _StatRequirement(
            "total_earned", lambda p: p.total_earned, op, threshold
        )

    @staticmethod
    def coins(op: str, threshold: float) -> Requirement:
        return _StatRequirement("coins", lambda p: p.coins, op, threshold)

    @staticmethod
    def clicks(op: str, threshold: int) -> Requirement:
        return _StatRequirement("clicks", lambda p: p.stats.clicks, op, threshold)

    @staticmethod
    def prestige_level(op: str, threshold: int) -> Requirement:
        return _StatRequirement(
            "prestige_level", lambda p: p.prestige_level, op, threshold
        )

    @staticmethod
    def level(kind: str, op: str, threshold: int) -> Requirement:
        _kind = kind
        return _StatRequirement(
            f"level[{kind}]", lambda p: p.levels.get(_kind, 0), op, threshold
        )

    @staticmethod
    def purchases(op: str, threshold: int, kind: str | None = None) -> Requirement:
        """Lifetime purchases of *kind*, or of every kind when *kind* is None."""
        if kind is None:
            return _StatRequirement(
                "upgrades_bought", lambda p: p.stats.upgrades_bought, op, threshold
            )
        _kind = kind
        return _StatRequirement(
            f"purchases[{kind}]",
            lambda p: p.stats.purchases.get(_kind, 0),
            op,
            threshold,
        )

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[PlayerProgress], bool]) -> Requirement:
        return _CustomRequirement(fn)
