from __future__ import annotations

from dataclasses import dataclass

# Offline accrual stops counting after 8 hours.
MAX_OFFLINE_SECONDS = 8 * 60 * 60
# Fraction of the online rate credited for offline time.
OFFLINE_EFFICIENCY = 0.5
# Gaps up to this long are treated as a live polling tick, not a resume.
ONLINE_GRACE_SECONDS = 5.0


def accrue(
    rate: float,
    elapsed_seconds: float,
    is_offline: bool,
    *,
    max_offline_seconds: float = MAX_OFFLINE_SECONDS,
    offline_efficiency: float = OFFLINE_EFFICIENCY,
) -> float:
    """Coins earned at *rate* over *elapsed_seconds*.

    Non-positive elapsed time (clock skew, replayed requests) earns nothing.
    Offline time is capped at *max_offline_seconds* and discounted by
    *offline_efficiency*; online time is neither capped nor discounted.
    """
    if elapsed_seconds <= 0 or rate <= 0:
        return 0.0
    if is_offline:
        return rate * min(elapsed_seconds, max_offline_seconds) * offline_efficiency
    return rate * elapsed_seconds


@dataclass(frozen=True)
class AccrualPolicy:
    """Offline cap, offline efficiency and the online grace window."""

    max_offline_seconds: float = MAX_OFFLINE_SECONDS
    offline_efficiency: float = OFFLINE_EFFICIENCY
    online_grace_seconds: float = ONLINE_GRACE_SECONDS

    def __post_init__(self) -> None:
        if self.max_offline_seconds < 0:
            raise ValueError(
                f"max_offline_seconds must be >= 0 (got {self.max_offline_seconds!r})"
            )
        if not 0.0 <= self.offline_efficiency <= 1.0:
            raise ValueError(
                f"offline_efficiency must be within [0, 1] (got {self.offline_efficiency!r})"
            )
        if self.online_grace_seconds < 0:
            raise ValueError(
                f"online_grace_seconds must be >= 0 (got {self.online_grace_seconds!r})"
            )

    def is_offline(self, elapsed_seconds: float) -> bool:
        return elapsed_seconds > self.online_grace_seconds

    def accrue(self, rate: float, elapsed_seconds: float) -> float:
        return accrue(
            rate,
            elapsed_seconds,
            self.is_offline(elapsed_seconds),
            max_offline_seconds=self.max_offline_seconds,
            offline_efficiency=self.offline_efficiency,
        )

    @property
    def max_offline_gain_per_rate(self) -> float:
        """Upper bound of one offline accrual per coin/second of rate."""
        return self.max_offline_seconds * self.offline_efficiency
