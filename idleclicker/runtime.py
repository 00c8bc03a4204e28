from __future__ import annotations

import logging
import math
from typing import Any

from idleclicker.accrual import AccrualPolicy
from idleclicker.economy import Economy
from idleclicker.result import ActionResult, Failure, PrestigeResult, TickResult
from idleclicker.state import PlayerProgress
from idleclicker.upgrade import UpgradeStatus

logger = logging.getLogger(__name__)


class ProgressionRuntime:
    """Authoritative progression logic for one player's save.

    Every action validates before it mutates, so a rejected action leaves the
    progress untouched. Business rejections come back as result values; the
    runtime never reads a clock, callers pass ``now`` in.
    """

    def __init__(
        self,
        economy: Economy,
        progress: PlayerProgress,
        policy: AccrualPolicy | None = None,
    ) -> None:
        self.economy = economy
        self.progress = progress
        self.policy = policy or AccrualPolicy()
        self._rate = 0.0
        self._dirty = True

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, now: float) -> TickResult:
        """Credit production for the time since the last update."""
        p = self.progress
        elapsed = now - p.last_update
        if elapsed <= 0:
            if elapsed < 0:
                logger.debug(
                    "Clock went backwards by %.3fs; accrual skipped", -elapsed
                )
            return TickResult(new_achievements=self.check_achievements())

        offline = self.policy.is_offline(elapsed)
        delta = self.policy.accrue(self.production_rate, elapsed)

        p.coins += delta
        p.total_earned += delta
        if offline:
            p.stats.offline_earned += delta
            logger.debug(
                "Offline resume after %.1fs credited %.2f coins", elapsed, delta
            )
        else:
            p.stats.play_time += elapsed
        p.last_update = now

        return TickResult(
            delta=delta,
            elapsed=elapsed,
            offline=offline,
            new_achievements=self.check_achievements(),
        )

    # ── Player actions ───────────────────────────────────────────────

    def click(self, now: float) -> ActionResult:
        """Accrue up to *now*, then add the flat click reward."""
        tick = self.tick(now)

        p = self.progress
        reward = self.economy.click_reward(p.prestige_level)
        p.coins += reward
        p.total_earned += reward
        p.stats.clicks += 1

        return ActionResult(
            success=True,
            amount=reward,
            tick=tick,
            new_achievements=tick.new_achievements + self.check_achievements(),
        )

    def buy_upgrade(self, kind: str) -> ActionResult:
        """Buy one level of *kind* if the balance covers its current cost."""
        if not self.economy.has_upgrade(kind):
            logger.info("Rejected purchase of unknown upgrade %r", kind)
            return ActionResult(
                success=False,
                failure=Failure.INVALID_UPGRADE_KIND,
                reason=f"Unknown upgrade: {kind!r}",
                kind=kind,
            )

        p = self.progress
        level = p.level(kind)
        cost = self.economy.upgrade_cost(kind, level)
        if not math.isfinite(cost) or p.coins < cost:
            logger.info(
                "Rejected purchase of %r: cost %.2f, balance %.2f", kind, cost, p.coins
            )
            return ActionResult(
                success=False,
                failure=Failure.INSUFFICIENT_FUNDS,
                reason=f"Cannot afford {kind!r}: costs {cost:.2f}, have {p.coins:.2f}",
                amount=cost,
                kind=kind,
                new_level=level,
            )

        p.coins -= cost
        p.levels[kind] = level + 1
        p.stats.purchases[kind] = p.stats.purchases.get(kind, 0) + 1
        p.stats.upgrades_bought += 1
        self._dirty = True
        logger.debug("Bought %r level %d for %.2f", kind, level + 1, cost)

        return ActionResult(
            success=True,
            amount=cost,
            kind=kind,
            new_level=level + 1,
            new_achievements=self.check_achievements(),
        )

    def prestige(self) -> PrestigeResult:
        """Reset coins and levels in exchange for a prestige level and points."""
        p = self.progress
        if not self.economy.can_prestige(p.total_earned):
            threshold = self.economy.config.prestige_threshold
            logger.info(
                "Rejected prestige: total earned %.2f below %.2f",
                p.total_earned,
                threshold,
            )
            return PrestigeResult(
                success=False,
                failure=Failure.PRESTIGE_INELIGIBLE,
                reason=(
                    f"Total earned {p.total_earned:.2f} is below the prestige "
                    f"threshold {threshold:.2f}"
                ),
                new_level=p.prestige_level,
            )

        gain = self.economy.prestige_gain(p.total_earned)
        p.prestige_points += gain
        p.prestige_level += 1
        p.stats.prestiges += 1
        p.coins = 0.0
        for kind in p.levels:
            p.levels[kind] = 0
        self._dirty = True
        logger.debug("Prestiged to level %d (+%d points)", p.prestige_level, gain)

        return PrestigeResult(
            success=True,
            points_gained=gain,
            new_level=p.prestige_level,
            new_achievements=self.check_achievements(),
        )

    def check_achievements(self) -> list[str]:
        """Unlock every achievement whose trigger is now met. Returns new ids."""
        p = self.progress
        new: list[str] = []
        for adef in self.economy.definition.achievements:
            if adef.id in p.achievements:
                continue
            if adef.trigger.evaluate(p):
                p.achievements.add(adef.id)
                new.append(adef.id)
        if new:
            self._dirty = True
            logger.debug("Unlocked achievements: %s", ", ".join(new))
        return new

    # ── Queries ──────────────────────────────────────────────────────

    @property
    def production_rate(self) -> float:
        """Current coins per second, recomputed after any change that affects it."""
        if self._dirty:
            p = self.progress
            self._rate = self.economy.production_rate(
                p.levels, p.prestige_level, p.achievements
            )
            self._dirty = False
        return self._rate

    def upgrade_cost(self, kind: str) -> float | None:
        if not self.economy.has_upgrade(kind):
            return None
        return self.economy.upgrade_cost(kind, self.progress.level(kind))

    def upgrade_statuses(self) -> list[UpgradeStatus]:
        result: list[UpgradeStatus] = []
        for udef in self.economy.definition.upgrades:
            level = self.progress.level(udef.id)
            cost = self.economy.upgrade_cost(udef.id, level)
            result.append(
                UpgradeStatus(
                    id=udef.id,
                    display_name=udef.display_name,
                    level=level,
                    cost=cost,
                    affordable=math.isfinite(cost) and self.progress.coins >= cost,
                    yield_per_level=udef.per_level_yield,
                )
            )
        return result

    def time_to_afford(self, kind: str) -> float | None:
        """Seconds of online play until *kind* is affordable. None if never."""
        cost = self.upgrade_cost(kind)
        if cost is None or not math.isfinite(cost):
            return None
        needed = cost - self.progress.coins
        if needed <= 0:
            return 0.0
        rate = self.production_rate
        if rate <= 0:
            return None
        return needed / rate

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the progress plus derived values."""
        data = self.progress.to_dict()
        data["production_rate"] = self.production_rate
        data["prestige_multiplier"] = self.economy.prestige_multiplier(
            self.progress.prestige_level
        )
        data["can_prestige"] = self.economy.can_prestige(self.progress.total_earned)
        return data

    def invalidate(self) -> None:
        """Force the rate to be recomputed, after editing progress directly."""
        self._dirty = True
