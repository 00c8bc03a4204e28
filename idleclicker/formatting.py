from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from idleclicker.economy import Economy
    from idleclicker.repository import LeaderboardEntry
    from idleclicker.runtime import ProgressionRuntime

_SUFFIXES = ["", "K", "M", "B", "T", "Qa", "Qi"]


def format_number(value: float) -> str:
    """Short human form: 1234 -> '1.23K', 2.5e6 -> '2.50M'."""
    if math.isinf(value):
        return "inf"
    if abs(value) < 1000:
        return f"{value:.2f}".rstrip("0").rstrip(".") or "0"
    exp = min(int(math.log10(abs(value)) // 3), len(_SUFFIXES) - 1)
    return f"{value / 10 ** (exp * 3):.2f}{_SUFFIXES[exp]}"


def format_player(player_id: str, runtime: ProgressionRuntime) -> str:
    """Format one player's progress for console output."""
    p = runtime.progress
    lines: list[str] = []

    lines.append("=" * 20 + f" Player {player_id} " + "=" * 20)
    lines.append(f"Coins: {format_number(p.coins)}")
    lines.append(f"Total earned: {format_number(p.total_earned)}")
    lines.append(f"Rate: {format_number(runtime.production_rate)}/s")
    lines.append(
        f"Prestige: level {p.prestige_level}, {p.prestige_points} point(s), "
        f"x{format_number(runtime.economy.prestige_multiplier(p.prestige_level))}"
    )
    lines.append("")

    lines.append("UPGRADES:")
    for status in runtime.upgrade_statuses():
        marker = "  *" if status.affordable else "   "
        lines.append(
            f"{marker} {status.display_name:.<24s} lvl {status.level:<4d} "
            f"next {format_number(status.cost)}"
        )
    lines.append("")

    if p.achievements:
        lines.append("ACHIEVEMENTS:")
        for aid in sorted(p.achievements):
            lines.append(f"  [x] {aid}")
        lines.append("")

    lines.append(
        f"STATS: {p.stats.clicks} clicks, {p.stats.upgrades_bought} upgrades bought, "
        f"{p.stats.prestiges} prestige(s)"
    )
    return "\n".join(lines)


def format_cost_table(economy: Economy, levels: int = 10) -> str:
    """Cost of each upgrade kind for the first *levels* levels."""
    lines: list[str] = []
    for udef in economy.definition.upgrades:
        lines.append(
            f"{udef.display_name} (base {format_number(udef.base_cost)}, "
            f"x{udef.growth_factor:g}/level, +{udef.per_level_yield:g}/s)"
        )
        for level, cost in economy.cost_table(udef.id, range(levels)):
            lines.append(f"  {level:>3d} -> {format_number(cost)}")
    return "\n".join(lines)


def format_leaderboard(entries: list[LeaderboardEntry]) -> str:
    if not entries:
        return "No players yet."
    lines = ["LEADERBOARD:"]
    for rank, e in enumerate(entries, start=1):
        lines.append(
            f"  {rank:>2d}. {e.player_id:.<30s} {format_number(e.total_earned):>10s}"
            f"  (prestige {e.prestige_level})"
        )
    return "\n".join(lines)
