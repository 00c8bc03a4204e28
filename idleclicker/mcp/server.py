"""MCP server exposing player progression as tools."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from idleclicker.repository import PlayerRepository
from idleclicker.result import ActionResult, PrestigeResult, TickResult

if TYPE_CHECKING:
    from idleclicker.settings import Settings

# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _ServerContext:
    """Holds the repository and the players recently seen by this server.

    A player stays live for *live_window* seconds after their last tool call.
    Once they drop out the driver stops ticking them, so their next call
    resumes from an offline gap.
    """

    repository: PlayerRepository
    leaderboard_limit: int = 10
    live_window: float = 60.0
    _live: dict[str, float] = field(default_factory=dict)
    _live_lock: threading.Lock = field(default_factory=threading.Lock)

    def touch(self, player_id: str) -> None:
        with self._live_lock:
            self._live[player_id] = self.repository.clock()

    def live_players(self) -> list[str]:
        now = self.repository.clock()
        with self._live_lock:
            for pid, seen in list(self._live.items()):
                if now - seen > self.live_window:
                    del self._live[pid]
            return sorted(self._live)


def _round(value: float) -> float:
    return round(value, 2)


def _validate_player_id(player_id: str) -> dict[str, Any] | None:
    if not player_id or not player_id.strip():
        return {"error": "player_id must not be empty"}
    return None


def _tick_payload(result: TickResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "earned": _round(result.delta),
        "elapsed": _round(result.elapsed),
        "offline": result.offline,
    }
    if result.new_achievements:
        payload["new_achievements"] = result.new_achievements
    return payload


def _failure_payload(result: ActionResult | PrestigeResult) -> dict[str, Any]:
    return {
        "success": False,
        "failure": result.failure.value if result.failure else None,
        "reason": result.reason,
    }


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_economy_info(ctx: _ServerContext) -> dict[str, Any]:
    economy = ctx.repository.economy
    cfg = economy.config
    policy = ctx.repository.policy
    return {
        "name": cfg.name,
        "base_rate": cfg.base_rate,
        "click_base": cfg.click_base,
        "prestige_base": cfg.prestige_base,
        "prestige_threshold": cfg.prestige_threshold,
        "prestige_unit": cfg.prestige_unit,
        "max_offline_seconds": policy.max_offline_seconds,
        "offline_efficiency": policy.offline_efficiency,
        "upgrades": [
            {
                "id": u.id,
                "display_name": u.display_name,
                "base_cost": u.base_cost,
                "growth_factor": u.growth_factor,
                "per_level_yield": u.per_level_yield,
            }
            for u in economy.definition.upgrades
        ],
        "achievements": [
            {"id": a.id, "description": a.description, "bonus": a.bonus}
            for a in economy.definition.achievements
        ],
    }


def _tool_get_player(ctx: _ServerContext, player_id: str) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    ctx.touch(player_id)
    repo = ctx.repository
    with repo.session(player_id) as runtime:
        tick = runtime.tick(repo.clock())
        snapshot = runtime.snapshot()
    return {"player_id": player_id, "tick": _tick_payload(tick), "state": snapshot}


def _tool_tick(ctx: _ServerContext, player_id: str) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    ctx.touch(player_id)
    repo = ctx.repository
    with repo.session(player_id) as runtime:
        tick = runtime.tick(repo.clock())
        balance = runtime.progress.coins
        rate = runtime.production_rate
    result = _tick_payload(tick)
    result["new_balance"] = _round(balance)
    result["rate"] = round(rate, 4)
    return result


def _tool_click(ctx: _ServerContext, player_id: str, count: int = 1) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    ctx.touch(player_id)
    repo = ctx.repository
    click_total = 0.0
    passive_total = 0.0
    new_achievements: list[str] = []
    with repo.session(player_id) as runtime:
        now = repo.clock()
        for _ in range(count):
            result = runtime.click(now)
            click_total += result.amount
            if result.tick is not None:
                passive_total += result.tick.delta
            new_achievements.extend(result.new_achievements)
        balance = runtime.progress.coins
        clicks = runtime.progress.stats.clicks

    payload: dict[str, Any] = {
        "clicks": count,
        "click_earned": _round(click_total),
        "passive_earned": _round(passive_total),
        "new_balance": _round(balance),
        "total_clicks": clicks,
    }
    if new_achievements:
        payload["new_achievements"] = new_achievements
    return payload


def _tool_buy_upgrade(ctx: _ServerContext, player_id: str, kind: str) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    ctx.touch(player_id)
    repo = ctx.repository
    with repo.session(player_id) as runtime:
        runtime.tick(repo.clock())
        result = runtime.buy_upgrade(kind)
        balance = runtime.progress.coins
        next_cost = runtime.upgrade_cost(kind)
    if not result.success:
        payload = _failure_payload(result)
        if next_cost is not None:
            payload["cost"] = _round(next_cost)
            payload["balance"] = _round(balance)
        return payload
    payload = {
        "success": True,
        "kind": kind,
        "new_level": result.new_level,
        "cost_paid": _round(result.amount),
        "next_cost": _round(next_cost) if next_cost is not None else None,
        "new_balance": _round(balance),
    }
    if result.new_achievements:
        payload["new_achievements"] = result.new_achievements
    return payload


def _tool_get_upgrades(ctx: _ServerContext, player_id: str) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    ctx.touch(player_id)
    repo = ctx.repository
    upgrades = []
    with repo.session(player_id) as runtime:
        runtime.tick(repo.clock())
        for status in runtime.upgrade_statuses():
            time_to_afford = runtime.time_to_afford(status.id)
            upgrades.append({
                "id": status.id,
                "display_name": status.display_name,
                "level": status.level,
                "cost": _round(status.cost),
                "affordable": status.affordable,
                "yield_per_level": status.yield_per_level,
                "time_to_afford": (
                    _round(time_to_afford) if time_to_afford is not None else None
                ),
            })
    return {"upgrades": upgrades}


def _tool_prestige(ctx: _ServerContext, player_id: str) -> dict[str, Any]:
    error = _validate_player_id(player_id)
    if error:
        return error
    ctx.touch(player_id)
    repo = ctx.repository
    with repo.session(player_id) as runtime:
        runtime.tick(repo.clock())
        result = runtime.prestige()
        multiplier = runtime.economy.prestige_multiplier(runtime.progress.prestige_level)
    if not result.success:
        return _failure_payload(result)
    payload: dict[str, Any] = {
        "success": True,
        "prestige_level": result.new_level,
        "points_gained": result.points_gained,
        "multiplier": round(multiplier, 4),
    }
    if result.new_achievements:
        payload["new_achievements"] = result.new_achievements
    return payload


def _tool_leaderboard(ctx: _ServerContext, limit: int | None = None) -> dict[str, Any]:
    if limit is None:
        limit = ctx.leaderboard_limit
    if limit < 1:
        return {"error": "Limit must be at least 1"}
    entries = ctx.repository.leaderboard(limit)
    return {
        "leaderboard": [
            {
                "rank": rank,
                "player_id": e.player_id,
                "total_earned": _round(e.total_earned),
                "prestige_level": e.prestige_level,
            }
            for rank, e in enumerate(entries, start=1)
        ]
    }


# ── Server factory ──────────────────────────────────────────────────


def create_server(
    repository: PlayerRepository,
    leaderboard_limit: int = 10,
    live_window: float = 60.0,
) -> tuple[FastMCP, _ServerContext]:
    """Create an MCP server over *repository*. Also returns the tool context."""
    ctx = _ServerContext(
        repository=repository,
        leaderboard_limit=leaderboard_limit,
        live_window=live_window,
    )

    mcp = FastMCP(
        name=f"idleclicker: {repository.economy.config.name}",
    )

    @mcp.tool()
    def get_economy_info() -> dict[str, Any]:
        """Get the static economy: constants, upgrade table and achievements."""
        return _tool_get_economy_info(ctx)

    @mcp.tool()
    def get_player(player_id: str) -> dict[str, Any]:
        """Accrue a player's earnings up to now and return their full state."""
        return _tool_get_player(ctx, player_id)

    @mcp.tool()
    def tick(player_id: str) -> dict[str, Any]:
        """Accrue a player's earnings up to now. Long absences earn at the offline rate."""
        return _tool_tick(ctx, player_id)

    @mcp.tool()
    def click(player_id: str, count: int = 1) -> dict[str, Any]:
        """Click N times for a player (max 1000). Returns coins earned."""
        return _tool_click(ctx, player_id, count)

    @mcp.tool()
    def buy_upgrade(player_id: str, kind: str) -> dict[str, Any]:
        """Buy one level of an upgrade. Returns success or the failure reason."""
        return _tool_buy_upgrade(ctx, player_id, kind)

    @mcp.tool()
    def get_upgrades(player_id: str) -> dict[str, Any]:
        """List every upgrade with level, next cost and time to afford."""
        return _tool_get_upgrades(ctx, player_id)

    @mcp.tool()
    def prestige(player_id: str) -> dict[str, Any]:
        """Reset coins and upgrades for a permanent production multiplier."""
        return _tool_prestige(ctx, player_id)

    @mcp.tool()
    def leaderboard(limit: int | None = None) -> dict[str, Any]:
        """Top players by lifetime earnings."""
        return _tool_leaderboard(ctx, limit)

    return mcp, ctx


def serve(settings: Settings) -> None:
    """Run the stdio MCP server with a tick driver for players it has seen."""
    from idleclicker.cli import build_repository
    from idleclicker.driver import TickDriver

    repository = build_repository(settings)
    mcp, ctx = create_server(
        repository, settings.leaderboard_limit, settings.live_window_seconds
    )
    driver = TickDriver(
        repository,
        interval=settings.tick_interval_seconds,
        players=ctx.live_players,
    )
    driver.start()
    try:
        mcp.run(transport="stdio")
    finally:
        driver.stop(timeout=settings.tick_interval_seconds * 2)
