from __future__ import annotations

import argparse
import sys

from idleclicker.definition import load_economy
from idleclicker.economy import Economy
from idleclicker.formatting import (
    format_cost_table,
    format_leaderboard,
    format_number,
    format_player,
)
from idleclicker.repository import PlayerRepository
from idleclicker.settings import Settings, configure_logging, get_settings
from idleclicker.store import JsonFileStore, StoreError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idleclicker",
        description="idleclicker: idle clicker progression engine",
    )
    parser.add_argument("--economy", default=None, help="Module with define_economy()")
    parser.add_argument("--data-file", default=None, help="JSON save file")
    parser.add_argument("--log-level", default=None, help="Logging level")
    sub = parser.add_subparsers(dest="command")

    costs = sub.add_parser("costs", help="Print the upgrade cost table")
    costs.add_argument("--levels", type=int, default=10, help="Levels per upgrade")

    show = sub.add_parser("show", help="Tick a player to now and print their progress")
    show.add_argument("player_id")

    click = sub.add_parser("click", help="Click for a player")
    click.add_argument("player_id")
    click.add_argument("--count", type=int, default=1, help="Number of clicks")

    buy = sub.add_parser("buy", help="Buy one level of an upgrade")
    buy.add_argument("player_id")
    buy.add_argument("kind")

    prestige = sub.add_parser("prestige", help="Reset progress for a prestige level")
    prestige.add_argument("player_id")

    sub.add_parser("tick", help="Tick every stored player to now")

    board = sub.add_parser("leaderboard", help="Print the top players")
    board.add_argument("--limit", type=int, default=None)

    sub.add_parser("serve", help="Run the MCP server with a background tick driver")

    return parser


def build_repository(settings: Settings) -> PlayerRepository:
    economy = Economy(load_economy(settings.economy_module))
    store = JsonFileStore(settings.data_file)
    return PlayerRepository(economy, store, policy=settings.accrual_policy())


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    overrides = {
        k: v
        for k, v in (
            ("economy_module", args.economy),
            ("data_file", args.data_file),
            ("log_level", args.log_level),
        )
        if v is not None
    }
    settings = get_settings().model_copy(update=overrides)
    configure_logging(settings.log_level)

    if args.command == "costs":
        economy = Economy(load_economy(settings.economy_module))
        print(format_cost_table(economy, args.levels))
        return

    if args.command == "serve":
        from idleclicker.mcp.server import serve

        serve(settings)
        return

    try:
        repo = build_repository(settings)
        _run_command(repo, settings, args)
    except StoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)


def _run_command(
    repo: PlayerRepository, settings: Settings, args: argparse.Namespace
) -> None:
    now = repo.clock()

    if args.command == "show":
        with repo.session(args.player_id) as runtime:
            result = runtime.tick(now)
            if result.offline:
                print(f"Welcome back! Earned {format_number(result.delta)} while away.\n")
            print(format_player(args.player_id, runtime))

    elif args.command == "click":
        if args.count < 1:
            print("Error: --count must be at least 1", file=sys.stderr)
            sys.exit(1)
        total = 0.0
        with repo.session(args.player_id) as runtime:
            for _ in range(args.count):
                result = runtime.click(now)
                total += result.amount + (result.tick.delta if result.tick else 0.0)
            balance = runtime.progress.coins
        print(f"{args.count} click(s): +{format_number(total)}, balance {format_number(balance)}")

    elif args.command == "buy":
        with repo.session(args.player_id) as runtime:
            runtime.tick(now)
            result = runtime.buy_upgrade(args.kind)
        if result.success:
            print(
                f"Bought {result.kind} level {result.new_level} "
                f"for {format_number(result.amount)}"
            )
        else:
            print(f"Purchase failed: {result.reason}")
            sys.exit(1)

    elif args.command == "prestige":
        with repo.session(args.player_id) as runtime:
            runtime.tick(now)
            result = runtime.prestige()
        if result.success:
            print(
                f"Prestiged to level {result.new_level}: "
                f"+{result.points_gained} prestige point(s)"
            )
        else:
            print(f"Prestige failed: {result.reason}")
            sys.exit(1)

    elif args.command == "tick":
        results = repo.tick_all(now)
        print(f"Ticked {len(results)} player(s)")

    elif args.command == "leaderboard":
        limit = args.limit if args.limit is not None else settings.leaderboard_limit
        print(format_leaderboard(repo.leaderboard(limit)))
