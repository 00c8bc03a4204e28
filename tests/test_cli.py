"""Tests for cli module."""
import json

import pytest

from idleclicker.cli import build_parser, main


def _run(tmp_path, *argv):
    data_file = str(tmp_path / "data.json")
    main(["--data-file", data_file, *argv])


def _saved(tmp_path) -> dict:
    return json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))["players"]


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
    assert "idleclicker" in capsys.readouterr().out


def test_parser_commands():
    parser = build_parser()
    args = parser.parse_args(["buy", "alice", "pickaxe"])
    assert args.command == "buy"
    assert args.player_id == "alice"
    assert args.kind == "pickaxe"


def test_costs(capsys):
    main(["costs", "--levels", "3"])
    out = capsys.readouterr().out
    assert "Pickaxe" in out
    assert "100" in out


def test_click_and_show(tmp_path, capsys):
    _run(tmp_path, "click", "alice", "--count", "5")
    assert "5 click(s)" in capsys.readouterr().out
    assert _saved(tmp_path)["alice"]["stats"]["clicks"] == 5

    _run(tmp_path, "show", "alice")
    out = capsys.readouterr().out
    assert "Player alice" in out
    assert "UPGRADES:" in out


def test_buy_failure_exits_nonzero(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(tmp_path, "buy", "alice", "pickaxe")
    assert exc.value.code == 1
    assert "Purchase failed" in capsys.readouterr().out


def test_buy_success(tmp_path, capsys):
    _run(tmp_path, "click", "alice", "--count", "10")
    _run(tmp_path, "buy", "alice", "miner")
    assert "Bought miner level 1" in capsys.readouterr().out
    assert _saved(tmp_path)["alice"]["levels"]["miner"] == 1


def test_prestige_ineligible(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(tmp_path, "prestige", "alice")
    assert exc.value.code == 1
    assert "Prestige failed" in capsys.readouterr().out


def test_tick_and_leaderboard(tmp_path, capsys):
    _run(tmp_path, "click", "alice", "--count", "2")
    _run(tmp_path, "click", "bob", "--count", "4")
    _run(tmp_path, "tick")
    assert "Ticked 2 player(s)" in capsys.readouterr().out
    _run(tmp_path, "leaderboard")
    out = capsys.readouterr().out
    assert out.index("bob") < out.index("alice")


def test_corrupt_save_file(tmp_path, capsys):
    (tmp_path / "data.json").write_text("garbage", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        _run(tmp_path, "show", "alice")
    assert exc.value.code == 2
    assert "Error" in capsys.readouterr().err
