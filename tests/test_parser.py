import builtins

import chess
import pytest

from minimax_bot.cli import main, parse_move


def test_parse_uci_move():
    board = chess.Board()
    assert parse_move(board, "e2e4") == chess.Move.from_uci("e2e4")


def test_parse_san_moves():
    board = chess.Board()
    assert parse_move(board, "Nf3") == chess.Move.from_uci("g1f3")
    assert parse_move(board, " e4, ") == chess.Move.from_uci("e2e4")


def test_parse_castling():
    board = chess.Board("r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq - 0 1")
    assert parse_move(board, "O-O") == chess.Move.from_uci("e1g1")
    assert parse_move(board, "e1c1") == chess.Move.from_uci("e1c1")


@pytest.mark.parametrize("text", ["e2e5", "zzzz", "", "Ke3", "12345"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_move(chess.Board(), text)


def test_cli_quit(monkeypatch, capsys):
    monkeypatch.setattr(builtins, "input", lambda prompt="": "quit")
    main(["--depth", "1"])
    assert "Goodbye" in capsys.readouterr().out


def test_cli_plays_until_game_over(monkeypatch, capsys):
    answers = iter(["Ra9", "a1a8"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    main(["--fen", "6k1/5ppp/8/8/8/8/5PPP/R5K1 w - - 0 1", "--depth", "1"])
    out = capsys.readouterr().out
    assert "Try again" in out
    assert "Game over: 1-0" in out


def test_cli_engine_replies(monkeypatch, capsys):
    answers = iter(["e4", "quit"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
    main(["--depth", "2", "--seed", "1", "--strategy", "pruned"])
    out = capsys.readouterr().out
    assert "Engine plays:" in out
    assert "Goodbye" in out


@pytest.fixture
def logged_levels(monkeypatch):
    levels = []
    monkeypatch.setattr("minimax_bot.cli.setup_logging", levels.append)
    return levels


def test_cli_takes_log_level_from_config(tmp_path, monkeypatch, logged_levels):
    path = tmp_path / "bot.toml"
    path.write_text('log_level = "DEBUG"\n')
    monkeypatch.setattr(builtins, "input", lambda prompt="": "quit")
    main(["--depth", "1", "--config", str(path)])
    assert logged_levels == ["DEBUG"]


def test_cli_log_level_flag_overrides_config(tmp_path, monkeypatch, logged_levels):
    path = tmp_path / "bot.toml"
    path.write_text('log_level = "DEBUG"\n')
    monkeypatch.setattr(builtins, "input", lambda prompt="": "quit")
    main(["--depth", "1", "--config", str(path), "--log-level", "ERROR"])
    assert logged_levels == ["ERROR"]
