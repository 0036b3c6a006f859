"""
Drivers: square notation, self-play, the line protocol and the CLI.
"""

import io
import logging

import pytest

from othello_ab.__main__ import main
from othello_ab.board import Board, Cell, Position, INVALID_POSITION
from othello_ab.config import EngineConfig
from othello_ab.game import (
    NotationError, SelfPlayGame, StalemateError, from_notation, to_notation,
)
from othello_ab.protocol import PipePlayer, ProtocolError
from othello_ab.search import SearchResult


class TestNotation:
    def test_to_notation(self):
        assert to_notation(Position(3, 2)) == "d3"
        assert to_notation(Position(0, 0)) == "a1"
        assert to_notation(Position(7, 7)) == "h8"

    def test_from_notation(self):
        assert from_notation("d3") == Position(3, 2)
        assert from_notation(" H8\n") == Position(7, 7)

    @pytest.mark.parametrize("text", ["", "d", "z9", "a0", "a9", "i1", "33", "d3x"])
    def test_malformed(self, text):
        with pytest.raises(NotationError):
            from_notation(text)

    def test_small_board(self):
        assert from_notation("d4", size=4) == Position(3, 3)
        with pytest.raises(NotationError):
            from_notation("e1", size=4)


class TestSelfPlay:
    def test_small_board_game_finishes(self):
        cfg = EngineConfig(board_size=4, endgame_threshold=10, search_depth=2)
        record = SelfPlayGame(cfg).play()
        assert record.board.is_game_over()
        assert record.moves[-2:] == [None, None]
        played = [m for m in record.moves if m is not None]
        assert record.board.disk_count == 4 + len(played)
        assert sum(record.board.count()) == record.board.disk_count
        assert record.winner is record.board.winner()

    def test_full_game_depth_one(self):
        record = SelfPlayGame(depth=1).play()
        assert record.board.is_game_over()
        assert len(set(m for m in record.moves if m is not None)) == record.board.disk_count - 4

    def test_is_deterministic(self):
        cfg = EngineConfig(board_size=6, endgame_threshold=20)
        first = SelfPlayGame(cfg, depth=2).play()
        second = SelfPlayGame(cfg, depth=2).play()
        assert first.moves == second.moves
        assert first.board == second.board

    def test_pass_changes_side(self):
        game = SelfPlayGame(depth=1)
        game.board = Board.from_rows(["BW######"] + ["########"] * 7, Cell.WHITE)
        assert game.step() is None
        assert game.board.to_move is Cell.BLACK
        assert game.step() == Position(0, 2)

    def test_missing_move_is_fatal(self, monkeypatch):
        game = SelfPlayGame(depth=1)
        monkeypatch.setattr(game.engine, "best_move",
                            lambda board, depth: SearchResult(INVALID_POSITION, 0))
        with pytest.raises(StalemateError):
            game.step()

    def test_rejects_depth_zero(self):
        with pytest.raises(ValueError):
            SelfPlayGame(depth=0)


def run_pipe(script, depth=1, board=None):
    out = io.StringIO()
    player = PipePlayer(EngineConfig(search_depth=depth), infile=io.StringIO(script), outfile=out)
    if board is not None:
        player.board = board
    final = player.run()
    return player, final, out.getvalue().splitlines()


class TestPipeProtocol:
    def test_black_opens(self):
        _, board, lines = run_pipe("color black\ngo\nquit\n")
        assert lines == ["move c4"]
        assert board.get_field(Position(2, 3)) is Cell.BLACK
        assert board.to_move is Cell.WHITE

    def test_white_replies(self):
        _, board, lines = run_pipe("color white\nmove c4\ngo\n")
        assert len(lines) == 1
        command, square = lines[0].split()
        assert command == "move"
        assert board.get_field(from_notation(square)) is Cell.WHITE
        assert board.disk_count == 6
        assert board.to_move is Cell.BLACK

    def test_opponent_move_keeps_side(self):
        player, board, lines = run_pipe("color white\nmove c4\n")
        assert lines == []
        assert board.to_move is Cell.BLACK
        assert board.get_field(Position(3, 3)) is Cell.BLACK

    def test_stops_at_quit(self):
        _, board, lines = run_pipe("color black\nquit\ngo\n")
        assert lines == []
        assert board == Board()

    def test_blank_lines_ignored(self):
        _, _, lines = run_pipe("\ncolor black\n\nGO\n")
        assert lines == ["move c4"]

    def test_pass_when_no_move(self):
        board = Board.from_rows(["BW######"] + ["########"] * 7, Cell.WHITE)
        _, final, lines = run_pipe("color white\ngo\n", board=board)
        assert lines == ["pass"]
        assert final.to_move is Cell.BLACK

    def test_rejects_depth_zero(self):
        with pytest.raises(ValueError):
            PipePlayer(EngineConfig(search_depth=0))

    @pytest.mark.parametrize("script", [
        "go\n",
        "color red\n",
        "color black\nhello\n",
        "color white\nmove z9\n",
        "color white\nmove a1\n",
        "color white\nmove\n",
    ])
    def test_errors(self, script):
        with pytest.raises(ProtocolError):
            run_pipe(script)


class TestCli:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_pipe(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("color black\ngo\nquit\n"))
        assert main(["--depth", "1", "--log-level", "WARNING", "pipe"]) == 0
        assert capsys.readouterr().out.splitlines() == ["move c4"]

    def test_pipe_protocol_error(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("bogus\n"))
        assert main(["--depth", "1", "--log-level", "WARNING", "pipe"]) == 1

    @pytest.mark.parametrize("command", ["pipe", "selfplay", "serve"])
    def test_depth_zero_rejected(self, command, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--depth", "0", command])
        assert exc.value.code == 2
        assert "--depth must be at least 1" in capsys.readouterr().err

    def test_selfplay(self, capsys):
        assert main(["--depth", "1", "--log-level", "WARNING", "selfplay"]) == 0
        out = capsys.readouterr().out
        assert "Black" in out and "White" in out
