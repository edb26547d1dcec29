import random
from typing import List

import pytest
from typer.testing import CliRunner

from dropfour.agents import Agent, MinimaxAgent
from dropfour.cli import Move, _parse_column, app, format_move_history, play_game, render_board
from dropfour.engine import COLS, ROWS, Board, ColumnFull, Side, new_board
from dropfour.messages import random_message
from dropfour.search import SearchConfig, SearchEngine

from tests.boards import fill_column

runner = CliRunner()


class ScriptedAgent(Agent):
    """Plays the first legal column, or the scripted ones while they last."""

    def __init__(self, script: List[int]) -> None:
        self.name = "scripted"
        self.script = list(script)

    def select_move(self, board: Board, side: Side) -> int:
        if self.script:
            return self.script.pop(0)
        return board.legal_moves()[0]


def lines(*cols: int) -> str:
    return "".join(f"{c}\n" for c in cols)


def test_render_board() -> None:
    board = new_board()
    board.apply(0, Side.FIRST)
    board.apply(8, Side.SECOND)
    rows = render_board(board).splitlines()
    assert len(rows) == ROWS + 2
    assert rows[0] == " ".join(["."] * COLS)
    assert rows[ROWS - 1] == "X . . . . . . . O"
    assert rows[-1] == "0 1 2 3 4 5 6 7 8"


def test_format_move_history() -> None:
    moves = [Move(0, Side.FIRST, 11, 3), Move(1, Side.SECOND, 10, 3)]
    assert format_move_history(moves) == "0:X@3 1:O@3"


def test_parse_column() -> None:
    assert _parse_column(" 4 ") == 4
    assert _parse_column("42") == 42
    assert _parse_column("9") is None
    assert _parse_column("-1") is None
    assert _parse_column("abc") is None
    assert _parse_column("") is None


def test_friends_game_vertical_win() -> None:
    result = runner.invoke(app, ["--mode", "friends"], input=lines(0, 1, 0, 1, 0, 1, 0))
    assert result.exit_code == 0, result.output
    assert "Result: X wins (four in a row)" in result.output
    assert "Moves: 0:X@0 1:O@1 2:X@0 3:O@1 4:X@0 5:O@1 6:X@0" in result.output


def test_mode_is_prompted_when_omitted() -> None:
    result = runner.invoke(app, [], input="7\n1\n" + lines(1, 0, 1, 0, 1, 0, 2, 0))
    assert result.exit_code == 0, result.output
    assert "play with a friend" in result.output
    assert "Result: O wins (four in a row)" in result.output


def test_invalid_input_reprompts() -> None:
    result = runner.invoke(app, ["--mode", "friends"], input="abc\n9\n" + lines(0, 1, 0, 1, 0, 1, 0))
    assert result.exit_code == 0, result.output
    assert "Enter a column index 0-8, or 42 for a hint." in result.output
    assert "Result: X wins" in result.output


def test_hint_plays_engine_move() -> None:
    # On an empty board every depth-1 move scores 0, so the hint is column 0.
    result = runner.invoke(app, ["--mode", "friends", "--depth", "1"], input=lines(42, 1, 0, 1, 0, 1, 0))
    assert result.exit_code == 0, result.output
    assert "Move: X -> col 0, row 11" in result.output
    assert "Result: X wins" in result.output


def test_bad_depth_is_rejected() -> None:
    result = runner.invoke(app, ["--mode", "friends", "--depth", "0"])
    assert result.exit_code != 0


def test_play_game_against_minimax_finishes() -> None:
    with SearchEngine(SearchConfig(depth=2)) as engine:
        agents = {Side.FIRST: ScriptedAgent([4, 4, 4]), Side.SECOND: MinimaxAgent("AI", engine)}
        board = new_board()
        tr = play_game(board, agents)

    assert tr.is_terminal
    assert tr.winner is not None or board.is_full()
    assert board.cell(ROWS - 1, 4) is Side.FIRST


def test_play_game_raises_when_an_agent_picks_a_full_column() -> None:
    board = new_board()
    fill_column(board, 0)
    agents = {Side.FIRST: ScriptedAgent([0]), Side.SECOND: ScriptedAgent([])}
    with pytest.raises(ColumnFull):
        play_game(board, agents)


def test_solo_game_against_ai() -> None:
    # X always asks for a hint; the AI prints chatter and its score table each turn.
    result = runner.invoke(
        app,
        ["--mode", "solo", "--depth", "1", "--seed", "3", "--show-scores"],
        input="42\n" * 60,
    )
    assert result.exit_code == 0, result.output
    assert "AI: " + random_message(random.Random(3)) in result.output
    assert "Minimax" in result.output
    assert "Result:" in result.output
