import random
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from dropfour.engine import COLS, ROWS, Board, Side, new_board
from dropfour.evaluation import HeuristicEvaluator, evaluate, score_line, score_window


def board_with(first=(), second=()) -> Board:
    grid = np.zeros((ROWS, COLS), dtype=np.int8)
    for r, c in first:
        grid[r, c] = int(Side.FIRST)
    for r, c in second:
        grid[r, c] = int(Side.SECOND)
    return Board(grid)


def random_board(seed: int, moves: int) -> Board:
    rng = random.Random(seed)
    board = new_board()
    side = Side.FIRST
    for _ in range(moves):
        board.apply(rng.choice(board.legal_moves()), side)
        side = side.other
    return board


BOTTOM = ROWS - 1


@pytest.mark.parametrize(
    "cells, expected",
    [
        ([], 0),
        ([1], 0),
        ([1, 1], 10),
        ([1, 1, 1], 60),
        ([1, 1, 1, 1], 160),
        ([1, 1, 1, 1, 1], 160),
        ([-1, -1, -1], -60),
        ([1, 1, -1, 1, 1], 10 - 0 + 10),
        ([1, 1, 0, -1, -1, -1, -1], 10 - 160),
    ],
)
def test_score_line(cells, expected: int) -> None:
    assert score_line(cells) == expected


def test_score_window() -> None:
    assert score_window([1, 1, 1, 1]) == 100
    assert score_window([-1, -1, -1, -1]) == -100
    assert score_window([1, 1, 1, 0]) == 0
    assert score_window([1, 1, 1, -1]) == 0
    # Clipped windows never reach four cells.
    assert score_window([1, 1, 1]) == 0


def test_empty_and_single_marker_score_zero() -> None:
    assert evaluate(new_board()) == 0
    assert evaluate(board_with(first=[(BOTTOM, 4)])) == 0


def test_horizontal_runs() -> None:
    assert evaluate(board_with(first=[(BOTTOM, 0), (BOTTOM, 1)])) == 10
    assert evaluate(board_with(first=[(BOTTOM, c) for c in range(3)])) == 60
    assert evaluate(board_with(first=[(BOTTOM, c) for c in range(4)])) == 160
    assert evaluate(board_with(first=[(BOTTOM, c) for c in range(5)])) == 160
    assert evaluate(board_with(second=[(BOTTOM, c) for c in range(3)])) == -60


def test_vertical_runs() -> None:
    assert evaluate(board_with(first=[(BOTTOM - i, 0) for i in range(3)])) == 60
    assert evaluate(board_with(second=[(BOTTOM - i, 8) for i in range(4)])) == -160


def test_down_right_window_scores_once() -> None:
    board = board_with(first=[(i, i) for i in range(4)])
    assert evaluate(board) == 100

    board = board_with(second=[(8 + i, 5 + i) for i in range(4)])
    assert evaluate(board) == -100


def test_up_right_window_scores_from_upper_start_rows() -> None:
    board = board_with(first=[(8 - i, i) for i in range(4)])
    assert evaluate(board) == 100

    board = board_with(first=[(3 - i, 5 + i) for i in range(4)])
    assert evaluate(board) == 100


def test_up_right_window_from_bottom_rows_is_not_scored() -> None:
    board = board_with(first=[(BOTTOM - i, i) for i in range(4)])
    assert evaluate(board) == 0


def test_diagonal_partial_runs_are_not_credited() -> None:
    board = board_with(first=[(i, i) for i in range(3)])
    assert evaluate(board) == 0


def test_five_on_a_diagonal_counts_two_windows() -> None:
    board = board_with(first=[(i, i) for i in range(5)])
    assert evaluate(board) == 200


def test_mixed_board_sums_all_terms() -> None:
    board = Board.from_rows(["OO.......", "XXX......"])
    # rows: 60 - 10, columns: single markers only
    assert evaluate(board) == 50


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_evaluation_is_repeatable(seed: int) -> None:
    board = random_board(seed, moves=40)
    assert evaluate(board) == evaluate(board)


@pytest.mark.parametrize("seed", [4, 5, 6])
def test_parallel_evaluation_matches_serial(seed: int) -> None:
    board = random_board(seed, moves=60)
    with ThreadPoolExecutor(max_workers=2) as executor:
        parallel = HeuristicEvaluator(executor)
        assert parallel.score(board) == evaluate(board)
        assert parallel.score(board) == parallel.score(board)


def test_evaluation_does_not_modify_board() -> None:
    board = random_board(9, moves=30)
    before = board.copy()
    evaluate(board)
    assert board == before
