"""Static evaluation of a board: run bonuses on rows/columns plus diagonal windows."""

from __future__ import annotations

from concurrent.futures import Executor
from typing import Dict, Iterable, List, Optional, Sequence

from dropfour.engine import COLS, ROWS, WIN_LENGTH, Board, Side
from dropfour.parallel import gather

Grid = List[List[int]]

# Bonus for the current run length after each cell of a row or column.
RUN_BONUS: Dict[int, int] = {2: 10, 3: 50, 4: 100}

# A diagonal window fully owned by one side.
WINDOW_SCORE = 100

_FIRST = int(Side.FIRST)
_SECOND = int(Side.SECOND)


def score_line(cells: Sequence[int]) -> int:
    """
    Score one row or column.

    Two run counters are kept, one per side. A cell of the other side (or an
    empty cell) resets a counter. After every cell the FIRST run length earns
    RUN_BONUS and the SECOND run length pays it, so a run of three is worth
    10 + 50 and a run of four or more caps at 10 + 50 + 100.
    """

    score = 0
    run_first = 0
    run_second = 0

    for value in cells:
        if value == _FIRST:
            run_first += 1
            run_second = 0
        elif value == _SECOND:
            run_second += 1
            run_first = 0
        else:
            run_first = 0
            run_second = 0

        score += RUN_BONUS.get(run_first, 0)
        score -= RUN_BONUS.get(run_second, 0)

    return score


def score_window(cells: Sequence[int]) -> int:
    """+-WINDOW_SCORE for a complete WIN_LENGTH window owned by one side, else 0."""

    count_first = sum(1 for v in cells if v == _FIRST)
    count_second = sum(1 for v in cells if v == _SECOND)
    if count_first == WIN_LENGTH:
        return WINDOW_SCORE
    if count_second == WIN_LENGTH:
        return -WINDOW_SCORE
    return 0


def _down_right_windows(grid: Grid, row: int) -> Iterable[List[int]]:
    for col in range(COLS - WIN_LENGTH + 1):
        yield [grid[row + i][col + i] for i in range(WIN_LENGTH)]


def _up_right_windows(grid: Grid, row: int) -> Iterable[List[int]]:
    # Same start rows as the down-right family. Starts near the top edge lose
    # the cells above row 0 and can never be complete, and starts in the
    # bottom WIN_LENGTH-1 rows are not visited at all.
    for col in range(COLS - WIN_LENGTH + 1):
        yield [grid[row - i][col + i] for i in range(WIN_LENGTH) if row - i >= 0]


def _score_diagonal_row(grid: Grid, row: int) -> int:
    score = 0
    for window in _down_right_windows(grid, row):
        score += score_window(window)
    for window in _up_right_windows(grid, row):
        score += score_window(window)
    return score


class HeuristicEvaluator:
    """
    Board scorer; positive favors Side.FIRST.

    score = rows + columns + diagonal windows. With an executor the three
    phases run as parallel subtasks and each phase fans out again per line;
    without one everything runs on the calling thread. Both paths sum the
    same terms, and the board is only read, so concurrent calls on shared
    snapshots are safe.
    """

    def __init__(self, executor: Optional[Executor] = None) -> None:
        self.executor = executor

    def score(self, board: Board) -> int:
        grid = board.rows()
        phases = gather(
            self.executor,
            [
                (self._score_rows, (grid,)),
                (self._score_cols, (grid,)),
                (self._score_diagonals, (grid,)),
            ],
        )
        return sum(phases)

    def _score_rows(self, grid: Grid) -> int:
        return sum(gather(self.executor, [(score_line, (row,)) for row in grid]))

    def _score_cols(self, grid: Grid) -> int:
        cols = [[grid[r][c] for r in range(ROWS)] for c in range(COLS)]
        return sum(gather(self.executor, [(score_line, (col,)) for col in cols]))

    def _score_diagonals(self, grid: Grid) -> int:
        starts = range(ROWS - WIN_LENGTH + 1)
        return sum(gather(self.executor, [(_score_diagonal_row, (grid, r)) for r in starts]))


_SERIAL = HeuristicEvaluator()


def evaluate(board: Board) -> int:
    return _SERIAL.score(board)
