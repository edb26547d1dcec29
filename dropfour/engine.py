"""Board state, gravity moves and win detection for the 12x9 drop-four game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence

import numpy as np

ROWS = 12
COLS = 9
WIN_LENGTH = 4
DEFAULT_DEPTH = 5

EMPTY = 0

# Stand-ins for -inf / +inf; scores stay plain ints.
SCORE_MIN = -(2**63)
SCORE_MAX = 2**63 - 1


class Side(IntEnum):
    """
    The two players.

    FIRST moves first and is the maximizing side everywhere in the search:
    positive scores favor FIRST, negative scores favor SECOND.
    """

    FIRST = 1
    SECOND = -1

    @property
    def other(self) -> "Side":
        return Side(-int(self))

    @property
    def symbol(self) -> str:
        return "X" if self is Side.FIRST else "O"


class MoveError(ValueError):
    def __init__(self, column: int, message: str) -> None:
        super().__init__(message)
        self.column = column


class ColumnOutOfRange(MoveError):
    def __init__(self, column: int) -> None:
        super().__init__(column, f"column {column} out of range 0..{COLS - 1}")


class ColumnFull(MoveError):
    def __init__(self, column: int) -> None:
        super().__init__(column, f"column {column} is full")


class ColumnEmpty(MoveError):
    def __init__(self, column: int) -> None:
        super().__init__(column, f"column {column} has no marker to remove")


_SYMBOLS = {".": EMPTY, "X": int(Side.FIRST), "O": int(Side.SECOND)}


class Board:
    """
    Fixed ROWS x COLS grid.

    grid values:
      +1 = Side.FIRST
      -1 = Side.SECOND
      0  = empty

    Row 0 is the top edge and row ROWS-1 the bottom edge. Markers fall to the
    lowest empty row, so in every column the occupied cells form a block
    resting on the bottom edge.
    """

    __slots__ = ("grid",)

    def __init__(self, grid: Optional[np.ndarray] = None) -> None:
        if grid is None:
            grid = np.zeros((ROWS, COLS), dtype=np.int8)
        self.grid = grid  # shape (ROWS, COLS), dtype=int8

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> "Board":
        """
        Build a board from a text diagram, top row first.

        '.' is empty, 'X' is Side.FIRST, 'O' is Side.SECOND. Spaces are
        ignored. Missing leading rows are treated as empty.
        """

        rows = [line.replace(" ", "") for line in lines]
        if len(rows) > ROWS:
            raise ValueError(f"expected at most {ROWS} rows, got {len(rows)}")
        rows = ["." * COLS] * (ROWS - len(rows)) + rows

        grid = np.zeros((ROWS, COLS), dtype=np.int8)
        for r, line in enumerate(rows):
            if len(line) != COLS:
                raise ValueError(f"row {r} has {len(line)} cells, expected {COLS}")
            for c, ch in enumerate(line):
                if ch not in _SYMBOLS:
                    raise ValueError(f"unknown cell symbol {ch!r}")
                grid[r, c] = _SYMBOLS[ch]

        for c in range(COLS):
            filled = np.flatnonzero(grid[:, c])
            if len(filled) and len(filled) != ROWS - int(filled[0]):
                raise ValueError(f"column {c} has a floating marker")

        return cls(grid)

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def cell(self, row: int, column: int) -> Optional[Side]:
        if not (0 <= row < ROWS and 0 <= column < COLS):
            raise IndexError(f"cell ({row}, {column}) is off the board")
        value = int(self.grid[row, column])
        return None if value == EMPTY else Side(value)

    def can_play(self, column: int) -> bool:
        return 0 <= column < COLS and int(self.grid[0, column]) == EMPTY

    def legal_moves(self) -> List[int]:
        return [int(c) for c in np.flatnonzero(self.grid[0] == EMPTY)]

    def is_full(self) -> bool:
        return not bool(np.any(self.grid[0] == EMPTY))

    def apply(self, column: int, side: Side) -> int:
        """Drop a marker for `side` into `column` and return the row it lands on."""

        if column < 0 or column >= COLS:
            raise ColumnOutOfRange(column)
        empties = np.flatnonzero(self.grid[:, column] == EMPTY)
        if len(empties) == 0:
            raise ColumnFull(column)

        row = int(empties[-1])
        self.grid[row, column] = int(side)
        return row

    def undo(self, column: int) -> int:
        """Clear the topmost marker of `column` and return its row."""

        if column < 0 or column >= COLS:
            raise ColumnOutOfRange(column)
        filled = np.flatnonzero(self.grid[:, column])
        if len(filled) == 0:
            raise ColumnEmpty(column)

        row = int(filled[0])
        self.grid[row, column] = EMPTY
        return row

    def rows(self) -> List[List[int]]:
        return self.grid.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        sym = {EMPTY: ".", int(Side.FIRST): "X", int(Side.SECOND): "O"}
        body = "\n".join("".join(sym[v] for v in row) for row in self.rows())
        return f"Board(\n{body}\n)"


@dataclass(frozen=True)
class TerminalResult:
    is_terminal: bool
    winner: Optional[Side]  # None for a draw or an unfinished game
    reason: str


def new_board() -> Board:
    return Board()


def apply(board: Board, column: int, side: Side) -> int:
    return board.apply(column, side)


def undo(board: Board, column: int) -> int:
    return board.undo(column)


def has_won(board: Board, side: Side) -> bool:
    """True if `side` owns WIN_LENGTH consecutive cells in any direction."""

    grid = board.rows()
    target = int(side)

    # Horizontal.
    for row in grid:
        count = 0
        for value in row:
            if value == target:
                count += 1
                if count >= WIN_LENGTH:
                    return True
            else:
                count = 0

    # Vertical.
    for c in range(COLS):
        count = 0
        for r in range(ROWS):
            if grid[r][c] == target:
                count += 1
                if count >= WIN_LENGTH:
                    return True
            else:
                count = 0

    # Diagonals are checked per window; only starts where a full window fits.
    for c in range(COLS - WIN_LENGTH + 1):
        # Down-right: row grows with the column.
        for r in range(ROWS - WIN_LENGTH + 1):
            if all(grid[r + i][c + i] == target for i in range(WIN_LENGTH)):
                return True
        # Up-right: row shrinks with the column, so start low enough to stay on the board.
        for r in range(WIN_LENGTH - 1, ROWS):
            if all(grid[r - i][c + i] == target for i in range(WIN_LENGTH)):
                return True

    return False


def winner(board: Board) -> Optional[Side]:
    for side in Side:
        if has_won(board, side):
            return side
    return None


def terminal_result(board: Board) -> TerminalResult:
    won = winner(board)
    if won is not None:
        return TerminalResult(is_terminal=True, winner=won, reason="four in a row")
    if board.is_full():
        return TerminalResult(is_terminal=True, winner=None, reason="board full")
    return TerminalResult(is_terminal=False, winner=None, reason="")
