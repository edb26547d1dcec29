"""Drop-four package (engine + evaluation + parallel minimax + CLI)."""

from dropfour.engine import (
    COLS,
    DEFAULT_DEPTH,
    ROWS,
    WIN_LENGTH,
    Board,
    ColumnEmpty,
    ColumnFull,
    ColumnOutOfRange,
    MoveError,
    Side,
    TerminalResult,
    apply,
    has_won,
    new_board,
    terminal_result,
    undo,
)
from dropfour.evaluation import HeuristicEvaluator, evaluate
from dropfour.search import SearchConfig, SearchEngine, minimax

__all__ = [
    "COLS",
    "DEFAULT_DEPTH",
    "ROWS",
    "WIN_LENGTH",
    "Board",
    "ColumnEmpty",
    "ColumnFull",
    "ColumnOutOfRange",
    "MoveError",
    "Side",
    "TerminalResult",
    "apply",
    "has_won",
    "new_board",
    "terminal_result",
    "undo",
    "HeuristicEvaluator",
    "evaluate",
    "SearchConfig",
    "SearchEngine",
    "minimax",
]
