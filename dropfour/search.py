"""Exhaustive fixed-depth minimax with the root moves fanned out over worker processes."""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from dropfour.engine import COLS, DEFAULT_DEPTH, SCORE_MAX, SCORE_MIN, Board, ColumnFull, Side, has_won
from dropfour.evaluation import HeuristicEvaluator

logger = logging.getLogger(__name__)

Candidate = Tuple[int, int]  # (score, column)


@dataclass
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    workers: Optional[int] = None  # process count; None = os.cpu_count()
    parallel: bool = True
    parallel_evaluation: bool = False

    def validate(self) -> None:
        if self.depth < 0:
            raise ValueError("depth must be >= 0")
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be >= 1")


class SearchEngine:
    """
    Minimax over the full game tree down to a fixed depth.

    Convention: `maximizing=True` means Side.FIRST is to move. Scores come
    from HeuristicEvaluator, where positive favors Side.FIRST, so FIRST
    maximizes and SECOND minimizes at alternating plies.

    With `parallel` on, every legal root move is sent to a persistent
    ProcessPoolExecutor together with its own pickled board clone; the
    subtree below it is searched inside that worker. Results are joined in
    column order, which keeps the max/min choice (and its tie-break)
    independent of which worker finishes first. No board is ever shared
    between branches.

    `parallel_evaluation` additionally splits each leaf evaluation into
    row, column and diagonal subtasks on a thread pool.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self.config.validate()

        self._pool: Optional[ProcessPoolExecutor] = None
        self._eval_executor: Optional[ThreadPoolExecutor] = None
        if self.config.parallel_evaluation:
            self._eval_executor = ThreadPoolExecutor(thread_name_prefix="dropfour-eval")
        self.evaluator = HeuristicEvaluator(self._eval_executor)

        self._nodes = 0

    @property
    def nodes(self) -> int:
        """Nodes visited by the most recent search, worker processes included."""
        return self._nodes

    def minimax(self, board: Board, depth: int, maximizing: bool) -> Candidate:
        """
        Return (score, column) for the side to move.

        The column is 0 at a terminal node (depth exhausted or a side has
        already won). If no column is playable the score is SCORE_MIN for a
        maximizing node and SCORE_MAX for a minimizing one, again with
        column 0. The caller's board is never modified.
        """

        if depth < 0:
            raise ValueError("depth must be >= 0")

        self._nodes = 1
        if _is_terminal(board, depth):
            score, column = self.evaluator.score(board), 0
        else:
            score, column = _reduce(self._expand_root(board, depth, maximizing), maximizing)

        logger.debug(
            "minimax depth=%d side=%s -> column=%d score=%d nodes=%d",
            depth,
            "FIRST" if maximizing else "SECOND",
            column,
            score,
            self._nodes,
        )
        return score, column

    def best_move(self, board: Board, side: Side, depth: Optional[int] = None) -> int:
        if depth is None:
            depth = self.config.depth
        _, column = self.minimax(board, depth, side is Side.FIRST)
        return column

    def column_scores(self, board: Board, depth: int, maximizing: bool) -> Dict[int, int]:
        """Minimax score of every playable column at the root."""

        if depth < 1:
            raise ValueError("depth must be >= 1")

        self._nodes = 1
        return {column: score for score, column in self._expand_root(board, depth, maximizing)}

    def _expand_root(self, board: Board, depth: int, maximizing: bool) -> List[Candidate]:
        if not self.config.parallel:
            return self._expand(board, depth, maximizing)

        pool = self._process_pool()
        branches = _branches(board, maximizing)
        futures = [
            pool.submit(_explore_branch, child, column, depth - 1, not maximizing, self.config.parallel_evaluation)
            for column, child in branches
        ]

        candidates: List[Candidate] = []
        for (column, _), future in zip(branches, futures):
            score, nodes = future.result()
            self._nodes += nodes
            candidates.append((score, column))
        return candidates

    def _expand(self, board: Board, depth: int, maximizing: bool) -> List[Candidate]:
        return [
            (self._explore(child, column, depth - 1, not maximizing), column)
            for column, child in _branches(board, maximizing)
        ]

    def _search(self, board: Board, depth: int, maximizing: bool) -> Candidate:
        self._nodes += 1
        if _is_terminal(board, depth):
            return self.evaluator.score(board), 0
        return _reduce(self._expand(board, depth, maximizing), maximizing)

    def _explore(self, child: Board, column: int, depth: int, maximizing: bool) -> int:
        score, _ = self._search(child, depth, maximizing)
        child.undo(column)
        return score

    def _process_pool(self) -> ProcessPoolExecutor:
        if self._pool is None:
            self._pool = ProcessPoolExecutor(max_workers=self.config.workers)
        return self._pool

    def close(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None
        if self._eval_executor is not None:
            self._eval_executor.shutdown(wait=True)
            self._eval_executor = None
            self.evaluator.executor = None

    def __enter__(self) -> "SearchEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _is_terminal(board: Board, depth: int) -> bool:
    return depth == 0 or has_won(board, Side.FIRST) or has_won(board, Side.SECOND)


def _branches(board: Board, maximizing: bool) -> List[Tuple[int, Board]]:
    """One (column, clone-with-the-move-applied) pair per playable column, ascending."""

    side = Side.FIRST if maximizing else Side.SECOND
    branches = []
    for column in range(COLS):
        child = board.copy()
        try:
            child.apply(column, side)
        except ColumnFull:
            continue
        branches.append((column, child))
    return branches


def _reduce(candidates: List[Candidate], maximizing: bool) -> Candidate:
    """Pick the best candidate; on equal scores the lowest column is kept."""

    if not candidates:
        return (SCORE_MIN, 0) if maximizing else (SCORE_MAX, 0)

    best = candidates[0]
    for candidate in candidates[1:]:
        if maximizing and candidate[0] > best[0]:
            best = candidate
        elif not maximizing and candidate[0] < best[0]:
            best = candidate
    return best


def best_column(scores: Dict[int, int], maximizing: bool) -> Candidate:
    """Reduce a `column_scores` table the same way minimax reduces its root."""

    return _reduce([(score, column) for column, score in sorted(scores.items())], maximizing)


# One serial engine per worker process, reused across submitted branches.
_worker_engine: Optional[SearchEngine] = None


def _explore_branch(
    child: Board,
    column: int,
    depth: int,
    maximizing: bool,
    parallel_evaluation: bool,
) -> Tuple[int, int]:
    """Worker entry point: search one root branch, return (score, nodes visited)."""

    global _worker_engine
    if _worker_engine is None or _worker_engine.config.parallel_evaluation != parallel_evaluation:
        if _worker_engine is not None:
            _worker_engine.close()
        _worker_engine = SearchEngine(SearchConfig(parallel=False, parallel_evaluation=parallel_evaluation))

    engine = _worker_engine
    engine._nodes = 0
    score = engine._explore(child, column, depth, maximizing)
    return score, engine.nodes


def minimax(board: Board, depth: int, maximizing: bool) -> Candidate:
    with SearchEngine(SearchConfig(depth=depth)) as engine:
        return engine.minimax(board, depth, maximizing)
