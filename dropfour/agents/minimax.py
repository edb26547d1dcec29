"""Agent backed by the parallel minimax search."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from dropfour.agents.base import Agent
from dropfour.engine import Board, Side
from dropfour.search import SearchEngine, best_column

ScoresFn = Callable[[Side, int, Dict[int, int]], None]


class MinimaxAgent(Agent):
    """
    Plays the column chosen by SearchEngine at the engine's configured depth.

    Side.FIRST searches as the maximizing side and Side.SECOND as the
    minimizing side. `on_move`, when given, is called before each search
    (the CLI uses it to print a line of chatter). With `on_scores` the agent
    searches once for the whole root score table, reports it, and plays the
    column minimax would pick from that table.
    """

    def __init__(
        self,
        name: str,
        engine: SearchEngine,
        *,
        on_move: Optional[Callable[[str], None]] = None,
        on_scores: Optional[ScoresFn] = None,
    ) -> None:
        self.name = name
        self.engine = engine
        self.on_move = on_move
        self.on_scores = on_scores

    def select_move(self, board: Board, side: Side) -> int:
        if not board.legal_moves():
            raise ValueError("no legal moves available")
        if self.on_move is not None:
            self.on_move(self.name)
        if self.on_scores is None:
            return self.engine.best_move(board, side)

        depth = self.engine.config.depth
        maximizing = side is Side.FIRST
        scores = self.engine.column_scores(board, depth, maximizing)
        self.on_scores(side, depth, scores)
        _, column = best_column(scores, maximizing)
        return column
