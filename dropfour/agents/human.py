"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable, Optional

from dropfour.agents.base import Agent
from dropfour.engine import Board, Side

# Typing this number at the prompt lets the advisor pick the move.
HINT_CODE = 42

PromptFn = Callable[[Board, Side, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn, advisor: Optional[Agent] = None) -> None:
        self.name = name
        self.prompt_fn = prompt_fn
        self.advisor = advisor

    def select_move(self, board: Board, side: Side) -> int:
        col = self.prompt_fn(board, side, self.name)
        if col == HINT_CODE and self.advisor is not None:
            return self.advisor.select_move(board, side)
        return col
