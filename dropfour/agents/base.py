"""Abstract base class for drop-four agents."""

from __future__ import annotations

import abc

from dropfour.engine import Board, Side


class Agent(abc.ABC):
    name: str

    @abc.abstractmethod
    def select_move(self, board: Board, side: Side) -> int:
        raise NotImplementedError
