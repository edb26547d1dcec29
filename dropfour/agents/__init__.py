"""Agent implementations for drop-four."""

from dropfour.agents.base import Agent
from dropfour.agents.human import HINT_CODE, HumanAgent
from dropfour.agents.minimax import MinimaxAgent

__all__ = ["Agent", "HumanAgent", "MinimaxAgent", "HINT_CODE"]
