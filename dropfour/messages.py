"""Chatter printed while the AI is thinking."""

from __future__ import annotations

import random
from typing import Optional

AI_MESSAGES = (
    "The AI is thinking...",
    "That was going to be my move, and now...",
    "Didn't see that one coming, but I can work with it...",
    "Don't ruin my plans...",
    "With this strategy I'm going to win...",
    "If this were poker I'd have already won...",
    "Started badly, and now it looks like the start again...",
    "Are you playing blindfolded?",
)


def random_message(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return rng.choice(AI_MESSAGES)
