"""Difficulty levels: blunder rate, candidate choice and search depth."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from enum import Enum
from typing import TypeVar

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_MAX_SEARCH_DEPTH = 6


class Difficulty(Enum):
    """Named engine strength."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"
    ENGINE = "engine"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, label: Difficulty | str) -> Difficulty:
        """Case-insensitive lookup; unknown labels play at full strength."""
        if isinstance(label, Difficulty):
            return label
        if isinstance(label, str):
            key = label.strip().lower()
            for level in cls:
                if level.value == key:
                    return level
        _LOGGER.warning("Unknown difficulty %r, using %s", label, cls.ENGINE)
        return cls.ENGINE

    @property
    def blunder_rate(self) -> float:
        """Chance of answering with a random legal move instead of searching."""
        return _BLUNDER_RATES.get(self, 0.0)

    @property
    def base_depth(self) -> int:
        return _BASE_DEPTHS[self]

    def select(self, ranked: Sequence[T], rng: random.Random) -> T:
        """Pick one of *ranked* (best first) the way this level plays.

        Beginner takes any of the top five, intermediate any of the top
        three, advanced the best 80% of the time and otherwise the second
        best; expert and engine always take the best.
        """
        if not ranked:
            raise ValueError("No candidates to select from")
        if self is Difficulty.BEGINNER:
            return ranked[rng.randrange(min(len(ranked), 5))]
        if self is Difficulty.INTERMEDIATE:
            return ranked[rng.randrange(min(len(ranked), 3))]
        if self is Difficulty.ADVANCED:
            if rng.random() < 0.8:
                return ranked[0]
            return ranked[min(len(ranked), 2) - 1]
        return ranked[0]


_BLUNDER_RATES: dict[Difficulty, float] = {
    Difficulty.BEGINNER: 0.25,
    Difficulty.INTERMEDIATE: 0.10,
}

_BASE_DEPTHS: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 2,
    Difficulty.INTERMEDIATE: 3,
    Difficulty.ADVANCED: 4,
    Difficulty.EXPERT: 5,
    Difficulty.ENGINE: 5,
}

_BONUS_LEVELS = frozenset({Difficulty.ADVANCED, Difficulty.EXPERT, Difficulty.ENGINE})


def search_depth(difficulty: Difficulty | str, bonus: int = 0) -> int:
    """Search depth for *difficulty*.

    *bonus* (e.g. from the player's rank) only raises the stronger levels,
    and never past a depth of 6.
    """
    if bonus < 0:
        raise ValueError(f"Depth bonus must be >= 0, got {bonus}")
    level = Difficulty.parse(difficulty)
    if level in _BONUS_LEVELS:
        return min(level.base_depth + bonus, _MAX_SEARCH_DEPTH)
    return level.base_depth
