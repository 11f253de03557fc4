"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState
    from gambit.engine.difficulty import Difficulty

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3
    time_limit_ms: int | None = 1000


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is white-positive and belongs to ``best_move``; it is ``None``
    when the move was picked without being scored. ``depth`` is the last
    fully completed iteration.
    """

    best_move: Move | None
    score: int | None
    depth: int
    nodes: int
    timed_out: bool = False


class IEngine(Protocol):
    """Protocol for chess engines used by the UI/game layer."""

    def search(
        self,
        state: GameState,
        limits: SearchLimits,
        difficulty: Difficulty | str = ...,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
