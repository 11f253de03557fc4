"""Pure-Python chess search (minimax + alpha-beta, iterative deepening)."""

from __future__ import annotations

import logging
import random
from time import perf_counter

from gambit.core.enums import Color
from gambit.core.evaluation import evaluate
from gambit.core.move import Move
from gambit.core.state import GameState
from gambit.core.transition import advance
from gambit.engine.difficulty import Difficulty
from gambit.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000


def _never_cancelled() -> bool:
    return False


def _capture_first(move: Move) -> bool:
    return move.captured is None


class MinimaxEngine(IEngine):
    """Time-boxed minimax searcher with difficulty-driven move choice.

    Random choices come from the injected ``rng``; pass a seeded
    :class:`random.Random` for reproducible play.
    """

    __slots__ = ("_rng", "_cancel_check", "_deadline", "_nodes")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._cancel_check: CancelCheck = _never_cancelled
        self._deadline: float | None = None
        self._nodes = 0

    def search(
        self,
        state: GameState,
        limits: SearchLimits,
        difficulty: Difficulty | str = Difficulty.ENGINE,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        level = Difficulty.parse(difficulty)
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            self._deadline = perf_counter() + limits.time_limit_ms / 1000.0

        moves = list(state.legal_moves)
        if not moves:
            return SearchResult(None, self._terminal_score(state, 0), 0, 0)

        rate = level.blunder_rate
        if rate and self._rng.random() < rate:
            move = self._rng.choice(moves)
            _LOGGER.debug("%s plays random move %s", level, move)
            return SearchResult(move, None, 0, 0)

        maximizing = state.current_player == Color.WHITE
        children = [(move, advance(state, move)) for move in moves]
        best_move: Move | None = None
        best_score: int | None = None
        completed_depth = 0
        timed_out = False

        for depth in range(1, limits.max_depth + 1):
            if self._should_stop():
                timed_out = True
                break

            ranked = self._rank_root(children, depth, maximizing)
            if ranked is None:
                timed_out = True
                break

            best_move, best_score = level.select(ranked, self._rng)
            completed_depth = depth
            _LOGGER.debug(
                "depth %d: %s (%s) best %s, %d nodes",
                depth,
                best_move,
                best_score,
                ranked[0][1],
                self._nodes,
            )

        if timed_out:
            _LOGGER.info(
                "Search stopped after depth %d of %d (%d nodes)",
                completed_depth,
                limits.max_depth,
                self._nodes,
            )

        if best_move is None:
            best_move = self._rng.choice(moves)
            _LOGGER.warning("No search depth completed, playing random %s", best_move)

        return SearchResult(
            best_move, best_score, completed_depth, self._nodes, timed_out
        )

    def _rank_root(
        self,
        children: list[tuple[Move, GameState]],
        depth: int,
        maximizing: bool,
    ) -> list[tuple[Move, int]] | None:
        """Score every root move at *depth*, best first; ``None`` if stopped."""
        scored: list[tuple[Move, int]] = []
        for move, child in children:
            score = self._minimax(
                child,
                depth - 1,
                -_INF_SCORE,
                _INF_SCORE,
                child.current_player == Color.WHITE,
            )
            if score is None:
                return None
            scored.append((move, score))

        scored.sort(key=lambda item: item[1], reverse=maximizing)
        return scored

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
    ) -> int | None:
        """White-positive score of *state*, or ``None`` once the search must stop."""
        if self._should_stop():
            return None

        self._nodes += 1

        if state.is_checkmate or state.is_stalemate:
            return self._terminal_score(state, depth)
        if depth == 0:
            return evaluate(state.board)

        ordered = sorted(state.legal_moves, key=_capture_first)

        if maximizing:
            best_score = -_INF_SCORE
            for move in ordered:
                score = self._minimax(advance(state, move), depth - 1, alpha, beta, False)
                if score is None:
                    return None
                best_score = max(best_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
            return best_score

        best_score = _INF_SCORE
        for move in ordered:
            score = self._minimax(advance(state, move), depth - 1, alpha, beta, True)
            if score is None:
                return None
            best_score = min(best_score, score)
            beta = min(beta, score)
            if beta <= alpha:
                break
        return best_score

    def _terminal_score(self, state: GameState, depth: int) -> int:
        # Mates found with more depth remaining are nearer the root.
        if state.is_checkmate:
            mate = _MATE_SCORE + depth
            return -mate if state.current_player == Color.WHITE else mate
        return 0

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() > self._deadline


def choose_move(
    state: GameState,
    max_depth: int = 3,
    difficulty: Difficulty | str = Difficulty.INTERMEDIATE,
    *,
    rng: random.Random | None = None,
    time_limit_ms: int | None = 1000,
) -> Move | None:
    """The engine's move for *state*, or ``None`` when there is no legal move."""
    engine = MinimaxEngine(rng)
    result = engine.search(
        state,
        SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms),
        difficulty,
    )
    return result.best_move
