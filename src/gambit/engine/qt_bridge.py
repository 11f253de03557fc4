"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import random
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.state import GameState
from gambit.engine.difficulty import Difficulty
from gambit.engine.minimax import MinimaxEngine
from gambit.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and connect ``request_move``; results come
    back through the signals tagged with the caller's request id.
    """

    best_move_ready = pyqtSignal(int, object, object, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_difficulty", "_engine", "_limits")

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 1000,
        difficulty: Difficulty | str = Difficulty.ENGINE,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._engine = MinimaxEngine(rng)
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        self._difficulty = Difficulty.parse(difficulty)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Search for the engine's move in *state_obj* and emit the result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid game state")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                state_obj,
                self._limits,
                self._difficulty,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._limits = SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)

    @pyqtSlot(str)
    def set_difficulty(self, label: str) -> None:
        """Update the playing strength (takes effect on the next search)."""
        self._difficulty = Difficulty.parse(label)
