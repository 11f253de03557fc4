"""High-level chess rules: check, checkmate, stalemate and game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameResult

if TYPE_CHECKING:
    from gambit.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`.

    Repetition and fifty-move draws are not tracked; a game ends only by
    checkmate or stalemate.
    """

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return state.is_check

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        return state.is_check and not state.legal_moves

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        return not state.is_check and not state.legal_moves

    @staticmethod
    def game_result(state: GameState) -> GameResult:
        """Determine the current game result."""
        if state.legal_moves:
            return GameResult.IN_PROGRESS
        if state.is_check:
            return (
                GameResult.BLACK_WINS
                if state.current_player == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
