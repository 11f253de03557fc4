"""GameState: one immutable snapshot of a game in progress."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square


@dataclass(frozen=True, slots=True)
class CapturedPieces:
    """Pieces taken off the board, grouped by the color of the lost piece.

    ``white`` lists white pieces black has captured and ``black`` the black
    pieces white has captured, each in capture order.
    """

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def of(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def with_capture(self, piece: Piece) -> CapturedPieces:
        if piece.color == Color.WHITE:
            return CapturedPieces(self.white + (piece,), self.black)
        return CapturedPieces(self.white, self.black + (piece,))


@dataclass(frozen=True, slots=True)
class GameState:
    """Board, side to move and derived status after some number of plies.

    A state is created by :func:`gambit.core.transition.create_initial_state`
    and then only replaced by :func:`gambit.core.transition.apply_move`.
    Nothing edits a state, or the board it owns, once it has been returned.

    ``legal_moves`` holds the legal moves of ``current_player``; the same
    list decides ``is_checkmate`` / ``is_stalemate``.
    """

    board: Board
    current_player: Color
    move_history: tuple[Move, ...]
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    en_passant_target: Square | None
    captured_pieces: CapturedPieces
    legal_moves: tuple[Move, ...] = field(repr=False)

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate
