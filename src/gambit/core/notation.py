"""Short algebraic move notation.

The format is deliberately minimal: no disambiguation between two
identical pieces that reach the same square, and no ``+`` / ``#`` suffix.
Display code built on top of this engine expects exactly that shape.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import PieceType
from gambit.core.move import Move
from gambit.core.piece import PIECE_LETTERS
from gambit.core.types import FILES, square_name


def move_to_notation(board: Board, move: Move) -> str:
    """Notation for *move* given the *board* before it is played.

    ``O-O`` / ``O-O-O`` for castling, ``e4`` / ``exd5`` / ``e8=Q`` for pawns
    and ``Nf3`` / ``Bxc6`` for pieces.
    """
    if move.is_castling:
        return "O-O" if move.to_sq[1] == 6 else "O-O-O"

    is_capture = (
        move.captured is not None
        or move.is_en_passant
        or board.piece_at(move.to_sq) is not None
    )
    target = square_name(move.to_sq)

    if move.piece.piece_type == PieceType.PAWN:
        text = f"{FILES[move.from_sq[1]]}x{target}" if is_capture else target
        if move.is_promotion and move.promoted_to is not None:
            text += "=" + PIECE_LETTERS[move.promoted_to]
        return text

    return move.piece.letter + ("x" if is_capture else "") + target
