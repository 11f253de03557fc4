"""State transition: initial state, applying moves, replay and undo."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import PROMOTION_TYPES, Move
from gambit.core.move_generator import MoveGenerator, is_in_check
from gambit.core.notation import move_to_notation
from gambit.core.state import CapturedPieces, GameState
from gambit.core.types import Square

_LOGGER = logging.getLogger(__name__)

# King destination column → (rook from column, rook to column)
_CASTLING_ROOK_COLS: dict[int, tuple[int, int]] = {
    6: (7, 5),
    2: (0, 3),
}


class IllegalMoveError(ValueError):
    """Raised when a move is not legal in the state it is applied to."""

    def __init__(self, move: Move, reason: str = "not a legal move") -> None:
        super().__init__(f"{move}: {reason}")
        self.move = move
        self.reason = reason


def state_for_board(
    board: Board,
    current_player: Color,
    *,
    move_history: tuple[Move, ...] = (),
    en_passant_target: Square | None = None,
    captured_pieces: CapturedPieces | None = None,
) -> GameState:
    """Build a :class:`GameState` with check / mate / stalemate derived.

    *board* becomes owned by the returned state and must not be edited
    afterwards.
    """
    legal = tuple(
        MoveGenerator(board, current_player, en_passant_target).generate_legal_moves()
    )
    check = is_in_check(board, current_player)
    return GameState(
        board=board,
        current_player=current_player,
        move_history=move_history,
        is_check=check,
        is_checkmate=check and not legal,
        is_stalemate=not check and not legal,
        en_passant_target=en_passant_target,
        captured_pieces=captured_pieces or CapturedPieces(),
        legal_moves=legal,
    )


def create_initial_state() -> GameState:
    """Standard starting array, white to move."""
    return state_for_board(Board.initial(), Color.WHITE)


def apply_move(state: GameState, move: Move) -> GameState:
    """Return the state after *move*; *state* itself is left untouched.

    *move* is matched against the legal moves of *state* by origin and
    destination. For promotions the caller's ``promoted_to`` is kept, and
    a queen is used when it is unset.

    Raises:
        IllegalMoveError: *move* is not legal in *state*.
    """
    if move.promoted_to is not None and move.promoted_to not in PROMOTION_TYPES:
        raise IllegalMoveError(move, f"cannot promote to {move.promoted_to!r}")

    for candidate in state.legal_moves:
        if candidate.from_sq == move.from_sq and candidate.to_sq == move.to_sq:
            if candidate.is_promotion:
                candidate = candidate.with_promotion(
                    move.promoted_to or PieceType.QUEEN
                )
            return advance(state, candidate)

    raise IllegalMoveError(move)


def advance(state: GameState, move: Move) -> GameState:
    """Apply a move taken from ``state.legal_moves`` without re-validating it."""
    board = state.board.copy()
    piece = move.piece
    from_sq, to_sq = move.from_sq, move.to_sq

    board[from_sq] = None
    if move.is_promotion:
        board[to_sq] = piece.promoted(move.promoted_to or PieceType.QUEEN)
    else:
        board[to_sq] = piece.moved()

    if move.is_en_passant:
        board[from_sq[0], to_sq[1]] = None

    if move.is_castling:
        rook_from, rook_to = _CASTLING_ROOK_COLS[to_sq[1]]
        rook = board[from_sq[0], rook_from]
        board[from_sq[0], rook_from] = None
        board[from_sq[0], rook_to] = rook.moved() if rook is not None else None

    en_passant_target: Square | None = None
    if piece.piece_type == PieceType.PAWN and abs(to_sq[0] - from_sq[0]) == 2:
        en_passant_target = ((from_sq[0] + to_sq[0]) // 2, from_sq[1])

    captured = state.captured_pieces
    if move.captured is not None:
        captured = captured.with_capture(move.captured)

    recorded = move.with_notation(move_to_notation(state.board, move))
    return state_for_board(
        board,
        state.current_player.opposite,
        move_history=state.move_history + (recorded,),
        en_passant_target=en_passant_target,
        captured_pieces=captured,
    )


def replay(moves: Iterable[Move]) -> GameState:
    """Apply *moves* in order to a fresh initial state."""
    state = create_initial_state()
    for move in moves:
        state = apply_move(state, move)
    return state


def undo(state: GameState, plies: int = 1) -> GameState:
    """State as it was *plies* moves ago, rebuilt by replay from move 0."""
    if not 0 <= plies <= state.ply_count:
        raise ValueError(
            f"Cannot undo {plies} plies from a game of {state.ply_count}"
        )
    _LOGGER.debug("Undoing %d of %d plies", plies, state.ply_count)
    return replay(state.move_history[: state.ply_count - plies])
