"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import all_legal_moves, apply_move, create_initial_state

    state = create_initial_state()
    for move in all_legal_moves(state):
        print(move)
    state = apply_move(state, all_legal_moves(state)[0])
"""

from gambit.core.board import Board
from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.evaluation import PIECE_VALUES, evaluate
from gambit.core.move import PROMOTION_TYPES, Move
from gambit.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    is_in_check,
    is_square_attacked,
    legal_moves,
    pseudo_legal_moves,
    would_leave_king_in_check,
)
from gambit.core.notation import move_to_notation
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import CapturedPieces, GameState
from gambit.core.transition import (
    IllegalMoveError,
    advance,
    apply_move,
    create_initial_state,
    replay,
    state_for_board,
    undo,
)
from gambit.core.types import (
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CapturedPieces",
    "GameState",
    "Move",
    "MoveGenerator",
    "PROMOTION_TYPES",
    "Piece",
    "Rules",
    # Attacks / generation
    "all_legal_moves",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "pseudo_legal_moves",
    "would_leave_king_in_check",
    # Transition
    "IllegalMoveError",
    "advance",
    "apply_move",
    "create_initial_state",
    "replay",
    "state_for_board",
    "undo",
    # Notation / evaluation
    "PIECE_VALUES",
    "evaluate",
    "move_to_notation",
]
