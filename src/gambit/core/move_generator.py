"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, back_rank, is_valid_square

if TYPE_CHECKING:
    from gambit.core.state import GameState


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

# Pawns advance towards row 0 for white and towards row 7 for black.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_PROMOTION_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

_KING_HOME_COL = 4


# -- Precomputed lookup tables ---------------------------------------------

_ALL_SQUARES: tuple[Square, ...] = tuple((r, c) for r in range(8) for c in range(8))


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for row, col in _ALL_SQUARES:
        targets[row, col] = tuple(
            (row + dr, col + dc)
            for dr, dc in offsets
            if 0 <= row + dr < 8 and 0 <= col + dc < 8
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for row, col in _ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r = row + dr
            c = col + dc
            ray: list[Square] = []
            while 0 <= r < 8 and 0 <= c < 8:
                ray.append((r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square[row, col] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, dict[Square, tuple[tuple[Square, ...], ...]]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


# -- Pseudo-legal generation -------------------------------------------------


def pseudo_legal_moves(
    board: Board,
    from_sq: Square,
    piece: Piece,
    en_passant_target: Square | None = None,
    attacks_only: bool = False,
) -> list[Move]:
    """Candidate moves for *piece* on *from_sq*, ignoring self-check.

    In *attacks_only* mode pawns report both forward diagonals whether or
    not an enemy stands there, and never their pushes. Castling is not
    produced here. An off-board *from_sq* yields no moves.
    """
    if not is_valid_square(from_sq):
        return []

    moves: list[Move] = []
    pt = piece.piece_type
    if pt == PieceType.PAWN:
        _gen_pawn(board, from_sq, piece, en_passant_target, attacks_only, moves)
    elif pt == PieceType.KNIGHT:
        _gen_steps(board, from_sq, piece, _KNIGHT_TARGETS[from_sq], moves)
    elif pt == PieceType.KING:
        _gen_steps(board, from_sq, piece, _KING_TARGETS[from_sq], moves)
    else:
        _gen_sliding(board, from_sq, piece, _SLIDER_RAYS[pt][from_sq], moves)
    return moves


def _gen_pawn(
    board: Board,
    sq: Square,
    piece: Piece,
    en_passant_target: Square | None,
    attacks_only: bool,
    moves: list[Move],
) -> None:
    row, col = sq
    color = piece.color
    to_row = row + _PAWN_DIRECTION[color]
    if not 0 <= to_row < 8:
        return
    promotes = to_row == _PROMOTION_ROW[color]

    for to_col in (col - 1, col + 1):
        if not 0 <= to_col < 8:
            continue
        to_sq = (to_row, to_col)
        target = board[to_sq]
        if target is not None and target.color != color:
            moves.append(_pawn_move(sq, to_sq, piece, target, promotes))
        elif attacks_only:
            moves.append(Move(sq, to_sq, piece))
        elif to_sq == en_passant_target:
            passed = board[row, to_col]
            if (
                passed is not None
                and passed.color != color
                and passed.piece_type == PieceType.PAWN
            ):
                moves.append(Move(sq, to_sq, piece, passed, is_en_passant=True))

    if attacks_only:
        return

    one_step = (to_row, col)
    if not board.is_empty(one_step):
        return
    moves.append(_pawn_move(sq, one_step, piece, None, promotes))

    if row == _PAWN_START_ROW[color]:
        two_step = (row + 2 * _PAWN_DIRECTION[color], col)
        if board.is_empty(two_step):
            moves.append(Move(sq, two_step, piece))


def _pawn_move(
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    captured: Piece | None,
    promotes: bool,
) -> Move:
    if promotes:
        return Move(
            from_sq,
            to_sq,
            piece,
            captured,
            is_promotion=True,
            promoted_to=PieceType.QUEEN,
        )
    return Move(from_sq, to_sq, piece, captured)


def _gen_steps(
    board: Board,
    sq: Square,
    piece: Piece,
    targets: tuple[Square, ...],
    moves: list[Move],
) -> None:
    for to_sq in targets:
        target = board[to_sq]
        if target is None or target.color != piece.color:
            moves.append(Move(sq, to_sq, piece, target))


def _gen_sliding(
    board: Board,
    sq: Square,
    piece: Piece,
    rays: tuple[tuple[Square, ...], ...],
    moves: list[Move],
) -> None:
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, piece))
                continue
            if target.color != piece.color:
                moves.append(Move(sq, to_sq, piece, target))
            break


# -- Attack detection ----------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Looks outward from *sq* for each attacker pattern, which reaches the
    same answer as generating every attack-mode move of *by_color*.
    """
    row, col = sq

    pawn_row = row - _PAWN_DIRECTION[by_color]
    if 0 <= pawn_row < 8:
        for pawn_col in (col - 1, col + 1):
            if 0 <= pawn_col < 8:
                p = board[pawn_row, pawn_col]
                if (
                    p is not None
                    and p.color == by_color
                    and p.piece_type == PieceType.PAWN
                ):
                    return True

    for from_sq in _KNIGHT_TARGETS[sq]:
        p = board[from_sq]
        if p is not None and p.color == by_color and p.piece_type == PieceType.KNIGHT:
            return True

    for from_sq in _KING_TARGETS[sq]:
        p = board[from_sq]
        if p is not None and p.color == by_color and p.piece_type == PieceType.KING:
            return True

    for rays, sliders in (
        (_BISHOP_RAYS[sq], (PieceType.BISHOP, PieceType.QUEEN)),
        (_ROOK_RAYS[sq], (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for ray in rays:
            for from_sq in ray:
                p = board[from_sq]
                if p is None:
                    continue
                if p.color == by_color and p.piece_type in sliders:
                    return True
                break

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without that king reports ``False``.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def would_leave_king_in_check(board: Board, move: Move) -> bool:
    """Play *move* on a private copy of *board* and test the mover's king."""
    probe = board.copy()
    probe[move.to_sq] = move.piece
    probe[move.from_sq] = None
    if move.is_en_passant:
        probe[move.from_sq[0], move.to_sq[1]] = None
    return is_in_check(probe, move.piece.color)


# -- Legal generation ----------------------------------------------------------


class MoveGenerator:
    """Generates legal moves for one side of a board.

    Every candidate is checked against a throwaway board copy, so the board
    handed in is only read.
    """

    __slots__ = ("_board", "_side", "_en_passant")

    def __init__(
        self,
        board: Board,
        side_to_move: Color,
        en_passant_target: Square | None = None,
    ) -> None:
        self._board = board
        self._side = side_to_move
        self._en_passant = en_passant_target

    @classmethod
    def for_state(cls, state: GameState) -> MoveGenerator:
        return cls(state.board, state.current_player, state.en_passant_target)

    # -- Public API ---------------------------------------------------------

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the side-to-move piece on *sq* (castling included)."""
        piece = self._board.piece_at(sq)
        if piece is None or piece.color != self._side:
            return []

        legal = [
            move
            for move in pseudo_legal_moves(self._board, sq, piece, self._en_passant)
            if not would_leave_king_in_check(self._board, move)
        ]
        if piece.piece_type == PieceType.KING:
            legal.extend(self._castling_moves(sq, piece))
        return legal

    def generate_legal_moves(self) -> list[Move]:
        """All legal moves for the side to move, a8-to-h1 by origin square."""
        legal: list[Move] = []
        for sq in self._board.pieces(self._side):
            legal.extend(self.legal_moves_from(sq))
        return legal

    def is_in_check(self, color: Color | None = None) -> bool:
        return is_in_check(self._board, self._side if color is None else color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self._board, sq, by_color)

    # -- Castling -------------------------------------------------------------

    def _castling_moves(self, king_sq: Square, king: Piece) -> list[Move]:
        row = back_rank(king.color)
        if king.has_moved or king_sq != (row, _KING_HOME_COL):
            return []
        if self.is_in_check(king.color):
            return []

        moves: list[Move] = []
        opponent = king.color.opposite
        # (rook column, squares that must be empty, squares the king crosses, king target column)
        for rook_col, between, crossed, to_col in (
            (7, (5, 6), (5, 6), 6),
            (0, (1, 2, 3), (3, 2), 2),
        ):
            rook = self._board[row, rook_col]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != king.color
                or rook.has_moved
            ):
                continue
            if any(not self._board.is_empty((row, c)) for c in between):
                continue
            if any(self.is_square_attacked((row, c), opponent) for c in crossed):
                continue
            moves.append(Move(king_sq, (row, to_col), king, is_castling=True))
        return moves


# -- State-level helpers ---------------------------------------------------------


def legal_moves(state: GameState, sq: Square) -> list[Move]:
    """Legal moves for the piece on *sq* in *state* (empty for off-board squares)."""
    return [move for move in state.legal_moves if move.from_sq == sq]


def all_legal_moves(state: GameState) -> list[Move]:
    """Every legal move for ``state.current_player``."""
    return list(state.legal_moves)
