"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, back_rank, is_valid_square

_BACK_RANK_TYPES: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """64-cell grid of optional pieces indexed by ``(row, col)``.

    A board is only written while it is being built: the state transition
    and the legality probe each work on their own :meth:`copy`, so a board
    referenced by a game state is never edited afterwards.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._cells[row * 8 + col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._cells[row * 8 + col] = piece

    def piece_at(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or ``None`` when empty or off the board."""
        if not is_valid_square(sq):
            return None
        return self[sq]

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied cell, a8 first."""
        for idx, piece in enumerate(self._cells):
            if piece is not None:
                yield (idx >> 3, idx & 7), piece

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, in row-major order."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is missing."""
        for sq, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return sq
        return None

    def count(self, color: Color, piece_type: PieceType) -> int:
        return sum(
            1
            for _, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        )

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = self._cells.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting array."""
        b = cls()
        for color, pawn_row in ((Color.WHITE, 6), (Color.BLACK, 1)):
            home = back_rank(color)
            for col, pt in enumerate(_BACK_RANK_TYPES):
                b[home, col] = Piece(color, pt)
                b[pawn_row, col] = Piece(color, PieceType.PAWN)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self[row, col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
