"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gambit.core.enums import PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Produced by the move generator and consumed by
    :func:`gambit.core.transition.apply_move`. The only later changes are a
    promotion choice (:meth:`with_promotion`) and the notation attached when
    the move is applied; both return new instances.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None
    is_promotion: bool = False
    promoted_to: PieceType | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    notation: str | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def with_promotion(self, piece_type: PieceType) -> Move:
        """Same move promoting to *piece_type* instead of the default queen."""
        if not self.is_promotion:
            raise ValueError(f"{self} is not a promotion")
        return replace(self, promoted_to=piece_type)

    def with_notation(self, notation: str) -> Move:
        return replace(self, notation=notation)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.is_promotion and self.promoted_to is not None:
            base += _PROMO_CHARS.get(self.promoted_to, "")
        return base
