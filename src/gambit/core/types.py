"""Square type alias and coordinate helpers.

Board layout (row-major, as seen from white):
    row 0 = rank 8 (black's back rank), row 7 = rank 1 (white's back rank)
    col 0 = file a, col 7 = file h

    a8=(0, 0) ... h8=(0, 7)
    ...
    a1=(7, 0) ... h1=(7, 7)
"""

from __future__ import annotations

from typing import TypeAlias

from gambit.core.enums import Color

Square: TypeAlias = tuple[int, int]  # (row, col), both 0–7

FILES = "abcdefgh"
RANKS = "87654321"


def is_valid_square(sq: Square) -> bool:
    """Both coordinates inside ``0..7``."""
    row, col = sq
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1'."""
    row, col = sq
    return FILES[col] + RANKS[row]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (RANKS.index(name[1]), FILES.index(name[0]))


def back_rank(color: Color) -> int:
    """Row of *color*'s home rank: 7 for white, 0 for black."""
    return 7 if color == Color.WHITE else 0


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
