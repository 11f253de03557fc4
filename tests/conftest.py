"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.transition import state_for_board
from gambit.core.types import Square

# Headless Linux runners have no display; use the offscreen Qt backend there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

StateFactory = Callable[..., GameState]


def board_from_placement(placement: str) -> Board:
    """Board from the piece-placement field of a FEN string (rank 8 first).

    Test-only helper: every piece starts out as not having moved.
    """
    board = Board()
    for row, rank in enumerate(placement.split("/")):
        col = 0
        for char in rank:
            if char.isdigit():
                col += int(char)
            else:
                board[row, col] = Piece.from_char(char)
                col += 1
    return board


@pytest.fixture
def make_state() -> StateFactory:
    """Factory building a :class:`GameState` from a placement string."""

    def _make(
        placement: str,
        side: Color = Color.WHITE,
        en_passant: Square | None = None,
    ) -> GameState:
        return state_for_board(
            board_from_placement(placement),
            side,
            en_passant_target=en_passant,
        )

    return _make


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt worker tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
