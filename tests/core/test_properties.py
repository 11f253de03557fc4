"""Invariants checked over seeded random games."""

from __future__ import annotations

import random

import pytest

from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import is_in_check
from gambit.core.state import GameState
from gambit.core.transition import apply_move, create_initial_state, replay

MAX_PLIES = 40


def _check_invariants(state: GameState, plies: int) -> None:
    assert len(state.move_history) == plies
    for color in Color:
        assert state.board.count(color, PieceType.KING) == 1
    if state.is_checkmate:
        assert state.is_check
        assert not state.legal_moves
    if state.is_stalemate:
        assert not state.is_check
        assert not state.legal_moves
    if not state.legal_moves:
        assert state.is_checkmate or state.is_stalemate


def _random_game(seed: int) -> GameState:
    rng = random.Random(seed)
    state = create_initial_state()
    _check_invariants(state, 0)
    for ply in range(1, MAX_PLIES + 1):
        if state.is_game_over:
            break
        mover = state.current_player
        move = rng.choice(state.legal_moves)
        state = apply_move(state, move)
        assert not is_in_check(state.board, mover)
        assert state.current_player == mover.opposite
        _check_invariants(state, ply)
    return state


class TestRandomGames:
    @pytest.mark.parametrize("seed", range(12))
    def test_invariants_hold(self, seed: int) -> None:
        _random_game(seed)

    @pytest.mark.parametrize("seed", range(3))
    def test_history_replays(self, seed: int) -> None:
        state = _random_game(100 + seed)
        assert replay(state.move_history) == state

    @pytest.mark.slow
    def test_thousand_games(self) -> None:
        for seed in range(1000):
            _random_game(seed)
