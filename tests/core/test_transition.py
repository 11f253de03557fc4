"""Tests for the state transition: apply, replay and undo."""

import pytest

from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState
from gambit.core.transition import (
    IllegalMoveError,
    apply_move,
    create_initial_state,
    replay,
    undo,
)
from gambit.core.types import C1, D1, D5, D6, E1, E2, E3, E5, E7, E8, F1, G1, H1, A1

WHITE_PAWN = Piece(Color.WHITE, PieceType.PAWN)


def _find(state: GameState, name: str) -> Move:
    return next(m for m in state.legal_moves if str(m) == name)


def _play(state: GameState, *names: str) -> GameState:
    for name in names:
        state = apply_move(state, _find(state, name))
    return state


class TestInitialState:
    def test_white_to_move(self) -> None:
        state = create_initial_state()
        assert state.current_player == Color.WHITE
        assert state.move_history == ()
        assert state.ply_count == 0

    def test_no_flags(self) -> None:
        state = create_initial_state()
        assert not state.is_check
        assert not state.is_checkmate
        assert not state.is_stalemate
        assert state.en_passant_target is None
        assert state.captured_pieces.white == ()
        assert state.captured_pieces.black == ()


class TestApplyMove:
    def test_returns_new_state_and_leaves_old_one(self) -> None:
        state = create_initial_state()
        board_before = state.board.copy()
        after = _play(state, "e2e4")
        assert after is not state
        assert state.board == board_before
        assert state.move_history == ()
        assert after.current_player == Color.BLACK
        assert after.board[E2] is None

    def test_moved_piece_is_flagged(self) -> None:
        after = _play(create_initial_state(), "g1f3")
        assert after.board[5, 5] == Piece(Color.WHITE, PieceType.KNIGHT, has_moved=True)

    def test_deterministic(self) -> None:
        state = create_initial_state()
        move = _find(state, "d2d4")
        assert apply_move(state, move) == apply_move(state, move)

    def test_history_records_notation(self) -> None:
        state = _play(create_initial_state(), "e2e4", "d7d5", "e4d5", "d8d5", "b1c3")
        assert [m.notation for m in state.move_history] == [
            "e4",
            "d5",
            "exd5",
            "Qxd5",
            "Nc3",
        ]
        assert state.ply_count == 5

    def test_captured_pieces_by_color(self) -> None:
        state = _play(create_initial_state(), "e2e4", "d7d5", "e4d5", "d8d5")
        assert [p.piece_type for p in state.captured_pieces.black] == [PieceType.PAWN]
        assert [p.piece_type for p in state.captured_pieces.white] == [PieceType.PAWN]
        assert state.captured_pieces.of(Color.WHITE)[0].color == Color.WHITE


class TestEnPassant:
    def test_double_push_sets_target(self) -> None:
        state = _play(create_initial_state(), "e2e4")
        assert state.en_passant_target == E3

    def test_target_cleared_by_next_move(self) -> None:
        state = _play(create_initial_state(), "e2e4", "g8f6")
        assert state.en_passant_target is None

    def test_capture_removes_passed_pawn(self) -> None:
        state = _play(create_initial_state(), "e2e4", "a7a6", "e4e5", "d7d5")
        assert state.en_passant_target == D6
        move = _find(state, "e5d6")
        assert move.is_en_passant
        assert move.captured == Piece(Color.BLACK, PieceType.PAWN, has_moved=True)

        after = apply_move(state, move)
        assert after.board[D5] is None
        assert after.board[E5] is None
        assert after.board[D6] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)
        assert len(after.captured_pieces.black) == 1
        assert after.move_history[-1].notation == "exd6"

    def test_only_available_immediately(self) -> None:
        state = _play(
            create_initial_state(), "e2e4", "a7a6", "e4e5", "d7d5", "g1f3", "h7h6"
        )
        assert state.board[D5] is not None
        assert not any(m.is_en_passant for m in state.legal_moves)
        with pytest.raises(IllegalMoveError):
            apply_move(state, Move(E5, D6, WHITE_PAWN))

    def test_gone_after_knights_shuffle_back(self) -> None:
        offered = _play(create_initial_state(), "e2e4", "a7a6", "e4e5", "d7d5")
        later = _play(offered, "g1f3", "g8f6", "f3g1", "f6g8")

        def layout(state: GameState) -> dict:
            return {sq: (p.color, p.piece_type) for sq, p in state.board.occupied()}

        assert layout(later) == layout(offered)
        assert later.current_player == offered.current_player
        assert later.en_passant_target is None
        assert not any(m.is_en_passant for m in later.legal_moves)
        with pytest.raises(IllegalMoveError):
            apply_move(later, Move(E5, D6, WHITE_PAWN))


class TestCastlingTransition:
    def test_kingside_moves_rook(self, make_state) -> None:
        state = make_state("r3k2r/8/8/8/8/8/8/R3K2R")
        after = apply_move(state, _find(state, "e1g1"))
        assert after.board[G1] == Piece(Color.WHITE, PieceType.KING, has_moved=True)
        assert after.board[F1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert after.board[H1] is None
        assert after.board[E1] is None
        assert after.move_history[-1].notation == "O-O"

    def test_queenside_moves_rook(self, make_state) -> None:
        state = make_state("r3k2r/8/8/8/8/8/8/R3K2R")
        after = apply_move(state, _find(state, "e1c1"))
        assert after.board[C1].piece_type == PieceType.KING
        assert after.board[D1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert after.board[A1] is None
        assert after.move_history[-1].notation == "O-O-O"


class TestPromotion:
    PLACEMENT = "7k/4P3/8/8/8/8/8/K7"

    def test_defaults_to_queen(self, make_state) -> None:
        state = make_state(self.PLACEMENT)
        after = apply_move(state, Move(E7, E8, WHITE_PAWN))
        assert after.board[E8] == Piece(Color.WHITE, PieceType.QUEEN, has_moved=True)
        assert after.move_history[-1].notation == "e8=Q"
        assert after.is_check

    def test_generated_move_is_queen(self, make_state) -> None:
        state = make_state(self.PLACEMENT)
        move = _find(state, "e7e8q")
        assert move.promoted_to == PieceType.QUEEN
        assert apply_move(state, move).board[E8].piece_type == PieceType.QUEEN

    def test_underpromotion(self, make_state) -> None:
        state = make_state(self.PLACEMENT)
        move = _find(state, "e7e8q").with_promotion(PieceType.KNIGHT)
        after = apply_move(state, move)
        assert after.board[E8] == Piece(Color.WHITE, PieceType.KNIGHT, has_moved=True)
        assert after.move_history[-1].notation == "e8=N"
        assert after.move_history[-1].promoted_to == PieceType.KNIGHT

    def test_rejects_king_promotion(self, make_state) -> None:
        state = make_state(self.PLACEMENT)
        move = _find(state, "e7e8q").with_promotion(PieceType.KING)
        with pytest.raises(IllegalMoveError):
            apply_move(state, move)

    def test_with_promotion_requires_promotion_move(self) -> None:
        move = _find(create_initial_state(), "e2e4")
        with pytest.raises(ValueError):
            move.with_promotion(PieceType.QUEEN)


class TestIllegalMoves:
    def test_rejects_impossible_pawn_jump(self) -> None:
        with pytest.raises(IllegalMoveError) as exc_info:
            apply_move(create_initial_state(), Move(E2, E5, WHITE_PAWN))
        assert exc_info.value.move.to_sq == E5

    def test_rejects_opponent_piece(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN)
        with pytest.raises(IllegalMoveError):
            apply_move(create_initial_state(), Move(E7, (3, 4), pawn))

    def test_is_a_value_error(self) -> None:
        assert issubclass(IllegalMoveError, ValueError)

    def test_no_moves_after_checkmate(self) -> None:
        state = _play(create_initial_state(), "f2f3", "e7e5", "g2g4", "d8h4")
        with pytest.raises(IllegalMoveError):
            apply_move(state, Move(E2, E3, WHITE_PAWN))


class TestTerminalStates:
    def test_fools_mate(self) -> None:
        state = _play(create_initial_state(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.is_check
        assert state.is_checkmate
        assert not state.is_stalemate
        assert state.legal_moves == ()
        assert Rules.game_result(state) == GameResult.BLACK_WINS
        assert state.move_history[-1].notation == "Qh4"

    def test_stalemate(self, make_state) -> None:
        state = make_state("7k/8/6K1/8/8/8/8/5Q2")
        after = _play(state, "f1f7")
        assert after.is_stalemate
        assert not after.is_check
        assert not after.is_checkmate
        assert Rules.game_result(after) == GameResult.DRAW


class TestReplayAndUndo:
    MOVES = ("e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6", "e1g1", "f6e4")

    def test_replay_reproduces_state(self) -> None:
        state = _play(create_initial_state(), *self.MOVES)
        replayed = replay(state.move_history)
        assert replayed.board == state.board
        assert replayed == state

    def test_undo_one_ply(self) -> None:
        before = _play(create_initial_state(), *self.MOVES[:-1])
        after = _play(before, self.MOVES[-1])
        assert undo(after) == before

    def test_undo_everything(self) -> None:
        state = _play(create_initial_state(), *self.MOVES)
        assert undo(state, len(self.MOVES)) == create_initial_state()

    def test_undo_zero_is_identity(self) -> None:
        state = _play(create_initial_state(), *self.MOVES)
        assert undo(state, 0) == state

    def test_undo_too_far(self) -> None:
        with pytest.raises(ValueError):
            undo(create_initial_state(), 1)

    def test_replay_rejects_illegal_sequence(self) -> None:
        with pytest.raises(IllegalMoveError):
            replay([Move(E2, E5, WHITE_PAWN)])
