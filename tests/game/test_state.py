"""Tests for GameState."""

import pytest

from chessbot.core.enums import Color, GameResult, PieceType
from chessbot.core.move import Move
from chessbot.core.notation import STARTING_FEN, FenError, position_to_fen
from chessbot.core.piece import Piece
from chessbot.core.types import D3, D6, E2, E4, E5, parse_square
from chessbot.game.state import GameEndReason, GamePhase, GameState


def _play(gs: GameState, *ucis: str) -> None:
    for uci in ucis:
        gs.apply_move(Move(parse_square(uci[:2]), parse_square(uci[2:])))


class TestGameStateSetup:
    def test_position_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Color.WHITE

    def test_setup_default(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.end_reason == GameEndReason.NONE
        assert gs.side_to_move == Color.WHITE
        assert gs.ply_count == 0
        assert gs.start_fen == STARTING_FEN

    def test_setup_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        gs = GameState()
        gs.setup(fen)
        assert gs.side_to_move == Color.BLACK
        assert gs.start_fen == fen

    def test_setup_resets(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(Move(E2, E4))
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.side_to_move == Color.WHITE

    def test_bad_fen_keeps_previous_game(self) -> None:
        gs = GameState()
        gs.setup()
        gs.apply_move(Move(E2, E4))
        with pytest.raises(FenError):
            gs.setup("not a fen")
        assert gs.ply_count == 1
        assert gs.start_fen == STARTING_FEN
        assert gs.piece_at(E4) == Piece(Color.WHITE, PieceType.PAWN)


class TestGameStateMoves:
    def test_apply_move_records(self) -> None:
        gs = GameState()
        gs.setup()
        record = gs.apply_move(Move(E2, E4))
        assert record.move == Move(E2, E4)
        assert record.fen_after == position_to_fen(gs.position)
        assert not record.was_check
        assert not record.was_capture
        assert gs.side_to_move == Color.BLACK
        assert gs.ply_count == 1

    def test_capture_recorded(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "e2e4", "d7d5")
        record = gs.apply_move(Move(E4, parse_square("d5")))
        assert record.was_capture

    def test_en_passant_capture_recorded(self) -> None:
        gs = GameState()
        gs.setup("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        record = gs.apply_move(Move(E5, D6))
        assert record.was_capture
        assert gs.piece_at(parse_square("d5")) is None

    def test_undo_restores(self) -> None:
        gs = GameState()
        gs.setup()
        fen_before = position_to_fen(gs.position)
        gs.apply_move(Move(E2, E4))
        undone = gs.undo_last_move()
        assert undone == Move(E2, E4)
        assert position_to_fen(gs.position) == fen_before
        assert gs.ply_count == 0

    def test_undo_empty_returns_none(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.undo_last_move() is None

    def test_legal_moves_from_start(self) -> None:
        gs = GameState()
        gs.setup()
        assert len(gs.legal_moves()) == 20


class TestGameStateTermination:
    def test_checkmate(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "f2f3", "e7e5", "g2g4", "d8h4")
        assert gs.is_checkmate()
        assert gs.is_check()
        assert gs.is_game_over
        assert gs.result == GameResult.BLACK_WINS
        assert gs.end_reason == GameEndReason.CHECKMATE
        assert gs.move_history[-1].was_check

    def test_stalemate_on_setup(self) -> None:
        gs = GameState()
        gs.setup("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert gs.is_stalemate()
        assert gs.result == GameResult.DRAW
        assert gs.end_reason == GameEndReason.STALEMATE
        assert gs.phase == GamePhase.GAME_OVER

    def test_insufficient_material_after_capture(self) -> None:
        gs = GameState()
        gs.setup("8/8/4k3/8/8/4K3/4r3/8 w - - 0 1")
        assert not gs.is_game_over
        gs.apply_move(Move(parse_square("e3"), E2))
        assert gs.result == GameResult.DRAW
        assert gs.end_reason == GameEndReason.INSUFFICIENT_MATERIAL

    def test_seventy_five_move_rule(self) -> None:
        gs = GameState()
        gs.setup("4k3/8/8/8/8/8/4K2R/7r w - - 149 80")
        assert not gs.is_game_over
        gs.apply_move(Move(E2, D3))
        assert gs.position.halfmove_clock == 150
        assert gs.end_reason == GameEndReason.SEVENTY_FIVE_MOVE_RULE

    def test_undo_reopens_finished_game(self) -> None:
        gs = GameState()
        gs.setup()
        _play(gs, "f2f3", "e7e5", "g2g4", "d8h4")
        gs.undo_last_move()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.end_reason == GameEndReason.NONE
        assert gs.side_to_move == Color.BLACK

    def test_resign(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Color.BLACK)
        assert gs.result == GameResult.WHITE_WINS
        assert gs.end_reason == GameEndReason.RESIGNATION
        assert gs.is_game_over
