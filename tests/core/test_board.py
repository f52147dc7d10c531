"""Tests for Board and Piece."""

import pytest

from chessbot.core.board import Board
from chessbot.core.enums import Color, PieceType
from chessbot.core.piece import Piece
from chessbot.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E4,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_back_ranks(self) -> None:
        board = Board.initial()
        expected = [
            (A1, A8, PieceType.ROOK), (B1, B8, PieceType.KNIGHT),
            (C1, C8, PieceType.BISHOP), (D1, D8, PieceType.QUEEN),
            (E1, E8, PieceType.KING), (F1, F8, PieceType.BISHOP),
            (G1, G8, PieceType.KNIGHT), (H1, H8, PieceType.ROOK),
        ]
        for white_sq, black_sq, pt in expected:
            assert board[white_sq] == Piece(Color.WHITE, pt)
            assert board[black_sq] == Piece(Color.BLACK, pt)

    def test_pawns(self) -> None:
        board = Board.initial()
        assert board.pieces(Color.WHITE, PieceType.PAWN) == list(range(8, 16))
        assert board.pieces(Color.BLACK, PieceType.PAWN) == list(range(48, 56))

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for sq in range(16, 48):
            assert board[sq] is None


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert board.is_empty(E2)

    @pytest.mark.parametrize("sq", [-1, 64, 100, -64])
    def test_piece_at_off_board_is_empty(self, sq: int) -> None:
        assert Board.initial().piece_at(sq) is None

    def test_piece_at_on_board(self) -> None:
        assert Board.initial().piece_at(E1) == Piece(Color.WHITE, PieceType.KING)

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert board.king_square(Color.WHITE) == E1

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_king_square_tracks_moves(self) -> None:
        board = Board.initial()
        board[E1] = None
        board[E4] = Piece(Color.WHITE, PieceType.KING)
        assert board.king_square(Color.WHITE) == E4

    def test_king_square_missing_is_none(self) -> None:
        assert Board().king_square(Color.WHITE) is None

    def test_occupied_count(self) -> None:
        board = Board.initial()
        assert len(board.occupied(Color.WHITE)) == 16
        assert len(board.occupied(Color.BLACK)) == 16
        assert board.piece_count() == 32

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert all(board[sq] is None for sq in range(64))
        assert board.king_square(Color.BLACK) is None

    def test_repr_not_empty(self) -> None:
        text = repr(Board.initial())
        assert "K" in text
        assert "a b c d e f g h" in text


class TestPiece:
    def test_fen_letters(self) -> None:
        assert str(Piece(Color.WHITE, PieceType.KNIGHT)) == "N"
        assert str(Piece(Color.BLACK, PieceType.QUEEN)) == "q"

    def test_from_char(self) -> None:
        assert Piece.from_char("k") == Piece(Color.BLACK, PieceType.KING)
        assert Piece.from_char("P") == Piece(Color.WHITE, PieceType.PAWN)

    def test_from_char_invalid_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    @pytest.mark.parametrize("char", ["x", "X", "1", "?"])
    def test_from_fen_char_unknown_is_none(self, char: str) -> None:
        assert Piece.from_fen_char(char) is None
