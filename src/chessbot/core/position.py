"""Position — complete game state (board + metadata) with make/undo."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessbot.core import attacks
from chessbot.core.board import Board
from chessbot.core.enums import CastlingRights, Color, PieceType
from chessbot.core.move import Move
from chessbot.core.piece import Piece
from chessbot.core.types import Square, file_of, rank_of, square_from_coords

_LOGGER = logging.getLogger(__name__)

_KING_FILE = 4


@dataclass(frozen=True, slots=True)
class _MoveState:
    """Everything :meth:`Position.undo_move` needs to reverse one move."""

    move: Move
    moved_piece: Piece
    captured_piece: Piece | None
    capture_sq: Square
    rook_from: Square | None
    rook_to: Square | None
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int


class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Moves are applied in place by :meth:`make_move`; every applied move pushes
    a :class:`_MoveState` so :meth:`undo_move` can walk back to any earlier
    point of the game.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_history",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._history: list[_MoveState] = []

    # ── Setup ────────────────────────────────────────────────────────────

    def initialize_standard_position(self) -> None:
        """Reset to the standard starting position and forget all history."""
        self.board = Board.initial()
        self.side_to_move = Color.WHITE
        self.castling = CastlingRights.ALL
        self.en_passant = None
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self._history.clear()

    def load_fen(self, fen: str) -> None:
        """Replace this position with the one described by *fen*.

        Raises:
            FenError: if *fen* is malformed. The position is left untouched.
        """
        from chessbot.core.notation.fen import position_from_fen

        parsed = position_from_fen(fen)
        self.board = parsed.board
        self.side_to_move = parsed.side_to_move
        self.castling = parsed.castling
        self.en_passant = parsed.en_passant
        self.halfmove_clock = parsed.halfmove_clock
        self.fullmove_number = parsed.fullmove_number
        self._history.clear()

    def to_fen(self) -> str:
        from chessbot.core.notation.fen import position_to_fen

        return position_to_fen(self)

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: int) -> Piece | None:
        return self.board.piece_at(sq)

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color* (default: side to move) in check?"""
        return attacks.is_in_check(
            self.board, self.side_to_move if color is None else color
        )

    @property
    def move_history(self) -> tuple[Move, ...]:
        """Applied moves, oldest first."""
        return tuple(state.move for state in self._history)

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move* without checking legality; push undo state."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")
        color = piece.color

        captured = board[move.to_sq]
        capture_sq = move.to_sq

        board[move.from_sq] = None
        board[move.to_sq] = (
            Piece(color, move.promotion) if move.promotion is not None else piece
        )

        # Castling: the king travels two files along its home rank
        rook_from: Square | None = None
        rook_to: Square | None = None
        if piece.piece_type == PieceType.KING and self._is_castling(move, color):
            rank = color.home_rank
            kingside = file_of(move.to_sq) > _KING_FILE
            rook_from = square_from_coords(7 if kingside else 0, rank)
            rook_to = square_from_coords(5 if kingside else 3, rank)
            rook = board[rook_from]
            if rook is not None and rook.piece_type == PieceType.ROOK:
                board[rook_to] = rook
                board[rook_from] = None
            else:
                rook_from = rook_to = None

        # En passant: the captured pawn sits beside the start square
        if (
            piece.piece_type == PieceType.PAWN
            and move.to_sq == self.en_passant
            and captured is None
            and file_of(move.from_sq) != file_of(move.to_sq)
        ):
            capture_sq = square_from_coords(file_of(move.to_sq), rank_of(move.from_sq))
            captured = board[capture_sq]
            board[capture_sq] = None

        self._history.append(
            _MoveState(
                move=move,
                moved_piece=piece,
                captured_piece=captured,
                capture_sq=capture_sq,
                rook_from=rook_from,
                rook_to=rook_to,
                castling=self.castling,
                en_passant=self.en_passant,
                halfmove_clock=self.halfmove_clock,
                fullmove_number=self.fullmove_number,
            )
        )

        self._update_castling(move, piece)

        self.en_passant = None
        if (
            piece.piece_type == PieceType.PAWN
            and abs(rank_of(move.to_sq) - rank_of(move.from_sq)) == 2
        ):
            self.en_passant = square_from_coords(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        if piece.piece_type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1
        if color == Color.BLACK:
            self.fullmove_number += 1

        self.side_to_move = self.side_to_move.opposite

    def undo_move(self) -> Move | None:
        """Undo the last :meth:`make_move`; ``None`` if there is nothing to undo."""
        if not self._history:
            _LOGGER.debug("undo_move called with empty history")
            return None

        state = self._history.pop()
        move = state.move
        board = self.board

        board[move.to_sq] = None
        board[move.from_sq] = state.moved_piece
        if state.captured_piece is not None:
            board[state.capture_sq] = state.captured_piece

        if state.rook_from is not None and state.rook_to is not None:
            board[state.rook_from] = board[state.rook_to]
            board[state.rook_to] = None

        self.castling = state.castling
        self.en_passant = state.en_passant
        self.halfmove_clock = state.halfmove_clock
        self.fullmove_number = state.fullmove_number
        self.side_to_move = self.side_to_move.opposite
        return move

    # ── Castling bookkeeping ─────────────────────────────────────────────

    _ROOK_CORNERS: dict[Square, CastlingRights] = {
        square_from_coords(0, 0): CastlingRights.WHITE_QUEENSIDE,
        square_from_coords(7, 0): CastlingRights.WHITE_KINGSIDE,
        square_from_coords(0, 7): CastlingRights.BLACK_QUEENSIDE,
        square_from_coords(7, 7): CastlingRights.BLACK_KINGSIDE,
    }

    @staticmethod
    def _is_castling(move: Move, color: Color) -> bool:
        rank = color.home_rank
        return (
            move.from_sq == square_from_coords(_KING_FILE, rank)
            and rank_of(move.to_sq) == rank
            and abs(file_of(move.to_sq) - _KING_FILE) == 2
        )

    def _update_castling(self, move: Move, piece: Piece) -> None:
        if piece.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or anything landing on one, ends that right
        for sq in (move.from_sq, move.to_sq):
            right = self._ROOK_CORNERS.get(sq)
            if right is not None:
                self.castling &= ~right

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self, with_history: bool = True) -> Position:
        """Independent deep copy.

        With *with_history* false the copy starts with an empty undo stack.
        """
        pos = Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )
        if with_history:
            pos._history = self._history.copy()
        return pos

    def __repr__(self) -> str:
        return f"Position({self.to_fen()!r})"
