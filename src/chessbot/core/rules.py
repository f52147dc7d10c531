"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessbot.core import attacks
from chessbot.core.enums import GameResult, PieceType
from chessbot.core.move_generator import MoveGenerator
from chessbot.core.types import Square, file_of, rank_of

if TYPE_CHECKING:
    from chessbot.core.position import Position

_MINORS = (PieceType.KNIGHT, PieceType.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # Draw policy: insufficient material and the 75-move rule end the game
    # automatically; the 50-move rule is only reported, never applied.

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return attacks.is_in_check(position.board, position.side_to_move)

    @staticmethod
    def checkers(position: Position) -> list[Square]:
        """Squares of the pieces giving check to the side to move."""
        king_sq = position.board.king_square(position.side_to_move)
        if king_sq is None:
            return []
        return attacks.attackers_of(
            position.board, king_sq, position.side_to_move.opposite
        )

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        return bool(MoveGenerator(position).generate_legal_moves())

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not Rules.has_legal_moves(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, K+B vs K+B with same-colored bishops."""
        board = position.board
        others = []
        for sq in range(64):
            piece = board[sq]
            if piece is not None and piece.piece_type != PieceType.KING:
                others.append((sq, piece))

        if not others:
            return True

        if len(others) == 1:
            return others[0][1].piece_type in _MINORS

        if len(others) == 2:
            (sq_a, a), (sq_b, b) = others
            if (
                a.piece_type == PieceType.BISHOP
                and b.piece_type == PieceType.BISHOP
                and a.color != b.color
            ):
                return (file_of(sq_a) + rank_of(sq_a)) % 2 == (
                    file_of(sq_b) + rank_of(sq_b)
                ) % 2

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 100  # 100 half-moves = 50 full moves

    @staticmethod
    def is_seventy_five_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= 150  # 150 half-moves = 75 full moves

    @staticmethod
    def is_automatic_draw(position: Position) -> bool:
        """Whether the position is drawn without a player claim."""
        return Rules.is_insufficient_material(
            position
        ) or Rules.is_seventy_five_move_rule(position)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        if not Rules.has_legal_moves(position):
            if Rules.is_in_check(position):
                return GameResult.win_for(position.side_to_move.opposite)
            return GameResult.DRAW  # stalemate

        if Rules.is_automatic_draw(position):
            return GameResult.DRAW

        return GameResult.IN_PROGRESS
