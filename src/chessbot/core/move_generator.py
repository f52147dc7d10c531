"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessbot.core import attacks
from chessbot.core.enums import CastlingRights, Color, PieceType
from chessbot.core.move import PROMOTION_TYPES, Move
from chessbot.core.piece import Piece
from chessbot.core.types import Square, on_board, square_from_coords

if TYPE_CHECKING:
    from chessbot.core.position import Position


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    Legality is decided on a scratch copy of the position per candidate, so
    the position handed in is never mutated.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        legal: list[Move] = []
        moving_color = self._pos.side_to_move

        for move in self.generate_pseudo_legal_moves():
            scratch = self._pos.copy(with_history=False)
            scratch.make_move(move)
            if not attacks.is_in_check(scratch.board, moving_color):
                legal.append(move)
        return legal

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves whose start square is *sq*."""
        return [move for move in self.generate_legal_moves() if move.from_sq == sq]

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check).

        Squares are visited in ascending order, so the result is deterministic.
        """
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in range(64):
            piece = board[sq]
            if piece is None or piece.color != color:
                continue
            self._gen_piece(sq, piece, moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return attacks.is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        return attacks.is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_piece(self, sq: Square, piece: Piece, moves: list[Move]) -> None:
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece.color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_leaper(sq, piece.color, attacks.KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.BISHOP:
            self._gen_sliding(sq, piece.color, attacks.BISHOP_RAYS[sq], moves)
        elif ptype == PieceType.ROOK:
            self._gen_sliding(sq, piece.color, attacks.ROOK_RAYS[sq], moves)
        elif ptype == PieceType.QUEEN:
            self._gen_sliding(sq, piece.color, attacks.QUEEN_RAYS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_leaper(sq, piece.color, attacks.KING_TARGETS[sq], moves)
            self._gen_castling(sq, piece.color, moves)

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx, rank_idx = sq % 8, sq // 8
        direction = color.pawn_direction
        start_rank = 1 if color == Color.WHITE else 6
        next_rank = rank_idx + direction
        if not 0 <= next_rank < 8:
            return
        promotes = next_rank == color.opposite.home_rank

        one_step = square_from_coords(file_idx, next_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, promotes, moves)
            if rank_idx == start_rank:
                two_step = square_from_coords(file_idx, rank_idx + 2 * direction)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step))

        for df in (-1, 1):
            if not on_board(file_idx + df, next_rank):
                continue
            cap_sq = square_from_coords(file_idx + df, next_rank)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(sq, cap_sq, promotes, moves)
            elif cap_sq == self._pos.en_passant:
                moves.append(Move(sq, cap_sq))

    @staticmethod
    def _add_pawn_move(
        from_sq: Square, to_sq: Square, promotes: bool, moves: list[Move]
    ) -> None:
        if promotes:
            for pt in PROMOTION_TYPES:
                moves.append(Move(from_sq, to_sq, pt))
        else:
            moves.append(Move(from_sq, to_sq))

    def _gen_leaper(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != color:
                moves.append(Move(sq, to_sq))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rank = color.home_rank
        if king_sq != square_from_coords(4, rank):
            return
        rights = self._pos.castling
        if not rights & CastlingRights.both(color):
            return
        if self.is_in_check(color):
            return

        opponent = color.opposite
        # (right, rook file, files strictly between, files the king crosses)
        sides = (
            (CastlingRights.kingside(color), 7, (5, 6), (5, 6)),
            (CastlingRights.queenside(color), 0, (1, 2, 3), (3, 2)),
        )
        for right, rook_file, between, path in sides:
            if not rights & right:
                continue
            rook = self._board[square_from_coords(rook_file, rank)]
            if rook != Piece(color, PieceType.ROOK):
                continue
            if not all(
                self._board.is_empty(square_from_coords(f, rank)) for f in between
            ):
                continue
            if any(
                self.is_square_attacked(square_from_coords(f, rank), opponent)
                for f in path
            ):
                continue
            moves.append(Move(king_sq, square_from_coords(path[-1], rank)))
