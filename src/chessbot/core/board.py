"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from chessbot.core.enums import Color, PieceType
from chessbot.core.piece import Piece
from chessbot.core.types import Square, is_valid_square, square_from_coords

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-slot board; slot ``i`` holds the contents of square ``i``."""

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        old_piece = self._squares[sq]
        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            if self._king_squares[old_piece.color] == sq:
                self._king_squares[old_piece.color] = None

        self._squares[sq] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[piece.color] = sq

    def piece_at(self, sq: int) -> Piece | None:
        """Total lookup: ``None`` for empty squares and for indexes off the board."""
        if not is_valid_square(sq):
            return None
        return self._squares[sq]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*, ascending."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None
            and piece.color == color
            and piece.piece_type == piece_type
        ]

    def occupied(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, ascending."""
        return [
            sq
            for sq, piece in enumerate(self._squares)
            if piece is not None and piece.color == color
        ]

    def piece_count(self) -> int:
        return sum(1 for piece in self._squares if piece is not None)

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it has none."""
        sq = self._king_squares[color]
        if sq is not None:
            return sq
        # The cache only remembers the last king placed; fall back to a scan
        # when several kings of one color were set up and one was removed.
        for sq, piece in enumerate(self._squares):
            if (
                piece is not None
                and piece.color == color
                and piece.piece_type == PieceType.KING
            ):
                self._king_squares[color] = sq
                return sq
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b[square_from_coords(f, 0)] = Piece(Color.WHITE, pt)
            b[square_from_coords(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[square_from_coords(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)
            b[square_from_coords(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[square_from_coords(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
