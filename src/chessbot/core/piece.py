"""Piece value object and its FEN letters."""

from __future__ import annotations

from dataclasses import dataclass

from chessbot.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A colored piece. Empty squares hold ``None`` instead of a Piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        piece = cls.from_fen_char(char)
        if piece is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return piece

    @classmethod
    def from_fen_char(cls, char: str) -> Piece | None:
        """Lenient variant of :meth:`from_char`: unknown letters give ``None``."""
        ptype = _TYPES_BY_LETTER.get(char.lower())
        if ptype is None or not char.isalpha():
            return None
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)
