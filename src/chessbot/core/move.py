"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessbot.core.enums import PieceType
from chessbot.core.types import Square, square_name

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable (start, target, promotion) triple.

    Special moves carry no flag: castling, en passant and double pushes are
    recognised from the board when the move is applied.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.promotion is not None and self.promotion not in _PROMO_CHARS:
            raise ValueError(f"Invalid promotion piece: {self.promotion!r}")

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base
