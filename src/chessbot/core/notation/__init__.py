"""Notation package: FEN parsing and serialization."""

from chessbot.core.notation.fen import (
    STARTING_FEN,
    FenError,
    position_from_fen,
    position_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "FenError",
    "position_from_fen",
    "position_to_fen",
]
