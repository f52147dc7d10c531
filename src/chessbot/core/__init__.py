"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessbot.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(pos)
    for move in gen.generate_legal_moves():
        print(move)
"""

from chessbot.core.attacks import attackers_of, is_in_check, is_square_attacked
from chessbot.core.board import Board
from chessbot.core.enums import CastlingRights, Color, GameResult, PieceType
from chessbot.core.move import PROMOTION_TYPES, Move
from chessbot.core.move_generator import MoveGenerator
from chessbot.core.notation import (
    STARTING_FEN,
    FenError,
    position_from_fen,
    position_to_fen,
)
from chessbot.core.piece import Piece
from chessbot.core.position import Position
from chessbot.core.rules import Rules
from chessbot.core.types import (
    Square,
    coords_from_square,
    file_of,
    parse_square,
    rank_of,
    square_from_coords,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "coords_from_square",
    "file_of",
    "parse_square",
    "rank_of",
    "square_from_coords",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "PROMOTION_TYPES",
    "Piece",
    "Position",
    "Rules",
    # Attack oracle
    "attackers_of",
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "FenError",
    "position_from_fen",
    "position_to_fen",
]
