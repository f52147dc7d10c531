"""FEN parsing and serialization."""

from __future__ import annotations

import logging

from chessbot.core.board import Board
from chessbot.core.enums import CastlingRights, Color
from chessbot.core.piece import Piece
from chessbot.core.position import Position
from chessbot.core.types import (
    Square,
    parse_square,
    rank_of,
    square_from_coords,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


class FenError(ValueError):
    """Raised when a FEN string is structurally invalid."""


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isascii() and ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise FenError(f"Invalid FEN rank width: {fen!r}")
                # Unknown letters leave the square empty but still take a file
                piece = Piece.from_fen_char(ch)
                if piece is None:
                    _LOGGER.debug("Ignoring unknown FEN piece letter %r", ch)
                else:
                    board[square_from_coords(file, rank)] = piece
                file += 1
            if file > 8:
                raise FenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FenError(f"Invalid FEN rank width: {fen!r}")
    return board


def _parse_castling(field: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if field == "-":
        return castling
    rights = dict(_CASTLING_CHARS)
    seen: set[str] = set()
    for ch in field:
        right = rights.get(ch)
        if right is None or ch in seen:
            raise FenError(f"Invalid FEN castling field: {field!r}")
        seen.add(ch)
        castling |= right
    return castling


def _parse_en_passant(field: str, side: Color) -> Square | None:
    if field == "-":
        return None
    try:
        ep = parse_square(field)
    except ValueError:
        raise FenError(f"Invalid FEN en-passant square: {field!r}") from None
    expected_rank = 5 if side == Color.WHITE else 2
    if rank_of(ep) != expected_rank:
        raise FenError(f"Invalid FEN en-passant square for side-to-move: {field!r}")
    return ep


def _parse_counter(field: str, name: str, minimum: int) -> int:
    if not (field.isascii() and field.isdigit()) or int(field) < minimum:
        raise FenError(f"Invalid FEN {name}: {field!r}")
    return int(field)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The halfmove clock and fullmove number are optional and default to
    ``0`` and ``1``.

    Raises:
        FenError: wrong field count, bad rank layout, unknown side to move,
            bad castling letters, an en-passant square off rank 3/6, or
            non-numeric clocks.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FenError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = _parse_castling(castling_part)
    ep = _parse_en_passant(ep_part, side)
    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    _LOGGER.debug("Loaded FEN %s", fen)
    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[square_from_coords(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    castling_str = castling_str or "-"

    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
