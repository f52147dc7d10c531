"""Attack detection: is a square attacked, is a king in check.

Leaper targets and slider rays are precomputed once per square so the
lookups below only walk the board, never recompute geometry.
"""

from __future__ import annotations

from chessbot.core.board import Board
from chessbot.core.enums import Color, PieceType
from chessbot.core.types import Square, on_board, square_from_coords

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx, rank_idx = sq % 8, sq // 8
        targets.append(
            tuple(
                square_from_coords(file_idx + df, rank_idx + dr)
                for df, dr in offsets
                if on_board(file_idx + df, rank_idx + dr)
            )
        )
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af, ar = sq % 8 + df, sq // 8 + dr
            ray: list[Square] = []
            while on_board(af, ar):
                ray.append(square_from_coords(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_sources(color: Color) -> tuple[tuple[Square, ...], ...]:
    """[sq] -> squares from which a *color* pawn would attack ``sq``."""
    sources: list[tuple[Square, ...]] = []
    back = -color.pawn_direction
    for sq in range(64):
        file_idx, rank_idx = sq % 8, sq // 8
        sources.append(
            tuple(
                square_from_coords(file_idx + df, rank_idx + back)
                for df in (-1, 1)
                if on_board(file_idx + df, rank_idx + back)
            )
        )
    return tuple(sources)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_PAWN_SOURCES = (_build_pawn_sources(Color.WHITE), _build_pawn_sources(Color.BLACK))


# -- Oracle -----------------------------------------------------------------


def _slider_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, ...],
) -> list[Square]:
    hits: list[Square] = []
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                hits.append(to_sq)
            break
    return hits


def _leaper_hits(
    board: Board,
    sources: tuple[Square, ...],
    by_color: Color,
    kind: PieceType,
) -> list[Square]:
    hits: list[Square] = []
    for from_sq in sources:
        piece = board[from_sq]
        if piece is not None and piece.color == by_color and piece.piece_type == kind:
            hits.append(from_sq)
    return hits


def attackers_of(board: Board, sq: Square, by_color: Color) -> list[Square]:
    """Squares of every *by_color* piece attacking *sq*, ascending."""
    hits = (
        _leaper_hits(board, _PAWN_SOURCES[by_color][sq], by_color, PieceType.PAWN)
        + _leaper_hits(board, KNIGHT_TARGETS[sq], by_color, PieceType.KNIGHT)
        + _leaper_hits(board, KING_TARGETS[sq], by_color, PieceType.KING)
        + _slider_hits(board, BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS)
        + _slider_hits(board, ROOK_RAYS[sq], by_color, _STRAIGHT_SLIDERS)
    )
    return sorted(hits)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    for from_sq in _PAWN_SOURCES[by_color][sq]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True

    for from_sq in KNIGHT_TARGETS[sq]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for from_sq in KING_TARGETS[sq]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    for rays, kinds in (
        (BISHOP_RAYS[sq], _DIAGONAL_SLIDERS),
        (ROOK_RAYS[sq], _STRAIGHT_SLIDERS),
    ):
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in kinds:
                    return True
                break

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? ``False`` when *color* has no king."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)
