"""Game state machine — tracks phase transitions and move history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessbot.core.enums import Color, GameResult
from chessbot.core.move_generator import MoveGenerator
from chessbot.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessbot.core.position import Position
from chessbot.core.rules import Rules

if TYPE_CHECKING:
    from chessbot.core.move import Move
    from chessbot.core.piece import Piece
    from chessbot.core.types import Square


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    INSUFFICIENT_MATERIAL = auto()
    SEVENTY_FIVE_MOVE_RULE = auto()
    RESIGNATION = auto()


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, move history.

    This is a pure data/logic class — no threading, no UI.
    """

    position: Position = field(default_factory=Position, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game.

        Raises:
            FenError: if *fen* is malformed; the previous game is kept.
        """
        position = position_from_fen(fen or STARTING_FEN)
        self.start_fen = fen or STARTING_FEN
        self.position = position
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.move_history.clear()
        # A loaded position may already be decided
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        pieces_before = self.position.board.piece_count()
        self.position.make_move(move)

        record = MoveRecord(
            move=move,
            fen_after=position_to_fen(self.position),
            was_check=self.position.is_in_check(),
            was_capture=self.position.board.piece_count() < pieces_before,
        )
        self.move_history.append(record)
        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        self.move_history.pop()
        move = self.position.undo_move()

        # Reset result if we un-did a game-ending move
        if self.result != GameResult.IN_PROGRESS:
            self.result = GameResult.IN_PROGRESS
            self.end_reason = GameEndReason.NONE
            self.phase = GamePhase.AWAITING_MOVE

        return move

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._finish(GameResult.win_for(color.opposite), GameEndReason.RESIGNATION)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def piece_at(self, sq: Square) -> Piece | None:
        return self.position.piece_at(sq)

    def is_check(self) -> bool:
        return Rules.is_in_check(self.position)

    def is_checkmate(self) -> bool:
        return Rules.is_checkmate(self.position)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self.position)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self.position).generate_legal_moves()

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER

    def _check_game_over(self) -> None:
        position = self.position
        if not Rules.has_legal_moves(position):
            if Rules.is_in_check(position):
                self._finish(
                    GameResult.win_for(position.side_to_move.opposite),
                    GameEndReason.CHECKMATE,
                )
            else:
                self._finish(GameResult.DRAW, GameEndReason.STALEMATE)
        elif Rules.is_insufficient_material(position):
            self._finish(GameResult.DRAW, GameEndReason.INSUFFICIENT_MATERIAL)
        elif Rules.is_seventy_five_move_rule(position):
            self._finish(GameResult.DRAW, GameEndReason.SEVENTY_FIVE_MOVE_RULE)
