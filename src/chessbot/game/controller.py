"""GameController — the entry point a board UI drives.

The UI asks for legal moves, submits the one the user picked and listens for
events; it never touches :class:`~chessbot.core.position.Position` directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessbot.core.enums import Color, GameResult, PieceType
from chessbot.core.move import Move
from chessbot.core.move_generator import MoveGenerator
from chessbot.core.types import Square
from chessbot.game.state import GamePhase, GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies moves for one game, notifies listeners.

    Thread-safety: all methods must be called from the thread that owns the
    game (the UI thread).
    """

    __slots__ = ("_state", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start a game from *fen* (default: the standard position).

        Raises:
            FenError: if *fen* is malformed; the current game is kept.
        """
        state = GameState()
        state.setup(fen)
        self._state = state
        _LOGGER.info("New game from %s", self._state.start_fen)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
        else:
            self._emit_phase(GamePhase.AWAITING_MOVE)

    def submit_move(self, move: Move) -> bool:
        """Apply *move* if it is one of the legal moves. Returns True if applied."""
        if self._state.phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Rejected %s: phase is %s", move, self._state.phase.name)
            return False

        if move not in self._state.legal_moves():
            _LOGGER.debug("Rejected illegal move %s", move)
            return False

        record = self._state.apply_move(move)
        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
        return True

    def try_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Convenience form of :meth:`submit_move` for square pairs."""
        try:
            move = Move(from_sq, to_sq, promotion)
        except ValueError:
            _LOGGER.debug("Rejected move with invalid promotion %r", promotion)
            return False
        return self.submit_move(move)

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state.resign(color)
        self._emit_game_over(self._state.result)

    def undo_move(self) -> bool:
        """Take back the last move, reopening a finished game if needed."""
        if self._state.undo_last_move() is None:
            return False
        self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        return self._state.legal_moves()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty if none or not its turn)."""
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        return MoveGenerator(self._state.position).legal_moves_from(sq)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        _LOGGER.info("Game over: %s (%s)", result.name, self._state.end_reason.name)
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
