"""Game session layer — the API a board UI drives.

Quick start::

    from chessbot.core.types import E2, E4
    from chessbot.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.try_move(E2, E4)
"""

from chessbot.game.controller import GameController, GameEvents
from chessbot.game.state import GameEndReason, GamePhase, GameState, MoveRecord

__all__ = [
    "GameController",
    "GameEndReason",
    "GameEvents",
    "GamePhase",
    "GameState",
    "MoveRecord",
]
