"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from chessbot.core.notation import STARTING_FEN, position_from_fen
from chessbot.core.position import Position
from chessbot.game.controller import GameController

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


@pytest.fixture
def start_position() -> Position:
    """A fresh standard starting position."""
    return position_from_fen(STARTING_FEN)


@pytest.fixture
def kiwipete() -> Position:
    """Tactically dense position with castling, en passant and promotions."""
    return position_from_fen(KIWIPETE)


@pytest.fixture
def controller() -> Iterator[GameController]:
    """A controller with a standard game already started."""
    ctrl = GameController()
    ctrl.new_game()
    yield ctrl
