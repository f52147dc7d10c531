"""chessbot — a chess rules engine: board, legal moves, make/undo, FEN."""

__version__ = "0.1.0"
