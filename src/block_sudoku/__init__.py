"""Block sudoku: rule engine and agent environment."""

from .game import (
    BlockSudokuGame,
    ClearResult,
    GameConfig,
    GameGrid,
    Piece,
    PieceGenerator,
    PieceLibrary,
    PieceSize,
)

__all__ = [
    "BlockSudokuGame",
    "ClearResult",
    "GameConfig",
    "GameGrid",
    "Piece",
    "PieceGenerator",
    "PieceLibrary",
    "PieceSize",
]

__version__ = "0.1.0"
