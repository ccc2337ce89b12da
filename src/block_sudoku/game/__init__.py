"""Rule engine for the 9x9 block sudoku puzzle.

Exports the engine pieces:
- GameGrid: occupancy grid with snapshots
- PieceLibrary / Piece: shape catalog with precomputed rotations
- can_place / can_place_anywhere / find_valid_positions: placement rules
- detect_clears / apply_clears: row, column and 3x3 block clears
- is_game_over: exhaustive terminal-state check
- PieceGenerator: seeded, difficulty-scaled piece sets
- BlockSudokuGame: game loop tying the above together
"""

from .clears import ClearResult, apply_clears, detect_clears, preview_clears
from .config import GameConfig
from .core import BlockSudokuGame, PlacementOutcome
from .errors import BlockSudokuError, SnapshotError, StaleClearResultError, UnknownShapeError
from .game_over import explain_game_over, is_game_over
from .generator import PieceGenerator
from .grid import GameGrid
from .pieces import Piece, PieceLibrary, PieceSize
from .placement import can_place, can_place_anywhere, find_valid_positions, iter_valid_placements
from .rules import ScoringRules

__all__ = [
    "BlockSudokuError",
    "BlockSudokuGame",
    "ClearResult",
    "GameConfig",
    "GameGrid",
    "Piece",
    "PieceGenerator",
    "PieceLibrary",
    "PieceSize",
    "PlacementOutcome",
    "ScoringRules",
    "SnapshotError",
    "StaleClearResultError",
    "UnknownShapeError",
    "apply_clears",
    "can_place",
    "can_place_anywhere",
    "detect_clears",
    "explain_game_over",
    "find_valid_positions",
    "is_game_over",
    "iter_valid_placements",
    "preview_clears",
]
