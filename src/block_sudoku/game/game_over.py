from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .grid import GameGrid
from .pieces import Piece, PieceLibrary
from .placement import can_place_anywhere

logger = logging.getLogger(__name__)


def is_game_over(
    grid: Optional[GameGrid],
    available_pieces: Optional[Sequence[Optional[Piece]]],
    library: PieceLibrary,
) -> bool:
    """Brute-force terminal check: every piece, every rotation, every origin.

    An absent grid cannot be evaluated and an empty batch means the caller
    still has to refill, so both report "not over". ``None`` slots are
    skipped; a tray holding only empty slots counts as empty.
    """
    if grid is None:
        return False
    pieces = [p for p in available_pieces or () if p is not None]
    if not pieces:
        return False

    for piece in pieces:
        if can_place_anywhere(grid, piece, library):
            return False

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("no moves left:\n%s", explain_game_over(grid, available_pieces, library))
    return True


def explain_game_over(
    grid: Optional[GameGrid],
    available_pieces: Optional[Sequence[Optional[Piece]]],
    library: PieceLibrary,
) -> str:
    """Per-piece placeability report, for debugging."""
    if grid is None:
        return "Grid is missing"
    if not available_pieces:
        return "No pieces available (not game over)"

    lines: List[str] = [f"Grid fill: {grid.filled_count()}/{grid.width * grid.height}"]
    for piece in available_pieces:
        if piece is None:
            lines.append("- empty slot (skipped)")
            continue
        verdict = "CAN place" if can_place_anywhere(grid, piece, library) else "CANNOT place"
        lines.append(f"- {piece.name} (id:{piece.shape_id}): {verdict}")
    return "\n".join(lines)
