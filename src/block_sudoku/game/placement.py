from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .grid import GameGrid
from .pieces import Piece, PieceLibrary

# (slot, rotation_index, x, y)
Move = Tuple[int, int, int, int]


def can_place(grid: Optional[GameGrid], piece: Optional[Piece], origin_x: int, origin_y: int) -> bool:
    """Check if every tile of ``piece`` lands on an empty, in-bounds cell."""
    if grid is None or piece is None:
        return False
    for dx, dy in piece.offsets:
        x = origin_x + dx
        y = origin_y + dy
        if grid.is_filled(x, y):
            return False
    return True


def can_place_anywhere(grid: Optional[GameGrid], piece: Optional[Piece], library: PieceLibrary) -> bool:
    """Exhaustive check over every rotation of the piece's shape at every origin."""
    if grid is None or piece is None:
        return False
    for r in range(library.get_rotation_count(piece.shape_id)):
        variant = library.get_variant(piece.shape_id, r)
        for x in range(grid.width):
            for y in range(grid.height):
                if can_place(grid, variant, x, y):
                    return True
    return False


def fits_somewhere(grid: Optional[GameGrid], piece: Optional[Piece]) -> bool:
    """Like can_place_anywhere, but for this exact variant only."""
    if grid is None or piece is None:
        return False
    return any(
        can_place(grid, piece, x, y)
        for x in range(grid.width)
        for y in range(grid.height)
    )


def find_valid_positions(grid: Optional[GameGrid], piece: Optional[Piece]) -> List[Tuple[int, int]]:
    """All origins where this exact variant fits."""
    positions: List[Tuple[int, int]] = []
    if grid is None or piece is None:
        return positions
    for x in range(grid.width):
        for y in range(grid.height):
            if can_place(grid, piece, x, y):
                positions.append((x, y))
    return positions


def iter_valid_placements(
    grid: GameGrid,
    pieces: Sequence[Optional[Piece]],
    library: PieceLibrary,
) -> Iterator[Move]:
    """Yield every legal (slot, rotation_index, x, y) for a tray; empty slots are skipped."""
    for slot, piece in enumerate(pieces):
        if piece is None:
            continue
        for variant in library.get_all_variants(piece.shape_id):
            for x, y in find_valid_positions(grid, variant):
                yield slot, variant.rotation_index, x, y
