from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Set, Tuple

from .errors import StaleClearResultError
from .grid import Coordinate, GameGrid
from .pieces import Piece
from .placement import can_place

BLOCK_SIZE = 3


@dataclass(frozen=True)
class ClearResult:
    """Rows, columns and 3x3 blocks that are full on one grid state.

    ``cleared_blocks`` holds block coordinates (block_x, block_y) in 0..2.
    ``cleared_cells`` lists each affected cell once, even when several
    clears overlap.
    """

    cleared_rows: Tuple[int, ...] = ()
    cleared_columns: Tuple[int, ...] = ()
    cleared_blocks: Tuple[Coordinate, ...] = ()
    cleared_cells: FrozenSet[Coordinate] = frozenset()
    grid_token: Optional[int] = field(default=None, compare=False, repr=False)
    grid_revision: Optional[int] = field(default=None, compare=False, repr=False)

    @property
    def total_lines_cleared(self) -> int:
        return len(self.cleared_rows) + len(self.cleared_columns) + len(self.cleared_blocks)

    @property
    def has_clears(self) -> bool:
        return self.total_lines_cleared > 0


def is_row_full(grid: GameGrid, y: int) -> bool:
    return all(grid.is_filled(x, y) for x in range(grid.width))


def is_column_full(grid: GameGrid, x: int) -> bool:
    return all(grid.is_filled(x, y) for y in range(grid.height))


def is_block_full(grid: GameGrid, start_x: int, start_y: int) -> bool:
    return all(
        grid.is_filled(start_x + dx, start_y + dy)
        for dx in range(BLOCK_SIZE)
        for dy in range(BLOCK_SIZE)
    )


def detect_clears(grid: GameGrid, include_3x3_blocks: bool = True) -> ClearResult:
    """Scan for full rows, full columns and, on a 9x9 grid, full 3x3 blocks."""
    cells: Set[Coordinate] = set()

    rows = [y for y in range(grid.height) if is_row_full(grid, y)]
    for y in rows:
        cells.update((x, y) for x in range(grid.width))

    columns = [x for x in range(grid.width) if is_column_full(grid, x)]
    for x in columns:
        cells.update((x, y) for y in range(grid.height))

    blocks = []
    if include_3x3_blocks and grid.width == 9 and grid.height == 9:
        for block_x in range(3):
            for block_y in range(3):
                start_x = block_x * BLOCK_SIZE
                start_y = block_y * BLOCK_SIZE
                if is_block_full(grid, start_x, start_y):
                    blocks.append((block_x, block_y))
                    cells.update(
                        (start_x + dx, start_y + dy)
                        for dx in range(BLOCK_SIZE)
                        for dy in range(BLOCK_SIZE)
                    )

    return ClearResult(
        cleared_rows=tuple(rows),
        cleared_columns=tuple(columns),
        cleared_blocks=tuple(blocks),
        cleared_cells=frozenset(cells),
        grid_token=grid.token,
        grid_revision=grid.revision,
    )


def apply_clears(grid: GameGrid, result: ClearResult) -> None:
    """Empty exactly the cells recorded in ``result``.

    Raises StaleClearResultError if the result was detected on another grid
    or the grid has been mutated since detection.
    """
    if result.grid_token is not None and result.grid_token != grid.token:
        raise StaleClearResultError("clear result was detected on a different grid")
    if result.grid_revision is not None and result.grid_revision != grid.revision:
        raise StaleClearResultError(
            f"grid changed since clears were detected "
            f"(revision {result.grid_revision} -> {grid.revision})"
        )
    if not result.cleared_cells:
        return
    grid.clear_cells(result.cleared_cells)


def preview_clears(
    grid: GameGrid,
    piece: Piece,
    origin_x: int,
    origin_y: int,
    include_3x3_blocks: bool = True,
) -> Optional[ClearResult]:
    """Clears that placing ``piece`` at the origin would cause, without touching ``grid``."""
    if not can_place(grid, piece, origin_x, origin_y):
        return None
    scratch = grid.copy()
    scratch.fill_cells(piece.cells_at(origin_x, origin_y))
    return detect_clears(scratch, include_3x3_blocks)

