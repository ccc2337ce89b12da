from __future__ import annotations

import itertools
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import SnapshotError

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

DEFAULT_WIDTH = 9
DEFAULT_HEIGHT = 9

_grid_tokens = itertools.count(1)


class GameGrid:
    """Fixed-size boolean occupancy grid.

    Cells are stored in a (height, width) numpy array indexed ``[y, x]``.
    Any query outside the grid reports the cell as filled, so placement
    code never has to special-case the edges.

    Every mutating call bumps ``revision``; clear results use it and the
    grid's ``token`` to refuse being applied to a grid that changed after
    detection. ``cells`` is a read-only view; mutate through the methods.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self._cells = np.zeros((self.height, self.width), dtype=np.bool_)
        self._revision = 0
        self._token = next(_grid_tokens)

    @classmethod
    def from_snapshot(
        cls,
        data: Sequence[int],
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        strict: bool = False,
    ) -> "GameGrid":
        grid = cls(width, height)
        grid.load_snapshot(data, strict=strict)
        return grid

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def token(self) -> int:
        """Identifier unique to this grid object for the life of the process."""
        return self._token

    @property
    def cells(self) -> np.ndarray:
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def _touch(self) -> None:
        self._revision += 1

    def is_valid_position(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_filled(self, x: int, y: int) -> bool:
        if not self.is_valid_position(x, y):
            return True
        return bool(self._cells[y, x])

    def is_cell_empty(self, x: int, y: int) -> bool:
        return not self.is_filled(x, y)

    def set_filled(self, x: int, y: int, filled: bool) -> None:
        if not self.is_valid_position(x, y):
            return
        self._cells[y, x] = bool(filled)
        self._touch()

    def fill_cell(self, x: int, y: int) -> None:
        self.set_filled(x, y, True)

    def clear_cell(self, x: int, y: int) -> None:
        self.set_filled(x, y, False)

    def fill_cells(self, cells: Iterable[Coordinate]) -> None:
        """Fill every in-bounds cell of ``cells`` as one mutation."""
        for x, y in cells:
            if self.is_valid_position(x, y):
                self._cells[y, x] = True
        self._touch()

    def clear_cells(self, cells: Iterable[Coordinate]) -> None:
        for x, y in cells:
            if self.is_valid_position(x, y):
                self._cells[y, x] = False
        self._touch()

    def clear(self) -> None:
        self._cells.fill(False)
        self._touch()

    def filled_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def is_empty(self) -> bool:
        return self.filled_count() == 0

    def is_full(self) -> bool:
        return self.filled_count() == self.width * self.height

    def filled_ratio(self) -> float:
        return float(self.filled_count()) / float(self.width * self.height)

    def to_snapshot(self) -> List[int]:
        """Flat row-major list of 0/1, ``index = y * width + x``."""
        return [int(v) for v in self._cells.reshape(-1)]

    def load_snapshot(self, data: Optional[Sequence[int]], strict: bool = False) -> bool:
        """Replace the grid contents with a flat row-major snapshot.

        Malformed data leaves the grid unchanged. By default that is only
        logged and ``False`` is returned; with ``strict=True`` a
        ``SnapshotError`` is raised instead.
        """
        expected = self.width * self.height
        if data is None or len(data) != expected:
            size = None if data is None else len(data)
            return self._reject(f"snapshot has {size} cells, expected {expected}", strict)

        arr = np.asarray(data).reshape(self.height, self.width)
        if strict and not np.isin(arr, (0, 1)).all():
            return self._reject("snapshot values must be 0 or 1", strict)

        self._cells = arr == 1
        self._touch()
        return True

    def _reject(self, message: str, strict: bool) -> bool:
        if strict:
            raise SnapshotError(message)
        logger.warning("ignoring grid snapshot: %s", message)
        return False

    def to_array(self) -> np.ndarray:
        """Copy of the grid as an int8 (height, width) array."""
        return self._cells.astype(np.int8)

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid._cells = self._cells.copy()
        return new_grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self._cells, other._cells))
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "\n".join("".join("X" if cell else "." for cell in row) for row in self._cells)

    def __repr__(self) -> str:
        return f"GameGrid(width={self.width}, height={self.height}, filled={self.filled_count()})"
