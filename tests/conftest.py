from __future__ import annotations

from typing import Callable, Tuple

import pytest

from block_sudoku.game import GameGrid, PieceLibrary


@pytest.fixture(scope="session")
def library() -> PieceLibrary:
    return PieceLibrary.default()


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(9, 9)


@pytest.fixture
def full_grid_except() -> Callable[..., GameGrid]:
    """Factory for a 9x9 grid where every cell but the given ones is filled."""

    def build(*empty: Tuple[int, int]) -> GameGrid:
        g = GameGrid(9, 9)
        g.fill_cells((x, y) for y in range(9) for x in range(9) if (x, y) not in empty)
        return g

    return build
