from __future__ import annotations

import pytest

from block_sudoku.game import GameGrid, SnapshotError


def test_new_grid_is_empty(grid: GameGrid) -> None:
    assert grid.is_empty()
    assert grid.filled_count() == 0
    assert not grid.is_full()


def test_fill_and_clear_cell(grid: GameGrid) -> None:
    grid.fill_cell(0, 0)
    assert grid.is_filled(0, 0)
    assert grid.filled_count() == 1
    grid.clear_cell(0, 0)
    assert grid.is_cell_empty(0, 0)


@pytest.mark.parametrize("x,y", [(-1, 0), (9, 0), (0, -1), (0, 9), (-5, 20), (100, 100)])
def test_out_of_bounds_reports_filled(grid: GameGrid, x: int, y: int) -> None:
    assert grid.is_filled(x, y)
    assert not grid.is_cell_empty(x, y)
    assert not grid.is_valid_position(x, y)


def test_set_filled_out_of_bounds_is_noop(grid: GameGrid) -> None:
    grid.set_filled(9, 9, True)
    grid.set_filled(-1, 3, True)
    assert grid.filled_count() == 0


def test_clear_resets_every_cell(grid: GameGrid) -> None:
    for x in range(9):
        grid.fill_cell(x, x)
    grid.clear()
    assert grid.is_empty()


def test_is_full() -> None:
    g = GameGrid(2, 3)
    for y in range(3):
        for x in range(2):
            g.fill_cell(x, y)
    assert g.is_full()
    assert g.filled_ratio() == 1.0


def test_snapshot_is_row_major(grid: GameGrid) -> None:
    grid.fill_cell(2, 1)
    data = grid.to_snapshot()
    assert len(data) == 81
    assert data[1 * 9 + 2] == 1
    assert sum(data) == 1


def test_snapshot_round_trip(grid: GameGrid) -> None:
    for x, y in [(0, 0), (5, 5), (8, 8), (3, 7)]:
        grid.fill_cell(x, y)
    restored = GameGrid(9, 9)
    assert restored.load_snapshot(grid.to_snapshot())
    assert restored == grid
    assert restored.filled_count() == 4


def test_snapshot_round_trip_non_square() -> None:
    g = GameGrid(4, 2)
    g.fill_cell(3, 0)
    g.fill_cell(0, 1)
    restored = GameGrid.from_snapshot(g.to_snapshot(), width=4, height=2)
    assert restored == g
    assert restored.is_filled(3, 0)
    assert not restored.is_filled(0, 0)


def test_wrong_length_snapshot_is_ignored(grid: GameGrid) -> None:
    grid.fill_cell(4, 4)
    assert grid.load_snapshot([1] * 80) is False
    assert grid.load_snapshot(None) is False
    assert grid.filled_count() == 1
    assert grid.is_filled(4, 4)


def test_strict_snapshot_raises(grid: GameGrid) -> None:
    with pytest.raises(SnapshotError, match="expected 81"):
        grid.load_snapshot([0] * 10, strict=True)
    with pytest.raises(SnapshotError, match="0 or 1"):
        grid.load_snapshot([2] * 81, strict=True)
    assert grid.is_empty()


def test_non_binary_values_count_as_empty_when_lenient(grid: GameGrid) -> None:
    data = [0] * 81
    data[0] = 1
    data[1] = 2
    assert grid.load_snapshot(data)
    assert grid.is_filled(0, 0)
    assert not grid.is_filled(1, 0)


def test_revision_increases_on_mutation(grid: GameGrid) -> None:
    r0 = grid.revision
    grid.fill_cell(1, 1)
    r1 = grid.revision
    grid.clear()
    assert r0 < r1 < grid.revision


def test_copy_is_independent(grid: GameGrid) -> None:
    grid.fill_cell(1, 2)
    clone = grid.copy()
    clone.fill_cell(3, 3)
    assert grid.filled_count() == 1
    assert clone.filled_count() == 2


def test_str_renders_rows(grid: GameGrid) -> None:
    grid.fill_cell(0, 0)
    lines = str(grid).splitlines()
    assert len(lines) == 9
    assert lines[0] == "X........"


def test_cells_view_is_read_only(grid: GameGrid) -> None:
    grid.fill_cell(2, 1)
    assert grid.cells[1, 2]
    with pytest.raises(ValueError):
        grid.cells[0, 0] = True
    assert grid.filled_count() == 1


def test_each_grid_has_its_own_token(grid: GameGrid) -> None:
    assert grid.copy().token != grid.token
    assert GameGrid().token != grid.token
