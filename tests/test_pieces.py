from __future__ import annotations

import pytest

from block_sudoku.game import PieceLibrary, PieceSize, UnknownShapeError
from block_sudoku.game.pieces import normalize_offsets, rotate_offsets_cw, unique_rotations


def test_default_library_has_27_shapes(library: PieceLibrary) -> None:
    assert len(library) == 27
    assert library.list_all_ids() == list(range(1, 28))


@pytest.mark.parametrize(
    "shape_id,expected",
    [
        (1, 1),   # dot
        (2, 2),   # domino
        (3, 4),   # L-tromino
        (4, 2),   # I-tromino
        (5, 1),   # 2x2 square
        (6, 4),   # T-tetromino
        (7, 2),   # S-tetromino
        (8, 2),   # Z-tetromino
        (11, 2),  # I-tetromino
        (12, 1),  # plus
        (14, 2),  # I-pentomino
        (18, 2),  # Z-pentomino
        (21, 1),  # 3x3 block
        (22, 4),  # large L
        (27, 1),  # X-pentomino
    ],
)
def test_rotation_counts(library: PieceLibrary, shape_id: int, expected: int) -> None:
    assert library.get_rotation_count(shape_id) == expected


def test_rotation_variants_are_structurally_distinct(library: PieceLibrary) -> None:
    for shape_id in library.shape_ids():
        variants = library.get_all_variants(shape_id)
        offsets = [v.offsets for v in variants]
        assert len(set(offsets)) == len(offsets)
        # one more clockwise turn of the last variant brings back the first
        assert rotate_offsets_cw(offsets[-1]) == offsets[0]


def test_variants_share_id_and_tile_count(library: PieceLibrary) -> None:
    for shape_id in library.shape_ids():
        variants = library.get_all_variants(shape_id)
        assert {v.shape_id for v in variants} == {shape_id}
        assert len({v.tile_count for v in variants}) == 1
        assert [v.rotation_index for v in variants] == list(range(len(variants)))
        assert all(v.rotation_count == len(variants) for v in variants)


def test_variants_are_normalized(library: PieceLibrary) -> None:
    for shape_id in library.shape_ids():
        for v in library.get_all_variants(shape_id):
            assert min(x for x, _ in v.offsets) == 0
            assert min(y for _, y in v.offsets) == 0
            assert v.offsets == normalize_offsets(v.offsets)


def test_full_rotation_cycle_returns_to_start(library: PieceLibrary) -> None:
    for shape_id in library.shape_ids():
        start = library.get_variant(shape_id, 0)
        piece = start
        for _ in range(library.get_rotation_count(shape_id)):
            piece = library.rotate_clockwise(piece)
        assert piece == start
        assert piece.rotation_index == 0


def test_get_variant_wraps_indices(library: PieceLibrary) -> None:
    t = library.get_variant(6, 0)
    assert library.get_variant(6, 4) == t
    assert library.get_variant(6, -1) == library.get_variant(6, 3)
    assert library.get_variant(1, 7) == library.get_variant(1, 0)


def test_size_classes(library: PieceLibrary) -> None:
    assert library.list_ids_by_size(PieceSize.SMALL) == [1, 2]
    assert library.list_ids_by_size(PieceSize.MEDIUM) == list(range(3, 12))
    assert library.list_ids_by_size(PieceSize.LARGE) == list(range(12, 28))
    big = library.get_variant(21)
    assert big.tile_count == 9
    assert big.size is PieceSize.LARGE
    assert (big.width, big.height) == (3, 3)


def test_size_for_tile_count() -> None:
    assert PieceSize.for_tile_count(1) is PieceSize.SMALL
    assert PieceSize.for_tile_count(2) is PieceSize.SMALL
    assert PieceSize.for_tile_count(3) is PieceSize.MEDIUM
    assert PieceSize.for_tile_count(4) is PieceSize.MEDIUM
    assert PieceSize.for_tile_count(5) is PieceSize.LARGE


def test_register_shape_normalizes_offsets() -> None:
    lib = PieceLibrary()
    variants = lib.register_shape(100, "Shifted", [(5, 7), (6, 7)])
    assert variants[0].offsets == ((0, 0), (1, 0))
    assert variants[1].offsets == ((0, 0), (0, 1))


def test_unique_rotations_of_symmetric_shape() -> None:
    square = [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert len(unique_rotations(square)) == 1


def test_unknown_and_duplicate_ids_raise(library: PieceLibrary) -> None:
    with pytest.raises(UnknownShapeError, match="unknown shape id 99"):
        library.get_variant(99)
    lib = PieceLibrary()
    lib.register_shape(1, "Dot", [(0, 0)])
    with pytest.raises(UnknownShapeError, match="already registered"):
        lib.register_shape(1, "Dot", [(0, 0)])
    with pytest.raises(UnknownShapeError, match="no tiles"):
        lib.register_shape(2, "Empty", [])


def test_libraries_are_independent() -> None:
    a = PieceLibrary.default()
    b = PieceLibrary()
    assert 1 in a
    assert 1 not in b
    assert len(b) == 0


def test_cells_at_translates_offsets(library: PieceLibrary) -> None:
    domino = library.get_variant(2, 0)
    assert domino.cells_at(3, 4) == [(3, 4), (4, 4)]
