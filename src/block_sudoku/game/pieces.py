from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Sequence, Tuple

from .errors import UnknownShapeError

logger = logging.getLogger(__name__)

Offset = Tuple[int, int]
Offsets = Tuple[Offset, ...]


class PieceSize(IntEnum):
    SMALL = 0  # 1-2 tiles
    MEDIUM = 1  # 3-4 tiles
    LARGE = 2  # 5+ tiles

    @classmethod
    def for_tile_count(cls, tile_count: int) -> "PieceSize":
        if tile_count <= 2:
            return cls.SMALL
        if tile_count <= 4:
            return cls.MEDIUM
        return cls.LARGE


def normalize_offsets(offsets: Iterable[Offset]) -> Offsets:
    """Shift so min x and min y are 0, then sort by (y, x)."""
    points = [(int(x), int(y)) for x, y in offsets]
    if not points:
        return ()
    min_x = min(x for x, _ in points)
    min_y = min(y for _, y in points)
    shifted = [(x - min_x, y - min_y) for x, y in points]
    return tuple(sorted(shifted, key=lambda p: (p[1], p[0])))


def rotate_offsets_cw(offsets: Iterable[Offset]) -> Offsets:
    """Rotate 90 degrees clockwise, ``(x, y) -> (y, -x)``, and re-normalize."""
    return normalize_offsets((y, -x) for x, y in offsets)


def unique_rotations(offsets: Iterable[Offset]) -> List[Offsets]:
    """Structurally distinct clockwise rotations, starting from the normalized base."""
    current = normalize_offsets(offsets)
    rotations: List[Offsets] = [current]
    for _ in range(3):
        current = rotate_offsets_cw(current)
        if current in rotations:
            break
        rotations.append(current)
    return rotations


@dataclass(frozen=True)
class Piece:
    """One rotation variant of a catalog shape."""

    shape_id: int
    name: str
    offsets: Offsets
    rotation_index: int = 0
    rotation_count: int = 1

    @property
    def tile_count(self) -> int:
        return len(self.offsets)

    @property
    def size(self) -> PieceSize:
        return PieceSize.for_tile_count(self.tile_count)

    def bounds(self) -> Tuple[int, int, int, int]:
        """Return (min_x, max_x, min_y, max_y) of the offsets."""
        xs = [x for x, _ in self.offsets]
        ys = [y for _, y in self.offsets]
        return min(xs), max(xs), min(ys), max(ys)

    @property
    def width(self) -> int:
        min_x, max_x, _, _ = self.bounds()
        return max_x - min_x + 1

    @property
    def height(self) -> int:
        _, _, min_y, max_y = self.bounds()
        return max_y - min_y + 1

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.offsets]

    def __str__(self) -> str:
        rows = [["."] * self.width for _ in range(self.height)]
        for x, y in self.offsets:
            rows[y][x] = "X"
        return "\n".join("".join(row) for row in rows)


class PieceLibrary:
    """Registry of shapes and their precomputed rotation variants.

    Variants are built once in ``register_shape`` and never change. A
    variant refers to its siblings only through ``(shape_id, rotation_index)``.
    """

    def __init__(self) -> None:
        self._variants: Dict[int, Tuple[Piece, ...]] = {}
        self._by_size: Dict[PieceSize, List[int]] = {size: [] for size in PieceSize}

    @classmethod
    def default(cls) -> "PieceLibrary":
        library = cls()
        for shape_id, name, offsets in STANDARD_SHAPES:
            library.register_shape(shape_id, name, offsets)
        logger.debug(
            "built default piece library: %d shapes, %d variants",
            len(library),
            sum(library.get_rotation_count(i) for i in library.shape_ids()),
        )
        return library

    def register_shape(self, shape_id: int, name: str, offsets: Sequence[Offset]) -> Tuple[Piece, ...]:
        if shape_id in self._variants:
            raise UnknownShapeError(f"shape id {shape_id} is already registered")
        if len(offsets) == 0:
            raise UnknownShapeError(f"shape {name!r} has no tiles")

        rotations = unique_rotations(offsets)
        variants = tuple(
            Piece(
                shape_id=int(shape_id),
                name=name,
                offsets=rot,
                rotation_index=i,
                rotation_count=len(rotations),
            )
            for i, rot in enumerate(rotations)
        )
        self._variants[int(shape_id)] = variants
        self._by_size[variants[0].size].append(int(shape_id))
        return variants

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, shape_id: object) -> bool:
        return shape_id in self._variants

    def _rotations(self, shape_id: int) -> Tuple[Piece, ...]:
        try:
            return self._variants[shape_id]
        except KeyError as e:
            raise UnknownShapeError(f"unknown shape id {shape_id!r}") from e

    def get_variant(self, shape_id: int, rotation_index: int = 0) -> Piece:
        """Variant ``rotation_index`` of a shape, wrapped modulo its rotation count."""
        rotations = self._rotations(shape_id)
        return rotations[rotation_index % len(rotations)]

    get_piece = get_variant

    def get_rotation_count(self, shape_id: int) -> int:
        return len(self._rotations(shape_id))

    def get_all_variants(self, shape_id: int) -> List[Piece]:
        return list(self._rotations(shape_id))

    def rotation_of(self, piece: Piece, rotation_index: int) -> Piece:
        return self.get_variant(piece.shape_id, rotation_index)

    def rotate_clockwise(self, piece: Piece) -> Piece:
        return self.get_variant(piece.shape_id, piece.rotation_index + 1)

    def list_ids_by_size(self, size: PieceSize) -> List[int]:
        return list(self._by_size[PieceSize(size)])

    def shape_ids(self) -> List[int]:
        return list(self._variants.keys())

    list_all_ids = shape_ids

    def max_shape_id(self) -> int:
        return max(self._variants) if self._variants else 0

    def max_rotation_count(self) -> int:
        return max((len(v) for v in self._variants.values()), default=1)


STANDARD_SHAPES: Tuple[Tuple[int, str, Offsets], ...] = (
    # Small (1-2 tiles)
    (1, "Dot", ((0, 0),)),
    (2, "Domino", ((0, 0), (1, 0))),
    # Medium (3-4 tiles)
    (3, "L-Tromino", ((0, 0), (1, 0), (0, 1))),
    (4, "I-Tromino", ((0, 0), (1, 0), (2, 0))),
    (5, "O-Tetromino", ((0, 0), (1, 0), (0, 1), (1, 1))),
    (6, "T-Tetromino", ((0, 0), (1, 0), (2, 0), (1, 1))),
    (7, "S-Tetromino", ((1, 0), (2, 0), (0, 1), (1, 1))),
    (8, "Z-Tetromino", ((0, 0), (1, 0), (1, 1), (2, 1))),
    (9, "L-Tetromino", ((0, 0), (0, 1), (0, 2), (1, 0))),
    (10, "J-Tetromino", ((1, 0), (1, 1), (1, 2), (0, 0))),
    (11, "I-Tetromino", ((0, 0), (1, 0), (2, 0), (3, 0))),
    # Large (5+ tiles)
    (12, "Plus", ((1, 0), (0, 1), (1, 1), (2, 1), (1, 2))),
    (13, "U-Pentomino", ((0, 0), (2, 0), (0, 1), (1, 1), (2, 1))),
    (14, "I-Pentomino", ((0, 0), (1, 0), (2, 0), (3, 0), (4, 0))),
    (15, "L-Pentomino", ((0, 0), (0, 1), (0, 2), (0, 3), (1, 0))),
    (16, "T-Pentomino", ((0, 0), (1, 0), (2, 0), (1, 1), (1, 2))),
    (17, "W-Pentomino", ((0, 0), (0, 1), (1, 1), (1, 2), (2, 2))),
    (18, "Z-Pentomino", ((0, 2), (1, 2), (1, 1), (1, 0), (2, 0))),
    (19, "P-Pentomino", ((0, 0), (0, 1), (0, 2), (1, 1), (1, 2))),
    (20, "F-Pentomino", ((1, 0), (0, 1), (1, 1), (1, 2), (2, 2))),
    (21, "Big-Square", (
        (0, 0), (1, 0), (2, 0),
        (0, 1), (1, 1), (2, 1),
        (0, 2), (1, 2), (2, 2),
    )),
    (22, "Large-L", ((0, 0), (0, 1), (0, 2), (0, 3), (1, 0), (2, 0))),
    (23, "Corner", ((0, 0), (1, 0), (2, 0), (0, 1), (0, 2))),
    (24, "Y-Pentomino", ((0, 1), (1, 0), (1, 1), (1, 2), (1, 3))),
    (25, "N-Pentomino", ((0, 0), (0, 1), (1, 1), (1, 2), (1, 3))),
    (26, "V-Pentomino", ((0, 0), (0, 1), (0, 2), (1, 0), (2, 0))),
    (27, "X-Pentomino", ((1, 0), (0, 1), (1, 1), (2, 1), (1, 2))),
)
