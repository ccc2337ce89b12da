from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .config import GameConfig
from .grid import GameGrid
from .pieces import Piece, PieceLibrary, PieceSize
from .placement import can_place_anywhere, fits_somewhere

logger = logging.getLogger(__name__)

BASE_LARGE_WEIGHT = 0.1
DIFFICULTY_RAMP_LEVELS = 20
MAX_SMALL_REDUCTION = 0.3
MIN_SMALL_WEIGHT = 0.2


class PieceGenerator:
    """Weighted random piece draws with difficulty scaling.

    All randomness goes through one ``random.Random`` so a seed reproduces
    the same sequence of piece sets.
    """

    def __init__(
        self,
        library: PieceLibrary,
        seed: Optional[int] = None,
        config: Optional[GameConfig] = None,
    ) -> None:
        self.library = library
        self.rng = random.Random(seed)
        self.level = 1
        self.small_piece_weight = 0.6
        self.large_piece_max_weight = 0.5
        self.difficulty_start_level = 10
        if config is not None:
            self.set_difficulty_params(
                config.small_piece_base_weight,
                config.large_piece_max_weight,
                config.difficulty_scaling_start_level,
            )
            self.set_level(config.level)
            if seed is None and config.random_seed is not None:
                self.set_seed(config.random_seed)

    def set_seed(self, seed: int) -> None:
        self.rng = random.Random(seed)

    def set_level(self, level: int) -> None:
        self.level = max(1, int(level))

    def set_difficulty_params(
        self,
        small_piece_weight: float,
        large_piece_max_weight: float,
        difficulty_start_level: int,
    ) -> None:
        self.small_piece_weight = float(small_piece_weight)
        self.large_piece_max_weight = float(large_piece_max_weight)
        self.difficulty_start_level = int(difficulty_start_level)

    def category_weights(self) -> Tuple[float, float, float]:
        """Return (small, medium, large) selection weights for the current level."""
        small = self.small_piece_weight
        large = BASE_LARGE_WEIGHT

        if self.level > self.difficulty_start_level:
            progress = min(1.0, (self.level - self.difficulty_start_level) / float(DIFFICULTY_RAMP_LEVELS))
            large = BASE_LARGE_WEIGHT + (self.large_piece_max_weight - BASE_LARGE_WEIGHT) * progress
            small = max(MIN_SMALL_WEIGHT, self.small_piece_weight - progress * MAX_SMALL_REDUCTION)

        medium = 1.0 - small - large
        return small, medium, large

    def generate_single_piece(self) -> Piece:
        small, medium, _ = self.category_weights()

        roll = self.rng.random()
        if roll < small:
            shape_ids = self.library.list_ids_by_size(PieceSize.SMALL)
        elif roll < small + medium:
            shape_ids = self.library.list_ids_by_size(PieceSize.MEDIUM)
        else:
            shape_ids = self.library.list_ids_by_size(PieceSize.LARGE)

        if not shape_ids:
            shape_ids = self.library.shape_ids()

        shape_id = shape_ids[self.rng.randrange(len(shape_ids))]
        rotation_index = self.rng.randrange(self.library.get_rotation_count(shape_id))
        return self.library.get_variant(shape_id, rotation_index)

    def generate_piece_set(self, count: int, grid: Optional[GameGrid] = None) -> List[Piece]:
        """Draw ``count`` pieces; with a grid, make sure at least one of them fits.

        If nothing drawn fits, the first slot is replaced by the first
        placeable small or medium variant. When none exists the set is
        returned as drawn and the game-over check will end the run.
        """
        pieces = [self.generate_single_piece() for _ in range(count)]

        if grid is not None and pieces and not self._has_placeable_piece(pieces, grid):
            fallback = self.find_placeable_piece(grid)
            if fallback is not None:
                logger.debug(
                    "no drawn piece fits; replacing %s with %s",
                    pieces[0].name,
                    fallback.name,
                )
                pieces[0] = fallback
            else:
                logger.debug("no small or medium piece fits the grid")

        return pieces

    def _has_placeable_piece(self, pieces: List[Piece], grid: GameGrid) -> bool:
        return any(can_place_anywhere(grid, piece, self.library) for piece in pieces)

    def find_placeable_piece(self, grid: GameGrid) -> Optional[Piece]:
        """First small, then medium variant that fits somewhere, in catalog order."""
        for size in (PieceSize.SMALL, PieceSize.MEDIUM):
            for shape_id in self.library.list_ids_by_size(size):
                for piece in self.library.get_all_variants(shape_id):
                    if fits_somewhere(grid, piece):
                        return piece
        return None
