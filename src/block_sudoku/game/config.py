from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


# camelCase option names used by external collaborators
_ALIASES: Dict[str, str] = {
    "gridWidth": "grid_width",
    "gridHeight": "grid_height",
    "enable3x3BlockClears": "enable_3x3_block_clears",
    "piecesPerSet": "pieces_per_set",
    "difficultyScalingStartLevel": "difficulty_scaling_start_level",
    "smallPieceBaseWeight": "small_piece_base_weight",
    "largePieceMaxWeight": "large_piece_max_weight",
    "pointsPerTile": "points_per_tile",
    "pointsPerClear": "points_per_clear",
    "perfectClearBonus": "perfect_clear_bonus",
    "comboMultiplierIncrement": "combo_multiplier_increment",
    "maxComboMultiplier": "max_combo_multiplier",
    "randomSeed": "random_seed",
    "maxEpisodeSteps": "max_episode_steps",
}


@dataclass
class GameConfig:
    """Configuration for the block sudoku engine"""
    grid_width: int = 9
    grid_height: int = 9
    enable_3x3_block_clears: bool = True
    pieces_per_set: int = 3

    # Piece generation
    difficulty_scaling_start_level: int = 10
    small_piece_base_weight: float = 0.6
    large_piece_max_weight: float = 0.5
    level: int = 1
    random_seed: Optional[int] = None

    # Scoring
    points_per_tile: int = 1
    points_per_clear: int = 10
    perfect_clear_bonus: int = 100
    combo_multiplier_increment: float = 0.1
    max_combo_multiplier: float = 3.0

    max_episode_steps: int = 10000

    def __post_init__(self) -> None:
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError(f"grid size must be positive, got {self.grid_width}x{self.grid_height}")
        if self.pieces_per_set < 1:
            raise ValueError(f"pieces_per_set must be >= 1, got {self.pieces_per_set}")
        for name in ("small_piece_base_weight", "large_piece_max_weight"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @property
    def is_sudoku_grid(self) -> bool:
        return self.grid_width == 9 and self.grid_height == 9

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GameConfig":
        """Build a config from an opaque mapping of camelCase or snake_case options.

        Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.debug("ignoring unknown config option %r", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)
