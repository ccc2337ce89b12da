from __future__ import annotations

from dataclasses import dataclass

from .config import GameConfig


@dataclass
class ScoringRules:
    points_per_tile: int = 1
    points_per_clear: int = 10
    perfect_clear_bonus: int = 100
    combo_multiplier_increment: float = 0.1
    max_combo_multiplier: float = 3.0

    @classmethod
    def from_config(cls, config: GameConfig) -> "ScoringRules":
        return cls(
            points_per_tile=config.points_per_tile,
            points_per_clear=config.points_per_clear,
            perfect_clear_bonus=config.perfect_clear_bonus,
            combo_multiplier_increment=config.combo_multiplier_increment,
            max_combo_multiplier=config.max_combo_multiplier,
        )

    def placement_points(self, tile_count: int) -> int:
        return tile_count * self.points_per_tile

    def combo_multiplier(self, combo: int) -> float:
        return min(1.0 + combo * self.combo_multiplier_increment, self.max_combo_multiplier)

    @staticmethod
    def multi_clear_multiplier(lines: int) -> float:
        if lines >= 4:
            return 3.0
        if lines >= 3:
            return 2.0
        if lines >= 2:
            return 1.5
        return 1.0

    def clear_bonus(self, rows: int, columns: int, blocks: int, combo: int = 0) -> int:
        lines = rows + columns + blocks
        if lines <= 0:
            return 0
        base = lines * self.points_per_clear
        return int(round(base * self.combo_multiplier(combo) * self.multi_clear_multiplier(lines)))
