from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .clears import ClearResult, apply_clears, detect_clears
from .config import GameConfig
from .game_over import explain_game_over, is_game_over
from .generator import PieceGenerator
from .grid import GameGrid
from .pieces import Piece, PieceLibrary
from .placement import Move, can_place, iter_valid_placements
from .rules import ScoringRules

logger = logging.getLogger(__name__)

PieceInfo = Optional[Tuple[int, int]]


@dataclass
class PlacementOutcome:
    success: bool
    points: int = 0
    clear_result: Optional[ClearResult] = None
    perfect_clear: bool = False
    game_over: bool = False

    @property
    def lines_cleared(self) -> int:
        return self.clear_result.total_lines_cleared if self.clear_result is not None else 0


class BlockSudokuGame:
    """Game loop: owns the grid and the tray, and wires the rule modules together."""

    def __init__(self, config: Optional[GameConfig] = None, library: Optional[PieceLibrary] = None) -> None:
        self.config = config or GameConfig()
        self.library = library or PieceLibrary.default()
        self.rules = ScoringRules.from_config(self.config)
        self.generator = PieceGenerator(self.library, config=self.config)
        self.grid = GameGrid(self.config.grid_width, self.config.grid_height)

        # Game state
        self.current_pieces: List[Optional[Piece]] = []
        self.pieces_used_this_set = 0
        self.score = 0
        self.combo = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False

        self.generate_new_piece_set()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.generator.set_seed(seed)
        self.grid.clear()
        self.current_pieces = []
        self.pieces_used_this_set = 0
        self.score = 0
        self.combo = 0
        self.total_lines_cleared = 0
        self.total_pieces_placed = 0
        self.step_count = 0
        self.game_over = False
        self.generate_new_piece_set()

    def set_level(self, level: int) -> None:
        self.generator.set_level(level)

    def generate_new_piece_set(self) -> None:
        self.current_pieces = list(self.generator.generate_piece_set(self.config.pieces_per_set, self.grid))
        self.pieces_used_this_set = 0
        self._check_game_over()

    def available_pieces(self) -> List[Piece]:
        return [piece for piece in self.current_pieces if piece is not None]

    def get_current_piece_ids(self) -> List[int]:
        """Shape id per slot, -1 for a used slot."""
        return [piece.shape_id if piece is not None else -1 for piece in self.current_pieces]

    def can_place_any_piece(self) -> bool:
        return not is_game_over(self.grid, self.available_pieces(), self.library)

    def valid_moves(self) -> List[Move]:
        """List of (slot, rotation_index, x, y) legal moves."""
        return list(iter_valid_placements(self.grid, self.current_pieces, self.library))

    def _piece_at(self, slot: int) -> Optional[Piece]:
        if slot < 0 or slot >= len(self.current_pieces):
            return None
        return self.current_pieces[slot]

    def rotate_piece(self, slot: int) -> Optional[Piece]:
        piece = self._piece_at(slot)
        if piece is None:
            return None
        rotated = self.library.rotate_clockwise(piece)
        self.current_pieces[slot] = rotated
        return rotated

    def set_rotation(self, slot: int, rotation_index: int) -> Optional[Piece]:
        piece = self._piece_at(slot)
        if piece is None:
            return None
        variant = self.library.rotation_of(piece, rotation_index)
        self.current_pieces[slot] = variant
        return variant

    def place_piece(self, slot: int, x: int, y: int) -> PlacementOutcome:
        """Place the piece in ``slot`` with its origin at (x, y).

        Illegal moves return ``success=False`` and leave the game untouched.
        """
        if self.game_over:
            return PlacementOutcome(success=False, game_over=True)
        piece = self._piece_at(slot)
        if piece is None or not can_place(self.grid, piece, x, y):
            return PlacementOutcome(success=False)

        self.grid.fill_cells(piece.cells_at(x, y))
        points = self.rules.placement_points(piece.tile_count)

        clear_result = detect_clears(self.grid, self.config.enable_3x3_block_clears)
        perfect_clear = False
        if clear_result.has_clears:
            points += self.rules.clear_bonus(
                len(clear_result.cleared_rows),
                len(clear_result.cleared_columns),
                len(clear_result.cleared_blocks),
                self.combo,
            )
            self.combo += 1
            apply_clears(self.grid, clear_result)
            self.total_lines_cleared += clear_result.total_lines_cleared
            if self.grid.is_empty():
                perfect_clear = True
                points += self.rules.perfect_clear_bonus
                logger.info("perfect clear")
            logger.debug(
                "cleared rows=%s columns=%s blocks=%s (combo %d)",
                clear_result.cleared_rows,
                clear_result.cleared_columns,
                clear_result.cleared_blocks,
                self.combo,
            )
        else:
            self.combo = 0

        self.score += points
        self.total_pieces_placed += 1
        self.step_count += 1
        self.current_pieces[slot] = None
        self.pieces_used_this_set += 1

        if not self.available_pieces():
            self.generate_new_piece_set()
        else:
            self._check_game_over()

        return PlacementOutcome(
            success=True,
            points=points,
            clear_result=clear_result,
            perfect_clear=perfect_clear,
            game_over=self.game_over,
        )

    def _check_game_over(self) -> None:
        if is_game_over(self.grid, self.available_pieces(), self.library):
            self.game_over = True
            logger.info(
                "game over: score=%d pieces=%d\n%s",
                self.score,
                self.total_pieces_placed,
                explain_game_over(self.grid, self.current_pieces, self.library),
            )

    def board_snapshot(self) -> List[int]:
        return self.grid.to_snapshot()

    def pieces_snapshot(self) -> List[PieceInfo]:
        """(shape_id, rotation_index) per slot, ``None`` for a used slot."""
        return [
            (piece.shape_id, piece.rotation_index) if piece is not None else None
            for piece in self.current_pieces
        ]

    def restore(
        self,
        board_snapshot: Sequence[int],
        pieces_snapshot: Sequence[PieceInfo],
        score: int = 0,
        combo: int = 0,
        pieces_used: Optional[int] = None,
        lines_cleared: int = 0,
        pieces_placed: int = 0,
        steps: int = 0,
    ) -> None:
        """Rebuild an in-progress game from snapshots.

        Run counters not passed in start again from zero. ``pieces_used`` is
        kept between the number of empty slots and the tray size.
        Unknown shape ids raise UnknownShapeError; a malformed board snapshot
        is ignored and leaves an empty grid.
        """
        pieces: List[Optional[Piece]] = [
            self.library.get_piece(info[0], info[1]) if info is not None else None
            for info in pieces_snapshot
        ]
        self.grid.clear()
        self.grid.load_snapshot(board_snapshot)
        self.current_pieces = pieces
        empty_slots = sum(1 for p in pieces if p is None)
        if pieces_used is None:
            pieces_used = empty_slots
        self.pieces_used_this_set = min(max(int(pieces_used), empty_slots), len(pieces))
        self.score = int(score)
        self.combo = int(combo)
        self.total_lines_cleared = int(lines_cleared)
        self.total_pieces_placed = int(pieces_placed)
        self.step_count = int(steps)
        self.game_over = False
        if not self.available_pieces():
            self.generate_new_piece_set()
        else:
            self._check_game_over()

    def get_state(self) -> dict:
        return {
            "grid": self.grid.to_array(),
            "current_pieces": self.get_current_piece_ids(),
            "pieces_remaining": len(self.available_pieces()),
            "score": self.score,
            "combo": self.combo,
            "total_lines_cleared": self.total_lines_cleared,
            "total_pieces_placed": self.total_pieces_placed,
            "step_count": self.step_count,
            "game_over": self.game_over,
            "filled_ratio": self.grid.filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_placed": self.total_pieces_placed,
            "lines_cleared": self.total_lines_cleared,
            "steps_taken": self.step_count,
            "final_fill_ratio": self.grid.filled_ratio(),
            "avg_score_per_piece": self.score / max(1, self.total_pieces_placed),
            "avg_lines_per_piece": self.total_lines_cleared / max(1, self.total_pieces_placed),
        }
