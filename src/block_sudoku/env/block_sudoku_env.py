from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_sudoku.game import BlockSudokuGame, GameConfig, PieceLibrary

MAX_ROTATIONS = 4


def compute_action_mask(game: BlockSudokuGame) -> np.ndarray:
    """Boolean mask of shape (pieces_per_set, 4, height, width)."""
    k = game.config.pieces_per_set
    mask = np.zeros((k, MAX_ROTATIONS, game.grid.height, game.grid.width), dtype=np.bool_)
    for slot, r, x, y in game.valid_moves():
        if 0 <= slot < k and 0 <= r < MAX_ROTATIONS:
            mask[slot, r, y, x] = True
    return mask


class BlockSudokuEnv(gym.Env):
    """Place one piece per step: action = (slot, rotation, y, x).

    ``rotation`` is an absolute variant index of the slot's shape; indices
    past the shape's rotation count are never valid.
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        library: Optional[PieceLibrary] = None,
        invalid_action_penalty: float = -0.1,
        step_penalty: float = 0.0,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = BlockSudokuGame(config, library)

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        height = self.game.grid.height
        width = self.game.grid.width
        k = self.game.config.pieces_per_set
        max_id = self.game.library.max_shape_id()

        # Observation space: grid (0/1), shape id and rotation per slot (-1 for used)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(height, width), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=max_id, shape=(k,), dtype=np.int16),
                "rotations": spaces.Box(low=-1, high=MAX_ROTATIONS - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        self.action_space = spaces.MultiDiscrete((k, MAX_ROTATIONS, height, width))

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int16)
        rotations = np.full((k,), -1, dtype=np.int8)
        for i, piece in enumerate(self.game.current_pieces[:k]):
            if piece is None:
                continue
            pieces[i] = piece.shape_id
            rotations[i] = piece.rotation_index
        return {
            "grid": self.game.grid.to_array(),
            "pieces": pieces,
            "rotations": rotations,
            "pieces_remaining": len(self.game.available_pieces()),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": compute_action_mask(self.game),
            "score": self.game.score,
            "combo": self.game.combo,
            "steps": self.game.step_count,
        }

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[dict] = None,
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        return self._get_obs(), self._get_info()

    def step(self, action: np.ndarray | Tuple[int, int, int, int]):
        slot, r, y, x = map(int, action)

        reward_components: Dict[str, float] = {}
        outcome = None
        if 0 <= r < MAX_ROTATIONS and self._rotation_exists(slot, r):
            previous = self.game.current_pieces[slot]
            self.game.set_rotation(slot, r)
            outcome = self.game.place_piece(slot, x, y)
            if not outcome.success:
                # an illegal move must not leave the tray rotated
                self.game.current_pieces[slot] = previous

        if outcome is not None and outcome.success:
            reward_components["points"] = float(outcome.points)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        terminated = bool(self.game.game_over)
        truncated = self.game.step_count >= self.game.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["lines_cleared"] = outcome.lines_cleared if outcome is not None else 0
        return self._get_obs(), reward, terminated, truncated, info

    def _rotation_exists(self, slot: int, r: int) -> bool:
        if slot < 0 or slot >= len(self.game.current_pieces):
            return False
        piece = self.game.current_pieces[slot]
        return piece is not None and r < piece.rotation_count
