from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .block_sudoku_env import compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Single-integer actions for agents that cannot take a 4-part move.

    Action ``i`` is ``np.unravel_index(i, (slot, rotation, y, x))``.
    ``get_action_mask()`` gives the legal moves in the same index order.
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        self.nvec = tuple(int(n) for n in env.action_space.nvec)
        self.n = int(np.prod(self.nvec))
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int, int]:
        slot, r, y, x = np.unravel_index(int(idx), self.nvec)
        return int(slot), int(r), int(y), int(x)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return compute_action_mask(self.env.unwrapped.game).reshape(-1)
