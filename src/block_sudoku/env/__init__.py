"""Gymnasium environment for Block Sudoku."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .block_sudoku_env import BlockSudokuEnv, compute_action_mask

register(
    id="BlockSudoku-9x9-v0",
    entry_point="block_sudoku.env.block_sudoku_env:BlockSudokuEnv",
)

__all__ = ["BlockSudokuEnv", "compute_action_mask"]
