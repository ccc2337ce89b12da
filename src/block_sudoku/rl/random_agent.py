from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym
import numpy as np

import block_sudoku.env  # noqa: F401  ensure registration
from block_sudoku.env.wrappers import FlattenDiscreteActionWrapper
from block_sudoku.utils.logging import setup_logger


def run_random(episodes: int = 5, seed: Optional[int] = None, level: str = "info") -> list[dict]:
    """Play ``episodes`` games choosing uniformly among valid moves."""
    logger = setup_logger(name="block_sudoku", level=level)
    env = FlattenDiscreteActionWrapper(gym.make("BlockSudoku-9x9-v0"))
    rng = np.random.default_rng(seed)

    results: list[dict] = []
    for episode in range(episodes):
        episode_seed = None if seed is None else seed + episode
        obs, info = env.reset(seed=episode_seed)
        total_reward = 0.0
        done = False
        while not done:
            valid = np.flatnonzero(env.get_action_mask())
            if valid.size == 0:
                break
            action = int(rng.choice(valid))
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated

        stats = env.unwrapped.game.get_game_stats()
        stats["total_reward"] = total_reward
        results.append(stats)
        logger.info(
            "episode %d: score=%d pieces=%d lines=%d",
            episode,
            stats["final_score"],
            stats["pieces_placed"],
            stats["lines_cleared"],
        )
    env.close()
    return results


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Roll out a random policy over valid moves.")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(episodes=args.episodes, seed=args.seed, level=args.log_level)


if __name__ == "__main__":  # pragma: no cover
    main()
