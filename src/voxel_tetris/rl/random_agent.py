from __future__ import annotations

import argparse
import logging
from typing import Optional

import gymnasium as gym

import voxel_tetris.env  # noqa: F401

logger = logging.getLogger(__name__)


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = gym.make("VoxelTetris-10x20x10-v0")
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished: score %d, lines %d", episodes, info["score"], info["lines"])
            obs, info = env.reset()
    env.close()
    logger.info("random agent total reward: %.2f over %d finished episode(s)", total_reward, episodes)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log_level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    log_format = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    logging.basicConfig(level=args.log_level.upper(), format=log_format)
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
