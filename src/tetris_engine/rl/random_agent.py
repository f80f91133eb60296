from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import tetris_engine.env  # noqa: F401  (registers the env)


def run_random(steps: int = 500, seed: Optional[int] = None) -> float:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    total = run_random(args.steps, args.seed)
    print(f"Random agent total reward: {total:.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
