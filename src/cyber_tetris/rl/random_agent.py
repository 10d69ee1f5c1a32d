from __future__ import annotations

from typing import Optional

import gymnasium as gym

from cyber_tetris.env import ENV_ID


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = gym.make(ENV_ID)
    env.action_space.seed(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} (score {info['score']})")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
