from __future__ import annotations

import random

import gymnasium as gym

import block_blast.env  # noqa: F401  (registers the env ids)


def run_random(steps: int = 200, seed: int | None = None) -> float:
    rng = random.Random(seed)
    env = gym.make("BlockBlast-10x10-v0")
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = info.get("valid_actions", [])
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f}")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
