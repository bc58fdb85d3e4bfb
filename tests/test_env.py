import gymnasium as gym
import numpy as np
import pytest

import block_blast.env  # noqa: F401
from block_blast.env.block_blast_env import BlockBlastEnv
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper
from block_blast.game import GameConfig
from block_blast.rl.random_agent import run_random


@pytest.fixture
def env():
    env = gym.make("BlockBlast-10x10-v0")
    yield env
    env.close()


def test_reset_observation(env):
    obs, info = env.reset(seed=0)
    assert obs["grid"].shape == (10, 10)
    assert not obs["grid"].any()
    assert obs["pieces_remaining"] == 3
    assert all(1 <= kind <= 12 for kind in obs["pieces"])
    assert info["action_mask"].shape == (3, 10, 10)
    assert info["action_mask"].any()
    assert info["score"] == 0


def test_seeded_reset_is_reproducible(env):
    first, _ = env.reset(seed=5)
    second, _ = env.reset(seed=5)
    np.testing.assert_array_equal(first["pieces"], second["pieces"])


def test_valid_step_rewards_engine_score(env):
    _, info = env.reset(seed=1)
    action = info["valid_actions"][0]
    obs, reward, terminated, truncated, info = env.step(np.array(action))
    assert reward == pytest.approx(0.1)
    assert info["score"] == 10
    assert obs["pieces_remaining"] == 2
    assert obs["grid"].any()
    assert not terminated and not truncated


def test_invalid_step_is_penalized(env):
    _, info = env.reset(seed=2)
    invalid = np.argwhere(~info["action_mask"])[0]
    obs, reward, terminated, truncated, info = env.step(invalid)
    assert reward == pytest.approx(-0.1)
    assert info["score"] == 0
    assert obs["pieces_remaining"] == 3


def test_env_refills_tray_immediately():
    env = BlockBlastEnv(GameConfig(random_seed=3, refill_delay=2.0))
    _, info = env.reset()
    for _ in range(3):
        obs, _, _, _, info = env.step(info["valid_actions"][0])
    assert obs["pieces_remaining"] == 3
    assert env.game.config.refill_delay == 0.0


def test_episode_truncates():
    env = BlockBlastEnv(max_episode_steps=2)
    _, info = env.reset(seed=4)
    _, _, _, truncated, info = env.step(info["valid_actions"][0])
    assert not truncated
    _, _, _, truncated, _ = env.step(info["valid_actions"][0])
    assert truncated


def test_flatten_wrapper_layout():
    env = FlattenDiscreteActionWrapper(gym.make("BlockBlast-10x10-v0"))
    assert env.action_space.n == 300
    assert env._unflatten(0) == (0, 0, 0)
    assert env._unflatten(123) == (1, 2, 3)
    assert env._unflatten(299) == (2, 9, 9)
    env.reset(seed=0)
    assert env.get_action_mask().shape == (300,)


def test_resample_wrapper_replaces_invalid_action():
    env = ResampleInvalidActionWrapper(FlattenDiscreteActionWrapper(gym.make("BlockBlast-10x10-v0")))
    env.reset(seed=0)
    mask = env.get_action_mask()
    invalid = int(np.flatnonzero(~mask)[0])
    _, reward, _, _, info = env.step(invalid)
    assert reward > 0
    assert info["score"] == 10


def test_random_agent_runs(capsys):
    total = run_random(steps=30, seed=1)
    assert isinstance(total, float)
    assert "Random agent total reward" in capsys.readouterr().out
