import gymnasium as gym
import numpy as np

import tetris_engine.env  # noqa: F401
from tetris_engine.env.tetris_env import FallingBlocksEnv
from tetris_engine.game import Action, GameState
from tetris_engine.rl.random_agent import run_random


def test_reset_starts_a_session():
    env = FallingBlocksEnv()
    obs, info = env.reset(seed=3)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert env.engine.state is GameState.RUNNING
    assert info["score"] == 0
    assert info["pieces"] == 1


def test_step_applies_action_then_gravity():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    x = env.engine.current_x
    obs, reward, terminated, truncated, info = env.step(int(Action.LEFT))
    assert env.engine.current_x == x - 1
    assert env.engine.current_y == 1
    assert reward == 0.0
    assert not terminated and not truncated


def test_hard_drop_rewards_lock_score():
    env = FallingBlocksEnv()
    env.reset(seed=0)
    _, reward, terminated, _, info = env.step(int(Action.HARD_DROP))
    assert reward == 10.0
    assert info["score"] == 10
    assert not terminated


def test_episode_terminates_when_stack_tops_out():
    env = FallingBlocksEnv()
    env.reset(seed=1)
    terminated = False
    for _ in range(200):
        _, _, terminated, _, _ = env.step(int(Action.HARD_DROP))
        if terminated:
            break
    assert terminated
    assert env.engine.game_over


def test_rgb_render():
    env = FallingBlocksEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)


def test_registered_env_runs_random_agent():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, _ = env.reset(seed=2)
    assert obs.shape == (20, 10)
    env.close()
    assert run_random(steps=200, seed=5) >= 0.0


def test_star_import_of_env_package():
    namespace = {}
    exec("from tetris_engine.env import *", namespace)
    assert "FallingBlocks-10x20-v0" in gym.registry
