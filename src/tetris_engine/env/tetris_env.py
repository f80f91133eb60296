from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import Action, BlockEngine, GameConfig, LockResult, ScoringRules, TetrominoType


class FallingBlocksEnv(gym.Env):
    """Engine driven one command per step.

    Actions (7 total) follow ``Action``: left, right, rotate cw, rotate ccw,
    soft drop, hard drop, none. After the command the env applies one gravity
    tick, standing in for the timer. Reward is the score gained in the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.engine = BlockEngine(config, rules)
        self.render_mode = render_mode

        h, w = self.engine.grid.height, self.engine.grid.width
        n_types = len(TetrominoType)
        # Board tags 1..7, falling piece overlaid as -1..-7
        self.observation_space = spaces.Box(low=-n_types, high=n_types, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "pieces": self.engine.piece_count,
            "delay_ms": self.engine.delay_ms,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self.engine.restart()
        return self.engine.get_state(), self._get_info()

    def step(self, action: int):
        score_before = self.engine.score
        lines = 0

        result = self.engine.apply(Action(int(action)))
        if not self.engine.game_over:
            tick_result = self.engine.tick()
            if tick_result is not None:
                lines += tick_result.lines_cleared
        if isinstance(result, LockResult):
            lines += result.lines_cleared

        reward = float(self.engine.score - score_before)
        terminated = bool(self.engine.game_over)
        info = self._get_info()
        info["lines_cleared"] = lines
        return self.engine.get_state(), reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.engine.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v > 0:
                    color = (70, 200, 120)
                elif v < 0:
                    color = (220, 200, 80)
                else:
                    color = (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
