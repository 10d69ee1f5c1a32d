from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from cyber_tetris.game import Action, GameConfig, TetrisGame, TetrominoType


class TetrisEnv(gym.Env):
    """Falling-block environment over a `TetrisGame` session.

    Each step applies one `Action`; every `gravity_every` steps the active
    piece also falls one row (or locks). Observations overlay the falling
    piece on the board as negative kind values.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        reward_weights: Optional[Dict[str, float]] = None,
        gravity_every: int = 1,
        max_episode_steps: int = 10000,
        terminal_penalty: float = 0.0,
    ) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.gravity_every = int(gravity_every)
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            # Positive components
            "score": 0.01,           # per engine score point
            "lines": 1.0,            # per line cleared
            # Negative components (penalize increases)
            "holes": 0.1,
            "height": 0.02,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        height = self.game.config.height
        width = self.game.config.width
        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(height, width), dtype=np.int8),
                "next": spaces.Box(low=0, high=n_kinds, shape=(self.game.config.queue_size,), dtype=np.int8),
                # 0 when the hold slot is empty
                "hold": spaces.Discrete(n_kinds + 1),
                "can_hold": spaces.Discrete(2),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._last_obs: Optional[Dict[str, Any]] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_kinds = np.zeros((self.game.config.queue_size,), dtype=np.int8)
        for i, kind in enumerate(self.game.next_kinds[: next_kinds.shape[0]]):
            next_kinds[i] = int(kind)
        held = self.game.held_kind
        return {
            "board": self.game.get_state().astype(np.int8),
            "next": next_kinds,
            "hold": int(held) if held is not None else 0,
            "can_hold": int(self.game.can_hold),
        }

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = self.game.get_stats()
        info["steps"] = self._steps
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self.game.start()
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()
        score_before = self.game.score
        lines_before = self.game.lines

        self.game.step(Action(int(action)))
        self._steps += 1
        if self.gravity_every > 0 and self._steps % self.gravity_every == 0:
            self.game.gravity_step()

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.game.score - score_before),
            "lines": self.reward_weights["lines"] * float(self.game.lines - lines_before),
            "holes": -self.reward_weights["holes"] * float(
                max(0, self.game.grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(
                max(0, self.game.grid.get_max_height() - height_before)),
        }
        terminated = bool(self.game.game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        self._last_obs = obs
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from cyber_tetris.visualization.renderer import color_for_value

            board = self._last_obs["board"] if self._last_obs is not None else self.game.get_state()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
            return img
        return None

    def close(self) -> None:
        pass
